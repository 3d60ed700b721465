from __future__ import annotations

import pytest

from mise.config import get_settings
from mise.models.recipe import SavedRecipe
from mise.safety.keywords import build_default_config
from mise.safety.scanner import (
    KeywordDietRule,
    MacroLimitRule,
    RecipeSnapshot,
    build_diet_rules,
    filter_recipes,
    filter_recipes_by_allergens,
    filter_recipes_by_diet,
    recipe_contains_allergens,
    recipe_meets_dietary_restrictions,
)

GRANOLA = {"title": "Honey Granola", "ingredients": ["oats", "honey", "almonds"], "tags": []}


def _recipe(**fields) -> SavedRecipe:
    fields.setdefault("title", "Test Recipe")
    return SavedRecipe.model_validate(fields)


def test_empty_allergen_list_is_always_safe(saved_recipes):
    for recipe in saved_recipes:
        result = recipe_contains_allergens(recipe, [])
        assert result.safe
        assert result.found_allergens == []


def test_allergen_found_in_title(recipe_payloads):
    result = recipe_contains_allergens(recipe_payloads[0], ["peanut"])

    assert not result.safe
    assert result.found_allergens == ["peanut"]


def test_allergen_scan_is_exhaustive_and_keeps_input_order(recipe_payloads):
    result = recipe_contains_allergens(recipe_payloads[0], ["Egg", "shellfish", "peanut", "egg"])

    assert result.found_allergens == ["Egg", "peanut"]


def test_allergen_found_in_tags():
    recipe = _recipe(ingredients=["rice"], tags=["shellfish"])

    assert recipe_contains_allergens(recipe, ["shellfish"]).found_allergens == ["shellfish"]


def test_blank_allergens_are_ignored(recipe_payloads):
    assert recipe_contains_allergens(recipe_payloads[0], ["", "   "]).safe


def test_vegan_tag_overrides_honey():
    tagged = dict(GRANOLA, tags=["Vegan"])

    assert recipe_meets_dietary_restrictions(tagged, ["vegan"]).compatible


def test_honey_violates_vegan_without_tag():
    result = recipe_meets_dietary_restrictions(GRANOLA, ["vegan"])

    assert not result.compatible
    assert result.violations == ["vegan"]
    assert result.violating_terms == {"vegan": ["honey"]}


def test_vegan_tag_keywords_are_checked():
    recipe = _recipe(ingredients=["tofu"], tags=["meat lovers"])

    result = recipe_meets_dietary_restrictions(recipe, ["vegan"])

    assert result.violating_terms == {"vegan": ["meat"]}


def test_vegetarian_rejects_chicken():
    recipe = _recipe(ingredients=["chicken breast", "rice"])

    result = recipe_meets_dietary_restrictions(recipe, ["vegetarian"])

    assert result.violating_terms == {"vegetarian": ["chicken"]}


def test_pescatarian_allows_fish_but_not_bacon():
    salmon = _recipe(ingredients=["salmon fillet", "lemon"])
    bacon = _recipe(ingredients=["salmon fillet", "bacon"])

    assert recipe_meets_dietary_restrictions(salmon, ["pescatarian"]).compatible
    assert not recipe_meets_dietary_restrictions(bacon, ["pescatarian"]).compatible


def test_restriction_names_are_normalized():
    recipe = _recipe(ingredients=["2 cups flour", "sugar"])

    result = recipe_meets_dietary_restrictions(recipe, ["Gluten Free", "dairy_free"])

    assert result.violations == ["Gluten Free"]
    assert result.violating_terms["Gluten Free"] == ["flour"]


def test_unknown_restriction_never_violates():
    recipe = _recipe(ingredients=["bacon"])

    assert recipe_meets_dietary_restrictions(recipe, ["paleo"]).compatible


def test_keto_with_missing_carbs_is_not_a_violation():
    assert recipe_meets_dietary_restrictions(_recipe(ingredients=["steak"]), ["keto"]).compatible


@pytest.mark.parametrize(("carbs", "compatible"), [(0, True), (20, True), (20.5, False), (21, False)])
def test_keto_carb_boundary(carbs, compatible):
    recipe = _recipe(ingredients=["steak"], carbs=carbs)

    assert recipe_meets_dietary_restrictions(recipe, ["keto"]).compatible is compatible


@pytest.mark.parametrize(("fats", "compatible"), [(15, True), (16, False)])
def test_low_fat_boundary(fats, compatible):
    recipe = _recipe(ingredients=["rice"], fats=fats)

    assert recipe_meets_dietary_restrictions(recipe, ["low-fat"]).compatible is compatible


def test_macro_violation_details():
    result = recipe_meets_dietary_restrictions(_recipe(carbs=21), ["low-carb"])

    assert result.violating_terms == {"low-carb": ["carbs 21g exceeds 20g"]}


def test_carb_limit_comes_from_settings(monkeypatch):
    monkeypatch.setenv("MISE_KETO_CARB_LIMIT_G", "10")
    get_settings.cache_clear()

    assert not recipe_meets_dietary_restrictions(_recipe(carbs=15), ["keto"]).compatible


def test_egg_matches_eggplant_unless_word_boundary():
    recipe = _recipe(ingredients=["eggplant", "olive oil", "garlic"])
    strict = build_default_config(word_boundary=True)

    assert not recipe_meets_dietary_restrictions(recipe, ["vegan"]).compatible
    assert recipe_meets_dietary_restrictions(recipe, ["vegan"], strict).compatible
    assert recipe_contains_allergens(recipe, ["egg"]).found_allergens == ["egg"]
    assert recipe_contains_allergens(recipe, ["egg"], strict).safe


def test_filter_recipes_combines_allergens_and_diet(saved_recipes):
    result = filter_recipes(saved_recipes, ["peanut"], ["vegetarian"])

    assert [recipe.id for recipe in result.filtered_recipes] == ["r2", "r3"]
    assert result.removed_count == 2


def test_filter_recipes_without_criteria_keeps_everything(recipe_payloads):
    result = filter_recipes(recipe_payloads, [], [])

    assert len(result.filtered_recipes) == len(recipe_payloads)
    assert result.removed_count == 0


def test_single_purpose_filters(saved_recipes):
    assert [r.id for r in filter_recipes_by_allergens(saved_recipes, ["butter"])] == ["r2", "r4"]
    assert [r.id for r in filter_recipes_by_diet(saved_recipes, ["dairy-free"])] == ["r2", "r4"]


def test_build_diet_rules_covers_every_restriction():
    rules = build_diet_rules(build_default_config())

    assert isinstance(rules["vegan"], KeywordDietRule)
    assert isinstance(rules["keto"], MacroLimitRule)
    assert set(rules) == {
        "vegan",
        "vegetarian",
        "pescatarian",
        "gluten-free",
        "dairy-free",
        "keto",
        "low-carb",
        "low-fat",
    }


def test_snapshot_normalizes_all_ingredient_shapes(recipe_payloads):
    snapshot = RecipeSnapshot.of(SavedRecipe.model_validate(recipe_payloads[1]))

    assert snapshot.ingredient_names == ("tofu", "soy sauce", "broccoli")
    assert "vegan" in snapshot.declared_tags


def test_peanut_allergen_matched_through_title_only():
    recipe = {"title": "Peanut Butter Cookies", "ingredients": [{"name": "flour"}], "tags": []}

    result = recipe_contains_allergens(recipe, ["peanuts"])

    assert result.safe is False
    assert result.found_allergens == ["peanuts"]


def test_filters_build_diet_rules_once_per_call(saved_recipes, monkeypatch):
    from mise.safety import scanner

    calls = []
    original = scanner.build_diet_rules

    def counting_build(config):
        calls.append(config)
        return original(config)

    monkeypatch.setattr(scanner, "build_diet_rules", counting_build)

    filter_recipes(saved_recipes, [], ["vegan", "keto"])
    filter_recipes_by_diet(saved_recipes, ["vegetarian"])

    assert len(saved_recipes) > 1
    assert len(calls) == 2
