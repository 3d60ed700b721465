from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mise.models.results import DateRange, RecipeFilters
from mise.recipes.filters import (
    collation_key,
    extract_all_tags,
    filter_recipes,
    highlight_search_query,
    sort_recipes,
)


def _ids(recipes):
    return [recipe.id for recipe in recipes]


def test_no_filters_sorts_newest_first(recipe_payloads):
    result = filter_recipes(recipe_payloads, RecipeFilters())

    assert _ids(result) == ["r2", "r1", "r3", "r4"]


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("peanut", ["r1"]),
        ("CHOUX", ["r3"]),
        ("soy", ["r2"]),
        ("dinner", ["r2", "r4"]),
        ("  ", ["r2", "r1", "r3", "r4"]),
        ("caviar", []),
    ],
)
def test_search_matches_any_field(recipe_payloads, query, expected):
    assert _ids(filter_recipes(recipe_payloads, RecipeFilters(search_query=query))) == expected


def test_selected_tags_must_all_be_present(recipe_payloads):
    both = RecipeFilters(selected_tags=["dinner", "vegan"])
    dessert = RecipeFilters(selected_tags=["dessert"])

    assert _ids(filter_recipes(recipe_payloads, both)) == ["r2"]
    assert _ids(filter_recipes(recipe_payloads, dessert)) == ["r1", "r3"]


def test_date_range_is_inclusive(recipe_payloads):
    window = DateRange(
        from_=datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc),
        to=datetime(2024, 3, 5, 18, 30, tzinfo=timezone.utc),
    )

    result = filter_recipes(recipe_payloads, RecipeFilters(date_range=window))

    assert _ids(result) == ["r2", "r1"]


def test_open_ended_date_range(recipe_payloads):
    until = RecipeFilters(date_range=DateRange(to=datetime(2024, 1, 1, tzinfo=timezone.utc)))
    since = RecipeFilters(date_range={"from": "2024-02-01T00:00:00Z"})

    assert _ids(filter_recipes(recipe_payloads, until)) == ["r3"]
    assert _ids(filter_recipes(recipe_payloads, since)) == ["r2"]


def test_naive_dates_are_treated_as_utc():
    recipes = [{"id": "n", "title": "Naive", "createdAt": "2024-02-01T00:00:00"}]
    window = DateRange(from_=datetime(2024, 2, 1, tzinfo=timezone.utc))

    assert _ids(filter_recipes(recipes, RecipeFilters(date_range=window))) == ["n"]


def test_safety_filters_run_in_facade(recipe_payloads):
    filters = RecipeFilters(allergens=["peanut"], dietary_restrictions=["vegetarian"])

    assert _ids(filter_recipes(recipe_payloads, filters)) == ["r2", "r3"]


def test_filters_combine_with_and(recipe_payloads):
    filters = RecipeFilters(search_query="e", selected_tags=["dessert"], allergens=["milk"])

    assert _ids(filter_recipes(recipe_payloads, filters)) == ["r1"]


@pytest.mark.parametrize(
    ("sort_by", "expected"),
    [
        ("date-desc", ["r2", "r1", "r3", "r4"]),
        ("date-asc", ["r4", "r3", "r1", "r2"]),
        ("name-asc", ["r3", "r4", "r1", "r2"]),
        ("name-desc", ["r2", "r1", "r4", "r3"]),
        ("time-asc", ["r4", "r1", "r2", "r3"]),
        ("time-desc", ["r3", "r2", "r1", "r4"]),
        (None, ["r1", "r2", "r3", "r4"]),
    ],
)
def test_sort_recipes(recipe_payloads, sort_by, expected):
    assert _ids(sort_recipes(recipe_payloads, sort_by)) == expected


def test_sort_is_stable_for_ties():
    recipes = [
        {"id": "a", "title": "Same", "prepTimeMinutes": 10},
        {"id": "b", "title": "same", "cookTimeMinutes": 10},
    ]

    assert _ids(sort_recipes(recipes, "time-asc")) == ["a", "b"]
    assert _ids(sort_recipes(recipes, "name-asc")) == ["a", "b"]


def test_extract_all_tags_is_distinct_and_collated(recipe_payloads):
    assert extract_all_tags(recipe_payloads) == [
        "baked",
        "Dessert",
        "dessert",
        "dinner",
        "french",
        "quick",
        "vegan",
    ]


def test_collation_key_ignores_accents_and_case():
    assert collation_key("Éclair") == collation_key("eclair")


def test_highlight_search_query():
    assert (
        highlight_search_query("Peanut butter and PEANUT", "peanut")
        == "<mark>Peanut</mark> butter and <mark>PEANUT</mark>"
    )
    assert highlight_search_query("a+b", "+") == "a<mark>+</mark>b"
    assert highlight_search_query("unchanged", "") == "unchanged"


def test_tag_filter_requires_every_selected_tag():
    recipes = [
        {"id": "v", "title": "Vegan only", "tags": ["vegan"]},
        {"id": "vq", "title": "Vegan and quick", "tags": ["Vegan", "quick"]},
    ]

    result = filter_recipes(recipes, RecipeFilters(selected_tags=["vegan", "quick"]))

    assert _ids(result) == ["vq"]
