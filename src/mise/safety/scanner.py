"""Allergen and dietary-restriction scanning for saved recipes."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from mise.matching.normalize import contains_term, normalize_name
from mise.models.recipe import SavedRecipe, as_saved_recipe
from mise.models.results import AllergenCheckResult, DietCheckResult, SafetyFilterResult

from .keywords import KeywordRule, MacroLimit, ScannerConfig, default_scanner_config

logger = logging.getLogger(__name__)

RecipeLike = Union[SavedRecipe, Mapping[str, Any]]


@dataclass(frozen=True)
class RuleResult:
    """Outcome of applying a dietary rule to a recipe."""

    name: str
    passed: bool
    details: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RecipeSnapshot:
    """Normalized view of a recipe shared across rule evaluations."""

    recipe: SavedRecipe
    title: str
    ingredient_names: Tuple[str, ...]
    tags: Tuple[str, ...]
    declared_tags: frozenset[str]

    @classmethod
    def of(cls, recipe: SavedRecipe) -> "RecipeSnapshot":
        return cls(
            recipe=recipe,
            title=normalize_name(recipe.title),
            ingredient_names=tuple(
                normalize_name(ingredient.name) for ingredient in recipe.canonical_ingredients()
            ),
            tags=tuple(normalize_name(tag) for tag in recipe.tags),
            declared_tags=frozenset(tag.strip().lower() for tag in recipe.tags),
        )


class DietRule:
    """Base class contract for dietary restriction rules."""

    name: str

    def evaluate(self, snapshot: RecipeSnapshot) -> RuleResult:
        raise NotImplementedError


class KeywordDietRule(DietRule):
    """Fails when an ingredient or tag mentions a forbidden keyword."""

    def __init__(self, name: str, rule: KeywordRule, *, word_boundary: bool = False) -> None:
        self.name = name
        self._ingredient_keywords = tuple(
            (keyword, normalize_name(keyword)) for keyword in rule.active_keywords()
        )
        self._tag_keywords = tuple((keyword, normalize_name(keyword)) for keyword in rule.tag_keywords)
        self._word_boundary = word_boundary

    def _hits(
        self, keywords: Iterable[Tuple[str, str]], haystacks: Sequence[str]
    ) -> List[str]:
        return [
            keyword
            for keyword, normalized in keywords
            if any(
                contains_term(text, normalized, word_boundary=self._word_boundary)
                for text in haystacks
            )
        ]

    def evaluate(self, snapshot: RecipeSnapshot) -> RuleResult:
        matched: List[str] = self._hits(self._ingredient_keywords, snapshot.ingredient_names)
        for keyword in self._hits(self._tag_keywords, snapshot.tags):
            if keyword not in matched:
                matched.append(keyword)
        if not matched:
            return RuleResult(self.name, True)
        return RuleResult(self.name, False, details=tuple(matched))


class MacroLimitRule(DietRule):
    """Fails when a numeric macro exceeds its ceiling; absent values pass."""

    def __init__(self, name: str, limit: MacroLimit) -> None:
        self.name = name
        self._macro = limit.macro
        self._limit = limit.limit_g

    def evaluate(self, snapshot: RecipeSnapshot) -> RuleResult:
        value: Optional[float] = getattr(snapshot.recipe, self._macro)
        if value is None or value <= self._limit:
            return RuleResult(self.name, True)
        return RuleResult(
            self.name,
            False,
            details=(f"{self._macro} {value:g}g exceeds {self._limit:g}g",),
        )


def build_diet_rules(config: ScannerConfig) -> Dict[str, DietRule]:
    """Instantiate one rule per configured restriction."""

    rules: Dict[str, DietRule] = {}
    for name, keyword_rule in config.keyword_rules.items():
        rules[_restriction_key(name)] = KeywordDietRule(
            name, keyword_rule, word_boundary=config.word_boundary
        )
    for name, limit in config.macro_limits.items():
        rules[_restriction_key(name)] = MacroLimitRule(name, limit)
    return rules


def _restriction_key(value: str) -> str:
    return re.sub(r"[\s_]+", "-", value.strip().lower())


def _unique_terms(terms: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    unique: List[str] = []
    for term in terms:
        key = term.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(term)
    return unique


def _allergen_hits(
    snapshot: RecipeSnapshot, allergens: Sequence[str], word_boundary: bool
) -> List[str]:
    found: List[str] = []
    for allergen in _unique_terms(allergens):
        needle = normalize_name(allergen)
        if not needle:
            continue
        haystacks = (snapshot.title,) + snapshot.ingredient_names + snapshot.tags
        if any(contains_term(text, needle, word_boundary=word_boundary) for text in haystacks):
            found.append(allergen)
    return found


def recipe_contains_allergens(
    recipe: RecipeLike,
    allergens: Sequence[str],
    config: Optional[ScannerConfig] = None,
) -> AllergenCheckResult:
    """Scan title, ingredients and tags for every listed allergen.

    The scan is exhaustive: every allergen that matches anywhere is reported,
    in the order the allergens were given.
    """

    if not allergens:
        return AllergenCheckResult(safe=True, found_allergens=[])

    if config is None:
        config = default_scanner_config()
    saved = as_saved_recipe(recipe)
    found = _allergen_hits(RecipeSnapshot.of(saved), allergens, config.word_boundary)
    if found:
        logger.debug(
            "Recipe %r contains allergens %s", saved.title, found, extra={"recipe_id": saved.id}
        )
    return AllergenCheckResult(safe=not found, found_allergens=found)


def recipe_meets_dietary_restrictions(
    recipe: RecipeLike,
    restrictions: Sequence[str],
    config: Optional[ScannerConfig] = None,
    *,
    rules: Optional[Dict[str, DietRule]] = None,
) -> DietCheckResult:
    """Check a recipe against dietary restrictions.

    A recipe tagged with the restriction itself is trusted. Restrictions with
    no configured rule never produce a violation. Callers checking many
    recipes pass ``rules`` built once from ``build_diet_rules``.
    """

    if not restrictions:
        return DietCheckResult(compatible=True)

    if config is None:
        config = default_scanner_config()
    saved = as_saved_recipe(recipe)
    snapshot = RecipeSnapshot.of(saved)
    if rules is None:
        rules = build_diet_rules(config)

    violations: List[str] = []
    violating_terms: Dict[str, List[str]] = {}
    for restriction in _unique_terms(restrictions):
        if restriction.strip().lower() in snapshot.declared_tags:
            continue
        rule = rules.get(_restriction_key(restriction))
        if rule is None:
            logger.debug("No rule configured for restriction %r; skipping", restriction)
            continue
        result = rule.evaluate(snapshot)
        if not result.passed:
            violations.append(restriction)
            violating_terms[restriction] = list(result.details)

    return DietCheckResult(
        compatible=not violations,
        violations=violations,
        violating_terms=violating_terms,
    )


def _filter(recipes: Iterable[RecipeLike], keep) -> List[SavedRecipe]:
    return [saved for saved in (as_saved_recipe(recipe) for recipe in recipes) if keep(saved)]


def filter_recipes_by_allergens(
    recipes: Sequence[RecipeLike],
    allergens: Sequence[str],
    config: Optional[ScannerConfig] = None,
) -> List[SavedRecipe]:
    return _filter(recipes, lambda saved: recipe_contains_allergens(saved, allergens, config).safe)


def filter_recipes_by_diet(
    recipes: Sequence[RecipeLike],
    restrictions: Sequence[str],
    config: Optional[ScannerConfig] = None,
) -> List[SavedRecipe]:
    if config is None:
        config = default_scanner_config()
    rules = build_diet_rules(config)

    def _keep(saved: SavedRecipe) -> bool:
        return recipe_meets_dietary_restrictions(saved, restrictions, config, rules=rules).compatible

    return _filter(recipes, _keep)


def filter_recipes(
    recipes: Sequence[RecipeLike],
    allergens: Sequence[str],
    restrictions: Sequence[str],
    config: Optional[ScannerConfig] = None,
) -> SafetyFilterResult:
    """Keep recipes that are both allergen-safe and diet-compatible."""

    if config is None:
        config = default_scanner_config()
    rules = build_diet_rules(config)

    def _keep(saved: SavedRecipe) -> bool:
        if not recipe_contains_allergens(saved, allergens, config).safe:
            return False
        return recipe_meets_dietary_restrictions(saved, restrictions, config, rules=rules).compatible

    kept = _filter(recipes, _keep)
    removed = len(recipes) - len(kept)
    if removed:
        logger.info("Safety filter removed %d of %d recipe(s)", removed, len(recipes))
    return SafetyFilterResult(filtered_recipes=kept, removed_count=removed)


__all__ = [
    "DietRule",
    "KeywordDietRule",
    "MacroLimitRule",
    "RecipeSnapshot",
    "RuleResult",
    "build_diet_rules",
    "filter_recipes",
    "filter_recipes_by_allergens",
    "filter_recipes_by_diet",
    "recipe_contains_allergens",
    "recipe_meets_dietary_restrictions",
]
