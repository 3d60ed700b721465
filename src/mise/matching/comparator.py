"""Classify required ingredients against a pantry snapshot."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Union

from rapidfuzz import fuzz, process

from mise.config import get_settings
from mise.models.pantry import PantryItem
from mise.models.recipe import (
    RequiredIngredient,
    SavedRecipe,
    StructuredIngredient,
    canonical_ingredient,
)
from mise.models.results import AvailabilityReport, AvailableIngredient, IngredientComparison

from .normalize import names_match, normalize_name
from .parser import parse_ingredients_from_recipe

logger = logging.getLogger(__name__)

Requirement = Union[str, StructuredIngredient, RequiredIngredient]


def _owned_items(inventory: Iterable[PantryItem], owner_id: Optional[str]) -> List[PantryItem]:
    if owner_id is None:
        return list(inventory)
    return [item for item in inventory if item.owner_id == owner_id]


def find_matching_ingredient(
    name: str,
    inventory: Sequence[PantryItem],
    *,
    owner_id: Optional[str] = None,
    word_boundary: bool = False,
) -> Optional[PantryItem]:
    """Locate the pantry entry satisfying ``name``.

    An exact normalized match wins; otherwise the first entry, in inventory
    order, whose normalized name contains or is contained by ``name``.
    """

    normalized = normalize_name(name)
    if not normalized:
        return None

    candidates = [
        (item, normalize_name(item.name)) for item in _owned_items(inventory, owner_id)
    ]
    for item, key in candidates:
        if key and key == normalized:
            return item
    for item, key in candidates:
        if names_match(normalized, key, word_boundary=word_boundary):
            return item
    return None


def compare_ingredients(
    required: Sequence[Requirement],
    inventory: Sequence[PantryItem],
    *,
    owner_id: Optional[str] = None,
    word_boundary: bool = False,
) -> IngredientComparison:
    """Split required ingredients into available and missing.

    Availability is presence only; quantities are never compared.
    """

    available: List[AvailableIngredient] = []
    missing: List[str] = []
    for entry in required:
        name = canonical_ingredient(entry).name
        match = find_matching_ingredient(
            name, inventory, owner_id=owner_id, word_boundary=word_boundary
        )
        if match is None:
            missing.append(name)
        else:
            available.append(AvailableIngredient(name=name, inventory=match))

    return IngredientComparison(
        available=available,
        missing=missing,
        total_required=len(required),
    )


def calculate_coverage(comparison: IngredientComparison) -> int:
    """Percentage of required ingredients available, 100 when nothing is required."""

    if comparison.total_required == 0:
        return 100
    ratio = len(comparison.available) / comparison.total_required
    return int(math.floor(ratio * 100 + 0.5))


def suggest_alternatives(
    missing: Sequence[str],
    inventory: Sequence[PantryItem],
    *,
    limit: int = 3,
    score_cutoff: Optional[float] = None,
    owner_id: Optional[str] = None,
) -> dict[str, list[str]]:
    """Return close pantry names for each missing ingredient, best first."""

    cutoff = get_settings().suggestion_score_cutoff if score_cutoff is None else score_cutoff
    items = _owned_items(inventory, owner_id)
    choices = [normalize_name(item.name) for item in items]
    suggestions: dict[str, list[str]] = {}
    if not choices or limit <= 0:
        return suggestions

    for name in missing:
        query = normalize_name(name)
        if not query:
            continue
        results = process.extract(
            query, choices, scorer=fuzz.WRatio, score_cutoff=cutoff, limit=limit
        )
        names: list[str] = []
        for _, _score, index in results:
            pantry_name = items[index].name
            if pantry_name not in names:
                names.append(pantry_name)
        if names:
            suggestions[name] = names
    return suggestions


def check_recipe_availability(
    recipe: Union[str, SavedRecipe],
    inventory: Sequence[PantryItem],
    *,
    owner_id: Optional[str] = None,
    word_boundary: Optional[bool] = None,
) -> AvailabilityReport:
    """Parse (or read) a recipe's ingredients and report pantry coverage."""

    if word_boundary is None:
        word_boundary = get_settings().word_boundary_matching

    if isinstance(recipe, SavedRecipe):
        required = [item for item in recipe.canonical_ingredients() if item.name]
    else:
        required = parse_ingredients_from_recipe(recipe)

    if not required:
        logger.info("No ingredients could be identified in recipe content")
        return AvailabilityReport(parsed=False)

    comparison = compare_ingredients(
        required, inventory, owner_id=owner_id, word_boundary=word_boundary
    )
    coverage = calculate_coverage(comparison)
    suggestions = suggest_alternatives(comparison.missing, inventory, owner_id=owner_id)
    logger.debug(
        "Availability: %d/%d ingredients on hand (%d%%)",
        len(comparison.available),
        comparison.total_required,
        coverage,
    )
    return AvailabilityReport(
        parsed=True,
        required=required,
        comparison=comparison,
        coverage=coverage,
        suggestions=suggestions,
    )


__all__ = [
    "calculate_coverage",
    "check_recipe_availability",
    "compare_ingredients",
    "find_matching_ingredient",
    "suggest_alternatives",
]
