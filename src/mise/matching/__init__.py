"""Ingredient normalization, recipe parsing and pantry comparison."""

from __future__ import annotations

from .comparator import (
    calculate_coverage,
    check_recipe_availability,
    compare_ingredients,
    find_matching_ingredient,
    suggest_alternatives,
)
from .normalize import contains_term, names_match, normalize_name
from .parser import parse_ingredient_line, parse_ingredients_from_recipe
from .units import normalize_unit

__all__ = [
    "calculate_coverage",
    "check_recipe_availability",
    "compare_ingredients",
    "contains_term",
    "find_matching_ingredient",
    "names_match",
    "normalize_name",
    "normalize_unit",
    "parse_ingredient_line",
    "parse_ingredients_from_recipe",
    "suggest_alternatives",
]
