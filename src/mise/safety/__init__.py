"""Allergen and dietary-restriction safety checks."""

from __future__ import annotations

from .keywords import (
    KeywordRule,
    MacroLimit,
    ScannerConfig,
    build_default_config,
    default_scanner_config,
    load_scanner_config,
)
from .scanner import (
    filter_recipes,
    filter_recipes_by_allergens,
    filter_recipes_by_diet,
    recipe_contains_allergens,
    recipe_meets_dietary_restrictions,
)

__all__ = [
    "KeywordRule",
    "MacroLimit",
    "ScannerConfig",
    "build_default_config",
    "default_scanner_config",
    "filter_recipes",
    "filter_recipes_by_allergens",
    "filter_recipes_by_diet",
    "load_scanner_config",
    "recipe_contains_allergens",
    "recipe_meets_dietary_restrictions",
]
