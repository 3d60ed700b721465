"""Pydantic models defining shared data contracts."""

from mise.models.extraction import (
    ExtractedRecipe,
    RecipeInstruction,
    RecipeMetadata,
    RecipeNutrition,
    RecipeValidation,
)
from mise.models.pantry import PantryItem
from mise.models.recipe import (
    RecipeIngredient,
    RequiredIngredient,
    SavedRecipe,
    StructuredIngredient,
    as_saved_recipe,
    canonical_ingredient,
)
from mise.models.results import (
    AllergenCheckResult,
    AvailabilityReport,
    AvailableIngredient,
    DateRange,
    DietCheckResult,
    IngredientComparison,
    RecipeContentScore,
    RecipeFilters,
    SafetyFilterResult,
    SortOption,
)

__all__ = [
    "ExtractedRecipe",
    "RecipeInstruction",
    "RecipeMetadata",
    "RecipeNutrition",
    "RecipeValidation",
    "PantryItem",
    "RecipeIngredient",
    "RequiredIngredient",
    "SavedRecipe",
    "StructuredIngredient",
    "as_saved_recipe",
    "canonical_ingredient",
    "AllergenCheckResult",
    "AvailabilityReport",
    "AvailableIngredient",
    "DateRange",
    "DietCheckResult",
    "IngredientComparison",
    "RecipeContentScore",
    "RecipeFilters",
    "SafetyFilterResult",
    "SortOption",
]
