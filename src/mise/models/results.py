"""Result and filter models returned by the matching and safety engines."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from mise.models.pantry import PantryItem
from mise.models.recipe import RequiredIngredient, SavedRecipe

SortOption = Literal["date-desc", "date-asc", "name-asc", "name-desc", "time-asc", "time-desc"]

_RESULT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class AvailableIngredient(BaseModel):
    """Required ingredient together with the pantry entry that satisfied it."""

    name: str
    inventory: PantryItem

    model_config = _RESULT_CONFIG


class IngredientComparison(BaseModel):
    """Classification of a recipe's required ingredients against a pantry."""

    available: list[AvailableIngredient] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    total_required: int = Field(default=0, ge=0)

    model_config = _RESULT_CONFIG

    @model_validator(mode="after")
    def check_classification(self) -> "IngredientComparison":
        classified = len(self.available) + len(self.missing)
        if classified != self.total_required:
            raise ValueError(
                f"{classified} ingredient(s) classified but {self.total_required} required"
            )
        return self


class AvailabilityReport(BaseModel):
    """Parsed requirements, their classification and pantry suggestions."""

    parsed: bool
    required: list[RequiredIngredient] = Field(default_factory=list)
    comparison: IngredientComparison = Field(default_factory=IngredientComparison)
    coverage: int = Field(default=100, ge=0, le=100)
    suggestions: dict[str, list[str]] = Field(default_factory=dict)

    model_config = _RESULT_CONFIG


class AllergenCheckResult(BaseModel):
    safe: bool
    found_allergens: list[str] = Field(default_factory=list)

    model_config = _RESULT_CONFIG


class DietCheckResult(BaseModel):
    compatible: bool
    violations: list[str] = Field(default_factory=list)
    violating_terms: dict[str, list[str]] = Field(default_factory=dict)

    model_config = _RESULT_CONFIG


class SafetyFilterResult(BaseModel):
    filtered_recipes: list[SavedRecipe] = Field(default_factory=list)
    removed_count: int = Field(default=0, ge=0)

    model_config = _RESULT_CONFIG


class DateRange(BaseModel):
    """Inclusive creation-date window; either bound may be omitted."""

    from_: Optional[datetime] = Field(default=None, alias="from")
    to: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RecipeFilters(BaseModel):
    """Search, tag, date, safety and ordering options for a recipe listing."""

    search_query: str = ""
    selected_tags: list[str] = Field(default_factory=list)
    date_range: Optional[DateRange] = Field(default=None)
    sort_by: Optional[SortOption] = Field(default="date-desc")
    allergens: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)

    model_config = _RESULT_CONFIG


class RecipeContentScore(BaseModel):
    """Breakdown of the recipe-content heuristic."""

    keyword_points: int = 0
    verb_points: int = 0
    list_points: int = 0
    measurement_points: int = 0
    matched_keywords: list[str] = Field(default_factory=list)
    matched_verbs: list[str] = Field(default_factory=list)

    model_config = _RESULT_CONFIG

    @property
    def total(self) -> int:
        return self.keyword_points + self.verb_points + self.list_points + self.measurement_points
