"""Models describing a recipe extracted from free text."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mise.models.recipe import RequiredIngredient

_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class RecipeInstruction(BaseModel):
    step: int = Field(ge=1)
    text: str

    model_config = _CONFIG


class RecipeMetadata(BaseModel):
    """Times and descriptors exactly as written in the source text."""

    prep_time: Optional[str] = Field(default=None)
    cook_time: Optional[str] = Field(default=None)
    total_time: Optional[str] = Field(default=None)
    servings: Optional[str] = Field(default=None)
    difficulty: Optional[Literal["easy", "medium", "hard"]] = Field(default=None)
    cuisine: Optional[str] = Field(default=None)
    course: Optional[str] = Field(default=None)

    model_config = _CONFIG


class RecipeNutrition(BaseModel):
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[str] = Field(default=None)
    carbs: Optional[str] = Field(default=None)
    fat: Optional[str] = Field(default=None)
    fiber: Optional[str] = Field(default=None)
    sugar: Optional[str] = Field(default=None)
    sodium: Optional[str] = Field(default=None)

    model_config = _CONFIG


class ExtractedRecipe(BaseModel):
    title: str
    ingredients: list[RequiredIngredient] = Field(default_factory=list)
    instructions: list[RecipeInstruction] = Field(default_factory=list)
    metadata: RecipeMetadata = Field(default_factory=RecipeMetadata)
    nutrition: Optional[RecipeNutrition] = Field(default=None)
    tags: list[str] = Field(default_factory=list)
    original_text: str = ""
    extracted_at: datetime
    is_complete: bool
    missing_fields: list[str] = Field(default_factory=list)

    model_config = _CONFIG


class RecipeValidation(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    completeness: int = Field(ge=0, le=100)

    model_config = _CONFIG
