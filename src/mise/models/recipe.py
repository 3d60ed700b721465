"""Recipe data models and ingredient shape normalization."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
)
from pydantic.alias_generators import to_camel


def _stringify_quantity(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return f"{value:g}"
    return value


class RequiredIngredient(BaseModel):
    """Canonical ingredient record used by every comparison in the engine."""

    name: str
    quantity: Optional[str] = Field(default=None)
    unit: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> Any:
        return _stringify_quantity(value)


class StructuredIngredient(BaseModel):
    """Ingredient stored as an object; the name may live under several keys."""

    item: Optional[str] = Field(default=None)
    name: Optional[str] = Field(default=None)
    ingredient: Optional[str] = Field(default=None)
    quantity: Optional[str] = Field(default=None)
    unit: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> Any:
        return _stringify_quantity(value)

    @property
    def resolved_name(self) -> str:
        for candidate in (self.item, self.name, self.ingredient):
            if candidate and candidate.strip():
                return candidate.strip()
        return ""


def _ingredient_shape(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return "text"
    if isinstance(value, (dict, StructuredIngredient)):
        return "structured"
    return None


RecipeIngredient = Annotated[
    Union[
        Annotated[str, Tag("text")],
        Annotated[StructuredIngredient, Tag("structured")],
    ],
    Discriminator(_ingredient_shape),
]


def canonical_ingredient(
    entry: Union[str, StructuredIngredient, RequiredIngredient],
) -> RequiredIngredient:
    """Convert any supported ingredient shape into a ``RequiredIngredient``."""

    if isinstance(entry, RequiredIngredient):
        return entry
    if isinstance(entry, str):
        return RequiredIngredient(name=entry.strip())
    if isinstance(entry, StructuredIngredient):
        return RequiredIngredient(
            name=entry.resolved_name,
            quantity=entry.quantity,
            unit=entry.unit,
            notes=entry.notes,
        )
    raise TypeError(f"unsupported ingredient shape: {type(entry).__name__}")


class SavedRecipe(BaseModel):
    """Recipe record saved by a user."""

    id: Optional[Union[int, str]] = Field(default=None)
    owner_id: Optional[str] = Field(default=None)
    title: str = ""
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None)
    prep_time_minutes: Optional[int] = Field(default=None, ge=0)
    cook_time_minutes: Optional[int] = Field(default=None, ge=0)
    servings: Optional[float] = Field(default=None, ge=0)
    calories: Optional[float] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fats: Optional[float] = Field(default=None, ge=0)
    difficulty: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    @field_validator("ingredients", "instructions", "tags", mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def canonical_ingredients(self) -> list[RequiredIngredient]:
        return [canonical_ingredient(entry) for entry in self.ingredients]

    @property
    def total_time_minutes(self) -> int:
        return (self.prep_time_minutes or 0) + (self.cook_time_minutes or 0)


def as_saved_recipe(recipe: Union[SavedRecipe, Mapping[str, Any]]) -> SavedRecipe:
    """Validate a mapping into a ``SavedRecipe``; instances pass through."""

    if isinstance(recipe, SavedRecipe):
        return recipe
    return SavedRecipe.model_validate(recipe)
