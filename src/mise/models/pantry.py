"""Pantry inventory data models."""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PantryItem(BaseModel):
    """Ingredient currently held in a user's pantry."""

    id: Union[int, str]
    owner_id: Optional[str] = Field(default=None, alias="ownerId")
    name: str
    quantity: float = Field(default=0.0)
    unit: str = ""
    category: Optional[str] = Field(default=None)
    expiry_date: Optional[date] = Field(default=None, alias="expiryDate")
    notes: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True, populate_by_name=True)
