"""Shared pytest fixtures for the Mise test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List

import pytest

from mise.config import get_settings
from mise.models.pantry import PantryItem
from mise.models.recipe import SavedRecipe
from mise.safety.keywords import default_scanner_config

MISE_ENV_VARS = (
    "MISE_LOG_LEVEL",
    "MISE_LOG_FORMAT",
    "MISE_RECIPE_THRESHOLD",
    "MISE_KETO_CARB_LIMIT_G",
    "MISE_LOW_FAT_LIMIT_G",
    "MISE_WORD_BOUNDARY_MATCHING",
    "MISE_KEYWORDS_PATH",
    "MISE_SUGGESTION_CUTOFF",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run each test from an empty directory with no MISE_* overrides."""

    monkeypatch.chdir(tmp_path)
    for name in MISE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    default_scanner_config.cache_clear()
    yield
    get_settings.cache_clear()
    default_scanner_config.cache_clear()


@pytest.fixture()
def pantry() -> List[PantryItem]:
    """A small pantry shared by comparison tests."""

    return [
        PantryItem(id=1, owner_id="u1", name="All-purpose flour", quantity=1000, unit="g"),
        PantryItem(id=2, owner_id="u1", name="salt", quantity=500, unit="g"),
        PantryItem(id=3, owner_id="u1", name="Tomatoes", quantity=4),
        PantryItem(id=4, owner_id="u2", name="butter", quantity=250, unit="g"),
        PantryItem(id=5, owner_id="u1", name="Eggplant", quantity=1),
    ]


@pytest.fixture()
def recipe_payloads() -> List[Dict[str, object]]:
    """Saved recipes as they arrive from storage (camelCase keys)."""

    return [
        {
            "id": "r1",
            "title": "Peanut Butter Cookies",
            "ingredients": ["1 cup peanut butter", "1 cup sugar", "1 egg"],
            "tags": ["dessert", "baked"],
            "createdAt": "2024-01-10T12:00:00+00:00",
            "prepTimeMinutes": 10,
            "cookTimeMinutes": 12,
            "carbs": 30,
        },
        {
            "id": "r2",
            "title": "Tofu Stir Fry",
            "ingredients": [
                {"item": "tofu", "quantity": 400, "unit": "g"},
                {"name": "soy sauce", "quantity": "2", "unit": "tbsp"},
                {"ingredient": "broccoli"},
            ],
            "tags": ["vegan", "dinner", "quick"],
            "createdAt": "2024-03-05T18:30:00+00:00",
            "prepTimeMinutes": 15,
            "cookTimeMinutes": 10,
            "carbs": 18,
            "fats": 12,
        },
        {
            "id": "r3",
            "title": "Éclair",
            "ingredients": ["milk", "butter", "flour", "eggs"],
            "tags": ["Dessert", "french"],
            "notes": "Pipe while the choux is warm.",
            "createdAt": "2023-12-24T09:00:00+00:00",
            "prepTimeMinutes": 45,
            "cookTimeMinutes": 30,
        },
        {
            "id": "r4",
            "title": "Grilled Salmon",
            "ingredients": ["salmon fillet", "lemon", "olive oil"],
            "tags": ["dinner"],
            "prepTimeMinutes": 5,
            "cookTimeMinutes": 15,
            "carbs": 2,
            "fats": 22,
        },
    ]


@pytest.fixture()
def saved_recipes(recipe_payloads) -> List[SavedRecipe]:
    return [SavedRecipe.model_validate(payload) for payload in recipe_payloads]


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
