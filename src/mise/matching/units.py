"""Measurement vocabulary shared by the normalizer, parser and detector."""

from __future__ import annotations

import re
from typing import Optional

# Canonical unit token for every accepted spelling.
UNIT_ALIASES: dict[str, str] = {
    "cup": "cup",
    "cups": "cup",
    "c": "cup",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsp": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsp": "tsp",
    "tsps": "tsp",
    "ounce": "oz",
    "ounces": "oz",
    "oz": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lb": "lb",
    "lbs": "lb",
    "gram": "g",
    "grams": "g",
    "g": "g",
    "kilogram": "kg",
    "kilograms": "kg",
    "kg": "kg",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "ml": "ml",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    "l": "l",
    "clove": "clove",
    "cloves": "clove",
    "piece": "piece",
    "pieces": "piece",
    "slice": "slice",
    "slices": "slice",
    "can": "can",
    "cans": "can",
    "pinch": "pinch",
    "pinches": "pinch",
    "dash": "dash",
    "dashes": "dash",
}

# Units that make a line unambiguously a measured ingredient.
MEASUREMENT_UNITS: tuple[str, ...] = (
    "cups",
    "cup",
    "tablespoons",
    "tablespoon",
    "tbsps",
    "tbsp",
    "tbs",
    "teaspoons",
    "teaspoon",
    "tsps",
    "tsp",
    "ounces",
    "ounce",
    "oz",
    "pounds",
    "pound",
    "lbs",
    "lb",
    "grams",
    "gram",
    "g",
    "kilograms",
    "kilogram",
    "kg",
    "milliliters",
    "milliliter",
    "millilitres",
    "millilitre",
    "ml",
    "liters",
    "liter",
    "litres",
    "litre",
    "l",
)

# Count-style units accepted after a quantity but not evidence of a recipe on their own.
COUNT_UNITS: tuple[str, ...] = (
    "cloves",
    "clove",
    "pieces",
    "piece",
    "slices",
    "slice",
    "cans",
    "can",
    "pinches",
    "pinch",
    "dashes",
    "dash",
)

UNICODE_FRACTIONS = "½⅓⅔¼¾⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞"

# 1, 1.5, 1/2, 1 1/2, ½, 1½, 2-3
QUANTITY_PATTERN = (
    rf"(?:\d+(?:\.\d+)?(?:\s+\d+/\d+|/\d+)?[{UNICODE_FRACTIONS}]?|[{UNICODE_FRACTIONS}])"
    rf"(?:\s*-\s*\d+(?:\.\d+)?(?:/\d+)?)?"
)

UNIT_PATTERN = "|".join(MEASUREMENT_UNITS + COUNT_UNITS)

MEASUREMENT_RE = re.compile(
    rf"(?<![\w/.])(?:{QUANTITY_PATTERN})\s*(?:{'|'.join(MEASUREMENT_UNITS)})\b",
    re.IGNORECASE,
)


def normalize_unit(unit: Optional[str]) -> str:
    """Return the canonical token for a unit spelling ("Tablespoons" -> "tbsp")."""

    if not unit:
        return ""
    cleaned = unit.strip().lower().rstrip(".")
    return UNIT_ALIASES.get(cleaned, cleaned)


def has_measurement(text: str) -> bool:
    """True when the text carries a number followed by a measurement unit."""

    return MEASUREMENT_RE.search(text) is not None
