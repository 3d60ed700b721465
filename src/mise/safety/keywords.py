"""Allergen and dietary keyword tables used by the safety scanner.

The tables are plain data so deployments can extend or localize them with a
JSON file (``MISE_KEYWORDS_PATH``) instead of code changes. A file has the
same shape as ``ScannerConfig.model_dump()``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mise.config import ConfigurationError, get_settings

logger = logging.getLogger(__name__)

ANIMAL_PRODUCTS = (
    "meat",
    "beef",
    "pork",
    "chicken",
    "turkey",
    "lamb",
    "fish",
    "seafood",
    "shrimp",
    "crab",
    "lobster",
    "milk",
    "cheese",
    "butter",
    "cream",
    "yogurt",
    "egg",
    "honey",
    "gelatin",
)

MEAT_PRODUCTS = (
    "meat",
    "beef",
    "pork",
    "chicken",
    "turkey",
    "lamb",
    "bacon",
    "sausage",
    "ham",
)

SEAFOOD_PRODUCTS = ("fish", "seafood", "shrimp", "crab", "lobster", "salmon", "tuna", "anchovy")

GLUTEN_PRODUCTS = ("wheat", "barley", "rye", "flour", "bread", "pasta", "noodles", "couscous")

DAIRY_PRODUCTS = ("milk", "cheese", "butter", "cream", "yogurt", "whey", "casein")


class KeywordRule(BaseModel):
    """Ingredient and tag keywords whose presence violates a restriction."""

    ingredient_keywords: tuple[str, ...] = ()
    tag_keywords: tuple[str, ...] = ()
    exceptions: tuple[str, ...] = Field(
        default=(),
        description="Keywords containing any of these terms are skipped.",
    )

    model_config = ConfigDict(frozen=True)

    def active_keywords(self) -> tuple[str, ...]:
        return tuple(
            keyword
            for keyword in self.ingredient_keywords
            if not any(exception in keyword for exception in self.exceptions)
        )


class MacroLimit(BaseModel):
    """Numeric ceiling on a recipe macro field, in grams."""

    macro: Literal["carbs", "fats", "protein"]
    limit_g: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class ScannerConfig(BaseModel):
    """Complete keyword configuration for allergen and diet checks."""

    keyword_rules: dict[str, KeywordRule] = Field(default_factory=dict)
    macro_limits: dict[str, MacroLimit] = Field(default_factory=dict)
    word_boundary: bool = False

    model_config = ConfigDict(frozen=True)

    def known_restrictions(self) -> set[str]:
        return set(self.keyword_rules) | set(self.macro_limits)


def build_default_config(
    *,
    carb_limit_g: float = 20.0,
    fat_limit_g: float = 15.0,
    word_boundary: bool = False,
) -> ScannerConfig:
    """Return the built-in keyword tables."""

    return ScannerConfig(
        keyword_rules={
            "vegan": KeywordRule(
                ingredient_keywords=ANIMAL_PRODUCTS,
                tag_keywords=("meat", "dairy", "egg"),
            ),
            "vegetarian": KeywordRule(
                ingredient_keywords=MEAT_PRODUCTS + SEAFOOD_PRODUCTS,
                tag_keywords=("meat", "fish", "chicken"),
            ),
            "pescatarian": KeywordRule(
                ingredient_keywords=MEAT_PRODUCTS + ("fish", "seafood"),
                tag_keywords=("meat", "chicken", "beef"),
                exceptions=("fish", "seafood"),
            ),
            "gluten-free": KeywordRule(
                ingredient_keywords=GLUTEN_PRODUCTS,
                tag_keywords=("wheat", "bread"),
            ),
            "dairy-free": KeywordRule(
                ingredient_keywords=DAIRY_PRODUCTS,
                tag_keywords=("dairy", "cheese"),
            ),
        },
        macro_limits={
            "keto": MacroLimit(macro="carbs", limit_g=carb_limit_g),
            "low-carb": MacroLimit(macro="carbs", limit_g=carb_limit_g),
            "low-fat": MacroLimit(macro="fats", limit_g=fat_limit_g),
        },
        word_boundary=word_boundary,
    )


def load_scanner_config(path: Path) -> ScannerConfig:
    """Load keyword tables from a JSON file."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"unable to read keyword table {path}: {exc}") from exc
    try:
        config = ScannerConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid keyword table {path}: {exc}") from exc
    logger.info(
        "Loaded keyword table from %s (%d restriction(s))",
        path,
        len(config.known_restrictions()),
    )
    return config


@lru_cache
def default_scanner_config() -> ScannerConfig:
    """Return the cached scanner configuration derived from settings."""

    settings = get_settings()
    if settings.keywords_path is not None:
        return load_scanner_config(settings.keywords_path)
    return build_default_config(
        carb_limit_g=settings.keto_carb_limit_g,
        fat_limit_g=settings.low_fat_limit_g,
        word_boundary=settings.word_boundary_matching,
    )


__all__ = [
    "KeywordRule",
    "MacroLimit",
    "ScannerConfig",
    "build_default_config",
    "default_scanner_config",
    "load_scanner_config",
]
