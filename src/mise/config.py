"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class ConfigurationError(RuntimeError):
    """Raised when an explicitly configured resource cannot be loaded."""


class Settings(BaseModel):
    """Global engine settings loaded from environment variables or .env files."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    recipe_detection_threshold: int = Field(
        default=5,
        description="Minimum heuristic score for a message to be treated as a recipe.",
    )
    keto_carb_limit_g: float = Field(
        default=20.0,
        description="Carbohydrate grams above which keto/low-carb recipes are rejected.",
    )
    low_fat_limit_g: float = Field(
        default=15.0,
        description="Fat grams above which low-fat recipes are rejected.",
    )
    word_boundary_matching: bool = Field(
        default=False,
        description="Require whole-word keyword matches instead of plain substrings.",
    )
    keywords_path: Optional[Path] = Field(
        default=None,
        description="Optional JSON file replacing the built-in allergen/diet keyword tables.",
    )
    suggestion_score_cutoff: float = Field(
        default=75.0,
        description="Minimum fuzzy score (0-100) for pantry substitution suggestions.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (log_level := _env("MISE_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("MISE_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (threshold := _env("MISE_RECIPE_THRESHOLD")):
        try:
            payload["recipe_detection_threshold"] = int(threshold)
        except ValueError:
            pass
    if (carb_limit := _env("MISE_KETO_CARB_LIMIT_G")):
        try:
            payload["keto_carb_limit_g"] = float(carb_limit)
        except ValueError:
            pass
    if (fat_limit := _env("MISE_LOW_FAT_LIMIT_G")):
        try:
            payload["low_fat_limit_g"] = float(fat_limit)
        except ValueError:
            pass
    if (word_boundary := _env("MISE_WORD_BOUNDARY_MATCHING")):
        payload["word_boundary_matching"] = _coerce_bool(word_boundary)
    if (keywords_path := _env("MISE_KEYWORDS_PATH")):
        payload["keywords_path"] = Path(keywords_path)
    if (cutoff := _env("MISE_SUGGESTION_CUTOFF")):
        try:
            payload["suggestion_score_cutoff"] = float(cutoff)
        except ValueError:
            pass
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
