"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

from mise.config import Settings, get_settings


def test_defaults():
    settings = get_settings()

    assert settings == Settings()
    assert settings.recipe_detection_threshold == 5
    assert settings.keto_carb_limit_g == 20.0
    assert settings.low_fat_limit_g == 15.0
    assert settings.word_boundary_matching is False
    assert settings.keywords_path is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MISE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MISE_LOG_FORMAT", "json")
    monkeypatch.setenv("MISE_RECIPE_THRESHOLD", "7")
    monkeypatch.setenv("MISE_WORD_BOUNDARY_MATCHING", "on")
    monkeypatch.setenv("MISE_KEYWORDS_PATH", "tables/keywords.json")
    monkeypatch.setenv("MISE_SUGGESTION_CUTOFF", "60")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"
    assert settings.recipe_detection_threshold == 7
    assert settings.word_boundary_matching is True
    assert settings.keywords_path == Path("tables/keywords.json")
    assert settings.suggestion_score_cutoff == 60.0


def test_malformed_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("MISE_RECIPE_THRESHOLD", "five")
    monkeypatch.setenv("MISE_LOW_FAT_LIMIT_G", "lots")

    settings = get_settings()

    assert settings.recipe_detection_threshold == 5
    assert settings.low_fat_limit_g == 15.0


def test_env_file_values_are_used(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text(
        "# local overrides\nMISE_KETO_CARB_LIMIT_G=30\nMISE_LOG_LEVEL=WARNING\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MISE_LOG_LEVEL", "ERROR")

    settings = get_settings()

    assert settings.keto_carb_limit_g == 30.0
    assert settings.log_level == "ERROR"


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("MISE_RECIPE_THRESHOLD", "9")

    assert get_settings() is first

    get_settings.cache_clear()
    assert get_settings().recipe_detection_threshold == 9
