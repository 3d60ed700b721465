"""Heuristic detection of recipe content in chat messages."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from mise.config import get_settings
from mise.matching.parser import COOKING_VERBS
from mise.matching.units import QUANTITY_PATTERN
from mise.models.results import RecipeContentScore

RECIPE_KEYWORDS: tuple[str, ...] = (
    "ingredients:",
    "instructions:",
    "directions:",
    "recipe",
    "servings:",
    "prep time:",
    "cook time:",
    "total time:",
    "calories:",
)

# Tunable weights; the threshold lives in Settings.recipe_detection_threshold.
KEYWORD_WEIGHT = 3
VERB_WEIGHT = 1
NUMBERED_LIST_WEIGHT = 2
BULLETED_LIST_WEIGHT = 2
MEASUREMENT_WEIGHT = 2

_NUMBERED_STEP_RE = re.compile(r"\n\s*\d+[.)]\s+")
_BULLET_ITEM_RE = re.compile(r"\n\s*[-*•]\s+")
_MEASUREMENT_RE = re.compile(
    rf"\b{QUANTITY_PATTERN}\s*(?:cup|tbsp|tsp|tablespoon|teaspoon|oz|lb|g|kg|ml|l|pound|ounce|gram|liter)s?\b",
    re.IGNORECASE,
)


def score_recipe_content(content: str) -> RecipeContentScore:
    """Score how strongly a message looks like a recipe."""

    if not content or not content.strip():
        return RecipeContentScore()

    lowered = content.lower()
    keywords = [keyword for keyword in RECIPE_KEYWORDS if keyword in lowered]
    verbs = [verb for verb in COOKING_VERBS if verb in lowered]

    list_points = 0
    if _NUMBERED_STEP_RE.search(content):
        list_points += NUMBERED_LIST_WEIGHT
    if _BULLET_ITEM_RE.search(content):
        list_points += BULLETED_LIST_WEIGHT

    return RecipeContentScore(
        keyword_points=KEYWORD_WEIGHT * len(keywords),
        verb_points=VERB_WEIGHT * len(verbs),
        list_points=list_points,
        measurement_points=MEASUREMENT_WEIGHT if _MEASUREMENT_RE.search(content) else 0,
        matched_keywords=keywords,
        matched_verbs=verbs,
    )


def is_recipe_content(content: str, threshold: Optional[int] = None) -> bool:
    """True when the message scores at or above the recipe threshold."""

    if threshold is None:
        threshold = get_settings().recipe_detection_threshold
    return score_recipe_content(content).total >= threshold


def get_message_text_content(message: Mapping[str, Any]) -> str:
    """Return the text of a chat message, preferring its text parts."""

    parts = message.get("parts") or []
    texts = [
        part.get("text", "")
        for part in parts
        if isinstance(part, Mapping) and part.get("type") == "text"
    ]
    joined = "\n\n".join(texts)
    return joined or message.get("content") or ""


__all__ = [
    "RECIPE_KEYWORDS",
    "get_message_text_content",
    "is_recipe_content",
    "score_recipe_content",
]
