"""Recipe-level helpers: content detection, listing filters and extraction."""

from __future__ import annotations

from .detection import get_message_text_content, is_recipe_content, score_recipe_content
from .extraction import extract_recipe, to_saved_recipe, validate_recipe
from .filters import extract_all_tags, filter_recipes, highlight_search_query, sort_recipes

__all__ = [
    "extract_all_tags",
    "extract_recipe",
    "filter_recipes",
    "get_message_text_content",
    "highlight_search_query",
    "is_recipe_content",
    "score_recipe_content",
    "sort_recipes",
    "to_saved_recipe",
    "validate_recipe",
]
