"""Search, tag, date and safety filtering plus ordering for recipe listings."""

from __future__ import annotations

import logging
import re
import unicodedata
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from mise.models.recipe import SavedRecipe, as_saved_recipe
from mise.models.results import DateRange, RecipeFilters, SortOption
from mise.safety.keywords import ScannerConfig
from mise.safety.scanner import filter_recipes as safety_filter

logger = logging.getLogger(__name__)

RecipeLike = Union[SavedRecipe, Mapping[str, Any]]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def collation_key(value: str) -> str:
    """Accent- and case-insensitive key approximating locale-aware ordering."""

    decomposed = unicodedata.normalize("NFKD", value or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _matches_search(recipe: SavedRecipe, query: str) -> bool:
    if query in recipe.title.lower():
        return True
    if recipe.notes and query in recipe.notes.lower():
        return True
    if any(query in ingredient.name.lower() for ingredient in recipe.canonical_ingredients()):
        return True
    return any(query in tag.lower() for tag in recipe.tags)


def _has_all_tags(recipe: SavedRecipe, selected: Sequence[str]) -> bool:
    recipe_tags = {tag.strip().lower() for tag in recipe.tags}
    return all(tag in recipe_tags for tag in selected)


def _in_range(recipe: SavedRecipe, date_range: DateRange) -> bool:
    if recipe.created_at is None:
        return False
    created = _aware(recipe.created_at)
    if date_range.from_ is not None and created < _aware(date_range.from_):
        return False
    if date_range.to is not None and created > _aware(date_range.to):
        return False
    return True


def sort_recipes(recipes: Iterable[RecipeLike], sort_by: Optional[SortOption]) -> List[SavedRecipe]:
    """Return a stably sorted copy of ``recipes``."""

    items = [as_saved_recipe(recipe) for recipe in recipes]
    if sort_by in ("date-desc", "date-asc"):
        items.sort(
            key=lambda recipe: _aware(recipe.created_at) if recipe.created_at else _EPOCH,
            reverse=sort_by == "date-desc",
        )
    elif sort_by in ("name-asc", "name-desc"):
        items.sort(key=lambda recipe: collation_key(recipe.title), reverse=sort_by == "name-desc")
    elif sort_by in ("time-asc", "time-desc"):
        items.sort(key=lambda recipe: recipe.total_time_minutes, reverse=sort_by == "time-desc")
    return items


def filter_recipes(
    recipes: Iterable[RecipeLike],
    filters: RecipeFilters,
    config: Optional[ScannerConfig] = None,
) -> List[SavedRecipe]:
    """Apply search, tag, date and safety filters, then sort.

    Search matches title, notes, ingredient names or tags (any field). Tag
    selection requires every selected tag.
    """

    filtered = [as_saved_recipe(recipe) for recipe in recipes]
    total = len(filtered)

    query = filters.search_query.strip().lower()
    if query:
        filtered = [recipe for recipe in filtered if _matches_search(recipe, query)]

    selected = [tag.strip().lower() for tag in filters.selected_tags if tag.strip()]
    if selected:
        filtered = [recipe for recipe in filtered if _has_all_tags(recipe, selected)]

    date_range = filters.date_range
    if date_range is not None and (date_range.from_ is not None or date_range.to is not None):
        filtered = [recipe for recipe in filtered if _in_range(recipe, date_range)]

    if filters.allergens or filters.dietary_restrictions:
        filtered = safety_filter(
            filtered, filters.allergens, filters.dietary_restrictions, config
        ).filtered_recipes

    logger.debug("Recipe filters kept %d of %d recipe(s)", len(filtered), total)
    return sort_recipes(filtered, filters.sort_by)


def extract_all_tags(recipes: Iterable[RecipeLike]) -> List[str]:
    """Every distinct tag across ``recipes``, in collation order."""

    tags = {
        tag
        for recipe in recipes
        for tag in as_saved_recipe(recipe).tags
        if tag and tag.strip()
    }
    return sorted(tags, key=lambda tag: (collation_key(tag), tag))


def highlight_search_query(text: str, query: str) -> str:
    """Wrap case-insensitive occurrences of ``query`` in ``<mark>`` tags."""

    if not query:
        return text
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda match: f"<mark>{match.group(0)}</mark>", text)


__all__ = [
    "collation_key",
    "extract_all_tags",
    "filter_recipes",
    "highlight_search_query",
    "sort_recipes",
]
