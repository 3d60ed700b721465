"""Extract structured recipes from free-form assistant replies."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from mise.matching.parser import parse_ingredients_from_recipe
from mise.models.extraction import (
    ExtractedRecipe,
    RecipeInstruction,
    RecipeMetadata,
    RecipeNutrition,
    RecipeValidation,
)
from mise.models.recipe import SavedRecipe, StructuredIngredient

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Recipe"

_TITLE_PREFIX_RE = re.compile(r"^(?:recipe|title):\s*(.+)", re.IGNORECASE)
_MARKDOWN_HEADER_RE = re.compile(r"^#{1,3}\s+(.+)")
_SECTION_LABEL_RE = re.compile(
    r"^(?:ingredients|instructions|directions|preparation|nutrition|notes):", re.IGNORECASE
)
_EXCLUDED_HEADERS = ("ingredients", "instructions", "directions", "nutrition", "notes")

_INSTRUCTION_HEADER_RE = re.compile(
    r"^(?:instructions|directions|steps|method|preparation)\s*(?::.*)?$"
)
_INSTRUCTION_END_RE = re.compile(r"^(?:nutrition|notes|tips|serving)s?:", re.IGNORECASE)
_NUMBERED_RE = re.compile(r"^\d+[.)]\s*(.+)")
_BULLET_RE = re.compile(r"^[-*•]\s*(.+)")
_MIN_PLAIN_STEP_LENGTH = 20

_TIME = r"(\d+\s*(?:min(?:ute)?s?|hours?|hrs?))"
_PREP_RE = re.compile(rf"prep(?:\s+time)?:\s*{_TIME}", re.IGNORECASE)
_COOK_RE = re.compile(rf"cook(?:\s+time)?:\s*{_TIME}", re.IGNORECASE)
_TOTAL_RE = re.compile(rf"total(?:\s+time)?:\s*{_TIME}", re.IGNORECASE)
_SERVINGS_RE = re.compile(r"servings?:\s*(\d+(?:-\d+)?)", re.IGNORECASE)
_YIELD_RE = re.compile(r"yields?:\s*(\d+(?:-\d+)?)", re.IGNORECASE)
_CUISINE_RE = re.compile(r"cuisine:\s*([^\n]+)", re.IGNORECASE)
_COURSE_RE = re.compile(r"course:\s*([^\n]+)", re.IGNORECASE)

_NUTRITION_PATTERNS = {
    "protein": re.compile(r"protein:\s*([\d.]+\s*g)", re.IGNORECASE),
    "carbs": re.compile(r"carb(?:ohydrate)?s?:\s*([\d.]+\s*g)", re.IGNORECASE),
    "fat": re.compile(r"fat:\s*([\d.]+\s*g)", re.IGNORECASE),
    "fiber": re.compile(r"fiber:\s*([\d.]+\s*g)", re.IGNORECASE),
    "sugar": re.compile(r"sugar:\s*([\d.]+\s*g)", re.IGNORECASE),
    "sodium": re.compile(r"sodium:\s*([\d.]+\s*(?:mg|g))", re.IGNORECASE),
}
_CALORIES_RE = re.compile(r"calories?:\s*(\d+)", re.IGNORECASE)

_TAG_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("vegan", ("vegan",)),
    ("vegetarian", ("vegetarian",)),
    ("gluten-free", ("gluten-free", "gluten free")),
    ("dairy-free", ("dairy-free", "dairy free")),
    ("keto", ("keto", "ketogenic")),
    ("paleo", ("paleo",)),
    ("low-carb", ("low-carb", "low carb")),
    ("high-protein", ("high-protein", "high protein")),
    ("baked", ("baked", "baking")),
    ("grilled", ("grilled", "grilling")),
    ("fried", ("fried", "frying")),
    ("slow-cooker", ("slow cooker", "crockpot")),
    ("instant-pot", ("instant pot", "pressure cooker")),
    ("no-cook", ("no-cook", "no cook")),
)


def _header_key(line: str) -> str:
    cleaned = re.sub(r"[*_#]", "", line.strip().lower())
    return re.sub(r"^[-•*]\s*", "", cleaned).strip()


def extract_title(text: str) -> Optional[str]:
    """Find a recipe title: "Title:" prefix, markdown header, then first plain line."""

    lines = text.splitlines()
    for line in lines:
        if match := _TITLE_PREFIX_RE.match(line.strip()):
            return match.group(1).strip()

    for line in lines:
        if match := _MARKDOWN_HEADER_RE.match(line.strip()):
            title = match.group(1).strip()
            if not any(header in title.lower() for header in _EXCLUDED_HEADERS):
                return title

    for line in lines:
        trimmed = line.strip()
        if (
            trimmed
            and len(trimmed) < 80
            and not _SECTION_LABEL_RE.match(trimmed)
            and not re.match(r"^\d+\.", trimmed)
            and not re.match(r"^[-*•]", trimmed)
        ):
            return trimmed
    return None


def extract_instructions(text: str) -> List[RecipeInstruction]:
    """Collect numbered, bulleted or substantial lines under an instructions header."""

    instructions: List[RecipeInstruction] = []
    in_section = False
    for line in text.splitlines():
        trimmed = line.strip()
        if _INSTRUCTION_HEADER_RE.match(_header_key(trimmed)):
            in_section = True
            continue
        if not in_section or not trimmed:
            continue
        if _INSTRUCTION_END_RE.match(trimmed):
            break

        match = _NUMBERED_RE.match(trimmed) or _BULLET_RE.match(trimmed)
        if match:
            step_text = match.group(1).strip()
        elif len(trimmed) > _MIN_PLAIN_STEP_LENGTH:
            step_text = trimmed
        else:
            continue
        instructions.append(RecipeInstruction(step=len(instructions) + 1, text=step_text))

    logger.debug("Extracted %d instruction step(s)", len(instructions))
    return instructions


def _first_group(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def extract_metadata(text: str) -> RecipeMetadata:
    lowered = text.lower()

    difficulty = None
    if any(word in lowered for word in ("difficult", "advanced", "expert")):
        difficulty = "hard"
    elif any(word in lowered for word in ("medium", "intermediate")):
        difficulty = "medium"
    elif any(word in lowered for word in ("easy", "simple", "beginner")):
        difficulty = "easy"

    course = _first_group(_COURSE_RE, text)
    if course:
        course = course.lower()
    elif any(word in lowered for word in ("breakfast", "pancake", "omelette")):
        course = "breakfast"
    elif any(word in lowered for word in ("dessert", "cake", "cookie")):
        course = "dessert"
    elif any(word in lowered for word in ("snack", "appetizer")):
        course = "snack"

    return RecipeMetadata(
        prep_time=_first_group(_PREP_RE, text),
        cook_time=_first_group(_COOK_RE, text),
        total_time=_first_group(_TOTAL_RE, text),
        servings=_first_group(_SERVINGS_RE, text) or _first_group(_YIELD_RE, text),
        difficulty=difficulty,
        cuisine=_first_group(_CUISINE_RE, text),
        course=course,
    )


def extract_nutrition(text: str) -> Optional[RecipeNutrition]:
    values: dict[str, object] = {}
    if calories := _first_group(_CALORIES_RE, text):
        values["calories"] = int(calories)
    for name, pattern in _NUTRITION_PATTERNS.items():
        if found := _first_group(pattern, text):
            values[name] = found
    return RecipeNutrition(**values) if values else None


def extract_tags(text: str) -> List[str]:
    lowered = text.lower()
    tags = [tag for tag, phrases in _TAG_RULES if any(phrase in lowered for phrase in phrases)]
    quick = any(word in lowered for word in ("quick", "easy", "30 minutes"))
    if quick and "slow" not in lowered:
        tags.append("quick")
    return tags


def extract_recipe(text: str, *, now: Optional[datetime] = None) -> ExtractedRecipe:
    """Combine every extractor into a single ``ExtractedRecipe``."""

    title = extract_title(text) or UNTITLED
    ingredients = parse_ingredients_from_recipe(text)
    instructions = extract_instructions(text)

    missing_fields: List[str] = []
    if title == UNTITLED:
        missing_fields.append("title")
    if not ingredients:
        missing_fields.append("ingredients")
    if not instructions:
        missing_fields.append("instructions")
    if missing_fields:
        logger.info("Recipe extraction incomplete; missing %s", ", ".join(missing_fields))

    return ExtractedRecipe(
        title=title,
        ingredients=ingredients,
        instructions=instructions,
        metadata=extract_metadata(text),
        nutrition=extract_nutrition(text),
        tags=extract_tags(text),
        original_text=text,
        extracted_at=now or datetime.now(timezone.utc),
        is_complete=not missing_fields,
        missing_fields=missing_fields,
    )


def validate_recipe(recipe: ExtractedRecipe) -> RecipeValidation:
    """Report blocking errors, soft warnings and a 0-100 completeness score."""

    errors: List[str] = []
    warnings: List[str] = []
    has_title = bool(recipe.title) and recipe.title != UNTITLED
    metadata = recipe.metadata
    has_time = bool(metadata.prep_time or metadata.cook_time or metadata.total_time)

    if not has_title:
        errors.append("Recipe title is missing")
    if not recipe.ingredients:
        errors.append("No ingredients found")
    elif len(recipe.ingredients) < 2:
        warnings.append("Only one ingredient found - recipe may be incomplete")
    if not recipe.instructions:
        errors.append("No instructions found")
    elif len(recipe.instructions) < 2:
        warnings.append("Only one instruction step found - recipe may be incomplete")
    if not metadata.servings:
        warnings.append("Servings information is missing")
    if not has_time:
        warnings.append("Time information is missing")
    if recipe.nutrition is None:
        warnings.append("Nutritional information is missing")

    score = 0
    score += 2 if has_title else 0
    score += 2 if len(recipe.ingredients) >= 2 else 0
    score += 2 if len(recipe.instructions) >= 2 else 0
    score += 1 if metadata.servings else 0
    score += 1 if has_time else 0
    score += 1 if recipe.nutrition is not None else 0
    score += 1 if recipe.tags else 0

    return RecipeValidation(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        completeness=round(score / 10 * 100),
    )


def _minutes(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = re.match(r"(\d+)\s*(h)?", value.strip().lower())
    if not match:
        return None
    amount = int(match.group(1))
    return amount * 60 if match.group(2) else amount


def _grams(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = re.match(r"([\d.]+)", value)
    try:
        return float(match.group(1)) if match else None
    except ValueError:
        return None


def to_saved_recipe(recipe: ExtractedRecipe) -> SavedRecipe:
    """Convert an extraction into a ``SavedRecipe`` the scanner and filters accept."""

    nutrition = recipe.nutrition or RecipeNutrition()
    servings = recipe.metadata.servings
    return SavedRecipe(
        title=recipe.title,
        ingredients=[
            StructuredIngredient(
                item=ingredient.name,
                quantity=ingredient.quantity,
                unit=ingredient.unit,
                notes=ingredient.notes,
            )
            for ingredient in recipe.ingredients
        ],
        instructions=[instruction.text for instruction in recipe.instructions],
        tags=list(recipe.tags),
        created_at=recipe.extracted_at,
        prep_time_minutes=_minutes(recipe.metadata.prep_time),
        cook_time_minutes=_minutes(recipe.metadata.cook_time),
        servings=float(servings.split("-")[0]) if servings else None,
        calories=nutrition.calories,
        protein=_grams(nutrition.protein),
        carbs=_grams(nutrition.carbs),
        fats=_grams(nutrition.fat),
        difficulty=recipe.metadata.difficulty,
    )


__all__ = [
    "extract_instructions",
    "extract_metadata",
    "extract_nutrition",
    "extract_recipe",
    "extract_tags",
    "extract_title",
    "to_saved_recipe",
    "validate_recipe",
]
