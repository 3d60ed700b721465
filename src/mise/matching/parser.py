"""Heuristic recipe text parser producing required ingredients."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from mise.models.recipe import RequiredIngredient

from .units import COUNT_UNITS, MEASUREMENT_UNITS, QUANTITY_PATTERN, has_measurement

logger = logging.getLogger(__name__)

# Shared with the recipe-content detector.
COOKING_VERBS: tuple[str, ...] = (
    "preheat",
    "bake",
    "mix",
    "combine",
    "whisk",
    "stir",
    "sauté",
    "saute",
    "simmer",
    "boil",
    "fry",
    "roast",
    "grill",
    "chop",
    "dice",
    "mince",
    "slice",
)

# Verbs that open a step line. The detector weighs COOKING_VERBS alone.
INSTRUCTION_VERBS: tuple[str, ...] = COOKING_VERBS + (
    "add",
    "serve",
    "cook",
    "heat",
    "pour",
    "place",
    "season",
    "cut",
    "beat",
    "fold",
    "drain",
    "transfer",
    "cover",
    "bring",
    "remove",
    "toss",
    "spread",
    "sprinkle",
    "reduce",
    "rinse",
    "blend",
    "knead",
    "marinate",
    "refrigerate",
    "garnish",
    "melt",
    "let",
)

INGREDIENT_HEADERS = ("ingredients", "ingredient list", "what you need", "what you'll need")
INSTRUCTION_HEADERS = ("instructions", "directions", "steps", "method", "preparation")
SECTION_HEADERS = INSTRUCTION_HEADERS + ("nutrition", "notes")

_BULLET_RE = re.compile(r"^\s*[-*•]\s*")
_NUMBERED_RE = re.compile(r"^\s*\d+[.)]\s+")
_MARKDOWN_RE = re.compile(r"[*_#`]")
_INGREDIENT_HEADER_RE = re.compile(
    r"^(?P<header>" + "|".join(re.escape(h) for h in INGREDIENT_HEADERS) + r")\s*(?::\s*(?P<rest>.*))?$"
)
_SECTION_HEADER_RE = re.compile(
    r"^(?:" + "|".join(re.escape(h) for h in SECTION_HEADERS) + r")\s*(?::.*)?$"
)
_INSTRUCTION_HEADER_RE = re.compile(
    r"^(?:" + "|".join(re.escape(h) for h in INSTRUCTION_HEADERS) + r")\s*(?::.*)?$"
)
_VERB_RE = re.compile(r"\b(?:" + "|".join(COOKING_VERBS) + r")\b", re.IGNORECASE)
_LEADING_VERB_RE = re.compile(r"^(?:" + "|".join(INSTRUCTION_VERBS) + r")\b", re.IGNORECASE)
_LINE_RE = re.compile(
    rf"^(?P<quantity>{QUANTITY_PATTERN})\s*"
    rf"(?:(?P<unit>{'|'.join(MEASUREMENT_UNITS + COUNT_UNITS)})\b\.?)?\s+"
    r"(?:of\s+)?(?P<name>.+)$",
    re.IGNORECASE,
)
_PAREN_NOTES_RE = re.compile(r"^(?P<name>.+?)\s*\((?P<notes>.+)\)$")
_TRAILING_NOTES_RE = re.compile(r"^(?P<name>.+?)\s+(?P<notes>to taste|as needed|optional)$", re.IGNORECASE)


def _header_key(line: str) -> str:
    """Lower-case a line with markdown emphasis and list markers removed."""

    cleaned = _MARKDOWN_RE.sub("", line.strip().lower())
    cleaned = _BULLET_RE.sub("", cleaned)
    return cleaned.strip()


def _is_list_item(line: str) -> bool:
    return bool(_BULLET_RE.match(line) or _NUMBERED_RE.match(line))


def _strip_marker(line: str) -> str:
    cleaned = _BULLET_RE.sub("", line, count=1)
    cleaned = _NUMBERED_RE.sub("", cleaned, count=1)
    cleaned = cleaned.replace("**", "").replace("__", "")
    return cleaned.strip()


def _is_instruction(line: str) -> bool:
    if has_measurement(line) or _LINE_RE.match(line):
        return False
    return bool(_LEADING_VERB_RE.match(line) or _VERB_RE.search(line))


def _split_notes(text: str) -> tuple[str, Optional[str]]:
    text = text.strip().rstrip(".")
    if match := _PAREN_NOTES_RE.match(text):
        return match.group("name").strip(), match.group("notes").strip()
    if "," in text:
        head, tail = text.split(",", 1)
        if head.strip() and tail.strip():
            return head.strip(), tail.strip()
    if match := _TRAILING_NOTES_RE.match(text):
        return match.group("name").strip(), match.group("notes").lower()
    return text, None


def parse_ingredient_line(line: str) -> Optional[RequiredIngredient]:
    """Parse one ingredient line into quantity, unit, name and notes.

    Returns ``None`` for blank lines, sub-headings ("For the sauce:") and lines
    that read as cooking instructions.
    """

    cleaned = _strip_marker(line)
    if not cleaned or cleaned.endswith(":"):
        return None
    if _is_instruction(cleaned):
        return None

    match = _LINE_RE.match(cleaned)
    if match:
        name, notes = _split_notes(match.group("name"))
        if not name:
            return None
        return RequiredIngredient(
            name=name,
            quantity=re.sub(r"\s+", " ", match.group("quantity")).strip(),
            unit=match.group("unit"),
            notes=notes,
        )

    name, notes = _split_notes(cleaned)
    if not name:
        return None
    return RequiredIngredient(name=name, notes=notes)


def _ingredient_section(lines: List[str]) -> Optional[List[str]]:
    """Return the lines under an explicit ingredients header, if there is one."""

    start: Optional[int] = None
    collected: List[str] = []
    for index, line in enumerate(lines):
        match = _INGREDIENT_HEADER_RE.match(_header_key(line))
        if match:
            start = index
            rest = (match.group("rest") or "").strip()
            if rest:
                collected.extend(part.strip() for part in rest.split(",") if part.strip())
            break
    if start is None:
        return None

    after_blank = False
    for line in lines[start + 1:]:
        stripped = line.strip()
        if not stripped:
            after_blank = True
            continue
        if _SECTION_HEADER_RE.match(_header_key(stripped)):
            break
        if after_blank and not (_is_list_item(stripped) or has_measurement(stripped)):
            break
        after_blank = False
        collected.append(stripped)
    return collected


def _candidate_lines(lines: List[str]) -> List[str]:
    """Fallback when no header exists: list items and measured lines before the steps."""

    collected: List[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        if _INSTRUCTION_HEADER_RE.match(_header_key(stripped)):
            break
        if _is_list_item(stripped) or has_measurement(stripped):
            collected.append(stripped)
    return collected


def parse_ingredients_from_recipe(text: str) -> List[RequiredIngredient]:
    """Extract the required ingredients from unstructured recipe text.

    An empty list means the text could not be parsed; callers should surface
    that to the user rather than treat it as a zero-ingredient recipe.
    """

    if not text or not text.strip():
        return []

    lines = text.splitlines()
    section = _ingredient_section(lines)
    if section is None:
        logger.debug("No ingredients header found; scanning %d line(s)", len(lines))
        section = _candidate_lines(lines)

    ingredients: List[RequiredIngredient] = []
    for line in section:
        parsed = parse_ingredient_line(line)
        if parsed is not None:
            ingredients.append(parsed)

    logger.debug("Parsed %d ingredient(s) from %d candidate line(s)", len(ingredients), len(section))
    return ingredients


__all__ = [
    "COOKING_VERBS",
    "INSTRUCTION_VERBS",
    "parse_ingredient_line",
    "parse_ingredients_from_recipe",
]
