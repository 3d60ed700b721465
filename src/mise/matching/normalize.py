"""Ingredient name normalization shared by every comparison in the engine."""

from __future__ import annotations

import re

from .units import QUANTITY_PATTERN, UNIT_PATTERN

# Preparation descriptors that do not change which pantry item is meant.
DESCRIPTOR_WORDS = frozenset(
    {"fresh", "dried", "chopped", "diced", "sliced", "minced", "whole", "ground", "crushed"}
)

_LEADING_MEASURE_RE = re.compile(
    rf"^\s*(?:{QUANTITY_PATTERN})\s*(?:(?:{UNIT_PATTERN})\b\.?)?\s*(?:of\s+)?",
    re.IGNORECASE,
)
_PUNCTUATION_RE = re.compile(r"[^\w\s-]+")
_WHITESPACE_RE = re.compile(r"\s+")

_KEEP_TRAILING_S = ("ss", "us", "is")

# Words ending in "s" that are already singular or mass nouns.
_UNCHANGED_WORDS = frozenset({"molasses", "species", "series", "swiss", "grits"})

# Plurals of "-ie" nouns, which would otherwise fold to "-y".
_IE_SINGULARS = frozenset(
    {"cookie", "brownie", "veggie", "smoothie", "calorie", "hoagie", "rotisserie"}
)

_IRREGULAR_PLURALS = {
    "chilies": "chili",
    "chillies": "chili",
    "leaves": "leaf",
    "halves": "half",
    "loaves": "loaf",
}


def singularize(word: str) -> str:
    """Fold a single English word to its singular form, conservatively."""

    if len(word) <= 3 or word in _UNCHANGED_WORDS:
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word.endswith("ies") and len(word) > 4:
        if word[:-1] in _IE_SINGULARS:
            return word[:-1]
        return word[:-3] + "y"
    if word.endswith("oes"):
        return word[:-2]
    if word.endswith(("sses", "shes", "ches", "xes", "zes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith(_KEEP_TRAILING_S):
        return word[:-1]
    return word


def normalize_name(value: str) -> str:
    """Normalize free-text ingredient names for comparison.

    Lower-cases, strips punctuation, a leading quantity/unit prefix and
    preparation descriptors, singularizes each word and collapses whitespace.
    "2 cups Fresh Tomatoes," and "tomato" both become "tomato".
    """

    if not value:
        return ""
    lowered = value.lower()
    lowered = _LEADING_MEASURE_RE.sub("", lowered, count=1)
    lowered = _PUNCTUATION_RE.sub(" ", lowered)
    words = [
        singularize(word)
        for word in _WHITESPACE_RE.split(lowered)
        if word and word not in DESCRIPTOR_WORDS
    ]
    return " ".join(words)


def contains_term(haystack: str, needle: str, *, word_boundary: bool = False) -> bool:
    """Return True when normalized ``needle`` occurs in normalized ``haystack``.

    Both arguments must already be normalized. A blank needle never matches.
    With ``word_boundary`` the needle must cover whole words, so "egg" no
    longer matches "eggplant".
    """

    if not needle or not haystack:
        return False
    if not word_boundary:
        return needle in haystack
    return f" {needle} " in f" {haystack} "


def names_match(first: str, second: str, *, word_boundary: bool = False) -> bool:
    """Symmetric containment between two normalized names."""

    return contains_term(first, second, word_boundary=word_boundary) or contains_term(
        second, first, word_boundary=word_boundary
    )
