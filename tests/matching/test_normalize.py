from __future__ import annotations

import pytest

from mise.matching.normalize import contains_term, names_match, normalize_name, singularize
from mise.matching.units import has_measurement, normalize_unit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2 cups Fresh Tomatoes,", "tomato"),
        ("Eggs", "egg"),
        ("1 1/2 tbsp minced garlic", "garlic"),
        ("½ cup of sugar", "sugar"),
        ("All-purpose Flour", "all-purpose flour"),
        ("  Cherry   tomatoes ", "cherry tomato"),
        ("Chocolate Chip Cookies", "chocolate chip cookie"),
        ("", ""),
    ],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("berries", "berry"),
        ("potatoes", "potato"),
        ("dishes", "dish"),
        ("onions", "onion"),
        ("glass", "glass"),
        ("hummus", "hummus"),
        ("peas", "pea"),
        ("gas", "gas"),
        ("cookies", "cookie"),
        ("veggies", "veggie"),
        ("brownies", "brownie"),
        ("chilies", "chili"),
        ("leaves", "leaf"),
        ("molasses", "molasses"),
    ],
)
def test_singularize(word, expected):
    assert singularize(word) == expected


def test_contains_term_is_plain_substring_by_default():
    assert contains_term("eggplant", "egg")
    assert not contains_term("eggplant", "egg", word_boundary=True)
    assert contains_term("fried egg", "egg", word_boundary=True)


def test_blank_needle_never_matches():
    assert not contains_term("anything", "")
    assert not names_match("", "salt")


def test_names_match_is_symmetric():
    assert names_match("tomato", "cherry tomato")
    assert names_match("cherry tomato", "tomato")
    assert not names_match("basil", "tomato")


def test_normalize_unit_maps_spellings():
    assert normalize_unit("Tablespoons") == "tbsp"
    assert normalize_unit("lbs.") == "lb"
    assert normalize_unit(None) == ""
    assert normalize_unit("sprig") == "sprig"


def test_has_measurement():
    assert has_measurement("Add 2 cups of water")
    assert has_measurement("1/2 tsp salt")
    assert not has_measurement("Season generously")
    assert not has_measurement("2 eggs")
