import pytest

from src.flowgraph.mapper import shorten_hex
from src.flowgraph.mapper.grouping import group_by, truncating_div, unordered_pair_key


def test_group_by_keeps_first_seen_order():
    groups = group_by(["b1", "a1", "b2", "c1", "a2"], lambda item: item[0])

    assert list(groups) == ["b", "a", "c"]
    assert groups["b"] == ["b1", "b2"]
    assert groups["a"] == ["a1", "a2"]


def test_group_by_empty():
    assert group_by([], lambda item: item) == {}


def test_unordered_pair_key_ignores_direction():
    assert unordered_pair_key("0xbb", "0xaa") == unordered_pair_key("0xaa", "0xbb") == "0xaa-0xbb"


@pytest.mark.parametrize("numerator, denominator, expected", [
    (200_000, 50, 4000),
    (7, 2, 3),
    (-7, 2, -3),
    (7, -2, -3),
    (-7, -2, 3),
    (0, 5, 0),
])
def test_truncating_div_rounds_toward_zero(numerator, denominator, expected):
    assert truncating_div(numerator, denominator) == expected


def test_shorten_hex():
    address = "0xA1a1A1a1A1a1A1a1A1a1A1a1A1a1A1a1A1a1A1a1"

    assert shorten_hex(address) == "0xA1a1...A1a1"
    assert shorten_hex(address, 6) == "0xA1a1A1...a1A1a1"


def test_shorten_hex_leaves_short_values_alone():
    assert shorten_hex("0x1234") == "0x1234"
