"""Tests for the shared helpers."""

import pytest

from intentboard.helpers import list_to_string, string_to_list, time_since


def test_string_to_list_splits_lines():
    """Test that text is split on line feeds, keeping order."""
    assert string_to_list("hi\nhello\nhey") == ["hi", "hello", "hey"]


def test_string_to_list_normalizes_crlf():
    """Test that CRLF pairs are treated as single line breaks."""
    assert string_to_list("hi\r\nhello\r\nhey") == ["hi", "hello", "hey"]


def test_string_to_list_empty_input():
    """Test that empty or missing text yields an empty list."""
    assert string_to_list("") == []
    assert string_to_list(None) == []


def test_string_to_list_keeps_blank_lines():
    """Test that blank lines in the middle survive the split."""
    assert string_to_list("a\n\nb") == ["a", "", "b"]


def test_list_to_string():
    """Test joining with line feeds."""
    assert list_to_string(["hi", "hello"]) == "hi\nhello"
    assert list_to_string([]) == ""


@pytest.mark.parametrize("text", ["hi", "hi\nhello", "one\ntwo\nthree"])
def test_lines_survive_split_and_join(text: str):
    """Test that LF-only text is unchanged by a split followed by a join."""
    assert list_to_string(string_to_list(text)) == text


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "seconds"),
        (59, "seconds"),
        (119, "seconds"),
        (120, "2 minutes"),
        (7_200, "2 hours"),
        (172_800, "2 days"),
        (5_184_000, "2 months"),
        (63_072_000, "2 years"),
    ],
)
def test_time_since_buckets(seconds: int, expected: str):
    """Test the unit chosen for typical elapsed times."""
    assert time_since(seconds) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (60, "seconds"),
        (3_600, "60 minutes"),
        (86_400, "24 hours"),
        (2_592_000, "30 days"),
        (31_536_000, "12 months"),
    ],
)
def test_time_since_single_unit_falls_through(seconds: int, expected: str):
    """Test that exactly one unit is reported with the next smaller unit."""
    assert time_since(seconds) == expected
