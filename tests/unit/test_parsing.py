"""Unit tests for shared configuration parsing helpers."""

import pytest

from agent_tts.parsing import (
    normalize_optional_string,
    parse_permissive_boolean,
    parse_positive_int,
)


def test_normalize_optional_string_handles_blank_values() -> None:
    """Normalization should return `None` for `None` and blank textual values."""

    assert normalize_optional_string(None) is None
    assert normalize_optional_string("") is None
    assert normalize_optional_string("   ") is None


def test_normalize_optional_string_strips_non_blank_values() -> None:
    """Normalization should return stripped content for non-empty values."""

    assert normalize_optional_string("  value  ") == "value"
    assert normalize_optional_string(42) == "42"


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("TrUe", True),
        ("  ON ", True),
        ("YeS", True),
        ("FALSE", False),
        (" oFf ", False),
        ("nO", False),
        (True, True),
    ],
)
def test_parse_permissive_boolean_accepts_mixed_case_tokens(
    token: object, expected: bool
) -> None:
    """Permissive parsing should accept valid tokens case-insensitively."""

    assert parse_permissive_boolean(token) is expected


@pytest.mark.parametrize("value", ["", "   ", "maybe", "2", object()])
def test_parse_permissive_boolean_returns_none_for_invalid_tokens(value: object) -> None:
    """Permissive parsing should return `None` for invalid or blank inputs."""

    assert parse_permissive_boolean(value) is None


@pytest.mark.parametrize(("value", "expected"), [(5, 5), (" 12 ", 12), ("1", 1)])
def test_parse_positive_int_accepts_positive_values(value: object, expected: int) -> None:
    """Positive integers and their string forms should parse."""

    assert parse_positive_int(value) == expected


@pytest.mark.parametrize("value", [0, -3, "0", "ten", "", None, True, 2.5])
def test_parse_positive_int_returns_none_for_invalid_values(value: object) -> None:
    """Booleans, non-positive and non-integer values should be rejected."""

    assert parse_positive_int(value) is None
