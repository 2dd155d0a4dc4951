"""Unit tests for the rating value helpers."""

import math
from decimal import Decimal

import pytest

from policy_rater import MISSING
from policy_rater.services.rating.helpers import (
    clamp,
    format_number,
    get_nested_value,
    round_to_decimal_places,
    to_lookup_key,
    to_number,
)


class TestGetNestedValue:
    """Dot-path traversal."""

    def test_top_level_and_nested(self):
        """Values resolve at any depth."""
        subject = {"a": 1, "b": {"c": {"d": "deep"}}}
        assert get_nested_value(subject, "a") == 1
        assert get_nested_value(subject, "b.c.d") == "deep"

    def test_missing_paths(self):
        """Absent keys and non-mapping intermediates are MISSING."""
        subject = {"a": None, "b": [1, 2], "c": "text"}
        assert get_nested_value(subject, "z") is MISSING
        assert get_nested_value(subject, "a.x") is MISSING
        assert get_nested_value(subject, "b.0") is MISSING
        assert get_nested_value(subject, "c.length") is MISSING
        assert get_nested_value(None, "a") is MISSING

    def test_explicit_none_is_returned(self):
        """A present None is a value."""
        assert get_nested_value({"a": None}, "a") is None


class TestToNumber:
    """Permissive numeric coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (5, 5.0),
            (2.5, 2.5),
            (Decimal("1.25"), 1.25),
            ("42", 42.0),
            ("  -3.5", -3.5),
            ("12px", 12.0),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("Infinity", math.inf),
        ],
    )
    def test_coercible(self, value, expected):
        """Numbers and numeric-prefixed strings coerce."""
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", True, False, None, [1], {"a": 1}, math.nan])
    def test_not_coercible(self, value):
        """Everything else is None."""
        assert to_number(value) is None


class TestToLookupKey:
    """Stable key conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("gold", "gold"),
            (3, "3"),
            (3.0, "3"),
            (2.5, "2.5"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (MISSING, "undefined"),
            ({"a": 1, "b": [1, 2]}, '{"a":1,"b":[1,2]}'),
            ([1, "x"], '[1,"x"]'),
            (object(), "unknown"),
        ],
    )
    def test_conversion(self, value, expected):
        """Each value type has one string form."""
        assert to_lookup_key(value) == expected


class TestFormatNumber:
    """Short number formatting used in breakdowns."""

    def test_formats(self):
        """Integral floats drop the fraction."""
        assert format_number(100.0) == "100"
        assert format_number(12.75) == "12.75"
        assert format_number(-0.0) == "0"
        assert format_number(math.inf) == "Infinity"
        assert format_number(math.nan) == "NaN"


class TestRoundingAndClamping:
    """Final-rate rounding and clamping."""

    @pytest.mark.parametrize(
        ("value", "places", "expected"),
        [
            (33.33333333, 3, 33.333),
            (99.9, 0, 100),
            (0.125, 2, 0.13),
            (-0.125, 2, -0.12),
            (-2.5, 0, -2),
            (-2.51, 0, -3),
            (-1.005, 2, -1.0),
            (1.005, 2, 1.01),
            (1e20, 2, 1e20),
        ],
    )
    def test_round_to_decimal_places(self, value, places, expected):
        """Halves round toward +infinity on the written value."""
        assert round_to_decimal_places(value, places) == expected

    def test_round_non_finite(self):
        """Infinities and NaN pass through."""
        assert round_to_decimal_places(math.inf, 2) == math.inf
        assert math.isnan(round_to_decimal_places(math.nan, 2))

    def test_clamp(self):
        """Minimum applies first, then maximum."""
        assert clamp(5, 10, 20) == 10
        assert clamp(25, 10, 20) == 20
        assert clamp(15, None, None) == 15
        assert clamp(5, 20, 10) == 10

    @pytest.mark.parametrize("value", [-12.3456, 0.0049, 57.125, 999.999, 12345.6789])
    def test_round_then_clamp_is_idempotent(self, value):
        """Clamping a rounded rate twice changes nothing."""
        once = clamp(round_to_decimal_places(value, 2), 0.01, 1000)
        assert clamp(once, 0.01, 1000) == once
