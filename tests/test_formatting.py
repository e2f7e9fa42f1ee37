"""Tests for display formatting."""

import math

import pytest

from bf6_stats.core.formatting import (
    coerce_number,
    coerce_optional_number,
    coerce_optional_text,
    format_abbreviated,
    format_decimal,
    format_distance,
    format_duration_compact,
    format_integer,
    format_playtime_coarse,
    format_ratio_percent,
)


class TestCoercion:
    """Test cases for raw value coercion."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 0.0),
            ("", 0.0),
            ("  ", 0.0),
            ("abc", 0.0),
            (True, 0.0),
            (math.nan, 0.0),
            (math.inf, 0.0),
            ([1], 0.0),
            ("12,345", 12345.0),
            (" 7.5 ", 7.5),
            (3, 3.0),
        ],
    )
    def test_coerce_number(self, raw, expected):
        """Test that any input coerces to a finite float."""
        assert coerce_number(raw) == expected

    def test_coerce_number_custom_default(self):
        """Test that the default is used for unusable input."""
        assert coerce_number("nope", default=5.0) == 5.0

    def test_coerce_optional_number_keeps_absence(self):
        """Test that missing values stay None while zero stays zero."""
        assert coerce_optional_number(None) is None
        assert coerce_optional_number("garbage") is None
        assert coerce_optional_number(0) == 0.0

    def test_coerce_optional_text(self):
        """Test text coercion strips and rejects non-strings."""
        assert coerce_optional_text("  Assault ") == "Assault"
        assert coerce_optional_text("   ") is None
        assert coerce_optional_text(12) is None
        assert coerce_optional_text(None) is None


class TestNumberFormatting:
    """Test cases for integer, decimal and abbreviated numbers."""

    def test_format_integer(self):
        """Test comma grouping and rounding."""
        assert format_integer(1234567) == "1,234,567"
        assert format_integer(2.6) == "3"
        assert format_integer(None) == "0"
        assert format_integer("n/a") == "0"

    def test_format_decimal(self):
        """Test fixed-point output."""
        assert format_decimal(1.8765) == "1.88"
        assert format_decimal(512.34, 1) == "512.3"
        assert format_decimal(2, 0) == "2"

    def test_format_decimal_missing_value(self):
        """Test that missing values render as zero."""
        assert format_decimal(None) == "0"
        assert format_decimal(math.nan) == "0"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (0, "0"),
            (None, "0"),
            (999, "999"),
            (1000, "1.0K"),
            (1500, "1.5K"),
            (999999, "1000.0K"),
            (1_000_000, "1.0M"),
            (2_500_000, "2.5M"),
            (-1500, "-1.5K"),
        ],
    )
    def test_format_abbreviated_bands(self, raw, expected):
        """Test abbreviation band boundaries."""
        assert format_abbreviated(raw) == expected


class TestNonFiniteInput:
    """Test cases for infinite and NaN input across formatters."""

    @pytest.mark.parametrize("raw", [math.inf, -math.inf, math.nan])
    @pytest.mark.parametrize(
        "formatter,zero",
        [
            (format_integer, "0"),
            (format_decimal, "0"),
            (format_abbreviated, "0"),
            (format_distance, "0m"),
            (format_playtime_coarse, "0 hours"),
            (format_duration_compact, "0m"),
        ],
    )
    def test_zero_string(self, formatter, zero, raw):
        """Test every formatter falls back to its zero string."""
        assert formatter(raw) == zero

    @pytest.mark.parametrize("raw", [math.inf, -math.inf, math.nan])
    def test_ratio_percent(self, raw):
        """Test non-finite totals and parts give 0%."""
        assert format_ratio_percent(1, raw) == "0%"
        assert format_ratio_percent(raw, 4) == "0.0%"


class TestAbbreviationOrdering:
    """Test cases for ordering within abbreviation bands."""

    @pytest.mark.parametrize(
        "band",
        [
            [1, 12, 250, 999],
            [1000, 1049, 1500, 20_000, 999_000],
            [1_000_000, 1_500_000, 42_000_000, 999_000_000],
        ],
    )
    def test_monotonic_within_band(self, band):
        """Test larger values never abbreviate to a smaller number in the same band."""
        numbers = [float(format_abbreviated(value).rstrip("KM")) for value in band]
        assert numbers == sorted(numbers)


class TestRatioFormatting:
    """Test cases for percentages."""

    def test_ratio_percent(self):
        """Test a normal ratio."""
        assert format_ratio_percent(1, 4) == "25.0%"
        assert format_ratio_percent(300, 500) == "60.0%"

    def test_zero_total_is_zero_percent(self):
        """Test that a zero or negative denominator gives 0% instead of raising."""
        assert format_ratio_percent(5, 0) == "0%"
        assert format_ratio_percent(0, 0) == "0%"
        assert format_ratio_percent(5, -1) == "0%"
        assert format_ratio_percent(None, None) == "0%"


class TestDistanceAndTime:
    """Test cases for distance and duration strings."""

    @pytest.mark.parametrize(
        "meters,expected",
        [
            (0, "0m"),
            (None, "0m"),
            (-5, "0m"),
            (999, "999m"),
            (1500, "1.5KM"),
            (1_234_567, "1.2k KM"),
        ],
    )
    def test_format_distance(self, meters, expected):
        """Test distance units."""
        assert format_distance(meters) == expected

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0 hours"),
            (None, "0 hours"),
            (3600, "1 hour"),
            (5 * 3600, "5 hours"),
            (24 * 3600, "1 day"),
            (3 * 86400 + 4 * 3600, "3 days 4 hours"),
            (86400 + 3600, "1 day 1 hour"),
        ],
    )
    def test_format_playtime_coarse(self, seconds, expected):
        """Test coarse playtime used in the header."""
        assert format_playtime_coarse(seconds) == expected

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0m"),
            (None, "0m"),
            (59, "0m"),
            (60, "1m"),
            (3600, "1h 0m"),
            (3 * 3600 + 15 * 60, "3h 15m"),
            (86400, "1d 0h 0m"),
            (2 * 86400 + 3 * 3600 + 15 * 60, "2d 3h 15m"),
        ],
    )
    def test_format_duration_compact(self, seconds, expected):
        """Test compact durations drop only leading zero units."""
        assert format_duration_compact(seconds) == expected
