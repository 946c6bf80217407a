"""Tests for deterministic number rendering."""

from __future__ import annotations

import pytest

from circuit_fab.formatting import (
    format_dimension,
    format_excellon_coordinate,
    format_fixed,
    format_gerber_coordinate,
    format_plain,
)


class TestFormatFixed:
    """format_fixed rounds half away from zero and never emits -0."""

    @pytest.mark.parametrize(
        ("value", "places", "expected"),
        [
            (2.5, 6, "2.500000"),
            (0.1, 6, "0.100000"),
            (0.00005, 4, "0.0001"),
            (-0.00005, 4, "-0.0001"),
            (1.23456789, 4, "1.2346"),
        ],
    )
    def test_rounding(self, value: float, places: int, expected: str) -> None:
        assert format_fixed(value, places) == expected

    def test_negative_zero_is_unsigned(self) -> None:
        assert format_fixed(-0.00001, 4) == "0.0000"
        assert format_fixed(-0.0, 6) == "0.000000"

    def test_dimension_uses_six_places(self) -> None:
        assert format_dimension(0.3) == "0.300000"

    def test_excellon_coordinate_uses_four_places(self) -> None:
        assert format_excellon_coordinate(-10) == "-10.0000"
        assert format_excellon_coordinate(5.25) == "5.2500"


class TestGerberCoordinate:
    """4.6 fixed-point coordinates."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (1.5, "1500000"),
            (-20, "-20000000"),
            (0.000001, "1"),
            (-0.000001, "-1"),
            (9999.999999, "9999999999"),
        ],
    )
    def test_scaling(self, value: float, expected: str) -> None:
        assert format_gerber_coordinate(value) == expected

    def test_tiny_negative_rounds_to_plain_zero(self) -> None:
        assert format_gerber_coordinate(-1e-12) == "0"

    @pytest.mark.parametrize("value", [10000, -10000, 12345.6])
    def test_out_of_range_raises(self, value: float) -> None:
        with pytest.raises(ValueError, match="4.6 format"):
            format_gerber_coordinate(value)


class TestFormatPlain:
    def test_integral_values_drop_the_fraction(self) -> None:
        assert format_plain(45.0) == "45"
        assert format_plain(-90) == "-90"

    def test_fractional_values_keep_shortest_repr(self) -> None:
        assert format_plain(22.5) == "22.5"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1e-07, "0.0000001"), (-2.5e-05, "-0.000025"), (123456.75, "123456.75")],
    )
    def test_never_uses_exponent_notation(self, value: float, expected: str) -> None:
        assert format_plain(value) == expected
