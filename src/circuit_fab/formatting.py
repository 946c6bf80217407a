"""Deterministic number rendering for Gerber and Excellon text.

Floats are converted through their shortest ``repr`` into :class:`Decimal`
before rounding, so a value renders identically on every platform and every
call. Rounding is half away from zero and a rounded zero never carries a sign.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

GERBER_INTEGER_DIGITS = 4
GERBER_DECIMAL_DIGITS = 6
GERBER_COORDINATE_LIMIT_MM = 10**GERBER_INTEGER_DIGITS

APERTURE_DECIMALS = 6
EXCELLON_COORDINATE_DECIMALS = 4

_GERBER_SCALE = Decimal(10) ** GERBER_DECIMAL_DIGITS
_UNIT = Decimal(1)


def _to_decimal(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def format_fixed(value: float, places: int) -> str:
    """Render ``value`` with exactly ``places`` fractional digits.

    >>> format_fixed(2.5, 6)
    '2.500000'
    >>> format_fixed(-0.00001, 4)
    '0.0000'
    """
    quantum = _UNIT.scaleb(-places)
    rounded = _to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return format(rounded, "f")


def format_dimension(value: float) -> str:
    """Render an aperture or tool dimension (6 decimals)."""
    return format_fixed(value, APERTURE_DECIMALS)


def format_excellon_coordinate(value: float) -> str:
    """Render an Excellon coordinate as plain decimal (4 decimals)."""
    return format_fixed(value, EXCELLON_COORDINATE_DECIMALS)


def format_gerber_coordinate(value: float) -> str:
    """Render a coordinate in the 4.6 fixed-point format declared by ``%FSLAX46Y46*%``.

    The value in millimetres is scaled by 10^6 and rounded to an integer. Leading
    zeros are omitted, so ``1.5`` renders as ``1500000`` and ``0`` as ``0``.

    Raises:
        ValueError: If the value needs more than four integer digits.
    """
    if abs(value) >= GERBER_COORDINATE_LIMIT_MM:
        raise ValueError(f"Coordinate {value} exceeds the 4.6 format range (|v| < {GERBER_COORDINATE_LIMIT_MM} mm)")
    scaled = (_to_decimal(value) * _GERBER_SCALE).quantize(_UNIT, rounding=ROUND_HALF_UP)
    return str(int(scaled))


def format_plain(value: float) -> str:
    """Render a number in fixed notation without trailing zeros.

    >>> format_plain(45.0)
    '45'
    >>> format_plain(1e-07)
    '0.0000001'
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(_to_decimal(number).normalize(), "f")
