"""Typed, fail-fast access to circuit soup element fields.

Circuit elements arrive as plain JSON-compatible mappings. The compilers read
geometry through these helpers so a missing or mistyped field raises
:class:`~circuit_fab.errors.MalformedElementError` at the point of access
instead of surfacing later as a ``KeyError`` or ``TypeError``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import MalformedElementError

Element = Mapping[str, Any]
Point = tuple[float, float]

SIDES: tuple[str, str] = ("top", "bottom")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def element_type(element: Any) -> str | None:
    """Return the ``type`` tag of an element, or None for non-mapping input."""
    if not isinstance(element, Mapping):
        return None
    value = element.get("type")
    return value if isinstance(value, str) else None


def has_number(element: Element, field: str) -> bool:
    return is_number(element.get(field))


def require_number(element: Element, field: str) -> float:
    value = element.get(field)
    if not is_number(value):
        raise MalformedElementError(element, field, "a finite number")
    return float(value)


def optional_number(element: Element, field: str, default: float | None = None) -> float | None:
    """Return a numeric field, ``default`` when absent or null.

    A present value of the wrong type is still an error.
    """
    value = element.get(field)
    if value is None:
        return default
    if not is_number(value):
        raise MalformedElementError(element, field, "a finite number")
    return float(value)


def require_str(element: Element, field: str) -> str:
    value = element.get(field)
    if not isinstance(value, str):
        raise MalformedElementError(element, field, "a string")
    return value


def optional_str(element: Element, field: str) -> str | None:
    value = element.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedElementError(element, field, "a string")
    return value


def require_sequence(element: Element, field: str) -> Sequence[Any]:
    value = element.get(field)
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise MalformedElementError(element, field, "a list")
    return value


def to_point(element: Element, field: str, value: Any) -> Point:
    """Coerce a ``{"x": .., "y": ..}`` mapping to an ``(x, y)`` tuple."""
    if not isinstance(value, Mapping) or not (is_number(value.get("x")) and is_number(value.get("y"))):
        raise MalformedElementError(element, field, "a point with numeric x and y")
    return (float(value["x"]), float(value["y"]))


def require_point(element: Element, field: str) -> Point:
    return to_point(element, field, element.get(field))


def require_points(element: Element, field: str) -> list[Point]:
    return [to_point(element, field, item) for item in require_sequence(element, field)]


def position(element: Element) -> Point:
    """Return the ``(x, y)`` position of a positioned element."""
    return (require_number(element, "x"), require_number(element, "y"))


def element_layers(element: Element) -> tuple[str, ...]:
    """Return the layers an element is on, from ``layers`` or a single ``layer``."""
    layers = element.get("layers")
    if layers is not None:
        if isinstance(layers, (str, bytes)) or not isinstance(layers, Sequence):
            raise MalformedElementError(element, "layers", "a list of layer names")
        return tuple(str(layer) for layer in layers)
    layer = element.get("layer")
    if layer is None:
        return ()
    if not isinstance(layer, str):
        raise MalformedElementError(element, "layer", "a layer name")
    return (layer,)


def is_on_layer(element: Element, layer: str) -> bool:
    return layer in element_layers(element)


def ccw_rotation(element: Element, *fields: str) -> float:
    """Return the first numeric rotation among ``fields`` (default ``ccw_rotation``), else 0."""
    for field in fields or ("ccw_rotation",):
        if has_number(element, field):
            return float(element[field])
    return 0.0
