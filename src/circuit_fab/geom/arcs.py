"""Bulge-arc geometry for polygon rings.

A ring vertex may carry a ``bulge``: the tangent of a quarter of the included
angle of the arc running from that vertex to the next one. Positive bulges
turn counter-clockwise, negative bulges clockwise, zero (or absent) means a
straight segment.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import MalformedElementError
from ..soup import is_number

if TYPE_CHECKING:
    from collections.abc import Sequence

BULGE_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class RingVertex:
    """One vertex of a polygon ring with an optional bulge to the next vertex."""

    x: float
    y: float
    bulge: float | None = None

    @property
    def has_arc(self) -> bool:
        return self.bulge is not None and abs(self.bulge) > BULGE_EPSILON


def ring_from_soup(element: Mapping[str, Any], ring: Any, field: str) -> list[RingVertex]:
    """Read a ``{"vertices": [{x, y, bulge?}, ...]}`` ring from an element."""
    if not isinstance(ring, Mapping) or not isinstance(ring.get("vertices"), list):
        raise MalformedElementError(element, field, "a ring with a vertices list")
    vertices: list[RingVertex] = []
    for vertex in ring["vertices"]:
        if not isinstance(vertex, Mapping) or not (is_number(vertex.get("x")) and is_number(vertex.get("y"))):
            raise MalformedElementError(element, field, "vertices with numeric x and y")
        bulge = vertex.get("bulge")
        if bulge is not None and not is_number(bulge):
            raise MalformedElementError(element, field, "vertices with a numeric bulge")
        vertices.append(RingVertex(float(vertex["x"]), float(vertex["y"]), None if bulge is None else float(bulge)))
    return vertices


def reverse_ring(vertices: Sequence[RingVertex]) -> list[RingVertex]:
    """Reverse a ring's winding, keeping every arc on the same geometric path.

    After reversal the vertex at index ``i`` starts the segment that used to
    end there, so it takes the negated bulge of original vertex
    ``(n - 2 - i) mod n``.
    """
    n = len(vertices)
    if n == 0:
        return []
    reversed_vertices = list(reversed(vertices))
    result: list[RingVertex] = []
    for i, vertex in enumerate(reversed_vertices):
        bulge = vertices[(n - 2 - i + n) % n].bulge
        result.append(RingVertex(vertex.x, vertex.y, -bulge if bulge else None))
    return result


def bulge_arc_center_offset(
    start: tuple[float, float],
    end: tuple[float, float],
    bulge: float,
) -> tuple[float, float] | None:
    """Return the (I, J) offset from ``start`` to the centre of a bulge arc.

    Returns None when the arc degenerates to a straight segment (coincident
    endpoints or a vanishing included angle).
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    chord = math.hypot(dx, dy)
    if chord < BULGE_EPSILON:
        return None

    theta = 4 * math.atan(abs(bulge))
    half_sin = math.sin(theta / 2)
    if abs(half_sin) < BULGE_EPSILON:
        return None

    radius = chord / (2 * half_sin)
    alpha = (math.pi - theta) / 2
    phi = math.atan2(dy, dx)
    angle_to_center = phi + (alpha if bulge > 0 else -alpha)
    return (radius * math.cos(angle_to_center), radius * math.sin(angle_to_center))
