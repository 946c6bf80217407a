"""Fixed stroke font used for silkscreen text.

Glyphs live in a unit box: x in [0, 1] left to right, y in [0, 1] baseline to
cap height. Each glyph is a set of polylines written as space separated
``x,y`` pairs; :data:`LINE_ALPHABET` expands them into line segments.
Characters without an entry render nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class GlyphSegment:
    x1: float
    y1: float
    x2: float
    y2: float


_RING_O = "0.125,0 0,0.125 0,0.875 0.125,1 0.875,1 1,0.875 1,0.125 0.875,0 0.125,0"
_BOWL_P = "0,0 0,1 0.875,1 1,0.875 1,0.625 0.875,0.5 0,0.5"

_POLYLINES: dict[str, tuple[str, ...]] = {
    "A": ("0,0 0.5,1 1,0", "0.25,0.5 0.75,0.5"),
    "B": (
        "0,0 0,1 0.75,1 1,0.875 1,0.625 0.75,0.5 0,0.5",
        "0.75,0.5 1,0.375 1,0.125 0.75,0 0,0",
    ),
    "C": ("1,0.875 0.875,1 0.125,1 0,0.875 0,0.125 0.125,0 0.875,0 1,0.125",),
    "D": ("0,0 0,1 0.625,1 1,0.625 1,0.375 0.625,0 0,0",),
    "E": ("1,1 0,1 0,0 1,0", "0,0.5 0.75,0.5"),
    "F": ("1,1 0,1 0,0", "0,0.5 0.75,0.5"),
    "G": ("1,0.875 0.875,1 0.125,1 0,0.875 0,0.125 0.125,0 0.875,0 1,0.125 1,0.5 0.5,0.5",),
    "H": ("0,0 0,1", "1,0 1,1", "0,0.5 1,0.5"),
    "I": ("0.5,0 0.5,1", "0.25,1 0.75,1", "0.25,0 0.75,0"),
    "J": ("1,1 1,0.125 0.875,0 0.125,0 0,0.125 0,0.25",),
    "K": ("0,0 0,1", "1,1 0,0.5 1,0"),
    "L": ("0,1 0,0 1,0",),
    "M": ("0,0 0,1 0.5,0.5 1,1 1,0",),
    "N": ("0,0 0,1 1,0 1,1",),
    "O": (_RING_O,),
    "P": (_BOWL_P,),
    "Q": (_RING_O, "0.625,0.25 1,0"),
    "R": (_BOWL_P, "0.5,0.5 1,0"),
    "S": ("1,0.875 0.875,1 0.125,1 0,0.875 0,0.625 0.125,0.5 0.875,0.5 1,0.375 1,0.125 0.875,0 0.125,0 0,0.125",),
    "T": ("0,1 1,1", "0.5,1 0.5,0"),
    "U": ("0,1 0,0.125 0.125,0 0.875,0 1,0.125 1,1",),
    "V": ("0,1 0.5,0 1,1",),
    "W": ("0,1 0.25,0 0.5,0.5 0.75,0 1,1",),
    "X": ("0,0 1,1", "0,1 1,0"),
    "Y": ("0,1 0.5,0.5 1,1", "0.5,0.5 0.5,0"),
    "Z": ("0,1 1,1 0,0 1,0",),
    "0": (_RING_O, "0,0.125 1,0.875"),
    "1": ("0.25,0.75 0.5,1 0.5,0", "0.25,0 0.75,0"),
    "2": ("0,0.875 0.125,1 0.875,1 1,0.875 1,0.625 0,0 1,0",),
    "3": ("0,1 1,1 0.5,0.5 0.875,0.5 1,0.375 1,0.125 0.875,0 0.125,0 0,0.125",),
    "4": ("0.75,0 0.75,1 0,0.25 1,0.25",),
    "5": ("1,1 0,1 0,0.5 0.875,0.5 1,0.375 1,0.125 0.875,0 0,0",),
    "6": ("0.875,1 0.125,1 0,0.875 0,0.125 0.125,0 0.875,0 1,0.125 1,0.375 0.875,0.5 0,0.5",),
    "7": ("0,1 1,1 0.25,0",),
    "8": (
        "0.125,0.5 0,0.625 0,0.875 0.125,1 0.875,1 1,0.875 1,0.625 0.875,0.5 0.125,0.5 "
        "0,0.375 0,0.125 0.125,0 0.875,0 1,0.125 1,0.375 0.875,0.5",
    ),
    "9": ("1,0.5 0.125,0.5 0,0.625 0,0.875 0.125,1 0.875,1 1,0.875 1,0.125 0.875,0 0.125,0",),
    "-": ("0.125,0.5 0.875,0.5",),
    "+": ("0.125,0.5 0.875,0.5", "0.5,0.125 0.5,0.875"),
    "_": ("0,0 1,0",),
    "=": ("0.125,0.375 0.875,0.375", "0.125,0.625 0.875,0.625"),
    ".": ("0.375,0 0.5,0 0.5,0.125 0.375,0.125 0.375,0",),
    ",": ("0.5,0.125 0.5,0 0.375,-0.125",),
    ":": ("0.5,0.125 0.5,0.25", "0.5,0.75 0.5,0.875"),
    "/": ("0,0 1,1",),
    "(": ("0.625,1 0.375,0.75 0.375,0.25 0.625,0",),
    ")": ("0.375,1 0.625,0.75 0.625,0.25 0.375,0",),
    "[": ("0.625,1 0.375,1 0.375,0 0.625,0",),
    "]": ("0.375,1 0.625,1 0.625,0 0.375,0",),
    "<": ("1,1 0,0.5 1,0",),
    ">": ("0,1 1,0.5 0,0",),
    "*": ("0.5,0.25 0.5,0.75", "0.25,0.375 0.75,0.625", "0.25,0.625 0.75,0.375"),
    "!": ("0.5,1 0.5,0.25", "0.5,0.0625 0.5,0"),
    "?": ("0,0.875 0.125,1 0.875,1 1,0.875 1,0.625 0.5,0.375 0.5,0.25", "0.5,0.0625 0.5,0"),
    "#": ("0.375,0 0.375,1", "0.625,0 0.625,1", "0,0.375 1,0.375", "0,0.625 1,0.625"),
    "%": ("0,0 1,1", "0,1 0.25,1 0.25,0.75 0,0.75 0,1", "0.75,0.25 1,0.25 1,0 0.75,0 0.75,0.25"),
    "'": ("0.5,1 0.5,0.75",),
    '"': ("0.375,1 0.375,0.75", "0.625,1 0.625,0.75"),
}


def _parse_polyline(polyline: str) -> list[tuple[float, float]]:
    points = []
    for pair in polyline.split():
        x, y = pair.split(",")
        points.append((float(x), float(y)))
    return points


def _segments(polylines: tuple[str, ...]) -> tuple[GlyphSegment, ...]:
    segments: list[GlyphSegment] = []
    for polyline in polylines:
        points = _parse_polyline(polyline)
        for (x1, y1), (x2, y2) in zip(points, points[1:]):
            segments.append(GlyphSegment(x1, y1, x2, y2))
    return tuple(segments)


LINE_ALPHABET = MappingProxyType({char: _segments(polylines) for char, polylines in _POLYLINES.items()})


def glyph_segments(char: str) -> tuple[GlyphSegment, ...]:
    return LINE_ALPHABET.get(char, ())
