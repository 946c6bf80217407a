"""Silkscreen text layout with the stroke font.

Text is laid out left to right from the lower-left corner of its bounding box.
Only the cap height matters for layout; it is 70% of the nominal font size.

Alignment precedence (resolved once per element by :func:`resolve_alignment`):

1. ``anchor_alignment`` when present;
2. otherwise ``anchor_side``: ``top`` -> ``top_center``, ``bottom`` ->
   ``bottom_center``, ``left`` -> ``center_left``, ``right`` -> ``center_right``;
3. otherwise ``center``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .alphabet import glyph_segments
from .transforms import about, apply_to_point, compose, identity, mirror_horizontal, rotate

if TYPE_CHECKING:
    from .transforms import Matrix

CAP_HEIGHT_SCALE = 0.7
LETTER_SPACING_SCALE = 0.4
SPACE_WIDTH_SCALE = 0.5


class TextAlignment(str, Enum):
    """Anchor point of a text box."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    CENTER_LEFT = "center_left"
    CENTER = "center"
    CENTER_RIGHT = "center_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def vertical(self) -> str:
        return self.value.split("_")[0]

    @property
    def horizontal(self) -> str:
        return "center" if self is TextAlignment.CENTER else self.value.split("_")[1]


ANCHOR_SIDE_ALIGNMENT: dict[str, TextAlignment] = {
    "top": TextAlignment.TOP_CENTER,
    "bottom": TextAlignment.BOTTOM_CENTER,
    "left": TextAlignment.CENTER_LEFT,
    "right": TextAlignment.CENTER_RIGHT,
}


def resolve_alignment(anchor_alignment: str | None, anchor_side: str | None = None) -> TextAlignment:
    """Resolve an element's alignment fields into a single :class:`TextAlignment`.

    Raises:
        ValueError: If ``anchor_alignment`` or ``anchor_side`` is not a known value.
    """
    if anchor_alignment:
        return TextAlignment(anchor_alignment)
    if anchor_side:
        try:
            return ANCHOR_SIDE_ALIGNMENT[anchor_side]
        except KeyError:
            raise ValueError(f"Unknown anchor_side {anchor_side!r}") from None
    return TextAlignment.CENTER


@dataclass(frozen=True, slots=True)
class TextMetrics:
    """Stroke font metrics derived from a nominal font size."""

    cap_height: float
    letter_spacing: float
    space_width: float

    @classmethod
    def from_font_size(cls, font_size: float) -> TextMetrics:
        cap_height = font_size * CAP_HEIGHT_SCALE
        return cls(
            cap_height=cap_height,
            letter_spacing=cap_height * LETTER_SPACING_SCALE,
            space_width=cap_height * SPACE_WIDTH_SCALE,
        )

    def advance(self, char: str) -> float:
        if char == " ":
            return self.space_width + self.letter_spacing
        return self.cap_height + self.letter_spacing

    def measure(self, text: str) -> tuple[float, float]:
        """Return ``(width, height)`` of ``text``; the trailing spacing is not counted."""
        width = sum(self.advance(char) for char in text) - self.letter_spacing
        return (width, self.cap_height)


def anchored_text_start(
    anchor: tuple[float, float],
    alignment: TextAlignment,
    width: float,
    height: float,
) -> tuple[float, float]:
    """Lower-left corner of a ``width`` x ``height`` text box anchored at ``anchor``."""
    x, y = anchor
    horizontal = alignment.horizontal
    if horizontal == "center":
        x -= width / 2
    elif horizontal == "right":
        x -= width

    vertical = alignment.vertical
    if vertical == "top":
        y -= height
    elif vertical == "center":
        y -= height / 2
    return (x, y)


def text_transform(center: tuple[float, float], ccw_rotation: float, mirror: bool) -> Matrix:
    """Transform applied to laid-out strokes.

    Mirrored (bottom side) text is flipped horizontally about the box centre
    and its rotation negated; the rotation is then applied about the same
    centre.
    """
    matrices: list[Matrix] = []
    rotation = ccw_rotation
    if mirror:
        matrices.append(about(center, mirror_horizontal()))
        rotation = -rotation
    if rotation:
        matrices.append(about(center, rotate(math.radians(rotation))))
    if not matrices:
        return identity()
    return compose(*matrices)


Stroke = tuple[tuple[float, float], tuple[float, float]]


def layout_text(
    text: str,
    *,
    font_size: float,
    anchor: tuple[float, float],
    alignment: TextAlignment = TextAlignment.CENTER,
    ccw_rotation: float = 0.0,
    mirror: bool = False,
) -> list[Stroke]:
    """Lay out ``text`` as stroke segments in board coordinates.

    Characters are upper-cased. A character without a glyph draws nothing but
    still advances the pen.
    """
    metrics = TextMetrics.from_font_size(font_size)
    width, height = metrics.measure(text)
    pen_x, pen_y = anchored_text_start(anchor, alignment, width, height)
    center = (pen_x + width / 2, pen_y + height / 2)
    matrix = text_transform(center, ccw_rotation, mirror)
    scale = metrics.cap_height

    strokes: list[Stroke] = []
    for char in text.upper():
        if char != " ":
            for seg in glyph_segments(char):
                start = (pen_x + seg.x1 * scale, pen_y + seg.y1 * scale)
                end = (pen_x + seg.x2 * scale, pen_y + seg.y2 * scale)
                strokes.append((apply_to_point(matrix, start), apply_to_point(matrix, end)))
        pen_x += metrics.advance(char)
    return strokes
