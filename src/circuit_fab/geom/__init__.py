"""Geometry helpers: affine transforms, bulge arcs and the stroke font."""

from __future__ import annotations

from .alphabet import LINE_ALPHABET, GlyphSegment, glyph_segments
from .arcs import RingVertex, bulge_arc_center_offset, reverse_ring, ring_from_soup
from .text import (
    TextAlignment,
    TextMetrics,
    anchored_text_start,
    layout_text,
    resolve_alignment,
    text_transform,
)
from .transforms import (
    about,
    apply_to_point,
    apply_to_points,
    compose,
    identity,
    mirror_horizontal,
    rect_corners,
    rotate,
    rotate_degrees,
    rotate_offset,
    translate,
)

__all__ = [
    "LINE_ALPHABET",
    "GlyphSegment",
    "RingVertex",
    "TextAlignment",
    "TextMetrics",
    "about",
    "anchored_text_start",
    "apply_to_point",
    "apply_to_points",
    "bulge_arc_center_offset",
    "compose",
    "glyph_segments",
    "identity",
    "layout_text",
    "mirror_horizontal",
    "rect_corners",
    "resolve_alignment",
    "reverse_ring",
    "ring_from_soup",
    "rotate",
    "rotate_degrees",
    "rotate_offset",
    "text_transform",
    "translate",
]
