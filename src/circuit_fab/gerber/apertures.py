"""Per-layer aperture registry and element -> aperture template mapping.

The registry keeps an ordered list of ``(template, number)`` pairs and finds
duplicates with a linear scan on template equality. New numbers start at 10
(codes 0-9 are reserved) and grow by one past the highest number defined.

The ``*_template`` helpers compute the aperture an element needs. They return
``None`` when the element's shape is not drawn with an aperture on the layer in
question (polygon pads are regions; unsupported shapes are skipped by the
compiler).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ..command_base import validation_messages
from ..errors import ApertureNotFoundError, SchemaValidationError
from ..soup import Element, element_type, has_number, optional_number, require_number, require_sequence
from .templates import (
    CircleTemplate,
    RectangleTemplate,
    RoundRectTemplate,
    pill_template,
)

if TYPE_CHECKING:
    from .builder import GerberBuilder
    from .layers import GerberLayerName
    from .templates import ApertureTemplate

APERTURE_NUMBER_FLOOR = 9


class ApertureRegistry:
    """Aperture table of a single Gerber layer.

    Definitions are appended to ``builder`` as they are allocated.
    """

    def __init__(self, builder: GerberBuilder, layer: GerberLayerName | None = None) -> None:
        self.builder = builder
        self.layer = layer
        self._entries: list[tuple[ApertureTemplate, int]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[ApertureTemplate, int]]:
        return iter(self._entries)

    def lookup(self, template: ApertureTemplate) -> int | None:
        for existing, number in self._entries:
            if existing == template:
                return number
        return None

    def find(self, template: ApertureTemplate) -> int:
        """Return the number of a defined aperture.

        Raises:
            ApertureNotFoundError: If ``template`` was never defined on this layer.
        """
        number = self.lookup(template)
        if number is None:
            raise ApertureNotFoundError(template, layer=str(self.layer) if self.layer else None)
        return number

    def next_number(self) -> int:
        highest = max((number for _, number in self._entries), default=APERTURE_NUMBER_FLOOR)
        return max(highest, APERTURE_NUMBER_FLOOR) + 1

    def define(self, template: ApertureTemplate) -> int:
        """Return the number of ``template``, defining it first if needed."""
        number = self.lookup(template)
        if number is not None:
            return number
        number = self.next_number()
        self.builder.add("define_aperture_template", aperture_number=number, template=template)
        self._entries.append((template, number))
        return number

    def define_all(self, templates: Iterable[ApertureTemplate]) -> list[int]:
        return [self.define(template) for template in templates]


def _build_template(factory: Any, **params: Any) -> ApertureTemplate:
    try:
        return factory(**params)
    except ValidationError as exc:
        raise SchemaValidationError("define_aperture_template", validation_messages(exc)) from exc


def trace_width_template(width: float) -> CircleTemplate:
    return _build_template(CircleTemplate, diameter=width)


def _corner_radius(element: Element) -> float:
    for field in ("corner_radius", "rect_border_radius"):
        radius = optional_number(element, field)
        if radius:
            return radius
    return 0.0


def _rect_template(element: Element) -> ApertureTemplate:
    width = require_number(element, "width")
    height = require_number(element, "height")
    radius = _corner_radius(element)
    if radius > 0:
        return _build_template(RoundRectTemplate, x_size=width, y_size=height, corner_radius=radius)
    return _build_template(RectangleTemplate, x_size=width, y_size=height)


def smtpad_template(element: Element) -> ApertureTemplate | None:
    shape = element.get("shape")
    if shape in ("rect", "rotated_rect"):
        # rotation is applied with %LR, not baked into the aperture
        return _rect_template(element)
    if shape == "circle":
        return _build_template(CircleTemplate, diameter=require_number(element, "radius") * 2)
    if shape in ("pill", "rotated_pill"):
        width = require_number(element, "width")
        return _build_template(pill_template, width=width, height=require_number(element, "height"))
    return None


def solder_paste_template(element: Element) -> ApertureTemplate | None:
    shape = element.get("shape")
    if shape in ("rect", "rotated_rect"):
        return _rect_template(element)
    if shape == "circle":
        return _build_template(CircleTemplate, diameter=require_number(element, "radius") * 2)
    if shape == "pill":
        width = require_number(element, "width")
        return _build_template(pill_template, width=width, height=require_number(element, "height"))
    return None


RECT_PAD_HOLE_SHAPES = frozenset(
    {"circular_hole_with_rect_pad", "pill_hole_with_rect_pad", "rotated_pill_hole_with_rect_pad"}
)
PILL_HOLE_SHAPES = frozenset({"pill", "oval"})


def plated_hole_pad_size(element: Element) -> tuple[float, float]:
    """Effective copper pad size: the largest of hole, outer and rect-pad dimensions."""
    widths = [0.0]
    heights = [0.0]
    if has_number(element, "hole_diameter"):
        widths.append(float(element["hole_diameter"]))
        heights.append(float(element["hole_diameter"]))
    for width_field, height_field in (
        ("hole_width", "hole_height"),
        ("outer_width", "outer_height"),
        ("rect_pad_width", "rect_pad_height"),
    ):
        if has_number(element, width_field):
            widths.append(float(element[width_field]))
        if has_number(element, height_field):
            heights.append(float(element[height_field]))
    return (max(widths), max(heights))


def plated_hole_template(element: Element) -> ApertureTemplate | None:
    shape = element.get("shape")
    if shape == "circle":
        return _build_template(CircleTemplate, diameter=require_number(element, "outer_diameter"))
    if shape in PILL_HOLE_SHAPES:
        pad_w, pad_h = plated_hole_pad_size(element)
        return _build_template(CircleTemplate, diameter=min(pad_w, pad_h))
    if shape in RECT_PAD_HOLE_SHAPES:
        pad_w, pad_h = plated_hole_pad_size(element)
        return _build_template(RectangleTemplate, x_size=pad_w, y_size=pad_h)
    return None


def hole_template(element: Element) -> ApertureTemplate | None:
    if element.get("hole_shape", "circle") != "circle":
        return None
    return _build_template(CircleTemplate, diameter=require_number(element, "hole_diameter"))


def via_template(element: Element) -> ApertureTemplate:
    return _build_template(CircleTemplate, diameter=require_number(element, "outer_diameter"))


def silkscreen_path_template(element: Element) -> ApertureTemplate:
    return _build_template(CircleTemplate, diameter=require_number(element, "stroke_width"))


def silkscreen_text_template(element: Element) -> ApertureTemplate:
    stroke_width = optional_number(element, "stroke_width")
    if stroke_width:
        return _build_template(CircleTemplate, diameter=stroke_width)
    return _build_template(CircleTemplate, diameter=require_number(element, "font_size") / 4)


def trace_widths(soup: Iterable[Element], side: str) -> list[float]:
    """Distinct wire widths on ``side``, in first-seen order."""
    widths: list[float] = []
    for element in soup:
        if element_type(element) != "pcb_trace":
            continue
        for point in require_sequence(element, "route"):
            if isinstance(point, Mapping) and point.get("route_type") == "wire" and point.get("layer") == side:
                width = require_number(point, "width")
                if width not in widths:
                    widths.append(width)
    return widths
