"""Compile circuit soup into an Excellon drill job.

A board gets two jobs: plated (``pcb_plated_hole``, ``pcb_via`` and, unless
disabled, ``pcb_hole``) and unplated (``pcb_hole`` and any ``pcb_plated_hole``
flagged ``"is_plated": false``). Each job is built in two passes over the
soup: the tool pass defines one tool per distinct drill diameter, the drill
pass selects each tool in turn and drills every element that uses it.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable

from ..config import ConversionOptions, resolve_options
from ..errors import UnsupportedShapeWarning
from ..geom.transforms import rotate_offset
from ..soup import Element, Point, ccw_rotation, element_type, has_number, optional_number, position
from .builder import ExcellonDrillBuilder, excellon_drill
from .commands import ExcellonDrillCommand
from .tools import ToolRegistry

logger = logging.getLogger(__name__)

DRILLED_TYPES = frozenset({"pcb_plated_hole", "pcb_hole", "pcb_via"})
SLOT_SHAPES = frozenset({"pill", "oval", "rotated_pill", "pill_hole_with_rect_pad", "rotated_pill_hole_with_rect_pad"})


def participates(element: Element, *, is_plated: bool, options: ConversionOptions) -> bool:
    """Whether ``element`` is drilled in the plated or unplated job."""
    kind = element_type(element)
    if kind not in DRILLED_TYPES:
        return False
    if kind == "pcb_hole":
        return not is_plated or options.plated_includes_npth
    if kind == "pcb_plated_hole" and element.get("is_plated") is False:
        return not is_plated
    return is_plated


def drill_diameter(element: Element) -> float | None:
    """Cutter diameter: ``hole_diameter``, else the smaller slot dimension."""
    if has_number(element, "hole_diameter"):
        return float(element["hole_diameter"])
    if has_number(element, "hole_width") and has_number(element, "hole_height"):
        return min(float(element["hole_width"]), float(element["hole_height"]))
    return None


def hole_shape(element: Element) -> str | None:
    if element_type(element) == "pcb_hole":
        return element.get("hole_shape")
    return element.get("shape")


def is_slot(element: Element) -> bool:
    return (
        hole_shape(element) in SLOT_SHAPES
        and has_number(element, "hole_width")
        and has_number(element, "hole_height")
    )


def drill_center(element: Element) -> Point:
    x, y = position(element)
    if element_type(element) == "pcb_plated_hole":
        x += optional_number(element, "hole_offset_x", 0.0) or 0.0
        y += optional_number(element, "hole_offset_y", 0.0) or 0.0
    return (x, y)


def slot_endpoints(element: Element) -> tuple[Point, Point] | None:
    """Start and end of a slot's centre line, or ``None`` when it degenerates to a round hole."""
    width = float(element["hole_width"])
    height = float(element["hole_height"])
    half_length = (max(width, height) - min(width, height)) / 2
    if half_length <= 0:
        return None
    rotation = ccw_rotation(element, "hole_ccw_rotation", "ccw_rotation")
    if width > height:
        dx, dy = rotate_offset(half_length, 0.0, rotation)
    else:
        dx, dy = rotate_offset(0.0, half_length, rotation)
    cx, cy = drill_center(element)
    return (cx - dx, cy - dy), (cx + dx, cy + dy)


def convert_soup_to_excellon_drill_commands(
    soup: Iterable[Element],
    *,
    is_plated: bool,
    flip_y_axis: bool | None = None,
    options: ConversionOptions | None = None,
) -> tuple[ExcellonDrillCommand, ...]:
    """Build the plated or unplated drill job for ``soup``.

    Raises:
        SchemaValidationError: If a drill position or diameter is out of range.
        MalformedElementError: If a drilled element has no usable position.
    """
    resolved = resolve_options(options, flip_y_axis=flip_y_axis)
    mfy = (lambda y: -y) if resolved.flip_y_axis else (lambda y: y)
    elements = [element for element in soup if participates(element, is_plated=is_plated, options=resolved)]

    builder = excellon_drill()
    _add_header(builder, is_plated=is_plated, options=resolved)

    tools = ToolRegistry(builder, is_plated=is_plated)
    drills: list[tuple[Element, int]] = []
    for element in elements:
        diameter = drill_diameter(element)
        if diameter is None:
            message = f"{element_type(element)}: no hole_diameter or hole_width/hole_height; element skipped"
            logger.warning(message)
            warnings.warn(message, UnsupportedShapeWarning, stacklevel=2)
            continue
        drills.append((element, tools.define(diameter)))

    builder.add("percent_sign").add("G90").add("G05")

    for diameter, tool_number in tools:
        builder.add("use_tool", tool_number=tool_number)
        for element, element_tool in drills:
            if element_tool != tool_number:
                continue
            endpoints = slot_endpoints(element) if is_slot(element) else None
            if endpoints is None:
                x, y = drill_center(element)
                builder.add("drill_at", x=x, y=mfy(y))
                continue
            (sx, sy), (ex, ey) = endpoints
            if resolved.slot_encoding == "g85":
                builder.add("G85", start_x=sx, start_y=mfy(sy), x=ex, y=mfy(ey), width=diameter)
            else:
                builder.add("G00").add("drill_at", x=sx, y=mfy(sy)).add("M15")
                builder.add("G01").add("drill_at", x=ex, y=mfy(ey)).add("M16").add("G05")

    builder.add("M30")
    commands = builder.build()
    logger.debug("%s drill job: %d tools, %d holes", "plated" if is_plated else "unplated", len(tools), len(drills))
    return commands


def _add_header(builder: ExcellonDrillBuilder, *, is_plated: bool, options: ConversionOptions) -> None:
    date = options.resolved_creation_date()
    file_function = "Plated,1,2,PTH" if is_plated else "NonPlated,1,2,NPTH"
    builder.add("M48")
    builder.add("header_comment", text=f"DRILL file {{{options.software_name}}} date {date}")
    builder.add("header_comment", text="FORMAT={-:-/ absolute / metric / decimal}")
    builder.add("header_attribute", attribute_name="TF.CreationDate", attribute_value=date)
    builder.add("header_attribute", attribute_name="TF.GenerationSoftware", attribute_value=options.software_name)
    builder.add("header_attribute", attribute_name="TF.FileFunction", attribute_value=file_function)
    builder.add("FMAT", format=2)
    builder.add("unit_format", unit="METRIC")
