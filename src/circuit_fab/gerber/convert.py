"""Compile circuit soup into per-layer Gerber command sequences.

The conversion runs in two passes:

1. **Aperture pass.** Every copper, mask, paste and silkscreen layer receives
   the common macros, then one aperture per distinct template used on its
   side of the board (trace widths first, then element shapes in soup
   order). All four layers of a side share the same aperture list. Edge_Cuts
   gets a single circular aperture for outlines.
2. **Geometry pass.** For ``top``, ``bottom`` and ``edgecut`` the soup is
   walked in order and each element emits aperture selects and
   move/plot/flash operations. Apertures are looked up with
   :meth:`ApertureRegistry.find`, so a template missed by the aperture pass
   raises :class:`~circuit_fab.errors.ApertureNotFoundError`.

Every Y coordinate goes through :meth:`_GerberCompiler.mfy`. With
``flip_y_axis`` the sign of each Y value and arc J offset is negated, and arc
directions and ``%LR`` angles are reversed, which mirrors the board without
changing its shapes.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from ..config import ConversionOptions, resolve_options
from ..errors import MalformedElementError, UnsupportedShapeWarning
from ..geom.arcs import RingVertex, bulge_arc_center_offset, reverse_ring, ring_from_soup
from ..geom.text import layout_text, resolve_alignment
from ..geom.transforms import rect_corners, rotate_offset
from ..soup import (
    SIDES,
    Element,
    Point,
    ccw_rotation,
    element_type,
    has_number,
    is_on_layer,
    optional_number,
    optional_str,
    position,
    require_number,
    require_point,
    require_points,
    require_sequence,
    require_str,
    to_point,
)
from .apertures import (
    PILL_HOLE_SHAPES,
    RECT_PAD_HOLE_SHAPES,
    ApertureRegistry,
    hole_template,
    plated_hole_pad_size,
    plated_hole_template,
    silkscreen_path_template,
    silkscreen_text_template,
    smtpad_template,
    solder_paste_template,
    trace_width_template,
    trace_widths,
    via_template,
)
from .builder import GerberBuilder
from .commands import GerberCommand
from .headers import command_headers
from .layers import PLOTTED_LAYERS, GerberLayerName, gerber_layer_name
from .macros import define_common_macros
from .templates import CircleTemplate

logger = logging.getLogger(__name__)

LayerToGerberCommandsMap = dict[GerberLayerName, tuple[GerberCommand, ...]]

EDGE_CUT = "edgecut"
GEOMETRY_PASSES: tuple[str, ...] = (*SIDES, EDGE_CUT)

_LINEAR = "set_movement_mode_to_linear"
_CLOCKWISE = "set_movement_mode_to_clockwise_circular"
_COUNTERCLOCKWISE = "set_movement_mode_to_counterclockwise_circular"


def convert_soup_to_gerber_commands(
    soup: Iterable[Element],
    options: ConversionOptions | None = None,
    *,
    flip_y_axis: bool | None = None,
) -> LayerToGerberCommandsMap:
    """Convert circuit soup into one Gerber command sequence per layer.

    Args:
        soup: Circuit elements. Elements of other types are ignored.
        options: Conversion options; defaults to :data:`~circuit_fab.config.DEFAULT_OPTIONS`.
        flip_y_axis: Overrides ``options.flip_y_axis`` when given.

    Returns:
        Mapping of all nine :class:`GerberLayerName` slots to immutable command tuples.

    Raises:
        SchemaValidationError: If a generated command is out of range.
        MalformedElementError: If an element lacks a required field.
        ApertureNotFoundError: If the geometry pass uses an undefined aperture.
    """
    resolved = resolve_options(options, flip_y_axis=flip_y_axis)
    return _GerberCompiler(list(soup), resolved).run()


class _GerberCompiler:
    def __init__(self, soup: list[Element], options: ConversionOptions) -> None:
        self.soup = soup
        self.options = options
        self.flip = options.flip_y_axis
        creation_date = options.resolved_creation_date()
        self.builders: dict[GerberLayerName, GerberBuilder] = {
            layer: command_headers(layer, options, creation_date) for layer in GerberLayerName
        }
        self.registries: dict[GerberLayerName, ApertureRegistry] = {
            layer: ApertureRegistry(builder, layer) for layer, builder in self.builders.items()
        }
        self._warned: set[int] = set()
        self._paste_rotations: dict[Point, float] = {}
        self._handlers: dict[str, Callable[[Element, str], None]] = {
            "pcb_trace": self._trace,
            "pcb_silkscreen_path": self._silkscreen_path,
            "pcb_silkscreen_text": self._silkscreen_text,
            "pcb_smtpad": self._smtpad,
            "pcb_solder_paste": self._solder_paste,
            "pcb_plated_hole": self._plated_hole,
            "pcb_hole": self._hole,
            "pcb_via": self._via,
            "pcb_board": self._board,
            "pcb_cutout": self._cutout,
            "pcb_copper_pour": self._copper_pour,
        }

    # -- coordinates -----------------------------------------------------

    def mfy(self, y: float) -> float:
        """Maybe flip the Y axis."""
        return -y if self.flip else y

    def _move(self, builder: GerberBuilder, point: Point) -> None:
        builder.add("move_operation", x=point[0], y=self.mfy(point[1]))

    def _plot(self, builder: GerberBuilder, point: Point) -> None:
        builder.add("plot_operation", x=point[0], y=self.mfy(point[1]))

    def _flash(self, builder: GerberBuilder, point: Point) -> None:
        builder.add("flash_operation", x=point[0], y=self.mfy(point[1]))

    def _closed_path(self, builder: GerberBuilder, points: Sequence[Point]) -> None:
        self._move(builder, points[0])
        for point in points[1:]:
            self._plot(builder, point)
        self._plot(builder, points[0])

    # -- driver ----------------------------------------------------------

    def run(self) -> LayerToGerberCommandsMap:
        side_templates = {side: self._side_templates(side) for side in SIDES}
        for layer in PLOTTED_LAYERS:
            builder = self.builders[layer]
            define_common_macros(builder)
            builder.add("comment", comment="aperture START LIST")
            self.registries[layer].define_all(side_templates[layer.side])
            builder.add("delete_attribute")
            builder.add("comment", comment="aperture END LIST")

        edge_template = CircleTemplate(diameter=self.options.edge_cut_aperture_diameter)
        self.registries[GerberLayerName.Edge_Cuts].define(edge_template)

        self._paste_rotations = self._plated_hole_rotations()

        for side in GEOMETRY_PASSES:
            for element in self.soup:
                handler = self._handlers.get(element_type(element) or "")
                if handler is not None:
                    handler(element, side)

        layers: LayerToGerberCommandsMap = {}
        for layer, builder in self.builders.items():
            builder.add("end_of_file")
            layers[layer] = builder.build()
            logger.debug("%s: %d commands, %d apertures", layer, len(layers[layer]), len(self.registries[layer]))
        return layers

    def _side_templates(self, side: str) -> list[Any]:
        templates: list[Any] = [trace_width_template(width) for width in trace_widths(self.soup, side)]
        for element in self.soup:
            kind = element_type(element)
            template = None
            if kind == "pcb_smtpad" and is_on_layer(element, side):
                template = smtpad_template(element)
            elif kind == "pcb_solder_paste" and is_on_layer(element, side):
                template = solder_paste_template(element)
            elif kind == "pcb_plated_hole" and is_on_layer(element, side):
                template = plated_hole_template(element)
            elif kind == "pcb_hole":
                template = hole_template(element)
            elif kind == "pcb_via" and is_on_layer(element, side):
                template = via_template(element)
            elif kind == "pcb_silkscreen_path" and is_on_layer(element, side):
                template = silkscreen_path_template(element)
            elif kind == "pcb_silkscreen_text" and is_on_layer(element, side):
                template = silkscreen_text_template(element)
            if template is not None and template not in templates:
                templates.append(template)
        return templates

    def _plated_hole_rotations(self) -> dict[Point, float]:
        rotations: dict[Point, float] = {}
        for element in self.soup:
            if element_type(element) == "pcb_plated_hole" and has_number(element, "x") and has_number(element, "y"):
                rotations[position(element)] = ccw_rotation(element)
        return rotations

    def _skip(self, element: Element, reason: str) -> None:
        if id(element) in self._warned:
            return
        self._warned.add(id(element))
        message = f"{element_type(element)}: {reason}; element skipped"
        logger.warning(message)
        warnings.warn(message, UnsupportedShapeWarning, stacklevel=2)

    def _select(self, layer: GerberLayerName, template: Any) -> GerberBuilder:
        builder = self.builders[layer]
        return builder.add("select_aperture", aperture_number=self.registries[layer].find(template))

    def _flash_rotated(self, builder: GerberBuilder, point: Point, rotation: float) -> None:
        if rotation:
            builder.add("load_rotation", rotation_degrees=-rotation if self.flip else rotation)
        self._flash(builder, point)
        if rotation:
            builder.add("load_rotation", rotation_degrees=0)

    # -- element handlers --------------------------------------------------

    def _trace(self, element: Element, side: str) -> None:
        if side == EDGE_CUT:
            return
        route = require_sequence(element, "route")
        layer = gerber_layer_name(side, "copper")
        for a, b in zip(route, route[1:]):
            if not isinstance(a, Mapping) or a.get("route_type") != "wire" or a.get("layer") != side:
                continue
            start = to_point(element, "route", a)
            end = to_point(element, "route", b)
            builder = self._select(layer, trace_width_template(require_number(a, "width")))
            self._move(builder, start)
            self._plot(builder, end)

    def _silkscreen_path(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        points = require_points(element, "route")
        if not points:
            return
        builder = self._select(gerber_layer_name(side, "silkscreen"), silkscreen_path_template(element))
        self._move(builder, points[0])
        for point in points[1:]:
            self._plot(builder, point)

    def _silkscreen_text(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        try:
            alignment = resolve_alignment(
                optional_str(element, "anchor_alignment"),
                optional_str(element, "anchor_side"),
            )
        except ValueError as exc:
            raise MalformedElementError(element, "anchor_alignment", "a known text alignment") from exc
        strokes = layout_text(
            require_str(element, "text"),
            font_size=require_number(element, "font_size"),
            anchor=require_point(element, "anchor_position"),
            alignment=alignment,
            ccw_rotation=ccw_rotation(element),
            mirror=side == "bottom",
        )
        builder = self._select(gerber_layer_name(side, "silkscreen"), silkscreen_text_template(element))
        for start, end in strokes:
            self._move(builder, start)
            self._plot(builder, end)

    def _smtpad(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        layers = (gerber_layer_name(side, "copper"), gerber_layer_name(side, "soldermask"))
        shape = element.get("shape")
        if shape == "polygon":
            points = require_points(element, "points")
            if not points:
                return
            for layer in layers:
                builder = self.builders[layer]
                builder.add("start_region_statement")
                self._closed_path(builder, points)
                builder.add("end_region_statement")
            return

        template = smtpad_template(element)
        if template is None:
            self._skip(element, f"unsupported pad shape {shape!r}")
            return
        rotation = ccw_rotation(element) if shape in ("rotated_rect", "rotated_pill") else 0.0
        for layer in layers:
            self._flash_rotated(self._select(layer, template), position(element), rotation)

    def _solder_paste(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        template = solder_paste_template(element)
        if template is None:
            self._skip(element, f"unsupported paste shape {element.get('shape')!r}")
            return
        center = position(element)
        rotation = optional_number(element, "ccw_rotation")
        if rotation is None:
            rotation = self._paste_rotations.get(center, 0.0)
        self._flash_rotated(self._select(gerber_layer_name(side, "paste"), template), center, rotation)

    def _plated_hole(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        shape = element.get("shape")
        template = plated_hole_template(element)
        if template is None:
            self._skip(element, f"unsupported plated hole shape {shape!r}")
            return
        center = position(element)
        for layer in (gerber_layer_name(side, "copper"), gerber_layer_name(side, "soldermask")):
            builder = self._select(layer, template)
            if shape in PILL_HOLE_SHAPES:
                self._pill_stroke(builder, element, center)
            elif shape in RECT_PAD_HOLE_SHAPES:
                self._flash_rotated(builder, center, optional_number(element, "rect_ccw_rotation", 0.0) or 0.0)
            else:
                self._flash(builder, center)

    def _pill_stroke(self, builder: GerberBuilder, element: Element, center: Point) -> None:
        """Draw a pill pad as a round aperture stroked along the slot axis."""
        pad_w, pad_h = plated_hole_pad_size(element)
        half_length = abs(pad_w - pad_h) / 2
        if half_length <= 0:
            self._flash(builder, center)
            return
        rotation = ccw_rotation(element)
        if pad_w >= pad_h:
            dx, dy = rotate_offset(half_length, 0.0, rotation)
        else:
            dx, dy = rotate_offset(0.0, half_length, rotation)
        start = (center[0] - dx, center[1] - dy)
        end = (center[0] + dx, center[1] + dy)
        self._flash(builder, start)
        self._move(builder, start)
        self._plot(builder, end)
        self._flash(builder, end)

    def _hole(self, element: Element, side: str) -> None:
        if side == EDGE_CUT:
            return
        template = hole_template(element)
        if template is None:
            self._skip(element, f"unsupported hole shape {element.get('hole_shape')!r}")
            return
        self._flash(self._select(gerber_layer_name(side, "soldermask"), template), position(element))

    def _via(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        self._flash(self._select(gerber_layer_name(side, "copper"), via_template(element)), position(element))

    def _edge_builder(self) -> GerberBuilder:
        edge_template = CircleTemplate(diameter=self.options.edge_cut_aperture_diameter)
        return self._select(GerberLayerName.Edge_Cuts, edge_template)

    def _board(self, element: Element, side: str) -> None:
        if side != EDGE_CUT:
            return
        outline = require_points(element, "outline") if element.get("outline") is not None else []
        if len(outline) > 2:
            points = outline
            if points[0] != points[-1]:
                points.append(points[0])
        else:
            cx, cy = require_point(element, "center")
            w = require_number(element, "width") / 2
            h = require_number(element, "height") / 2
            points = [(cx - w, cy - h), (cx + w, cy - h), (cx + w, cy + h), (cx - w, cy + h), (cx - w, cy - h)]
        builder = self._edge_builder()
        self._move(builder, points[0])
        for point in points[1:]:
            self._plot(builder, point)

    def _cutout(self, element: Element, side: str) -> None:
        if side != EDGE_CUT:
            return
        shape = element.get("shape")
        if shape == "rect":
            corners = rect_corners(
                require_point(element, "center"),
                require_number(element, "width"),
                require_number(element, "height"),
                optional_number(element, "rotation", 0.0) or 0.0,
            )
            self._closed_path(self._edge_builder(), corners)
        elif shape == "circle":
            cx, cy = require_point(element, "center")
            radius = require_number(element, "radius")
            right = (cx + radius, cy)
            left = (cx - radius, cy)
            builder = self._edge_builder()
            self._move(builder, right)
            builder.add(_COUNTERCLOCKWISE)
            builder.add("plot_operation", x=left[0], y=self.mfy(left[1]), i=-radius, j=0)
            builder.add("plot_operation", x=right[0], y=self.mfy(right[1]), i=radius, j=0)
            builder.add(_LINEAR)
        elif shape == "polygon":
            points = require_points(element, "points")
            if points:
                self._closed_path(self._edge_builder(), points)
        else:
            self._skip(element, f"unsupported cutout shape {shape!r}")

    def _copper_pour(self, element: Element, side: str) -> None:
        if side == EDGE_CUT or not is_on_layer(element, side):
            return
        shape = element.get("shape")
        if shape == "rect":
            rings: list[list[RingVertex]] = [
                [
                    RingVertex(x, y)
                    for x, y in rect_corners(
                        require_point(element, "center"),
                        require_number(element, "width"),
                        require_number(element, "height"),
                        optional_number(element, "rotation", 0.0) or 0.0,
                    )
                ]
            ]
        elif shape == "polygon":
            rings = [[RingVertex(x, y) for x, y in require_points(element, "points")]]
        elif shape == "brep":
            brep = element.get("brep_shape")
            if not isinstance(brep, Mapping):
                raise MalformedElementError(element, "brep_shape", "an object with an outer_ring")
            rings = [reverse_ring(ring_from_soup(element, brep.get("outer_ring"), "brep_shape.outer_ring"))]
            for inner in brep.get("inner_rings") or ():
                rings.append(reverse_ring(ring_from_soup(element, inner, "brep_shape.inner_rings")))
        else:
            self._skip(element, f"unsupported copper pour shape {shape!r}")
            return

        rings = [ring for ring in rings if ring]
        if not rings:
            return
        builder = self.builders[gerber_layer_name(side, "copper")]
        builder.add("start_region_statement")
        mode = _LINEAR
        for ring in rings:
            mode = self._region_ring(builder, ring, mode)
        builder.add("end_region_statement")
        if mode != _LINEAR:
            builder.add(_LINEAR)

    def _region_ring(self, builder: GerberBuilder, ring: list[RingVertex], mode: str) -> str:
        """Draw one closed ring of a region; returns the interpolation mode left active."""
        self._move(builder, (ring[0].x, ring[0].y))
        for index, start in enumerate(ring):
            end = ring[(index + 1) % len(ring)]
            offset = None
            if start.has_arc:
                offset = bulge_arc_center_offset((start.x, start.y), (end.x, end.y), start.bulge)
            if offset is None:
                if mode != _LINEAR:
                    mode = _LINEAR
                    builder.add(mode)
                self._plot(builder, (end.x, end.y))
                continue
            counterclockwise = (start.bulge > 0) != self.flip
            wanted = _COUNTERCLOCKWISE if counterclockwise else _CLOCKWISE
            if mode != wanted:
                mode = wanted
                builder.add(mode)
            builder.add("plot_operation", x=end.x, y=self.mfy(end.y), i=offset[0], j=self.mfy(offset[1]))
        return mode
