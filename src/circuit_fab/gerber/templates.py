"""Aperture templates for ``%ADD`` definitions.

Templates are frozen pydantic models discriminated by ``template_code``. Two
templates describe the same aperture exactly when they compare equal, which is
what the aperture registry relies on for deduplication.

Standard templates (``C``, ``R``, ``O``, ``P``) map directly onto Gerber's
built-in apertures. ``HORZPILL``, ``VERTPILL`` and ``RoundRect`` instantiate
the aperture macros defined at the top of every copper, mask, paste and
silkscreen layer (see :mod:`circuit_fab.gerber.macros`).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..formatting import GERBER_COORDINATE_LIMIT_MM, format_dimension, format_plain

Dimension = Annotated[float, Field(gt=0, lt=GERBER_COORDINATE_LIMIT_MM)]
Offset = Annotated[float, Field(ge=0, lt=GERBER_COORDINATE_LIMIT_MM)]


class _TemplateBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    def modifiers(self) -> list[str]:
        """Rendered modifiers, joined with ``X`` after ``<code>,`` in the ADD line."""
        raise NotImplementedError


class CircleTemplate(_TemplateBase):
    template_code: Literal["C"] = "C"
    diameter: Dimension
    hole_diameter: Dimension | None = None

    def modifiers(self) -> list[str]:
        values = [format_dimension(self.diameter)]
        if self.hole_diameter is not None:
            values.append(format_dimension(self.hole_diameter))
        return values


class RectangleTemplate(_TemplateBase):
    template_code: Literal["R"] = "R"
    x_size: Dimension
    y_size: Dimension
    hole_diameter: Dimension | None = None

    def modifiers(self) -> list[str]:
        values = [format_dimension(self.x_size), format_dimension(self.y_size)]
        if self.hole_diameter is not None:
            values.append(format_dimension(self.hole_diameter))
        return values


class ObroundTemplate(_TemplateBase):
    template_code: Literal["O"] = "O"
    x_size: Dimension
    y_size: Dimension
    hole_diameter: Dimension | None = None

    def modifiers(self) -> list[str]:
        values = [format_dimension(self.x_size), format_dimension(self.y_size)]
        if self.hole_diameter is not None:
            values.append(format_dimension(self.hole_diameter))
        return values


class PolygonTemplate(_TemplateBase):
    template_code: Literal["P"] = "P"
    outer_diameter: Dimension
    number_of_vertices: int = Field(..., ge=3, le=12)
    rotation: float | None = None
    hole_diameter: Dimension | None = None

    def modifiers(self) -> list[str]:
        values = [format_dimension(self.outer_diameter), str(self.number_of_vertices)]
        if self.rotation is not None or self.hole_diameter is not None:
            values.append(format_plain(self.rotation or 0.0))
        if self.hole_diameter is not None:
            values.append(format_dimension(self.hole_diameter))
        return values


class HorizontalPillTemplate(_TemplateBase):
    """Stadium wider than tall; instantiates the ``HORZPILL`` macro.

    ``circle_center_offset`` is half the straight section length, i.e. the
    distance from the aperture centre to each end-cap circle centre.
    """

    template_code: Literal["HORZPILL"] = "HORZPILL"
    x_size: Dimension
    y_size: Dimension
    circle_diameter: Dimension
    circle_center_offset: Offset

    @model_validator(mode="after")
    def _check_orientation(self) -> HorizontalPillTemplate:
        if self.x_size < self.y_size:
            raise ValueError("HORZPILL requires x_size >= y_size")
        return self

    def modifiers(self) -> list[str]:
        return [
            format_dimension(self.x_size - self.y_size),
            format_dimension(self.y_size),
            format_dimension(self.circle_diameter),
            format_dimension(self.circle_center_offset),
        ]


class VerticalPillTemplate(_TemplateBase):
    """Stadium taller than wide; instantiates the ``VERTPILL`` macro."""

    template_code: Literal["VERTPILL"] = "VERTPILL"
    x_size: Dimension
    y_size: Dimension
    circle_diameter: Dimension
    circle_center_offset: Offset

    @model_validator(mode="after")
    def _check_orientation(self) -> VerticalPillTemplate:
        if self.y_size < self.x_size:
            raise ValueError("VERTPILL requires y_size >= x_size")
        return self

    def modifiers(self) -> list[str]:
        return [
            format_dimension(self.x_size),
            format_dimension(self.y_size - self.x_size),
            format_dimension(self.circle_diameter),
            format_dimension(self.circle_center_offset),
        ]


class RoundRectTemplate(_TemplateBase):
    """Rectangle with rounded corners; instantiates the ``RoundRect`` macro.

    Rendered as the corner radius followed by the four corner-circle centres
    (top-left, top-right, bottom-right, bottom-left).
    """

    template_code: Literal["RoundRect"] = "RoundRect"
    x_size: Dimension
    y_size: Dimension
    corner_radius: Offset

    @model_validator(mode="after")
    def _check_radius(self) -> RoundRectTemplate:
        if self.corner_radius > min(self.x_size, self.y_size) / 2:
            raise ValueError("corner_radius must not exceed half the smaller side")
        return self

    def corner_centers(self) -> list[tuple[float, float]]:
        a = self.x_size / 2 - self.corner_radius
        b = self.y_size / 2 - self.corner_radius
        return [(-a, b), (a, b), (a, -b), (-a, -b)]

    def modifiers(self) -> list[str]:
        values = [format_dimension(self.corner_radius)]
        for x, y in self.corner_centers():
            values.extend((format_dimension(x), format_dimension(y)))
        return values


ApertureTemplate = Annotated[
    Union[
        CircleTemplate,
        RectangleTemplate,
        ObroundTemplate,
        PolygonTemplate,
        HorizontalPillTemplate,
        VerticalPillTemplate,
        RoundRectTemplate,
    ],
    Field(discriminator="template_code"),
]


def pill_template(width: float, height: float) -> HorizontalPillTemplate | VerticalPillTemplate:
    """Pill aperture for a ``width`` x ``height`` stadium, oriented along its long side."""
    diameter = min(width, height)
    if width >= height:
        return HorizontalPillTemplate(
            x_size=width,
            y_size=height,
            circle_diameter=diameter,
            circle_center_offset=(width - height) / 2,
        )
    return VerticalPillTemplate(
        x_size=width,
        y_size=height,
        circle_diameter=diameter,
        circle_center_offset=(height - width) / 2,
    )
