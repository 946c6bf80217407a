"""Excellon NC drill command models.

Mirrors :mod:`circuit_fab.gerber.commands`: one frozen pydantic model per
command, a closed :data:`ExcellonDrillCommand` union discriminated by
``command_code`` and a name -> model table for the builder.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, model_validator

from ..command_base import CommandModel
from ..formatting import GERBER_COORDINATE_LIMIT_MM

Coordinate = Annotated[float, Field(gt=-GERBER_COORDINATE_LIMIT_MM, lt=GERBER_COORDINATE_LIMIT_MM)]
ToolNumber = Annotated[int, Field(ge=1)]
ToolSize = Annotated[float, Field(gt=0, lt=GERBER_COORDINATE_LIMIT_MM)]
LineText = Annotated[str, Field(pattern=r"^[^\r\n]*$")]


class M48(CommandModel):
    """Start of header."""

    command_code: Literal["M48"] = "M48"


class HeaderComment(CommandModel):
    command_code: Literal["header_comment"] = "header_comment"
    text: LineText


class HeaderAttribute(CommandModel):
    """``; #@! <name>,<value>`` attribute comment (X2-style attributes in a drill header)."""

    command_code: Literal["header_attribute"] = "header_attribute"
    attribute_name: Annotated[str, Field(pattern=r"^[A-Za-z_.$][A-Za-z0-9_.$]*$")]
    attribute_value: LineText


class FMAT(CommandModel):
    command_code: Literal["FMAT"] = "FMAT"
    format: Literal[1, 2] = 2


class UnitFormat(CommandModel):
    command_code: Literal["unit_format"] = "unit_format"
    unit: Literal["METRIC", "INCH"] = "METRIC"
    lz: Literal["LZ", "TZ"] | None = None


class AperFunctionHeader(CommandModel):
    command_code: Literal["aper_function_header"] = "aper_function_header"
    is_plated: bool


class DefineTool(CommandModel):
    """``T<n>C<diameter>``.

    A pill/slot tool can be given as ``width`` and ``height``; the smaller of
    the two is the cutter diameter.
    """

    command_code: Literal["define_tool"] = "define_tool"
    tool_number: ToolNumber
    diameter: ToolSize | None = None
    width: ToolSize | None = None
    height: ToolSize | None = None
    shape: Literal["circle", "pill"] | None = None

    @model_validator(mode="after")
    def _check_size(self) -> DefineTool:
        has_pill_size = self.width is not None and self.height is not None
        if self.diameter is None and not has_pill_size:
            raise ValueError("define_tool requires diameter or both width and height")
        if self.diameter is None and (self.width is None) != (self.height is None):
            raise ValueError("width and height must be given together")
        return self

    @property
    def tool_diameter(self) -> float:
        if self.diameter is not None:
            return self.diameter
        return min(self.width, self.height)  # type: ignore[type-var]


class PercentSign(CommandModel):
    """End of header (rewind stop)."""

    command_code: Literal["percent_sign"] = "percent_sign"


class G90(CommandModel):
    """Absolute coordinates."""

    command_code: Literal["G90"] = "G90"


class G05(CommandModel):
    """Drill mode."""

    command_code: Literal["G05"] = "G05"


class G00(CommandModel):
    """Route mode (rapid move to the start of a route)."""

    command_code: Literal["G00"] = "G00"


class G01(CommandModel):
    """Linear routing."""

    command_code: Literal["G01"] = "G01"


class M15(CommandModel):
    """Z axis feed down (router plunge)."""

    command_code: Literal["M15"] = "M15"


class M16(CommandModel):
    """Z axis feed up (retract)."""

    command_code: Literal["M16"] = "M16"


class M30(CommandModel):
    """End of program."""

    command_code: Literal["M30"] = "M30"


class UseTool(CommandModel):
    command_code: Literal["use_tool"] = "use_tool"
    tool_number: ToolNumber


class DrillAt(CommandModel):
    command_code: Literal["drill_at"] = "drill_at"
    x: Coordinate
    y: Coordinate


class G85(CommandModel):
    """Canned slot from ``(start_x, start_y)`` to ``(x, y)`` with the current tool."""

    command_code: Literal["G85"] = "G85"
    start_x: Coordinate
    start_y: Coordinate
    x: Coordinate
    y: Coordinate
    width: ToolSize


ExcellonDrillCommand = Annotated[
    Union[
        M48,
        HeaderComment,
        HeaderAttribute,
        FMAT,
        UnitFormat,
        AperFunctionHeader,
        DefineTool,
        PercentSign,
        G90,
        G05,
        G00,
        G01,
        M15,
        M16,
        M30,
        UseTool,
        DrillAt,
        G85,
    ],
    Field(discriminator="command_code"),
]

EXCELLON_COMMANDS: dict[str, type[CommandModel]] = {
    "M48": M48,
    "header_comment": HeaderComment,
    "header_attribute": HeaderAttribute,
    "FMAT": FMAT,
    "unit_format": UnitFormat,
    "aper_function_header": AperFunctionHeader,
    "define_tool": DefineTool,
    "percent_sign": PercentSign,
    "G90": G90,
    "G05": G05,
    "G00": G00,
    "G01": G01,
    "M15": M15,
    "M16": M16,
    "M30": M30,
    "use_tool": UseTool,
    "drill_at": DrillAt,
    "G85": G85,
}
