"""Gerber RS-274X command models.

Every command is a frozen pydantic model keyed by a literal ``command_code``.
:data:`GerberCommand` is the closed union of all of them and
:data:`GERBER_COMMANDS` maps builder names to models. Each model accepts only
values :mod:`circuit_fab.gerber.stringify` can render unambiguously: finite
coordinates inside the 4.6 format range, aperture numbers >= 10, and free
text without the ``*``, ``%`` and newline delimiters.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, model_validator

from ..command_base import CommandModel
from ..formatting import GERBER_COORDINATE_LIMIT_MM
from .templates import ApertureTemplate

Coordinate = Annotated[float, Field(gt=-GERBER_COORDINATE_LIMIT_MM, lt=GERBER_COORDINATE_LIMIT_MM)]
ApertureNumber = Annotated[int, Field(ge=10)]
FreeText = Annotated[str, Field(pattern=r"^[^*%\r\n]*$")]
AttributeName = Annotated[str, Field(pattern=r"^[A-Za-z_.$][A-Za-z0-9_.$]*$")]
MacroName = Annotated[str, Field(pattern=r"^[A-Za-z_.$][A-Za-z0-9_.$]*$")]


class Comment(CommandModel):
    command_code: Literal["G04"] = "G04"
    comment: FreeText


class AddAttributeOnFile(CommandModel):
    """``%TF.<name>,<value>*%`` file attribute."""

    command_code: Literal["TF"] = "TF"
    attribute_name: AttributeName
    attribute_value: FreeText


class DeleteAttribute(CommandModel):
    """``%TD*%`` deletes every aperture/object attribute, ``%TD.<name>*%`` just one."""

    command_code: Literal["TD"] = "TD"
    attribute_name: AttributeName | None = None


class FormatSpecification(CommandModel):
    command_code: Literal["FS"] = "FS"
    integer_digits: Literal[4] = 4
    decimal_digits: Literal[6] = 6


class SetUnit(CommandModel):
    command_code: Literal["MO"] = "MO"
    unit: Literal["MM", "IN"] = "MM"


class SetLayerPolarity(CommandModel):
    command_code: Literal["LP"] = "LP"
    polarity: Literal["D", "C"] = "D"


class SetMovementModeToLinear(CommandModel):
    command_code: Literal["G01"] = "G01"


class SetMovementModeToClockwiseCircular(CommandModel):
    command_code: Literal["G02"] = "G02"


class SetMovementModeToCounterclockwiseCircular(CommandModel):
    command_code: Literal["G03"] = "G03"


class CreateArc(CommandModel):
    """Multi-quadrant arc mode; must precede the first arc."""

    command_code: Literal["G75"] = "G75"


class DefineMacroApertureTemplate(CommandModel):
    command_code: Literal["AM"] = "AM"
    macro_name: MacroName
    template_code: str = Field(..., min_length=1, pattern=r"^[^%]*$")


class DefineApertureTemplate(CommandModel):
    command_code: Literal["ADD"] = "ADD"
    aperture_number: ApertureNumber
    template: ApertureTemplate


class SelectAperture(CommandModel):
    command_code: Literal["D"] = "D"
    aperture_number: ApertureNumber


class PlotOperation(CommandModel):
    """D01: draw (or arc, when ``i``/``j`` are given) from the current point."""

    command_code: Literal["D01"] = "D01"
    x: Coordinate
    y: Coordinate
    i: Coordinate | None = None
    j: Coordinate | None = None

    @model_validator(mode="after")
    def _check_arc_offsets(self) -> PlotOperation:
        if (self.i is None) != (self.j is None):
            raise ValueError("arc offsets i and j must be given together")
        return self

    @property
    def is_arc(self) -> bool:
        return self.i is not None


class MoveOperation(CommandModel):
    command_code: Literal["D02"] = "D02"
    x: Coordinate
    y: Coordinate


class FlashOperation(CommandModel):
    command_code: Literal["D03"] = "D03"
    x: Coordinate
    y: Coordinate


class StartRegionStatement(CommandModel):
    command_code: Literal["G36"] = "G36"


class EndRegionStatement(CommandModel):
    command_code: Literal["G37"] = "G37"


class LoadRotation(CommandModel):
    command_code: Literal["LR"] = "LR"
    rotation_degrees: float


class EndOfFile(CommandModel):
    command_code: Literal["M02"] = "M02"


GerberCommand = Annotated[
    Union[
        Comment,
        AddAttributeOnFile,
        DeleteAttribute,
        FormatSpecification,
        SetUnit,
        SetLayerPolarity,
        SetMovementModeToLinear,
        SetMovementModeToClockwiseCircular,
        SetMovementModeToCounterclockwiseCircular,
        CreateArc,
        DefineMacroApertureTemplate,
        DefineApertureTemplate,
        SelectAperture,
        PlotOperation,
        MoveOperation,
        FlashOperation,
        StartRegionStatement,
        EndRegionStatement,
        LoadRotation,
        EndOfFile,
    ],
    Field(discriminator="command_code"),
]

GERBER_COMMANDS: dict[str, type[CommandModel]] = {
    "comment": Comment,
    "add_attribute_on_file": AddAttributeOnFile,
    "delete_attribute": DeleteAttribute,
    "format_specification": FormatSpecification,
    "set_unit": SetUnit,
    "set_layer_polarity": SetLayerPolarity,
    "set_movement_mode_to_linear": SetMovementModeToLinear,
    "set_movement_mode_to_clockwise_circular": SetMovementModeToClockwiseCircular,
    "set_movement_mode_to_counterclockwise_circular": SetMovementModeToCounterclockwiseCircular,
    "create_arc": CreateArc,
    "define_macro_aperture_template": DefineMacroApertureTemplate,
    "define_aperture_template": DefineApertureTemplate,
    "select_aperture": SelectAperture,
    "plot_operation": PlotOperation,
    "move_operation": MoveOperation,
    "flash_operation": FlashOperation,
    "start_region_statement": StartRegionStatement,
    "end_region_statement": EndRegionStatement,
    "load_rotation": LoadRotation,
    "end_of_file": EndOfFile,
}
