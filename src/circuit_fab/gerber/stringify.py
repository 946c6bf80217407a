"""Render Gerber command sequences to RS-274X text.

Rendering is a table lookup keyed by command class. The table is checked
against the :data:`~circuit_fab.gerber.commands.GerberCommand` union when this
module is imported, so adding a command without a renderer fails immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, get_args

from ..formatting import format_gerber_coordinate as fmt
from ..formatting import format_plain
from .commands import (
    AddAttributeOnFile,
    Comment,
    CreateArc,
    DefineApertureTemplate,
    DefineMacroApertureTemplate,
    DeleteAttribute,
    EndOfFile,
    EndRegionStatement,
    FlashOperation,
    FormatSpecification,
    GerberCommand,
    LoadRotation,
    MoveOperation,
    PlotOperation,
    SelectAperture,
    SetLayerPolarity,
    SetMovementModeToClockwiseCircular,
    SetMovementModeToCounterclockwiseCircular,
    SetMovementModeToLinear,
    SetUnit,
    StartRegionStatement,
)

logger = logging.getLogger(__name__)


def _delete_attribute(c: DeleteAttribute) -> str:
    if c.attribute_name is None:
        return "%TD*%"
    return f"%TD.{c.attribute_name}*%"


def _format_specification(c: FormatSpecification) -> str:
    digits = f"{c.integer_digits}{c.decimal_digits}"
    return f"%FSLAX{digits}Y{digits}*%"


def _define_aperture(c: DefineApertureTemplate) -> str:
    modifiers = "X".join(c.template.modifiers())
    return f"%ADD{c.aperture_number}{c.template.template_code},{modifiers}*%"


def _plot(c: PlotOperation) -> str:
    text = f"X{fmt(c.x)}Y{fmt(c.y)}"
    if c.i is not None and c.j is not None:
        text += f"I{fmt(c.i)}J{fmt(c.j)}"
    return f"{text}D01*"


_RENDERERS: dict[type, Callable[[Any], str]] = {
    Comment: lambda c: f"G04 {c.comment}*",
    AddAttributeOnFile: lambda c: f"%TF.{c.attribute_name},{c.attribute_value}*%",
    DeleteAttribute: _delete_attribute,
    FormatSpecification: _format_specification,
    SetUnit: lambda c: f"%MO{c.unit}*%",
    SetLayerPolarity: lambda c: f"%LP{c.polarity}*%",
    SetMovementModeToLinear: lambda c: "G01*",
    SetMovementModeToClockwiseCircular: lambda c: "G02*",
    SetMovementModeToCounterclockwiseCircular: lambda c: "G03*",
    CreateArc: lambda c: "G75*",
    DefineMacroApertureTemplate: lambda c: f"%AM{c.macro_name}*\n{c.template_code}%",
    DefineApertureTemplate: _define_aperture,
    SelectAperture: lambda c: f"D{c.aperture_number}*",
    PlotOperation: _plot,
    MoveOperation: lambda c: f"X{fmt(c.x)}Y{fmt(c.y)}D02*",
    FlashOperation: lambda c: f"X{fmt(c.x)}Y{fmt(c.y)}D03*",
    StartRegionStatement: lambda c: "G36*",
    EndRegionStatement: lambda c: "G37*",
    LoadRotation: lambda c: f"%LR{format_plain(c.rotation_degrees)}*%",
    EndOfFile: lambda c: "M02*",
}


def _check_renderers() -> None:
    union = get_args(get_args(GerberCommand)[0])
    missing = [cls.__name__ for cls in union if cls not in _RENDERERS]
    if missing:
        raise TypeError(f"Gerber commands without a renderer: {', '.join(missing)}")


_check_renderers()


def stringify_gerber_command(command: GerberCommand) -> str:
    try:
        renderer = _RENDERERS[type(command)]
    except KeyError:
        raise TypeError(f"Not a Gerber command: {command!r}") from None
    return renderer(command)


def stringify_gerber_commands(commands: Iterable[GerberCommand]) -> str:
    """Render one layer: one statement per line, joined with ``\\n``."""
    return "\n".join(stringify_gerber_command(command) for command in commands)


def stringify_gerber_command_layers(layers: Mapping[Any, Iterable[GerberCommand]]) -> dict[str, str]:
    """Render every layer of a layer map, keyed by layer name."""
    rendered: dict[str, str] = {}
    for layer, commands in layers.items():
        name = getattr(layer, "value", layer)
        rendered[name] = stringify_gerber_commands(commands)
        logger.debug("Rendered %s (%d bytes)", name, len(rendered[name]))
    return rendered
