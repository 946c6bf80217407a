"""Render Excellon command sequences to NC drill text."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, get_args

from ..formatting import format_dimension
from ..formatting import format_excellon_coordinate as fmt
from .commands import (
    FMAT,
    G00,
    G01,
    G05,
    G85,
    G90,
    M15,
    M16,
    M30,
    M48,
    AperFunctionHeader,
    DefineTool,
    DrillAt,
    ExcellonDrillCommand,
    HeaderAttribute,
    HeaderComment,
    PercentSign,
    UnitFormat,
    UseTool,
)


def _unit_format(c: UnitFormat) -> str:
    return c.unit if c.lz is None else f"{c.unit},{c.lz}"


def _aper_function_header(c: AperFunctionHeader) -> str:
    if c.is_plated:
        return "; #@! TA.AperFunction,Plated,PTH,ComponentDrill"
    return "; #@! TA.AperFunction,NonPlated,NPTH,ComponentDrill"


_RENDERERS: dict[type, Callable[[Any], str]] = {
    M48: lambda c: "M48",
    HeaderComment: lambda c: f"; {c.text}",
    HeaderAttribute: lambda c: f"; #@! {c.attribute_name},{c.attribute_value}",
    FMAT: lambda c: f"FMAT,{c.format}",
    UnitFormat: _unit_format,
    AperFunctionHeader: _aper_function_header,
    DefineTool: lambda c: f"T{c.tool_number}C{format_dimension(c.tool_diameter)}",
    PercentSign: lambda c: "%",
    G90: lambda c: "G90",
    G05: lambda c: "G05",
    G00: lambda c: "G00",
    G01: lambda c: "G01",
    M15: lambda c: "M15",
    M16: lambda c: "M16",
    M30: lambda c: "M30",
    UseTool: lambda c: f"T{c.tool_number}",
    DrillAt: lambda c: f"X{fmt(c.x)}Y{fmt(c.y)}",
    G85: lambda c: f"X{fmt(c.start_x)}Y{fmt(c.start_y)}G85X{fmt(c.x)}Y{fmt(c.y)}",
}

_missing = [cls.__name__ for cls in get_args(get_args(ExcellonDrillCommand)[0]) if cls not in _RENDERERS]
if _missing:
    raise TypeError(f"Excellon commands without a renderer: {', '.join(_missing)}")


def stringify_excellon_command(command: ExcellonDrillCommand) -> str:
    try:
        renderer = _RENDERERS[type(command)]
    except KeyError:
        raise TypeError(f"Not an Excellon command: {command!r}") from None
    return renderer(command)


def stringify_excellon_drill(commands: Iterable[ExcellonDrillCommand]) -> str:
    """Render a drill job, one statement per line."""
    return "\n".join(stringify_excellon_command(command) for command in commands)
