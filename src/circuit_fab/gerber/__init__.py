"""Gerber RS-274X command model, compiler and stringifier."""

from __future__ import annotations

from .apertures import ApertureRegistry
from .builder import GerberBuilder, gerber_builder
from .commands import GERBER_COMMANDS, GerberCommand
from .convert import LayerToGerberCommandsMap, convert_soup_to_gerber_commands
from .layers import GerberLayerName, gerber_layer_name
from .stringify import stringify_gerber_command, stringify_gerber_command_layers, stringify_gerber_commands
from .templates import (
    ApertureTemplate,
    CircleTemplate,
    HorizontalPillTemplate,
    ObroundTemplate,
    PolygonTemplate,
    RectangleTemplate,
    RoundRectTemplate,
    VerticalPillTemplate,
)

__all__ = [
    "GERBER_COMMANDS",
    "ApertureRegistry",
    "ApertureTemplate",
    "CircleTemplate",
    "GerberBuilder",
    "GerberCommand",
    "GerberLayerName",
    "HorizontalPillTemplate",
    "LayerToGerberCommandsMap",
    "ObroundTemplate",
    "PolygonTemplate",
    "RectangleTemplate",
    "RoundRectTemplate",
    "VerticalPillTemplate",
    "convert_soup_to_gerber_commands",
    "gerber_builder",
    "gerber_layer_name",
    "stringify_gerber_command",
    "stringify_gerber_command_layers",
    "stringify_gerber_commands",
]
