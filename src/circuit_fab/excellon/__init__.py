"""Excellon NC drill command model, compiler and stringifier."""

from __future__ import annotations

from .builder import ExcellonDrillBuilder, excellon_drill
from .commands import EXCELLON_COMMANDS, ExcellonDrillCommand
from .convert import convert_soup_to_excellon_drill_commands
from .stringify import stringify_excellon_command, stringify_excellon_drill
from .tools import ToolRegistry

__all__ = [
    "EXCELLON_COMMANDS",
    "ExcellonDrillBuilder",
    "ExcellonDrillCommand",
    "ToolRegistry",
    "convert_soup_to_excellon_drill_commands",
    "excellon_drill",
    "stringify_excellon_command",
    "stringify_excellon_drill",
]
