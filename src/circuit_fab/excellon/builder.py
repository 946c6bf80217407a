from __future__ import annotations

from ..command_base import CommandBuilder
from .commands import EXCELLON_COMMANDS, ExcellonDrillCommand


class ExcellonDrillBuilder(CommandBuilder[ExcellonDrillCommand]):
    """Fluent Excellon command accumulator."""

    commands_by_name = EXCELLON_COMMANDS


def excellon_drill() -> ExcellonDrillBuilder:
    return ExcellonDrillBuilder()
