from __future__ import annotations

from ..command_base import CommandBuilder
from .commands import GERBER_COMMANDS, GerberCommand


class GerberBuilder(CommandBuilder[GerberCommand]):
    """Fluent Gerber command accumulator.

    >>> commands = GerberBuilder().add("select_aperture", aperture_number=10).add("flash_operation", x=1, y=2).build()
    >>> [c.command_code for c in commands]
    ['D', 'D03']
    """

    commands_by_name = GERBER_COMMANDS


def gerber_builder() -> GerberBuilder:
    return GerberBuilder()
