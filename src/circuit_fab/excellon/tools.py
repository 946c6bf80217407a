from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from ..errors import ApertureNotFoundError
from ..formatting import format_dimension

if TYPE_CHECKING:
    from .builder import ExcellonDrillBuilder

TOOL_NUMBER_FLOOR = 9


class ToolRegistry:
    """Drill tool table of one Excellon job, keyed by cutter diameter.

    Each new diameter gets the next tool number (starting at 10) and its
    ``aper_function_header`` + ``define_tool`` pair is appended to the builder.
    """

    def __init__(self, builder: ExcellonDrillBuilder, *, is_plated: bool) -> None:
        self.builder = builder
        self.is_plated = is_plated
        self._tools: list[tuple[float, int]] = []

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[tuple[float, int]]:
        """Iterate ``(diameter, tool_number)`` in ascending tool number order."""
        return iter(sorted(self._tools, key=lambda entry: entry[1]))

    def lookup(self, diameter: float) -> int | None:
        """Tool number of a diameter that renders identically in ``T<n>C<d>``, if any."""
        key = format_dimension(diameter)
        for existing, number in self._tools:
            if format_dimension(existing) == key:
                return number
        return None

    def find(self, diameter: float) -> int:
        number = self.lookup(diameter)
        if number is None:
            raise ApertureNotFoundError(f"drill tool C{diameter}", layer="plated" if self.is_plated else "unplated")
        return number

    def define(self, diameter: float) -> int:
        number = self.lookup(diameter)
        if number is not None:
            return number
        number = max((n for _, n in self._tools), default=TOOL_NUMBER_FLOOR) + 1
        self.builder.add("aper_function_header", is_plated=self.is_plated)
        self.builder.add("define_tool", tool_number=number, diameter=diameter)
        self._tools.append((diameter, number))
        return number
