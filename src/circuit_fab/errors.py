"""Exception and warning taxonomy for circuit-fab.

Fatal conditions raise a subclass of :class:`CircuitFabError`:

- :class:`SchemaValidationError` - a command's parameters fail type/range checks
- :class:`ApertureNotFoundError` - the geometry pass referenced an aperture the
  aperture pass never defined
- :class:`MalformedElementError` - a circuit element lacks a required field
- :class:`ConfigError` - a conversion options file is invalid

Recoverable conditions (an element shape with no renderer) are reported with
:class:`UnsupportedShapeWarning` and the element is skipped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class CircuitFabError(Exception):
    """Base class for all circuit-fab errors."""


class SchemaValidationError(CircuitFabError, ValueError):
    """Raised when a command's parameters fail validation.

    Attributes:
        command_name: Builder name of the rejected command.
        errors: Individual validation error messages.
    """

    def __init__(self, command_name: str, errors: list[str]) -> None:
        self.command_name = command_name
        self.errors = errors
        super().__init__(f"Invalid parameters for command '{command_name}': {'; '.join(errors)}")


class ApertureNotFoundError(CircuitFabError, LookupError):
    """Raised when an aperture/tool lookup has no matching definition."""

    def __init__(self, template: Any, layer: str | None = None) -> None:
        self.template = template
        self.layer = layer
        where = f" on layer {layer}" if layer else ""
        super().__init__(f"Aperture not found{where} for {template!r}")


class MalformedElementError(CircuitFabError, ValueError):
    """Raised when a circuit element is missing a required geometry field."""

    def __init__(self, element: Any, field: str, expected: str = "a value") -> None:
        self.element_type = element.get("type", "<unknown>") if isinstance(element, Mapping) else "<unknown>"
        self.field = field
        super().__init__(f"{self.element_type}: field '{field}' must be {expected}")


class ConfigError(CircuitFabError, ValueError):
    """Raised when conversion options cannot be loaded."""


class UnsupportedShapeWarning(UserWarning):
    """Issued when an element's shape has no renderer and is skipped."""
