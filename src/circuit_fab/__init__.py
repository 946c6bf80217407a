"""circuit-fab: circuit JSON to Gerber RS-274X and Excellon drill files."""

from __future__ import annotations

from ._version import __version__
from .config import DEFAULT_OPTIONS, ConversionOptions, load_options
from .errors import (
    ApertureNotFoundError,
    CircuitFabError,
    ConfigError,
    MalformedElementError,
    SchemaValidationError,
    UnsupportedShapeWarning,
)
from .excellon import convert_soup_to_excellon_drill_commands, excellon_drill, stringify_excellon_drill
from .export import convert_circuit_json, gerber_filename, load_circuit_json, write_zip
from .gerber import (
    GerberLayerName,
    convert_soup_to_gerber_commands,
    gerber_builder,
    stringify_gerber_command_layers,
    stringify_gerber_commands,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "ApertureNotFoundError",
    "CircuitFabError",
    "ConfigError",
    "ConversionOptions",
    "GerberLayerName",
    "MalformedElementError",
    "SchemaValidationError",
    "UnsupportedShapeWarning",
    "__version__",
    "convert_circuit_json",
    "convert_soup_to_excellon_drill_commands",
    "convert_soup_to_gerber_commands",
    "excellon_drill",
    "gerber_builder",
    "gerber_filename",
    "load_circuit_json",
    "load_options",
    "stringify_excellon_drill",
    "stringify_gerber_command_layers",
    "stringify_gerber_commands",
]
