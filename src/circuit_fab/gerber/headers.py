from __future__ import annotations

from typing import TYPE_CHECKING

from .builder import GerberBuilder
from .layers import GerberLayerName, file_function, file_polarity

if TYPE_CHECKING:
    from ..config import ConversionOptions


def command_headers(layer: GerberLayerName, options: ConversionOptions, creation_date: str) -> GerberBuilder:
    """Start a layer with its file attributes, format, units, polarity and modes.

    ``creation_date`` is resolved once per conversion so every layer carries
    the same timestamp.
    """
    software = f"{options.vendor},{options.software_name},{options.software_version}"
    return (
        GerberBuilder()
        .add("add_attribute_on_file", attribute_name="GenerationSoftware", attribute_value=software)
        .add("add_attribute_on_file", attribute_name="CreationDate", attribute_value=creation_date)
        .add("add_attribute_on_file", attribute_name="SameCoordinates", attribute_value="Original")
        .add("add_attribute_on_file", attribute_name="FileFunction", attribute_value=file_function(layer))
        .add("add_attribute_on_file", attribute_name="FilePolarity", attribute_value=file_polarity(layer))
        .add("format_specification")
        .add("comment", comment="Gerber Fmt 4.6, Leading zero omitted, Abs format (unit mm)")
        .add("comment", comment=f"Created by {options.software_name} date {creation_date}")
        .add("set_unit", unit="MM")
        .add("set_layer_polarity", polarity="D")
        .add("set_movement_mode_to_linear")
        .add("create_arc")
    )
