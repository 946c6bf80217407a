"""Whole-board export: every Gerber layer and both drill jobs as named text files."""

from __future__ import annotations

import json
import logging
import zipfile
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .config import ConversionOptions, resolve_options
from .errors import CircuitFabError
from .excellon import convert_soup_to_excellon_drill_commands, stringify_excellon_drill
from .gerber import GerberLayerName, convert_soup_to_gerber_commands, stringify_gerber_command_layers
from .soup import Element

logger = logging.getLogger(__name__)

GERBER_EXTENSIONS: dict[str, str] = {
    GerberLayerName.F_Cu.value: "GTL",
    GerberLayerName.B_Cu.value: "GBL",
    GerberLayerName.F_Mask.value: "GTS",
    GerberLayerName.B_Mask.value: "GBS",
    GerberLayerName.F_SilkScreen.value: "GTO",
    GerberLayerName.B_SilkScreen.value: "GBO",
    GerberLayerName.F_Paste.value: "GTP",
    GerberLayerName.B_Paste.value: "GBP",
    GerberLayerName.Edge_Cuts.value: "GKO",
}

PLATED_DRILL_FILENAME = "plated.drl"
UNPLATED_DRILL_FILENAME = "unplated.drl"


def gerber_filename(layer: str | GerberLayerName) -> str:
    """Return the conventional file name for a layer, e.g. ``F_Cu`` -> ``F_Cu.GTL``."""
    name = str(layer)
    return f"{name}.{GERBER_EXTENSIONS.get(name, 'gbr')}"


def convert_circuit_json(
    soup: Iterable[Element],
    options: ConversionOptions | None = None,
    *,
    flip_y_axis: bool | None = None,
) -> dict[str, str]:
    """Convert circuit soup to fabrication files.

    Returns:
        File name -> file text for the nine Gerber layers, ``plated.drl`` and
        ``unplated.drl``.
    """
    resolved = resolve_options(options, flip_y_axis=flip_y_axis)
    elements = list(soup)
    files: dict[str, str] = {}
    layers = stringify_gerber_command_layers(convert_soup_to_gerber_commands(elements, resolved))
    for layer, text in layers.items():
        files[gerber_filename(layer)] = text
    for filename, is_plated in ((PLATED_DRILL_FILENAME, True), (UNPLATED_DRILL_FILENAME, False)):
        commands = convert_soup_to_excellon_drill_commands(elements, is_plated=is_plated, options=resolved)
        files[filename] = stringify_excellon_drill(commands)
    logger.info("Converted %d elements into %d files", len(elements), len(files))
    return files


def load_circuit_json(path: Path | str) -> list[Element]:
    """Read a circuit JSON file (a top-level list of element objects).

    Raises:
        FileNotFoundError: If the file does not exist.
        CircuitFabError: If the file is not UTF-8 JSON holding a list.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Circuit JSON not found: {path}")
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CircuitFabError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(data, list):
        raise CircuitFabError(f"{path} must contain a list of circuit elements, got {type(data).__name__}")
    return data


def write_zip(files: Mapping[str, str], path: Path | str) -> Path:
    """Write ``files`` into a deflated zip archive, in sorted name order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name in sorted(files):
            archive.writestr(name, files[name])
    logger.debug("Wrote %d files to %s", len(files), path)
    return path
