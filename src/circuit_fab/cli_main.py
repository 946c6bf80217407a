from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ._version import __version__
from .config import load_options
from .errors import CircuitFabError
from .export import convert_circuit_json, load_circuit_json, write_zip

logger = logging.getLogger(__name__)


def default_output_path(input_path: Path) -> Path:
    """``board.circuit.json`` -> ``board.gerbers.zip`` (same directory)."""
    name = input_path.name
    for suffix in (".circuit.json", ".json"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return input_path.with_name(f"{name}.gerbers.zip")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="circuit-fab",
        description="Convert circuit JSON into a zip of Gerber and Excellon fabrication files",
    )
    parser.add_argument("input", type=Path, help="Circuit JSON file (list of elements)")
    parser.add_argument("-o", "--output", type=Path, help="Output zip (default: <input>.gerbers.zip)")
    parser.add_argument("--config", type=Path, help="Conversion options file (.yaml, .yml or .json)")
    parser.add_argument("--flip-y", action="store_true", default=False, help="Negate every Y coordinate")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.WARNING
    if args.verbose >= 1:
        log_level = logging.INFO
    if args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    output = args.output or default_output_path(args.input)
    try:
        options = load_options(args.config) if args.config else None
        soup = load_circuit_json(args.input)
        files = convert_circuit_json(soup, options, flip_y_axis=True if args.flip_y else None)
        write_zip(files, output)
    except (CircuitFabError, OSError) as e:
        sys.stderr.write(f"Error: {e}\n")
        if args.verbose >= 2:
            logger.exception("Conversion failed")
        return 1

    sys.stdout.write(f"Created {output}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
