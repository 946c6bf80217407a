"""Conversion options shared by the Gerber and Excellon compilers.

Options are a frozen pydantic model so a single instance can be passed to both
compilers (and across threads) without defensive copies. They can be loaded
from YAML or JSON files with :func:`load_options`.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._version import __version__
from .errors import ConfigError

SlotEncoding = Literal["g85", "routed"]


class ConversionOptions(BaseModel):
    """Options controlling generated fabrication output.

    Attributes:
        flip_y_axis: Negate every Y coordinate (fab tools that expect Y-down).
        software_name: Application name written into file attributes.
        software_version: Application version written into file attributes.
        vendor: Vendor name for the ``TF.GenerationSoftware`` attribute.
        creation_date: Timestamp written into headers; ``None`` means now (UTC).
        slot_encoding: ``"g85"`` emits one ``X..Y..G85X..Y..`` route per slot,
            ``"routed"`` emits the legacy ``G00/M15/G01/M16/G05`` sequence.
        plated_includes_npth: Whether the plated drill job also drills
            unplated ``pcb_hole`` elements.
        edge_cut_aperture_diameter: Stroke width of the board outline in mm.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    flip_y_axis: bool = False
    software_name: str = Field("circuit-fab", min_length=1, pattern=r"^[^,*%\n]+$")
    software_version: str = Field(__version__, min_length=1, pattern=r"^[^,*%\n]+$")
    vendor: str = Field("circuit-fab", min_length=1, pattern=r"^[^,*%\n]+$")
    creation_date: datetime | None = None
    slot_encoding: SlotEncoding = "g85"
    plated_includes_npth: bool = True
    edge_cut_aperture_diameter: float = Field(0.05, gt=0, allow_inf_nan=False)

    def resolved_creation_date(self) -> str:
        """Return the creation timestamp as an ISO-8601 string."""
        stamp = self.creation_date or datetime.now(timezone.utc)
        return stamp.isoformat()


DEFAULT_OPTIONS = ConversionOptions()


def resolve_options(options: ConversionOptions | None, **overrides: Any) -> ConversionOptions:
    """Apply keyword overrides (ignoring ``None``) on top of ``options``."""
    base = options or DEFAULT_OPTIONS
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return base
    return base.model_copy(update=updates)


def load_options_from_dict(data: dict[str, Any]) -> ConversionOptions:
    """Validate conversion options from a mapping.

    Raises:
        ConfigError: If the mapping contains unknown keys or invalid values.
    """
    try:
        return ConversionOptions.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid conversion options: {exc}") from exc


def load_options(path: Path | str) -> ConversionOptions:
    """Load conversion options from a YAML (.yaml, .yml) or JSON (.json) file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the extension is unsupported or the content is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if suffix in (".yaml", ".yml"):
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    elif suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    else:
        raise ConfigError(f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Options file must contain a mapping, got {type(data).__name__}")

    return load_options_from_dict(data)
