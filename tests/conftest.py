# SPDX-License-Identifier: MIT
"""Pytest configuration and shared fixtures.

This module provides:
- Deterministic test environment setup
- Conversion options with a fixed creation date
- Small circuit soups reused across the Gerber, Excellon and export tests
"""
from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any

import pytest

from circuit_fab.config import ConversionOptions

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CREATION_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)
CREATION_DATE_ISO = "2024-01-01T00:00:00+00:00"


# ---------------------------------------------------------------------------
# Environment Setup
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest environment for determinism."""
    deterministic_env = {
        "LC_ALL": "C",
        "LANG": "C",
        "TZ": "UTC",
        "PYTHONHASHSEED": "0",
    }
    for key, value in deterministic_env.items():
        os.environ.setdefault(key, value)


# ---------------------------------------------------------------------------
# Fixtures: options
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_options() -> ConversionOptions:
    """Default options with a pinned creation date."""
    return ConversionOptions(creation_date=CREATION_DATE)


@pytest.fixture
def creation_date_iso() -> str:
    return CREATION_DATE_ISO


# ---------------------------------------------------------------------------
# Fixtures: circuit soups
# ---------------------------------------------------------------------------


def wire(x: float, y: float, width: float = 0.1, layer: str = "top") -> dict[str, Any]:
    return {"route_type": "wire", "x": x, "y": y, "width": width, "layer": layer}


@pytest.fixture
def board_with_trace() -> list[dict[str, Any]]:
    """A 40 x 20 mm board with one 0.1 mm top trace from (0, 0) to (10, 0)."""
    return [
        {"type": "pcb_board", "center": {"x": 0, "y": 0}, "width": 40, "height": 20},
        {"type": "pcb_trace", "route": [wire(0, 0), wire(10, 0)]},
    ]


@pytest.fixture
def mixed_soup() -> list[dict[str, Any]]:
    """Pads, holes, a via, silkscreen and a trace on a board."""
    return [
        {"type": "pcb_board", "center": {"x": 0, "y": 0}, "width": 30, "height": 30},
        {"type": "pcb_trace", "route": [wire(-5, -5), wire(5, 5, layer="top")]},
        {
            "type": "pcb_smtpad",
            "shape": "rect",
            "x": 1,
            "y": 2,
            "width": 1,
            "height": 0.5,
            "layer": "top",
        },
        {
            "type": "pcb_smtpad",
            "shape": "circle",
            "x": -3,
            "y": 4.5,
            "radius": 0.4,
            "layer": "bottom",
        },
        {
            "type": "pcb_plated_hole",
            "shape": "circle",
            "x": 6,
            "y": -2,
            "hole_diameter": 0.8,
            "outer_diameter": 1.6,
            "layers": ["top", "bottom"],
        },
        {
            "type": "pcb_plated_hole",
            "shape": "pill",
            "x": -6,
            "y": -7,
            "hole_width": 2,
            "hole_height": 1,
            "outer_width": 3,
            "outer_height": 2,
            "layers": ["top", "bottom"],
        },
        {"type": "pcb_hole", "hole_shape": "circle", "x": 10, "y": 10, "hole_diameter": 3},
        {
            "type": "pcb_via",
            "x": 2,
            "y": -8,
            "hole_diameter": 0.3,
            "outer_diameter": 0.6,
            "layers": ["top", "bottom"],
        },
        {
            "type": "pcb_silkscreen_path",
            "layer": "top",
            "stroke_width": 0.15,
            "route": [{"x": -10, "y": 10}, {"x": -8, "y": 12}],
        },
        {
            "type": "pcb_silkscreen_text",
            "layer": "bottom",
            "text": "U1",
            "font_size": 1,
            "anchor_position": {"x": 0, "y": 12},
            "anchor_alignment": "center",
        },
    ]
