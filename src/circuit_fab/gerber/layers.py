"""Gerber layer names and their file attributes."""

from __future__ import annotations

from enum import Enum
from typing import Literal

LayerSide = Literal["top", "bottom"]
LayerType = Literal["copper", "soldermask", "paste", "silkscreen"]


class GerberLayerName(str, Enum):
    """The nine physical layers produced for a two-layer board."""

    F_Cu = "F_Cu"
    B_Cu = "B_Cu"
    F_Mask = "F_Mask"
    B_Mask = "B_Mask"
    F_Paste = "F_Paste"
    B_Paste = "B_Paste"
    F_SilkScreen = "F_SilkScreen"
    B_SilkScreen = "B_SilkScreen"
    Edge_Cuts = "Edge_Cuts"

    def __str__(self) -> str:
        return self.value

    @property
    def side(self) -> LayerSide | None:
        if self.value.startswith("F_"):
            return "top"
        if self.value.startswith("B_"):
            return "bottom"
        return None


_LAYER_TYPE_SUFFIX: dict[str, str] = {
    "copper": "Cu",
    "soldermask": "Mask",
    "paste": "Paste",
    "silkscreen": "SilkScreen",
}

# Copper, mask, paste and silkscreen layers, in aperture-definition order.
PLOTTED_LAYERS: tuple[GerberLayerName, ...] = (
    GerberLayerName.F_Cu,
    GerberLayerName.B_Cu,
    GerberLayerName.F_Mask,
    GerberLayerName.B_Mask,
    GerberLayerName.F_Paste,
    GerberLayerName.B_Paste,
    GerberLayerName.F_SilkScreen,
    GerberLayerName.B_SilkScreen,
)


def gerber_layer_name(side: LayerSide, layer_type: LayerType) -> GerberLayerName:
    """Map a board side and layer type to a Gerber layer, e.g. ``("top", "copper") -> F_Cu``."""
    if side not in ("top", "bottom"):
        raise ValueError(f"Unknown board side {side!r}")
    prefix = "F" if side == "top" else "B"
    return GerberLayerName(f"{prefix}_{_LAYER_TYPE_SUFFIX[layer_type]}")


_FILE_FUNCTIONS: dict[GerberLayerName, str] = {
    GerberLayerName.F_Cu: "Copper,L1,Top",
    GerberLayerName.B_Cu: "Copper,L2,Bot",
    GerberLayerName.F_Mask: "Soldermask,Top",
    GerberLayerName.B_Mask: "Soldermask,Bot",
    GerberLayerName.F_Paste: "Paste,Top",
    GerberLayerName.B_Paste: "Paste,Bot",
    GerberLayerName.F_SilkScreen: "Legend,Top",
    GerberLayerName.B_SilkScreen: "Legend,Bot",
    GerberLayerName.Edge_Cuts: "Profile,NP",
}


def file_function(layer: GerberLayerName) -> str:
    return _FILE_FUNCTIONS[layer]


def file_polarity(layer: GerberLayerName) -> str:
    """Solder mask is described by its openings, so it is the only negative layer."""
    if layer in (GerberLayerName.F_Mask, GerberLayerName.B_Mask):
        return "Negative"
    return "Positive"
