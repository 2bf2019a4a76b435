"""Level-of-detail switching between DC roll-ups and individual stores."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ...models.domain import ALL_DCS
from ..surface.layers import DC_LAYERS, STORE_LAYERS


class LodMode(str, Enum):
    DC_ROLLUP = "dc_rollup"
    STORES = "stores"


def resolve_lod(zoom: float, dc: str, threshold: float) -> LodMode:
    # A selected DC pins the store layer regardless of zoom.
    if dc != ALL_DCS or zoom >= threshold:
        return LodMode.STORES
    return LodMode.DC_ROLLUP


def layer_visibility(mode: LodMode) -> dict[str, str]:
    stores = "visible" if mode is LodMode.STORES else "none"
    dcs = "none" if mode is LodMode.STORES else "visible"
    visibility = {layer_id: stores for layer_id in STORE_LAYERS}
    visibility.update({layer_id: dcs for layer_id in DC_LAYERS})
    return visibility


class LodController:
    def __init__(self, threshold: float, zoom: float, dc: str = ALL_DCS) -> None:
        self.threshold = threshold
        self.zoom = zoom
        self.dc = dc
        self.mode = resolve_lod(zoom, dc, threshold)

    def _update(self, zoom: Optional[float] = None, dc: Optional[str] = None) -> tuple[LodMode, bool]:
        if zoom is not None:
            self.zoom = zoom
        if dc is not None:
            self.dc = dc
        mode = resolve_lod(self.zoom, self.dc, self.threshold)
        changed = mode is not self.mode
        self.mode = mode
        return mode, changed

    def on_zoom(self, zoom: float) -> tuple[LodMode, bool]:
        return self._update(zoom=zoom)

    def on_filter(self, dc: str) -> tuple[LodMode, bool]:
        return self._update(dc=dc)
