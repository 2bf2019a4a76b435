"""Camera framing for a filter state.

Precedence, first match wins:

1. a selected, known DC: fly to its centroid at drill-down zoom and pitch;
2. a selected division with a region polygon: fit the polygon's bounds;
3. optionally, the visible stores' bounds when nothing is selected;
4. the fixed national view.

Only one command is produced per filter change, so two fits can never race
on the same transition.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Optional

from ...models.domain import ALL_DCS, ALL_DIVISIONS, GeoDataset
from ..geospatial import LngLatBounds, geometry_bounds, points_bounds
from .derive import DerivedViewData
from .filters import FilterState

US_CENTER = (-96.9, 38.5)
US_ZOOM = 3.3
US_MAX_BOUNDS: LngLatBounds = ((-167.65, 5.5), (-52.2, 74.1))

DC_ZOOM = 7.8
DC_PITCH = 25.0
DC_BEARING = 10.0

DIVISION_MAX_ZOOM = 6.8
DIVISION_PADDING = 70
DIVISION_PITCH = 26.0
DIVISION_BEARING = 8.0

STORES_MAX_ZOOM = 7.5
STORES_PADDING = 60


@dataclass(frozen=True)
class CameraCommand:
    kind: Literal["fly_to", "fit_bounds"]
    reason: Literal["dc", "division", "visible_stores", "national"]
    center: Optional[tuple[float, float]] = None
    zoom: Optional[float] = None
    bounds: Optional[LngLatBounds] = None
    padding: int = 0
    max_zoom: Optional[float] = None
    pitch: float = 0.0
    bearing: float = 0.0
    duration_ms: int = 600

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def national_view() -> CameraCommand:
    return CameraCommand(kind="fly_to", reason="national", center=US_CENTER, zoom=US_ZOOM, duration_ms=450)


class CameraDirector:
    def __init__(self, dataset: GeoDataset, *, fit_visible_stores: bool = False) -> None:
        self.dataset = dataset
        self.fit_visible_stores = fit_visible_stores

    def target(self, state: FilterState, derived: Optional[DerivedViewData] = None) -> CameraCommand:
        if state.dc != ALL_DCS:
            dc = self.dataset.dcs.get(state.dc)
            if dc is not None:
                return CameraCommand(
                    kind="fly_to",
                    reason="dc",
                    center=(dc.longitude, dc.latitude),
                    zoom=DC_ZOOM,
                    pitch=DC_PITCH,
                    bearing=DC_BEARING,
                    duration_ms=700,
                )

        if state.division != ALL_DIVISIONS:
            region = self.dataset.regions.get(state.division)
            if region is not None:
                return CameraCommand(
                    kind="fit_bounds",
                    reason="division",
                    bounds=geometry_bounds(region.geometry),
                    padding=DIVISION_PADDING,
                    max_zoom=DIVISION_MAX_ZOOM,
                    pitch=DIVISION_PITCH,
                    bearing=DIVISION_BEARING,
                    duration_ms=720,
                )

        if self.fit_visible_stores and derived is not None:
            bounds = points_bounds(derived.store_coordinates())
            if bounds is not None:
                return CameraCommand(
                    kind="fit_bounds",
                    reason="visible_stores",
                    bounds=bounds,
                    padding=STORES_PADDING,
                    max_zoom=STORES_MAX_ZOOM,
                )

        return national_view()
