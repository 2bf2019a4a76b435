"""Map view session: wires filters, derivation, surface, LOD, camera and interactions."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Optional

from ...config import Settings, settings as default_settings
from ...models.domain import PERIODS, GeoDataset
from ..export.geojson import feature_collection, region_feature
from ..health import legend_entries
from ..surface.adapter import RenderSurfaceAdapter
from ..surface.engine import CommandBufferSurface
from ..surface.layers import DC_INTERACTIVE_LAYER, STORE_INTERACTIVE_LAYER
from .camera import US_CENTER, US_MAX_BOUNDS, US_ZOOM, CameraCommand, CameraDirector
from .derive import DerivedViewData, derive_view
from .filters import FilterController, FilterState
from .interaction import NavigationIntent, Tooltip, dc_tooltip, store_tooltip
from .lod import LodController

logger = logging.getLogger(__name__)

SURFACE_EVENTS = {"style.load", "load", "error", "zoomend"}


class MapViewSession:
    """One open map view.

    Every filter change flows one way: derive, push data, LOD, region
    highlight, camera. Surface events and gestures come back in through
    :meth:`handle_event`, :meth:`hover` and :meth:`click`.
    """

    def __init__(
        self,
        dataset: GeoDataset,
        *,
        config: Optional[Settings] = None,
        surface: Optional[CommandBufferSurface] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.config = config or default_settings
        self.session_id = session_id or uuid.uuid4().hex
        self.dataset = dataset
        self.period = self.config.default_period
        self.warnings: list[str] = []
        self.last_camera: Optional[CameraCommand] = None
        self._lock = threading.RLock()

        self.filters = FilterController(dataset, country=self.config.country)
        self.camera = CameraDirector(dataset, fit_visible_stores=self.config.fit_visible_stores)
        self.lod = LodController(self.config.store_zoom_threshold, zoom=US_ZOOM)
        self.derived: DerivedViewData = derive_view(dataset, self.filters.state, country=self.config.country)

        self.surface = surface or CommandBufferSurface()
        regions = feature_collection(region_feature(region) for region in dataset.regions.values())
        self.adapter = RenderSurfaceAdapter(regions=regions)
        self.adapter.attach(self.surface)
        self.adapter.subscribe("zoomend", self._on_zoom)

        if not self.config.mapbox_token:
            message = "Map access token is not configured; the map will stay blank."
            logger.warning(message)
            self.warnings.append(message)

        # first paint once the surface is ready
        self.adapter.push_data(self.derived)
        self.adapter.set_lod(self.lod.mode)

    @property
    def state(self) -> FilterState:
        return self.filters.state

    # -- filter setters ---------------------------------------------------

    def set_division(self, division: str) -> FilterState:
        with self._lock:
            self.filters.set_division(division)
            return self._sync()

    def set_dc(self, dc_id: str) -> FilterState:
        with self._lock:
            self.filters.set_dc(dc_id)
            return self._sync()

    def set_only_assigned(self, only_assigned: bool) -> FilterState:
        with self._lock:
            self.filters.set_only_assigned(only_assigned)
            return self._sync()

    def reset(self) -> FilterState:
        with self._lock:
            self.filters.reset()
            return self._sync()

    def set_period(self, period: str) -> str:
        with self._lock:
            period = period.upper()
            if period in PERIODS:
                self.period = period
            else:
                logger.info("Ignoring unknown reporting period '%s'", period)
            return self.period

    def apply_filters(
        self,
        *,
        division: Optional[str] = None,
        dc: Optional[str] = None,
        only_assigned: Optional[bool] = None,
        period: Optional[str] = None,
    ) -> FilterState:
        """Apply several selector changes as one transition.

        The division goes first so a DC in the same request is validated
        against the new division's options.
        """
        with self._lock:
            before = self.filters.state
            if division is not None:
                self.filters.set_division(division)
            if dc is not None:
                self.filters.set_dc(dc)
            if only_assigned is not None:
                self.filters.set_only_assigned(only_assigned)
            if period is not None:
                self.set_period(period)
            self.filters.changed = self.filters.state != before
            return self._sync()

    def _sync(self) -> FilterState:
        state = self.filters.state
        if not self.filters.changed:
            return state
        self.filters.changed = False

        self.derived = derive_view(self.dataset, state, country=self.config.country)
        self.adapter.push_data(self.derived)
        mode, lod_changed = self.lod.on_filter(state.dc)
        if lod_changed:
            self.adapter.set_lod(mode)
        self.adapter.highlight_region(state.division)
        self.last_camera = self.camera.target(state, self.derived)
        self.adapter.move_camera(self.last_camera)
        return state

    # -- surface events ---------------------------------------------------

    def _on_zoom(self, payload: Optional[dict]) -> None:
        zoom = (payload or {}).get("zoom")
        if zoom is None:
            return
        mode, changed = self.lod.on_zoom(float(zoom))
        if changed:
            self.adapter.set_lod(mode)

    def handle_event(self, event: str, payload: Optional[dict] = None) -> None:
        with self._lock:
            if event == "resize":
                payload = payload or {}
                self.adapter.resize(int(payload.get("width", 0)), int(payload.get("height", 0)))
                return
            if event not in SURFACE_EVENTS:
                logger.info("Ignoring unknown surface event '%s'", event)
                return
            self.surface.emit(event, payload)

    # -- gestures ---------------------------------------------------------

    def _find_feature(self, collection: dict, key: str, value: str) -> Optional[dict]:
        for feature in collection["features"]:
            if str(feature["properties"].get(key)) == value:
                return feature
        return None

    def hover(self, layer_id: str, feature_id: str) -> Optional[Tooltip]:
        with self._lock:
            if layer_id == STORE_INTERACTIVE_LAYER:
                feature = self._find_feature(self.derived.visible_stores, "store_id", feature_id)
                return store_tooltip(feature["properties"]) if feature else None
            if layer_id == DC_INTERACTIVE_LAYER:
                feature = self._find_feature(self.derived.visible_dcs, "dc_id", feature_id)
                return dc_tooltip(feature["properties"]) if feature else None
            return None

    def click(self, layer_id: str, feature_id: str) -> Optional[NavigationIntent]:
        """Store clicks navigate; DC clicks drill down like picking the DC in the selector."""
        with self._lock:
            if layer_id == STORE_INTERACTIVE_LAYER:
                if self._find_feature(self.derived.visible_stores, "store_id", feature_id) is None:
                    return None
                return NavigationIntent(store_id=feature_id, period=self.period)
            if layer_id == DC_INTERACTIVE_LAYER:
                self.set_dc(feature_id)
            return None

    # -- output -----------------------------------------------------------

    def drain_commands(self) -> list[dict]:
        with self._lock:
            if self.surface.removed:
                return []
            return self.surface.drain_commands()

    def map_options(self) -> dict[str, Any]:
        return {
            "style": self.config.map_style,
            "accessToken": self.config.mapbox_token or "",
            "center": list(US_CENTER),
            "zoom": US_ZOOM,
            "maxBounds": [list(corner) for corner in US_MAX_BOUNDS],
            "storeZoomThreshold": self.config.store_zoom_threshold,
        }

    def snapshot(self, *, include_features: bool = False) -> dict[str, Any]:
        with self._lock:
            state = self.filters.state
            snapshot: dict[str, Any] = {
                "session_id": self.session_id,
                "filters": {"division": state.division, "dc": state.dc, "only_assigned": state.only_assigned},
                "period": self.period,
                "dc_options": list(self.derived.dc_options),
                "visible_store_count": self.derived.store_count,
                "visible_dc_count": self.derived.dc_count,
                "lod": self.lod.mode.value,
                "zoom": self.lod.zoom,
                "surface_state": self.adapter.state.value,
                "pending_operations": self.adapter.pending_kinds(),
                "camera": self.last_camera.to_dict() if self.last_camera else None,
                "last_error": self.adapter.last_error,
                "warnings": list(self.warnings),
                "legend": legend_entries(),
                "map_options": self.map_options(),
            }
            if include_features:
                snapshot["visible_stores"] = self.derived.visible_stores
                snapshot["visible_dcs"] = self.derived.visible_dcs
            return snapshot

    def dispose(self) -> None:
        with self._lock:
            self.adapter.dispose()


class SessionRegistry:
    """In-process map sessions keyed by id. Oldest sessions are evicted past the limit."""

    def __init__(self, max_sessions: int = 500) -> None:
        self.max_sessions = max_sessions
        self._sessions: dict[str, MapViewSession] = {}
        self._lock = threading.Lock()

    def create(self, dataset: GeoDataset, config: Optional[Settings] = None) -> MapViewSession:
        session = MapViewSession(dataset, config=config)
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                oldest_id = next(iter(self._sessions))
                logger.info("Evicting map session %s", oldest_id)
                self._sessions.pop(oldest_id).dispose()
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[MapViewSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.dispose()
        return True

    def clear(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.dispose()

    def __len__(self) -> int:
        return len(self._sessions)
