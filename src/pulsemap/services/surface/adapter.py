"""Owner of the map surface and the only code allowed to mutate it."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from ...models.domain import ALL_DIVISIONS
from ..export.geojson import feature_collection
from .engine import Handler, MapSurface
from .layers import DCS_SOURCE, REGION_LAYERS, REGIONS_SOURCE, SOURCE_IDS, STORES_SOURCE, layer_specs

if TYPE_CHECKING:
    from ..view.camera import CameraCommand
    from ..view.derive import DerivedViewData
    from ..view.lod import LodMode

logger = logging.getLogger(__name__)

READY_EVENTS: tuple[str, ...] = ("style.load", "load")

# Deferred operations run in this order once the surface is ready.
DRAIN_ORDER: tuple[str, ...] = ("data", "region", "lod", "camera")


class SurfaceState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    DISPOSED = "disposed"


class RenderSurfaceAdapter:
    """Lifecycle, readiness gating and idempotent setup for one map surface.

    Mutations requested before the surface reports readiness are queued by
    kind, keeping only the newest request of each kind; the queue is drained
    exactly once on the ready transition.
    """

    def __init__(self, regions: Optional[dict] = None) -> None:
        self.state = SurfaceState.UNINITIALIZED
        self.surface: Optional[MapSurface] = None
        self.last_error: Optional[str] = None
        self.regions = regions or feature_collection([])
        self._pending: dict[str, Callable[[], None]] = {}
        self._latest_data: Optional["DerivedViewData"] = None
        self._listeners: list[tuple[str, Handler]] = []
        self._size: Optional[tuple[int, int]] = None

    @property
    def ready(self) -> bool:
        return self.state is SurfaceState.READY

    def pending_kinds(self) -> list[str]:
        return [kind for kind in DRAIN_ORDER if kind in self._pending]

    # -- lifecycle --------------------------------------------------------

    def attach(self, surface: MapSurface) -> None:
        if self.state is not SurfaceState.UNINITIALIZED:
            raise RuntimeError(f"Cannot attach a surface to an adapter in state '{self.state.value}'.")
        self.surface = surface
        self.state = SurfaceState.INITIALIZING
        # Engines fire either event depending on build; whichever comes first wins.
        for event in READY_EVENTS:
            surface.once(event, self._on_ready)
            self._listeners.append((event, self._on_ready))
        self.subscribe("error", self._on_error)

    def subscribe(self, event: str, handler: Handler) -> None:
        if self.surface is None or self.state is SurfaceState.DISPOSED:
            return
        self.surface.on(event, handler)
        self._listeners.append((event, handler))

    def dispose(self) -> None:
        if self.state is SurfaceState.DISPOSED:
            return
        self._pending.clear()
        if self.surface is not None:
            for event, handler in self._listeners:
                self.surface.off(event, handler)
            self.surface.remove()
        self._listeners.clear()
        self.state = SurfaceState.DISPOSED
        logger.debug("Map surface disposed")

    def _on_ready(self, payload: Optional[dict] = None) -> None:
        if self.state is not SurfaceState.INITIALIZING:
            logger.debug("Ignoring repeated readiness event in state '%s'", self.state.value)
            return
        self.state = SurfaceState.READY
        logger.debug("Map surface ready, draining %d deferred operations", len(self._pending))
        self.ensure_sources_and_layers()
        operations = [self._pending[kind] for kind in DRAIN_ORDER if kind in self._pending]
        self._pending.clear()
        for operation in operations:
            self._apply(operation)

    def _on_error(self, payload: Optional[dict] = None) -> None:
        error = (payload or {}).get("error") or "Unknown map error"
        message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
        logger.error("Map engine error: %s", message)
        self.last_error = message

    def _apply(self, operation: Callable[[], None]) -> None:
        try:
            operation()
        except Exception as exc:
            logger.error("Map surface operation failed: %s", exc)
            self.last_error = str(exc)

    def _run_or_defer(self, kind: str, operation: Callable[[], None]) -> bool:
        if self.state is SurfaceState.DISPOSED:
            return False
        if self.state is SurfaceState.READY:
            self._apply(operation)
            return True
        self._pending[kind] = operation
        logger.debug("Deferred '%s' until the map surface is ready", kind)
        return False

    # -- operations -------------------------------------------------------

    def ensure_sources_and_layers(self) -> None:
        """Create any missing source or layer. Safe to call repeatedly."""
        if not self.ready:
            return
        surface = self.surface
        # store and DC sources start empty and are filled by setData
        created: list[str] = []
        try:
            for source_id in SOURCE_IDS:
                if surface.get_source(source_id) is None:
                    data = self.regions if source_id == REGIONS_SOURCE else feature_collection([])
                    surface.add_source(source_id, {"type": "geojson", "data": data})
                    created.append(source_id)
            for spec in layer_specs():
                if surface.get_layer(spec["id"]) is None:
                    surface.add_layer(spec)
        except Exception as exc:
            logger.error("Layer wiring error: %s", exc)
            self.last_error = str(exc)
            return
        refill = {STORES_SOURCE, DCS_SOURCE} & set(created)
        if refill and self._latest_data is not None and "data" not in self._pending:
            self._apply(lambda: self._set_data(self._latest_data))

    def _set_data(self, derived: "DerivedViewData") -> None:
        self.surface.set_source_data(STORES_SOURCE, derived.visible_stores)
        self.surface.set_source_data(DCS_SOURCE, derived.visible_dcs)

    def push_data(self, derived: "DerivedViewData") -> bool:
        self._latest_data = derived
        return self._run_or_defer("data", lambda: self._set_data(derived))

    def set_layer_visibility(self, visibility: dict[str, str]) -> None:
        for layer_id, value in visibility.items():
            if self.surface.get_layer(layer_id) is None:
                continue
            if self.surface.get_layout_property(layer_id, "visibility") == value:
                continue
            self.surface.set_layout_property(layer_id, "visibility", value)

    def set_lod(self, mode: "LodMode") -> bool:
        from ..view.lod import layer_visibility

        visibility = layer_visibility(mode)
        return self._run_or_defer("lod", lambda: self.set_layer_visibility(visibility))

    def highlight_region(self, division: str) -> bool:
        def operation() -> None:
            visible = division != ALL_DIVISIONS
            self.set_layer_visibility({layer_id: "visible" if visible else "none" for layer_id in REGION_LAYERS})
            if visible:
                for layer_id in REGION_LAYERS:
                    if self.surface.get_layer(layer_id) is not None:
                        self.surface.set_filter(layer_id, ["==", ["get", "division"], division])

        return self._run_or_defer("region", operation)

    def move_camera(self, command: "CameraCommand") -> bool:
        def operation() -> None:
            options = {"pitch": command.pitch, "bearing": command.bearing, "duration": command.duration_ms}
            if command.kind == "fit_bounds":
                options["padding"] = command.padding
                if command.max_zoom is not None:
                    options["maxZoom"] = command.max_zoom
                self.surface.fit_bounds(command.bounds, **options)
            else:
                self.surface.fly_to(center=list(command.center), zoom=command.zoom, **options)

        return self._run_or_defer("camera", operation)

    def resize(self, width: int, height: int) -> bool:
        """Ask the surface to re-measure when the container size changed."""
        if self.surface is None or self.state is SurfaceState.DISPOSED:
            return False
        if self._size == (width, height):
            return False
        self._size = (width, height)
        self._apply(self.surface.resize)
        return True
