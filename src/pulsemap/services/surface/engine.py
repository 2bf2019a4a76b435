"""Server-side mirror of the browser's map engine.

``CommandBufferSurface`` keeps the sources, layers and camera the browser
map should have, and records every mutation as a Mapbox-style command in an
outbox. The browser drains the outbox and replays it verbatim.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

Handler = Callable[[Optional[dict]], None]


class MapSurface(Protocol):
    """The subset of the Mapbox GL API the adapter relies on."""

    def on(self, event: str, handler: Handler) -> None: ...

    def once(self, event: str, handler: Handler) -> None: ...

    def off(self, event: str, handler: Handler) -> None: ...

    def get_source(self, source_id: str) -> Optional[dict]: ...

    def add_source(self, source_id: str, spec: dict) -> None: ...

    def set_source_data(self, source_id: str, data: dict) -> None: ...

    def get_layer(self, layer_id: str) -> Optional[dict]: ...

    def add_layer(self, spec: dict) -> None: ...

    def get_layout_property(self, layer_id: str, name: str) -> Any: ...

    def set_layout_property(self, layer_id: str, name: str, value: Any) -> None: ...

    def set_filter(self, layer_id: str, expression: Optional[list]) -> None: ...

    def fly_to(self, **options: Any) -> None: ...

    def fit_bounds(self, bounds: Sequence[Sequence[float]], **options: Any) -> None: ...

    def resize(self) -> None: ...

    def remove(self) -> None: ...


class CommandBufferSurface:
    def __init__(self) -> None:
        self.sources: dict[str, dict] = {}
        self.layers: dict[str, dict] = {}
        self.camera: dict[str, Any] = {}
        self.removed = False
        self._listeners: dict[str, list[tuple[Handler, bool]]] = {}
        self._outbox: list[tuple[Optional[str], dict]] = []

    # -- events -----------------------------------------------------------

    def on(self, event: str, handler: Handler) -> None:
        self._listeners.setdefault(event, []).append((handler, False))

    def once(self, event: str, handler: Handler) -> None:
        self._listeners.setdefault(event, []).append((handler, True))

    def off(self, event: str, handler: Handler) -> None:
        listeners = self._listeners.get(event, [])
        self._listeners[event] = [entry for entry in listeners if entry[0] is not handler]

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, payload: Optional[dict] = None) -> None:
        """Dispatch an engine event. Listener failures are re-emitted as ``error``."""
        listeners = list(self._listeners.get(event, []))
        self._listeners[event] = [entry for entry in listeners if not entry[1]]
        for handler, _ in listeners:
            try:
                handler(payload)
            except Exception as exc:
                logger.exception("Map listener for '%s' failed", event)
                if event != "error":
                    self.emit("error", {"error": str(exc)})

    # -- outbox -----------------------------------------------------------

    def _record(self, command: dict, key: Optional[str] = None) -> None:
        if self.removed:
            raise RuntimeError("Map surface has been removed.")
        if key is not None:
            # an undelivered command with the same key is superseded
            self._outbox = [entry for entry in self._outbox if entry[0] != key]
        self._outbox.append((key, command))

    def pending_commands(self) -> list[dict]:
        return [command for _, command in self._outbox]

    def drain_commands(self) -> list[dict]:
        commands = self.pending_commands()
        self._outbox.clear()
        return commands

    # -- sources and layers -----------------------------------------------

    def get_source(self, source_id: str) -> Optional[dict]:
        return self.sources.get(source_id)

    def add_source(self, source_id: str, spec: dict) -> None:
        if source_id in self.sources:
            raise ValueError(f"There is already a source with ID \"{source_id}\".")
        self.sources[source_id] = copy.deepcopy(spec)
        self._record({"op": "addSource", "id": source_id, "source": spec})

    def set_source_data(self, source_id: str, data: dict) -> None:
        if source_id not in self.sources:
            raise ValueError(f"Source \"{source_id}\" does not exist.")
        self.sources[source_id]["data"] = data
        self._record({"op": "setData", "source": source_id, "data": data}, key=f"data:{source_id}")

    def get_layer(self, layer_id: str) -> Optional[dict]:
        return self.layers.get(layer_id)

    def add_layer(self, spec: dict) -> None:
        layer_id = spec["id"]
        if layer_id in self.layers:
            raise ValueError(f"Layer with id \"{layer_id}\" already exists on this map.")
        if spec.get("source") not in self.sources:
            raise ValueError(f"Source \"{spec.get('source')}\" not found for layer \"{layer_id}\".")
        self.layers[layer_id] = copy.deepcopy(spec)
        self._record({"op": "addLayer", "layer": spec})

    def get_layout_property(self, layer_id: str, name: str) -> Any:
        layer = self.layers.get(layer_id)
        if layer is None:
            return None
        value = layer.get("layout", {}).get(name)
        if name == "visibility" and value is None:
            return "visible"
        return value

    def set_layout_property(self, layer_id: str, name: str, value: Any) -> None:
        if layer_id not in self.layers:
            raise ValueError(f"Layer \"{layer_id}\" does not exist.")
        self.layers[layer_id].setdefault("layout", {})[name] = value
        self._record(
            {"op": "setLayoutProperty", "layer": layer_id, "name": name, "value": value},
            key=f"layout:{layer_id}:{name}",
        )

    def set_filter(self, layer_id: str, expression: Optional[list]) -> None:
        if layer_id not in self.layers:
            raise ValueError(f"Layer \"{layer_id}\" does not exist.")
        self.layers[layer_id]["filter"] = expression
        self._record({"op": "setFilter", "layer": layer_id, "filter": expression}, key=f"filter:{layer_id}")

    # -- camera -----------------------------------------------------------

    def fly_to(self, **options: Any) -> None:
        self.camera = {"op": "flyTo", **options}
        self._record({"op": "flyTo", "options": options}, key="camera")

    def fit_bounds(self, bounds: Sequence[Sequence[float]], **options: Any) -> None:
        bounds_list = [list(corner) for corner in bounds]
        self.camera = {"op": "fitBounds", "bounds": bounds_list, **options}
        self._record({"op": "fitBounds", "bounds": bounds_list, "options": options}, key="camera")

    def resize(self) -> None:
        self._record({"op": "resize"}, key="resize")

    def remove(self) -> None:
        self._record({"op": "remove"})
        self._listeners.clear()
        self.removed = True
