"""Source and layer definitions for the store map."""

from __future__ import annotations

from ..health import health_color_expression

STORES_SOURCE = "stores"
DCS_SOURCE = "dcs"
REGIONS_SOURCE = "regions"

SOURCE_IDS: tuple[str, ...] = (REGIONS_SOURCE, DCS_SOURCE, STORES_SOURCE)

REGION_LAYERS: tuple[str, ...] = ("region-line-glow", "region-line-bright")
DC_LAYERS: tuple[str, ...] = ("dc-rollup-glow", "dc-rollup-core")
STORE_LAYERS: tuple[str, ...] = ("stores-glow", "stores-core")

# layers that answer hover and click
STORE_INTERACTIVE_LAYER = "stores-core"
DC_INTERACTIVE_LAYER = "dc-rollup-core"


def _line_layer(layer_id: str, width: float, opacity: float) -> dict:
    return {
        "id": layer_id,
        "type": "line",
        "source": REGIONS_SOURCE,
        "paint": {"line-color": "#2BC4FF", "line-width": width, "line-opacity": opacity},
        "layout": {"visibility": "none"},
    }


def _circle_layer(layer_id: str, source: str, health_prop: str, *, glow: bool, radius: list, visible: bool) -> dict:
    paint = {
        "circle-radius": ["interpolate", ["linear"], ["zoom"], *radius],
        "circle-color": health_color_expression(health_prop),
        "circle-opacity": 0.26 if glow else 1,
    }
    if glow:
        paint["circle-blur"] = 1
    return {
        "id": layer_id,
        "type": "circle",
        "source": source,
        "paint": paint,
        "layout": {"visibility": "visible" if visible else "none"},
    }


def layer_specs() -> list[dict]:
    """All layers in drawing order, bottom first."""
    return [
        _line_layer("region-line-glow", 3, 0.24),
        _line_layer("region-line-bright", 1, 0.85),
        _circle_layer("dc-rollup-glow", DCS_SOURCE, "rollup_health", glow=True, radius=[3, 10, 6, 22, 9, 30], visible=True),
        _circle_layer("dc-rollup-core", DCS_SOURCE, "rollup_health", glow=False, radius=[3, 5, 6, 9, 9, 12], visible=True),
        _circle_layer("stores-glow", STORES_SOURCE, "health", glow=True, radius=[3, 3, 6, 10, 9, 14], visible=False),
        _circle_layer("stores-core", STORES_SOURCE, "health", glow=False, radius=[3, 2.2, 8, 7.8], visible=False),
    ]
