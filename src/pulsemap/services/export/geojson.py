"""GeoJSON feature builders for the map sources."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

from ...models.domain import DistributionCenter, DivisionRegion, Store
from ..health import health_band


def feature_collection(features: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


def point_feature(longitude: float, latitude: float, properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [longitude, latitude]},
        "properties": properties,
    }


def store_feature(store: Store) -> Dict[str, Any]:
    """Convert a store to a point feature carrying the tooltip and styling properties."""
    return point_feature(
        store.longitude,
        store.latitude,
        {
            "store_id": store.store_id,
            "store_name": store.store_name,
            "division": store.division,
            "dc_id": store.dc_id,
            "health": store.health,
            "health_band": health_band(store.health).value,
            "turnover": store.turnover,
            "return_pct": store.return_pct,
            "assigned": store.assigned,
            "country": store.country,
        },
    )


def dc_feature(dc: DistributionCenter) -> Dict[str, Any]:
    return point_feature(
        dc.longitude,
        dc.latitude,
        {
            "dc_id": dc.dc_id,
            "dc_name": dc.name,
            "division": dc.division,
            "rollup_health": dc.rollup_health,
            "health_band": health_band(dc.rollup_health).value,
            "store_count": dc.store_count,
        },
    )


def region_feature(region: DivisionRegion) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": region.geometry,
        "properties": {"division": region.division, "type": "Division"},
    }


def save_geojson(collection: Dict[str, Any], output_path: Path) -> None:
    """Save a FeatureCollection to disk.

    Args:
        collection: GeoJSON FeatureCollection
        output_path: Path to save JSON file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, ensure_ascii=False)
