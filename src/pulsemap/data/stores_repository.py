"""Data access helpers for loading the static store, DC and region dataset."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Optional

from .dc_repository import get_distribution_centers
from ..config import settings
from ..models.domain import DIVISIONS, DivisionRegion, GeoDataset, Store

logger = logging.getLogger(__name__)

POLYGON_TYPES = {"Polygon", "MultiPolygon"}


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def _read_feature_collection(path: Path) -> list[dict]:
    with path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise ValueError(f"'{path}' is not a GeoJSON FeatureCollection.")
    return list(payload.get("features") or [])


def parse_store_feature(feature: dict) -> Optional[Store]:
    """Build a Store from a GeoJSON point feature, or None when it is unusable."""
    geometry = feature.get("geometry") or {}
    props = feature.get("properties") or {}
    if geometry.get("type") != "Point":
        return None
    coordinates = geometry.get("coordinates") or []
    if len(coordinates) < 2:
        return None
    store_id = props.get("store_id")
    if store_id is None or str(store_id).strip() == "":
        return None
    health = _coerce_float(props.get("health"))
    if health is None:
        return None

    return Store(
        store_id=str(store_id).strip(),
        longitude=float(coordinates[0]),
        latitude=float(coordinates[1]),
        division=str(props.get("division") or "").strip(),
        dc_id=str(props.get("dc_id") or "").strip(),
        health=health,
        # older exports used is_assigned
        assigned=_coerce_bool(props.get("assigned", props.get("is_assigned", False))),
        store_name=(str(props.get("store_name")).strip() or None) if props.get("store_name") else None,
        turnover=_coerce_float(props.get("turnover")),
        return_pct=_coerce_float(props.get("return_pct")),
        country=(str(props.get("country")).strip() or None) if props.get("country") else None,
        state=props.get("state"),
    )


def load_stores(source: Optional[Path] = None) -> tuple[Store, ...]:
    """Load stores from the configured GeoJSON file."""

    geojson_path = (source or settings.stores_file)
    if not geojson_path.exists():
        raise FileNotFoundError(f"Store file not found: {geojson_path}")

    stores: list[Store] = []
    skipped = 0
    for feature in _read_feature_collection(geojson_path):
        store = parse_store_feature(feature)
        if store is None:
            skipped += 1
            continue
        stores.append(store)
    if skipped:
        logger.warning("Skipped %d store features without id, point geometry or health in %s", skipped, geojson_path)
    return tuple(stores)


def load_regions(source: Optional[Path] = None) -> dict[str, DivisionRegion]:
    """Load division polygons. A missing file yields no regions."""

    geojson_path = (source or settings.regions_file)
    if not geojson_path.exists():
        logger.warning("Region file not found: %s; division framing falls back to the national view", geojson_path)
        return {}

    regions: dict[str, DivisionRegion] = {}
    for feature in _read_feature_collection(geojson_path):
        geometry = feature.get("geometry") or {}
        props = feature.get("properties") or {}
        division = str(props.get("division") or "").strip()
        if geometry.get("type") not in POLYGON_TYPES or division not in DIVISIONS:
            continue
        # some exports carry State polygons next to the Division ones
        if props.get("type") not in (None, "Division"):
            continue
        regions.setdefault(division, DivisionRegion(division=division, geometry=geometry))
    return regions


@functools.lru_cache(maxsize=1)
def get_geo_dataset() -> GeoDataset:
    """Load stores, regions and DC roll-ups once per process."""

    stores = load_stores()
    dcs = get_distribution_centers(stores, settings.dc_locations_file)
    regions = load_regions()
    logger.info("Loaded %d stores, %d DCs, %d division regions", len(stores), len(dcs), len(regions))
    return GeoDataset(stores=stores, dcs=dcs, regions=regions)


def set_active_dataset_files(
    stores_file: Path,
    regions_file: Optional[Path] = None,
    dc_locations_file: Optional[Path] = None,
) -> None:
    """Point the loaders at new files and clear related caches."""

    settings.stores_file = stores_file
    if regions_file is not None:
        settings.regions_file = regions_file
    settings.dc_locations_file = dc_locations_file
    get_geo_dataset.cache_clear()
