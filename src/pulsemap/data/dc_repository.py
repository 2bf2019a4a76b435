"""Distribution center roll-ups built from the store set, with optional workbook overrides."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from pathlib import Path
from typing import Iterable

import numpy as np
from openpyxl import load_workbook

from ..models.domain import DistributionCenter, Store

logger = logging.getLogger(__name__)


def _normalize_dc_name(name: str) -> str:
    return name.strip()


def _load_dc_overrides_from_file(source: Path) -> dict[str, dict]:
    """Load DC names, divisions and coordinates from an Excel workbook."""
    if not source.exists():
        raise FileNotFoundError(f"DC workbook not found: {source}")

    wb = load_workbook(source, data_only=True, read_only=True)
    sheet = wb.active
    rows = sheet.iter_rows(min_row=1, values_only=True)
    header = next(rows, None)
    if header is None:
        raise ValueError(f"DC workbook '{source}' is empty.")

    header_map = {str(name).strip(): idx for idx, name in enumerate(header) if name is not None}
    missing_columns = {"DC", "Latitude", "Longitude"} - set(header_map)
    if missing_columns:
        raise ValueError(f"DC workbook missing columns: {', '.join(sorted(missing_columns))}")

    overrides: dict[str, dict] = {}
    for row in rows:
        dc_value = row[header_map["DC"]]
        if not dc_value:
            continue
        entry = {
            "latitude": float(row[header_map["Latitude"]]),
            "longitude": float(row[header_map["Longitude"]]),
        }
        if "Name" in header_map and row[header_map["Name"]]:
            entry["name"] = str(row[header_map["Name"]]).strip()
        if "Division" in header_map and row[header_map["Division"]]:
            entry["division"] = str(row[header_map["Division"]]).strip()
        overrides[_normalize_dc_name(str(dc_value))] = entry
    wb.close()
    return overrides


def build_distribution_centers(
    stores: Iterable[Store],
    overrides: dict[str, dict] | None = None,
) -> dict[str, DistributionCenter]:
    """Group stores by ``dc_id`` and compute each DC's roll-up.

    The roll-up health is the mean health of every store served by the DC,
    regardless of country, division or assignment. The centroid and division
    come from the stores (mean position, majority division) unless the
    overrides provide them.
    """
    overrides = overrides or {}
    grouped: dict[str, list[Store]] = defaultdict(list)
    for store in stores:
        if store.dc_id:
            grouped[store.dc_id].append(store)

    dcs: dict[str, DistributionCenter] = {}
    for dc_id in sorted(grouped):
        members = grouped[dc_id]
        health = np.array([store.health for store in members], dtype=float)
        coords = np.array([(store.longitude, store.latitude) for store in members], dtype=float)
        centroid_lon, centroid_lat = coords.mean(axis=0)
        division = Counter(store.division for store in members).most_common(1)[0][0]

        override = overrides.get(dc_id, {})
        dcs[dc_id] = DistributionCenter(
            dc_id=dc_id,
            name=override.get("name", dc_id),
            division=override.get("division", division),
            longitude=float(override.get("longitude", centroid_lon)),
            latitude=float(override.get("latitude", centroid_lat)),
            rollup_health=float(health.mean()),
            store_count=len(members),
        )

    unknown = set(overrides) - set(dcs)
    if unknown:
        logger.warning("DC workbook lists %d DCs without stores: %s", len(unknown), ", ".join(sorted(unknown)))
    return dcs


def get_distribution_centers(
    stores: Iterable[Store],
    source: Path | None = None,
) -> dict[str, DistributionCenter]:
    """Build DC roll-ups, applying the workbook at ``source`` when one is configured."""
    overrides = _load_dc_overrides_from_file(source) if source is not None else None
    return build_distribution_centers(stores, overrides)
