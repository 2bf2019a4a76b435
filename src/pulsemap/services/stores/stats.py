"""Store dataset summaries for the dashboard side panels."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Optional

from ...models.domain import DIVISIONS, GeoDataset
from ...services.health import HealthBand, health_band
from ..view.derive import in_country


def compute_store_summary(dataset: GeoDataset, country: Optional[str] = None) -> dict:
    stores = [store for store in dataset.stores if in_country(store, country)]

    band_counts: Dict[str, Counter[str]] = defaultdict(Counter)
    dc_sets: Dict[str, set[str]] = defaultdict(set)
    for store in stores:
        band_counts[store.division][health_band(store.health).value] += 1
        if store.dc_id:
            dc_sets[store.division].add(store.dc_id)

    divisions: list[dict] = []
    for division in DIVISIONS:
        counts = band_counts.get(division, Counter())
        divisions.append(
            {
                "division": division,
                "stores": sum(counts.values()),
                "dcs": len(dc_sets.get(division, ())),
                "bands": {band.value: counts.get(band.value, 0) for band in HealthBand},
            }
        )

    return {
        "totalStores": len(stores),
        "assignedStores": sum(1 for store in stores if store.assigned),
        "divisions": divisions,
    }


def list_distribution_centers(dataset: GeoDataset, division: Optional[str] = None) -> list[dict]:
    """Return DC roll-ups, optionally limited to one division."""

    items: list[dict] = []
    for dc in sorted(dataset.dcs.values(), key=lambda item: item.dc_id):
        if division and dc.division != division:
            continue
        items.append(
            {
                "dc_id": dc.dc_id,
                "name": dc.name,
                "division": dc.division,
                "latitude": dc.latitude,
                "longitude": dc.longitude,
                "rollup_health": round(dc.rollup_health, 1),
                "health_band": health_band(dc.rollup_health).value,
                "store_count": dc.store_count,
            }
        )
    return items


def store_detail(dataset: GeoDataset, store_id: str, period: str) -> Optional[dict]:
    store = dataset.store(store_id)
    if store is None:
        return None
    return {
        "store_id": store.store_id,
        "store_name": store.store_name,
        "division": store.division,
        "dc_id": store.dc_id,
        "health": store.health,
        "health_band": health_band(store.health).value,
        "turnover": store.turnover,
        "return_pct": store.return_pct,
        "assigned": store.assigned,
        "latitude": store.latitude,
        "longitude": store.longitude,
        "period": period,
    }
