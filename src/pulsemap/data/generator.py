"""Synthetic demo dataset: store points clustered around DCs plus division envelopes."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any, Callable

from ..models.domain import DIVISIONS
from ..services.export.geojson import feature_collection, point_feature

# (lng_min, lng_max, lat_min, lat_max)
Box = tuple[float, float, float, float]

GEORGIA_BOX: Box = (-85.61, -80.75, 30.36, 35.00)
NATIONAL_BOX: Box = (-123.0, -67.0, 25.5, 48.5)

DIVISION_BOXES: dict[str, Box] = {
    "Northern": (-125.0, -93.0, 41.0, 49.5),
    "Southern": (-118.0, -79.0, 25.0, 36.5),
    "Eastern": (-82.5, -66.9, 36.5, 47.5),
    "Midwestern": (-110.0, -82.5, 36.5, 44.0),
}


@dataclass(frozen=True)
class DcCluster:
    dc_id: str
    division: str
    state: str
    center: tuple[float, float]
    count: int


CLUSTERS: tuple[DcCluster, ...] = (
    DcCluster("CHI-DC", "Midwestern", "IL", (-87.65, 41.88), 35),
    DcCluster("DAL-DC", "Southern", "TX", (-96.80, 32.78), 40),
    DcCluster("DEN-DC", "Midwestern", "CO", (-104.99, 39.74), 28),
    DcCluster("PHX-DC", "Southern", "AZ", (-112.07, 33.45), 25),
    DcCluster("SEA-DC", "Northern", "WA", (-122.33, 47.61), 25),
    DcCluster("BOS-DC", "Eastern", "MA", (-71.06, 42.36), 30),
    DcCluster("NYC-DC", "Eastern", "NY", (-74.00, 40.71), 30),
)

ATL_COUNT = 200
NATIONAL_COUNT = 40
SINGLETON_STATES = ("CA", "OR", "UT", "NV", "NM", "OK", "MO", "AL", "NC", "SC", "VA", "PA", "OH")


class StoreGenerator:
    """Seeded generator so tests and demos get the same dataset every time."""

    def __init__(self, seed: int | None = 42, first_store_id: int = 1000) -> None:
        self._rng = random.Random(seed)
        self._next_id = first_store_id

    def _props(self, *, division: str, dc_id: str, state: str, assigned_ratio: float) -> dict[str, Any]:
        store_id = str(self._next_id)
        self._next_id += 1
        return {
            "store_id": store_id,
            "store_name": f"{dc_id.split('-')[0].title()} #{store_id}",
            "country": "USA",
            "state": state,
            "division": division,
            "dc_id": dc_id,
            "assigned": self._rng.random() < assigned_ratio,
            "health": round(self._rng.uniform(45, 100)),
            "turnover": round(self._rng.uniform(2.0, 9.0), 1),
            "return_pct": round(self._rng.uniform(0.0, 0.12), 3),
        }

    def scatter_box(self, box: Box, count: int, make_props: Callable[[], dict]) -> list[dict]:
        lng_min, lng_max, lat_min, lat_max = box
        return [
            point_feature(self._rng.uniform(lng_min, lng_max), self._rng.uniform(lat_min, lat_max), make_props())
            for _ in range(count)
        ]

    def scatter_radius(
        self, center: tuple[float, float], count: int, radius_deg: float, make_props: Callable[[], dict]
    ) -> list[dict]:
        features = []
        for _ in range(count):
            r = self._rng.random() * radius_deg
            theta = self._rng.random() * math.pi * 2
            features.append(
                point_feature(center[0] + math.cos(theta) * r, center[1] + math.sin(theta) * r, make_props())
            )
        return features

    def stores(self) -> dict:
        features = self.scatter_box(
            GEORGIA_BOX,
            ATL_COUNT,
            lambda: self._props(division="Southern", dc_id="ATL-DC", state="GA", assigned_ratio=0.6),
        )
        for cluster in CLUSTERS:
            features.extend(
                self.scatter_radius(
                    cluster.center,
                    cluster.count,
                    0.8,
                    lambda cluster=cluster: self._props(
                        division=cluster.division, dc_id=cluster.dc_id, state=cluster.state, assigned_ratio=0.5
                    ),
                )
            )
        dc_ids = ["ATL-DC", *(cluster.dc_id for cluster in CLUSTERS)]
        features.extend(
            self.scatter_box(
                NATIONAL_BOX,
                NATIONAL_COUNT,
                lambda: self._props(
                    division=self._rng.choice(DIVISIONS),
                    dc_id=self._rng.choice(dc_ids),
                    state=self._rng.choice(SINGLETON_STATES),
                    assigned_ratio=0.35,
                ),
            )
        )
        return feature_collection(features)


def division_regions() -> dict:
    """Envelope polygons for the four divisions."""
    features = []
    for division in DIVISIONS:
        lng_min, lng_max, lat_min, lat_max = DIVISION_BOXES[division]
        ring = [
            [lng_min, lat_min],
            [lng_max, lat_min],
            [lng_max, lat_max],
            [lng_min, lat_max],
            [lng_min, lat_min],
        ]
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Polygon", "coordinates": [ring]},
                "properties": {"type": "Division", "division": division},
            }
        )
    return feature_collection(features)
