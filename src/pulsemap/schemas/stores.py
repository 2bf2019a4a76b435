"""Store dataset API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class StoreDetailModel(BaseModel):
    store_id: str
    store_name: str | None = None
    division: str
    dc_id: str
    health: float
    health_band: str
    turnover: float | None = None
    return_pct: float | None = None
    assigned: bool
    latitude: float
    longitude: float
    period: str


class DistributionCenterModel(BaseModel):
    dc_id: str
    name: str
    division: str
    latitude: float
    longitude: float
    rollup_health: float
    health_band: str
    store_count: int


class DivisionSummaryModel(BaseModel):
    division: str
    stores: int
    dcs: int
    bands: dict[str, int]


class StoreSummaryResponse(BaseModel):
    totalStores: int
    assignedStores: int
    divisions: List[DivisionSummaryModel]
