"""Pydantic request/response models for map view endpoints."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


class FilterModel(BaseModel):
    division: str
    dc: str
    only_assigned: bool


class LegendEntryModel(BaseModel):
    band: str
    color: str
    label: str


class ViewSnapshotResponse(BaseModel):
    session_id: str
    filters: FilterModel
    period: str
    dc_options: List[str]
    visible_store_count: int
    visible_dc_count: int
    lod: str
    zoom: float
    surface_state: str
    pending_operations: List[str]
    camera: Optional[dict] = None
    last_error: Optional[str] = None
    warnings: List[str]
    legend: List[LegendEntryModel]
    map_options: dict
    visible_stores: Optional[dict] = None
    visible_dcs: Optional[dict] = None


class FilterUpdateRequest(BaseModel):
    division: Optional[str] = Field(default=None, description="All, Northern, Southern, Eastern or Midwestern.")
    dc: Optional[str] = Field(default=None, description="DC id or ALL.")
    only_assigned: Optional[bool] = Field(default=None, description="Show only stores assigned to the operator.")
    period: Optional[Literal["DAILY", "WEEKLY"]] = Field(default=None, description="Reporting period for navigation.")


class SurfaceEventRequest(BaseModel):
    type: Literal["style.load", "load", "error", "zoomend", "resize"]
    zoom: Optional[float] = None
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    error: Optional[str] = None

    def payload(self) -> dict[str, Any]:
        return self.model_dump(exclude={"type"}, exclude_none=True)


class FeatureGestureRequest(BaseModel):
    layer: str
    feature_id: str


class TooltipLineModel(BaseModel):
    label: str
    value: str


class TooltipResponse(BaseModel):
    kind: str
    title: str
    health: int
    band: str
    color: str
    lines: List[TooltipLineModel]


class ClickResponse(BaseModel):
    navigation: Optional[dict] = None
    snapshot: ViewSnapshotResponse


class CommandsResponse(BaseModel):
    session_id: str
    commands: List[dict]
