"""Store dataset endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...schemas.stores import DistributionCenterModel, StoreDetailModel, StoreSummaryResponse
from ...schemas.view import LegendEntryModel
from ...services.health import legend_entries
from ...services.stores import compute_store_summary, list_distribution_centers, store_detail
from ..dependencies import load_dataset

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("/legend", response_model=List[LegendEntryModel], status_code=status.HTTP_200_OK)
def get_legend() -> List[LegendEntryModel]:
    return [LegendEntryModel(**entry) for entry in legend_entries()]


@router.get("/summary", response_model=StoreSummaryResponse, status_code=status.HTTP_200_OK)
def get_store_summary() -> StoreSummaryResponse:
    return StoreSummaryResponse(**compute_store_summary(load_dataset(), settings.country))


@router.get("/dcs", response_model=List[DistributionCenterModel], status_code=status.HTTP_200_OK)
def get_distribution_centers(
    division: str | None = Query(default=None, description="Optional division filter"),
) -> List[DistributionCenterModel]:
    return [DistributionCenterModel(**entry) for entry in list_distribution_centers(load_dataset(), division)]


@router.get("/{store_id}", response_model=StoreDetailModel, status_code=status.HTTP_200_OK)
def get_store(
    store_id: str,
    period: str = Query(default="DAILY", pattern="^(DAILY|WEEKLY)$", description="Reporting period"),
) -> StoreDetailModel:
    detail = store_detail(load_dataset(), store_id, period)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Store '{store_id}' not found.")
    return StoreDetailModel(**detail)
