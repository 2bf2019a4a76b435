"""Shared request helpers for the API routes."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..data.stores_repository import get_geo_dataset
from ..models.domain import GeoDataset

logger = logging.getLogger(__name__)


def load_dataset() -> GeoDataset:
    """Return the cached dataset, translating loader failures into a 503."""
    try:
        return get_geo_dataset()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Store dataset unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Store dataset unavailable: {exc}",
        ) from exc
