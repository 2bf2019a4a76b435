"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_mapbox_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.mapbox_client import check_style
    return check_style


@router.get("/health/mapbox", status_code=status.HTTP_200_OK)
def health_mapbox() -> dict:
    """Check that the map style loads with the configured token."""
    from ...config import settings

    if not settings.mapbox_token:
        return {
            "service": "mapbox",
            "configured": False,
            "healthy": False,
            "message": "Mapbox token not configured. Set the PULSE_MAPBOX_TOKEN environment variable.",
        }
    check_style = _get_mapbox_health_check()
    return {"service": "mapbox", "configured": True, "healthy": check_style(), "style": settings.map_style}
