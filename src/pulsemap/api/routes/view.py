"""Map view session endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status

from ...config import settings
from ...schemas.view import (
    ClickResponse,
    CommandsResponse,
    FeatureGestureRequest,
    FilterUpdateRequest,
    SurfaceEventRequest,
    TooltipResponse,
    ViewSnapshotResponse,
)
from ...services.view.session import MapViewSession, SessionRegistry
from ..dependencies import load_dataset

router = APIRouter(prefix="/view", tags=["view"])

registry = SessionRegistry(max_sessions=settings.max_sessions)


def _get_session(session_id: str) -> MapViewSession:
    session = registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map session '{session_id}' not found.")
    return session


@router.post("/sessions", response_model=ViewSnapshotResponse, status_code=status.HTTP_201_CREATED)
def create_session() -> ViewSnapshotResponse:
    session = registry.create(load_dataset(), settings)
    return ViewSnapshotResponse(**session.snapshot(include_features=True))


@router.get("/sessions/{session_id}", response_model=ViewSnapshotResponse, status_code=status.HTTP_200_OK)
def get_session(
    session_id: str,
    include_features: bool = Query(default=True, description="Include the visible feature collections"),
) -> ViewSnapshotResponse:
    return ViewSnapshotResponse(**_get_session(session_id).snapshot(include_features=include_features))


@router.put("/sessions/{session_id}/filters", response_model=ViewSnapshotResponse, status_code=status.HTTP_200_OK)
def update_filters(session_id: str, payload: FilterUpdateRequest) -> ViewSnapshotResponse:
    session = _get_session(session_id)
    session.apply_filters(
        division=payload.division,
        dc=payload.dc,
        only_assigned=payload.only_assigned,
        period=payload.period,
    )
    return ViewSnapshotResponse(**session.snapshot(include_features=True))


@router.post("/sessions/{session_id}/reset", response_model=ViewSnapshotResponse, status_code=status.HTTP_200_OK)
def reset_filters(session_id: str) -> ViewSnapshotResponse:
    session = _get_session(session_id)
    session.reset()
    return ViewSnapshotResponse(**session.snapshot(include_features=True))


@router.post("/sessions/{session_id}/events", response_model=ViewSnapshotResponse, status_code=status.HTTP_200_OK)
def post_surface_event(session_id: str, payload: SurfaceEventRequest) -> ViewSnapshotResponse:
    session = _get_session(session_id)
    session.handle_event(payload.type, payload.payload())
    return ViewSnapshotResponse(**session.snapshot())


@router.post("/sessions/{session_id}/hover", response_model=TooltipResponse | None, status_code=status.HTTP_200_OK)
def hover_feature(session_id: str, payload: FeatureGestureRequest) -> TooltipResponse | None:
    tooltip = _get_session(session_id).hover(payload.layer, payload.feature_id)
    if tooltip is None:
        return None
    return TooltipResponse.model_validate(tooltip.to_dict())


@router.post("/sessions/{session_id}/click", response_model=ClickResponse, status_code=status.HTTP_200_OK)
def click_feature(session_id: str, payload: FeatureGestureRequest) -> ClickResponse:
    session = _get_session(session_id)
    intent = session.click(payload.layer, payload.feature_id)
    navigation = None
    if intent is not None:
        navigation = {"store_id": intent.store_id, "period": intent.period, "path": intent.to_path()}
    return ClickResponse(navigation=navigation, snapshot=ViewSnapshotResponse(**session.snapshot(include_features=True)))


@router.get("/sessions/{session_id}/commands", response_model=CommandsResponse, status_code=status.HTTP_200_OK)
def drain_commands(session_id: str) -> CommandsResponse:
    session = _get_session(session_id)
    return CommandsResponse(session_id=session_id, commands=session.drain_commands())


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str) -> Response:
    if not registry.remove(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map session '{session_id}' not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
