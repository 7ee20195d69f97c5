"""Public status endpoints.

Endpoints:
    GET /status                                   - Overall and per-component status
    GET /components                               - Per-component uptime windows and latency
    GET /components/{component}/response-times    - Response time series
    GET /history                                  - Daily uptime bars
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from status_page.core.dependencies import SessionDep

from .schemas import ComponentsResponse, HistoryResponse, ResponseTimesResponse, StatusResponse
from .service import StatusService

router = APIRouter(tags=["status"])


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Current status",
    description="Overall status, component states, active incident and upcoming maintenance counts.",
)
async def get_status(session: SessionDep) -> StatusResponse:
    return await StatusService(session).get_status()


@router.get("/components", response_model=ComponentsResponse, summary="Component details")
async def get_components(session: SessionDep) -> ComponentsResponse:
    return await StatusService(session).get_components()


@router.get(
    "/components/{component}/response-times",
    response_model=ResponseTimesResponse,
    summary="Response time history",
    responses={404: {"description": "Unknown component"}},
)
async def get_response_times(
    component: str,
    session: SessionDep,
    hours: Annotated[int, Query(ge=1, le=24 * 90)] = 24,
) -> ResponseTimesResponse:
    return await StatusService(session).get_response_times(component, hours=hours)


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Daily uptime history",
    description="`days` is clamped to [1, 90]. Omit `component` for every component.",
    responses={400: {"description": "Unknown component"}},
)
async def get_history(
    session: SessionDep,
    component: str | None = None,
    days: int = 90,
) -> HistoryResponse:
    return await StatusService(session).get_history(component=component, days=days)
