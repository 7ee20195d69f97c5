"""Public maintenance endpoints.

Endpoints:
    GET /maintenance?status=upcoming|active|completed - Up to 20 windows
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from status_page.core.dependencies import SessionDep

from .repository import MaintenanceFilter
from .schemas import MaintenanceListResponse, MaintenanceResponse
from .service import MaintenanceService

router = APIRouter(prefix="/maintenance", tags=["maintenance"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=MaintenanceListResponse,
    summary="List maintenance windows",
    description=(
        "Upcoming windows are scheduled with a future start, active windows are in "
        "progress, completed windows are newest first. Omit status for all windows."
    ),
)
async def list_maintenance(
    session: SessionDep,
    status: Annotated[MaintenanceFilter | None, Query()] = None,
) -> MaintenanceListResponse:
    windows = await MaintenanceService(session).list_public(status=status)
    return MaintenanceListResponse(
        maintenance=[MaintenanceResponse.model_validate(m) for m in windows]
    )
