"""Admin endpoints for scheduling maintenance.

Endpoints:
    GET    /admin/maintenance       - Latest 50 windows
    POST   /admin/maintenance       - Schedule a window
    PATCH  /admin/maintenance/{id}  - Change status
    DELETE /admin/maintenance/{id}  - Delete a window
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from status_page.core.dependencies import AdminDep, SessionDep, require_admin
from status_page.core.schemas.common import SuccessResponse

from .schemas import (
    MaintenanceCollection,
    MaintenanceCreate,
    MaintenancePatch,
    MaintenanceResponse,
)
from .service import MaintenanceService

router = APIRouter(
    prefix="/admin/maintenance",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger(__name__)


@router.get("", response_model=MaintenanceCollection, summary="List recent maintenance")
async def list_maintenance(session: SessionDep) -> MaintenanceCollection:
    windows = await MaintenanceService(session).list_recent(limit=50)
    return MaintenanceCollection(items=[MaintenanceResponse.model_validate(m) for m in windows])


@router.post(
    "",
    response_model=MaintenanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule maintenance",
    responses={400: {"description": "End time is not after start time"}},
)
async def create_maintenance(
    payload: MaintenanceCreate,
    admin: AdminDep,
    session: SessionDep,
) -> MaintenanceResponse:
    maintenance = await MaintenanceService(session).create(payload, created_by=admin.email)
    await session.commit()
    return MaintenanceResponse.model_validate(maintenance)


@router.patch(
    "/{maintenance_id}",
    response_model=MaintenanceResponse,
    summary="Update maintenance status",
    responses={404: {"description": "Maintenance not found"}},
)
async def update_maintenance(
    maintenance_id: int,
    payload: MaintenancePatch,
    session: SessionDep,
) -> MaintenanceResponse:
    maintenance = await MaintenanceService(session).update(maintenance_id, payload)
    await session.commit()
    return MaintenanceResponse.model_validate(maintenance)


@router.delete(
    "/{maintenance_id}",
    response_model=SuccessResponse,
    summary="Delete maintenance",
    responses={404: {"description": "Maintenance not found"}},
)
async def delete_maintenance(maintenance_id: int, session: SessionDep) -> SuccessResponse:
    await MaintenanceService(session).delete(maintenance_id)
    await session.commit()
    logger.info("Maintenance deleted", extra={"maintenance_id": maintenance_id})
    return SuccessResponse()
