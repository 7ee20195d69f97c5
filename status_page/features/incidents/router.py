"""Public incident endpoints.

Endpoints:
    GET /incidents                - Paginated incidents, newest first
    GET /incidents/{incident_id}  - Single incident with its timeline
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from status_page.core.dependencies import SessionDep

from .repository import IncidentFilter
from .schemas import IncidentListResponse, IncidentResponse
from .service import IncidentService

router = APIRouter(prefix="/incidents", tags=["incidents"])


@router.get(
    "",
    response_model=IncidentListResponse,
    summary="List incidents",
    description="Paginated incidents ordered by start time, newest first.",
)
async def list_incidents(
    session: SessionDep,
    status: Annotated[IncidentFilter | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> IncidentListResponse:
    result = await IncidentService(session).search(status=status, page=page, limit=limit)
    return IncidentListResponse(
        items=[IncidentResponse.model_validate(incident) for incident in result.items],
        total=result.total,
        page=page,
        limit=limit,
        pages=result.pages,
    )


@router.get(
    "/{incident_id}",
    response_model=IncidentResponse,
    summary="Get an incident",
    responses={404: {"description": "Incident not found"}},
)
async def get_incident(incident_id: int, session: SessionDep) -> IncidentResponse:
    incident = await IncidentService(session).get(incident_id)
    return IncidentResponse.model_validate(incident)
