"""Admin endpoints for reporting and updating incidents.

Endpoints:
    GET    /admin/incidents       - Latest 50 incidents
    POST   /admin/incidents       - Open an incident and notify subscribers
    GET    /admin/incidents/{id}  - Single incident
    PATCH  /admin/incidents/{id}  - Status, timeline message, postmortem
    DELETE /admin/incidents/{id}  - Delete an incident
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status

from status_page.core.dependencies import AdminDep, NotifierDep, SessionDep, require_admin
from status_page.core.schemas.common import SuccessResponse

from .schemas import IncidentCollection, IncidentCreate, IncidentPatch, IncidentResponse
from .service import IncidentService, default_incident_message

router = APIRouter(
    prefix="/admin/incidents",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger(__name__)


@router.get("", response_model=IncidentCollection, summary="List recent incidents")
async def list_incidents(session: SessionDep) -> IncidentCollection:
    incidents = await IncidentService(session).list_recent(limit=50)
    return IncidentCollection(items=[IncidentResponse.model_validate(i) for i in incidents])


@router.post(
    "",
    response_model=IncidentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open an incident",
    description=(
        "Creates the incident in `investigating` and notifies Slack, Discord and "
        "matching subscribers after the response is sent."
    ),
)
async def create_incident(
    payload: IncidentCreate,
    admin: AdminDep,
    session: SessionDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
) -> IncidentResponse:
    incident = await IncidentService(session).create(payload, created_by=admin.email)
    await session.commit()
    response = IncidentResponse.model_validate(incident)

    background_tasks.add_task(
        notifier.notify_incident,
        incident.title,
        incident.severity,
        payload.message or default_incident_message(incident.title),
        list(incident.affected_components),
    )
    return response


@router.get(
    "/{incident_id}",
    response_model=IncidentResponse,
    summary="Get an incident",
    responses={404: {"description": "Incident not found"}},
)
async def get_incident(incident_id: int, session: SessionDep) -> IncidentResponse:
    incident = await IncidentService(session).get(incident_id)
    return IncidentResponse.model_validate(incident)


@router.patch(
    "/{incident_id}",
    response_model=IncidentResponse,
    summary="Update an incident",
    responses={404: {"description": "Incident not found"}},
)
async def update_incident(
    incident_id: int,
    payload: IncidentPatch,
    session: SessionDep,
) -> IncidentResponse:
    incident = await IncidentService(session).update(incident_id, payload)
    await session.commit()
    return IncidentResponse.model_validate(incident)


@router.delete(
    "/{incident_id}",
    response_model=SuccessResponse,
    summary="Delete an incident",
    responses={404: {"description": "Incident not found"}},
)
async def delete_incident(incident_id: int, session: SessionDep) -> SuccessResponse:
    await IncidentService(session).delete(incident_id)
    await session.commit()
    logger.info("Incident deleted", extra={"incident_id": incident_id})
    return SuccessResponse()
