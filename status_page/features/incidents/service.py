"""Service layer for incident lifecycle operations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from status_page.core.database import NotFoundError
from status_page.core.exceptions import NotFoundException
from status_page.core.services import BaseService
from status_page.features.status.levels import IncidentStatus

from .models import Incident, IncidentUpdate
from .repository import IncidentFilter, IncidentRepository, get_incident_repository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from status_page.core.database import SearchResult

    from .schemas import IncidentCreate, IncidentPatch


def default_incident_message(title: str) -> str:
    """Notification text used when an incident is opened without a message."""
    return f"We are investigating an issue with {title}"


class IncidentService(BaseService):
    """Create, update, list and delete incidents.

    Callers own the transaction: mutating methods flush, the router commits.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: IncidentRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_incident_repository()

    async def search(
        self,
        *,
        status: IncidentFilter | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> SearchResult[Incident]:
        return await self._repository.search_incidents(
            self._session, status=status, page=page, limit=limit
        )

    async def list_recent(self, *, limit: int = 50) -> Sequence[Incident]:
        return await self._repository.list_recent(self._session, limit=limit)

    async def get(self, incident_id: int) -> Incident:
        try:
            return await self._repository.get_or_raise(self._session, incident_id)
        except NotFoundError as exc:
            raise NotFoundException(
                detail="Incident not found",
                type="incident-not-found",
                extra={"incident_id": incident_id},
            ) from exc

    async def create(self, payload: IncidentCreate, *, created_by: str) -> Incident:
        """Open an incident in ``investigating``, with an initial update if a message is given."""
        now = datetime.now(UTC)
        updates = []
        if payload.message:
            updates.append(
                IncidentUpdate(
                    status=IncidentStatus.INVESTIGATING.value,
                    message=payload.message,
                    timestamp=now,
                    position=0,
                )
            )

        incident = Incident(
            title=payload.title,
            status=IncidentStatus.INVESTIGATING.value,
            severity=payload.severity.value,
            affected_components=[c.value for c in payload.affected_components],
            started_at=now,
            created_by=created_by,
            updates=updates,
        )
        created = await self._repository.create(self._session, incident)

        self.logger.info(
            "Incident created",
            extra={
                "incident_id": created.id,
                "severity": created.severity,
                "components": created.affected_components,
                "created_by": created_by,
                "operation": "service.create_incident",
            },
        )
        return created

    async def update(self, incident_id: int, payload: IncidentPatch) -> Incident:
        """Apply a status change, timeline message and/or postmortem.

        ``resolved_at`` is stamped only on the first transition to resolved.
        """
        incident = await self.get(incident_id)
        now = datetime.now(UTC)
        fields = payload.model_fields_set

        if payload.status is not None:
            if payload.status is IncidentStatus.RESOLVED and incident.resolved_at is None:
                incident.resolved_at = now
            incident.status = payload.status.value

        if payload.message:
            await self._repository.add_update(
                self._session,
                incident,
                status=incident.status,
                message=payload.message,
                timestamp=now,
            )

        if "postmortem" in fields:
            incident.postmortem = payload.postmortem

        # Touch updated_at even when only a child row changed
        incident.updated_at = now
        await self._session.flush()

        self.logger.info(
            "Incident updated",
            extra={
                "incident_id": incident.id,
                "status": incident.status,
                "added_update": bool(payload.message),
                "operation": "service.update_incident",
            },
        )
        return incident

    async def delete(self, incident_id: int) -> None:
        incident = await self.get(incident_id)
        await self._repository.delete(self._session, incident)
