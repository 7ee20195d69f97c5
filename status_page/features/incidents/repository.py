"""Data access for incidents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from sqlalchemy import func, select

from status_page.core.database import BaseRepository, SearchResult
from status_page.features.status.levels import IncidentStatus

from .models import Incident, IncidentUpdate

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

IncidentFilter = Literal["active", "resolved"]


class IncidentRepository(BaseRepository[Incident]):
    def __init__(self) -> None:
        super().__init__(Incident)

    async def search_incidents(
        self,
        session: AsyncSession,
        *,
        status: IncidentFilter | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> SearchResult[Incident]:
        """Page through incidents, newest first.

        ``active`` means any status other than resolved.
        """
        stmt = select(Incident)
        if status == "active":
            stmt = stmt.where(Incident.status != IncidentStatus.RESOLVED.value)
        elif status == "resolved":
            stmt = stmt.where(Incident.status == IncidentStatus.RESOLVED.value)
        stmt = stmt.order_by(Incident.started_at.desc(), Incident.id.desc())
        return await self.search(session, stmt, limit=limit, offset=(page - 1) * limit)

    async def list_recent(self, session: AsyncSession, *, limit: int = 50) -> Sequence[Incident]:
        stmt = select(Incident).order_by(Incident.started_at.desc(), Incident.id.desc()).limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_active(self, session: AsyncSession) -> int:
        stmt = select(func.count(Incident.id)).where(
            Incident.status != IncidentStatus.RESOLVED.value
        )
        return (await session.execute(stmt)).scalar_one()

    async def add_update(
        self,
        session: AsyncSession,
        incident: Incident,
        *,
        status: str,
        message: str,
        timestamp: datetime,
    ) -> IncidentUpdate:
        """Append a timeline entry after the existing ones."""
        update = IncidentUpdate(
            status=status,
            message=message,
            timestamp=timestamp,
            position=len(incident.updates),
        )
        incident.updates.append(update)
        await session.flush()
        return update


_incident_repository: IncidentRepository | None = None


def get_incident_repository() -> IncidentRepository:
    """Get the shared IncidentRepository instance."""
    global _incident_repository
    if _incident_repository is None:
        _incident_repository = IncidentRepository()
    return _incident_repository
