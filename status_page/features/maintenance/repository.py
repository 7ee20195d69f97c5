"""Data access for maintenance windows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from sqlalchemy import func, select

from status_page.core.database import BaseRepository
from status_page.features.status.levels import MaintenanceStatus

from .models import Maintenance

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

MaintenanceFilter = Literal["upcoming", "active", "completed"]

PUBLIC_LIST_LIMIT = 20


class MaintenanceRepository(BaseRepository[Maintenance]):
    def __init__(self) -> None:
        super().__init__(Maintenance)

    async def list_public(
        self,
        session: AsyncSession,
        *,
        status: MaintenanceFilter | None,
        now: datetime,
        limit: int = PUBLIC_LIST_LIMIT,
    ) -> Sequence[Maintenance]:
        """Windows for the public page.

        ``upcoming`` is scheduled with a start in the future, ``active`` is
        in progress and ``completed`` is completed (newest first). Without a
        filter every window is returned in start order.
        """
        stmt = select(Maintenance)
        if status == "upcoming":
            stmt = stmt.where(
                Maintenance.status == MaintenanceStatus.SCHEDULED.value,
                Maintenance.scheduled_start > now,
            ).order_by(Maintenance.scheduled_start.asc())
        elif status == "active":
            stmt = stmt.where(
                Maintenance.status == MaintenanceStatus.IN_PROGRESS.value,
            ).order_by(Maintenance.scheduled_start.asc())
        elif status == "completed":
            stmt = stmt.where(
                Maintenance.status == MaintenanceStatus.COMPLETED.value,
            ).order_by(Maintenance.scheduled_start.desc())
        else:
            stmt = stmt.order_by(Maintenance.scheduled_start.asc())
        result = await session.execute(stmt.order_by(Maintenance.id).limit(limit))
        return result.scalars().all()

    async def list_recent(self, session: AsyncSession, *, limit: int = 50) -> Sequence[Maintenance]:
        stmt = (
            select(Maintenance)
            .order_by(Maintenance.scheduled_start.desc(), Maintenance.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_upcoming(self, session: AsyncSession, *, now: datetime) -> int:
        """Scheduled or in-progress windows that have not ended yet."""
        stmt = select(func.count(Maintenance.id)).where(
            Maintenance.status.in_(
                [MaintenanceStatus.SCHEDULED.value, MaintenanceStatus.IN_PROGRESS.value]
            ),
            Maintenance.scheduled_end >= now,
        )
        return (await session.execute(stmt)).scalar_one()


_maintenance_repository: MaintenanceRepository | None = None


def get_maintenance_repository() -> MaintenanceRepository:
    """Get the shared MaintenanceRepository instance."""
    global _maintenance_repository
    if _maintenance_repository is None:
        _maintenance_repository = MaintenanceRepository()
    return _maintenance_repository
