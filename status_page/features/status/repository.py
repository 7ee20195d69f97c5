"""Data access for recorded status checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from status_page.core.database import BaseRepository

from .levels import ComponentType, StatusLevel
from .models import StatusCheck

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

    from .results import CheckResult


class StatusCheckRepository(BaseRepository[StatusCheck]):
    """Append, query and purge ``StatusCheck`` rows."""

    def __init__(self) -> None:
        super().__init__(StatusCheck)

    async def save_results(
        self,
        session: AsyncSession,
        results: Iterable[CheckResult],
        timestamp: datetime,
    ) -> Sequence[StatusCheck]:
        """Insert one row per result, all stamped with ``timestamp``."""
        rows = [
            StatusCheck(
                timestamp=timestamp,
                component=result.component.value,
                status=result.status.value,
                response_time_ms=result.response_time_ms,
                status_code=result.status_code,
                details=result.details or None,
            )
            for result in results
        ]
        return await self.create_many(session, rows)

    async def get_latest(
        self,
        session: AsyncSession,
        component: ComponentType,
    ) -> StatusCheck | None:
        stmt = (
            select(StatusCheck)
            .where(StatusCheck.component == component.value)
            .order_by(StatusCheck.timestamp.desc(), StatusCheck.id.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_latest_checks(
        self,
        session: AsyncSession,
    ) -> dict[ComponentType, StatusCheck]:
        """Latest check for every component that has one."""
        latest: dict[ComponentType, StatusCheck] = {}
        for component in ComponentType:
            check = await self.get_latest(session, component)
            if check is not None:
                latest[component] = check
        return latest

    async def get_latest_statuses(
        self,
        session: AsyncSession,
    ) -> dict[ComponentType, StatusLevel]:
        """Current stored status per component; missing components are omitted."""
        checks = await self.get_latest_checks(session)
        return {component: StatusLevel(check.status) for component, check in checks.items()}

    async def checks_between(
        self,
        session: AsyncSession,
        component: ComponentType,
        since: datetime,
        until: datetime | None = None,
    ) -> Sequence[StatusCheck]:
        """Checks for ``component`` with ``since <= timestamp [<= until]``, oldest first."""
        stmt = select(StatusCheck).where(
            StatusCheck.component == component.value,
            StatusCheck.timestamp >= since,
        )
        if until is not None:
            stmt = stmt.where(StatusCheck.timestamp <= until)
        stmt = stmt.order_by(StatusCheck.timestamp.asc(), StatusCheck.id.asc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def purge_older_than(self, session: AsyncSession, cutoff: datetime) -> int:
        """Delete checks created before ``cutoff``; returns the number removed."""
        result = await session.execute(
            delete(StatusCheck).where(StatusCheck.created_at < cutoff)
        )
        purged = result.rowcount or 0
        if purged:
            self._logger.info(
                "Purged expired status checks",
                extra={"purged": purged, "cutoff": cutoff.isoformat()},
            )
        return purged


_status_check_repository: StatusCheckRepository | None = None


def get_status_check_repository() -> StatusCheckRepository:
    """Get the shared StatusCheckRepository instance.

    Usage in FastAPI routes:
        repo: StatusCheckRepository = Depends(get_status_check_repository)
    """
    global _status_check_repository
    if _status_check_repository is None:
        _status_check_repository = StatusCheckRepository()
    return _status_check_repository
