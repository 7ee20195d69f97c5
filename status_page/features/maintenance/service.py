"""Service layer for maintenance windows."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from status_page.core.database import NotFoundError
from status_page.core.exceptions import BadRequestException, NotFoundException
from status_page.core.services import BaseService
from status_page.features.status.levels import MaintenanceStatus
from status_page.utils import apply_updates

from .models import Maintenance
from .repository import MaintenanceFilter, MaintenanceRepository, get_maintenance_repository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from .schemas import MaintenanceCreate, MaintenancePatch


class MaintenanceService(BaseService):
    """Schedule, list, update and delete maintenance windows.

    Mutating methods flush; the router commits.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: MaintenanceRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_maintenance_repository()

    async def list_public(
        self,
        *,
        status: MaintenanceFilter | None = None,
        now: datetime | None = None,
    ) -> Sequence[Maintenance]:
        return await self._repository.list_public(
            self._session, status=status, now=now or datetime.now(UTC)
        )

    async def list_recent(self, *, limit: int = 50) -> Sequence[Maintenance]:
        return await self._repository.list_recent(self._session, limit=limit)

    async def get(self, maintenance_id: int) -> Maintenance:
        try:
            return await self._repository.get_or_raise(self._session, maintenance_id)
        except NotFoundError as exc:
            raise NotFoundException(
                detail="Maintenance not found",
                type="maintenance-not-found",
                extra={"maintenance_id": maintenance_id},
            ) from exc

    async def create(self, payload: MaintenanceCreate, *, created_by: str) -> Maintenance:
        if payload.scheduled_end <= payload.scheduled_start:
            raise BadRequestException(
                detail="End time must be after start time",
                type="invalid-maintenance-window",
            )

        maintenance = Maintenance(
            title=payload.title,
            description=payload.description,
            affected_components=[c.value for c in payload.affected_components],
            scheduled_start=payload.scheduled_start,
            scheduled_end=payload.scheduled_end,
            status=MaintenanceStatus.SCHEDULED.value,
            created_by=created_by,
        )
        created = await self._repository.create(self._session, maintenance)

        self.logger.info(
            "Maintenance scheduled",
            extra={
                "maintenance_id": created.id,
                "scheduled_start": created.scheduled_start.isoformat(),
                "scheduled_end": created.scheduled_end.isoformat(),
                "created_by": created_by,
                "operation": "service.create_maintenance",
            },
        )
        return created

    async def update(self, maintenance_id: int, payload: MaintenancePatch) -> Maintenance:
        maintenance = await self.get(maintenance_id)
        result = apply_updates(maintenance, {"status": payload.status.value})
        if result.applied:
            maintenance.updated_at = datetime.now(UTC)
            await self._session.flush()
            self.logger.info(
                "Maintenance updated",
                extra={"maintenance_id": maintenance.id, "changes": result.changes},
            )
        return maintenance

    async def delete(self, maintenance_id: int) -> None:
        maintenance = await self.get(maintenance_id)
        await self._repository.delete(self._session, maintenance)
