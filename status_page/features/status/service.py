"""Read models for the public status, components and history endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from status_page.core.exceptions import BadRequestException, NotFoundException
from status_page.core.services import BaseService
from status_page.features.incidents.repository import IncidentRepository, get_incident_repository
from status_page.features.maintenance.repository import (
    MaintenanceRepository,
    get_maintenance_repository,
)

from .levels import (
    ComponentType,
    StatusLevel,
    get_overall_status,
    get_overall_status_message,
    parse_component,
)
from .repository import StatusCheckRepository, get_status_check_repository
from .schemas import (
    ComponentDetail,
    ComponentHistory,
    ComponentsResponse,
    ComponentStatus,
    DailyUptimeSchema,
    HistoryResponse,
    ResponseTimePoint,
    ResponseTimesResponse,
    StatusResponse,
    UptimeWindows,
)
from .uptime import UptimeCalculator

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

MAX_HISTORY_DAYS = 90
UPTIME_WINDOWS_DAYS = (1, 7, 30, 90)


def clamp_days(days: int) -> int:
    """Clamp a requested history window to [1, 90] days."""
    return min(max(days, 1), MAX_HISTORY_DAYS)


class StatusService(BaseService):
    """Assemble status page responses from recorded checks.

    ``now`` is fixed at construction so one response uses one clock reading.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        repository: StatusCheckRepository | None = None,
        incidents: IncidentRepository | None = None,
        maintenance: MaintenanceRepository | None = None,
        now: datetime | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_status_check_repository()
        self._incidents = incidents or get_incident_repository()
        self._maintenance = maintenance or get_maintenance_repository()
        self._uptime = UptimeCalculator(self._repository)
        self._now = now or datetime.now(UTC)

    async def get_status(self) -> StatusResponse:
        latest = await self._repository.get_latest_checks(self._session)
        uptime_30d = await self._uptime.get_uptime_for_all_components(
            self._session, 30, now=self._now
        )

        components: list[ComponentStatus] = []
        for component in ComponentType:
            check = latest.get(component)
            status = StatusLevel(check.status) if check else StatusLevel.OPERATIONAL
            components.append(
                ComponentStatus(
                    component=component,
                    name=component.label,
                    status=status,
                    status_label=status.label,
                    response_time_ms=check.response_time_ms if check else 0,
                    updated_at=check.timestamp if check else None,
                    uptime_30d=uptime_30d[component].percentage,
                )
            )

        overall = get_overall_status(c.status for c in components)
        return StatusResponse(
            status=overall,
            status_label=overall.label,
            message=get_overall_status_message(overall),
            components=components,
            active_incidents=await self._incidents.count_active(self._session),
            upcoming_maintenance=await self._maintenance.count_upcoming(
                self._session, now=self._now
            ),
            updated_at=self._now,
        )

    async def get_components(self) -> ComponentsResponse:
        latest = await self._repository.get_latest_checks(self._session)

        details: list[ComponentDetail] = []
        for component in ComponentType:
            check = latest.get(component)
            status = StatusLevel(check.status) if check else StatusLevel.OPERATIONAL
            h24, d7, d30, d90 = [
                (await self._uptime.calculate_uptime(
                    self._session, component, days, now=self._now
                )).percentage
                for days in UPTIME_WINDOWS_DAYS
            ]
            details.append(
                ComponentDetail(
                    component=component,
                    name=component.label,
                    status=status,
                    status_label=status.label,
                    response_time_ms=check.response_time_ms if check else 0,
                    avg_response_time_24h=await self._uptime.get_average_response_time(
                        self._session, component, 24, now=self._now
                    ),
                    uptime=UptimeWindows(h24=h24, d7=d7, d30=d30, d90=d90),
                    last_checked=check.timestamp if check else None,
                )
            )
        return ComponentsResponse(components=details, updated_at=self._now)

    async def get_response_times(self, component: str, *, hours: int = 24) -> ResponseTimesResponse:
        parsed = parse_component(component)
        if parsed is None:
            raise NotFoundException(
                detail=f"Unknown component: {component}",
                type="component-not-found",
                extra={"component": component},
            )
        points = await self._uptime.get_response_time_history(
            self._session, parsed, hours, now=self._now
        )
        return ResponseTimesResponse(
            component=parsed,
            hours=hours,
            data=[
                ResponseTimePoint(timestamp=p.timestamp, response_time_ms=p.response_time_ms)
                for p in points
            ],
        )

    async def get_history(self, *, component: str | None = None, days: int = 90) -> HistoryResponse:
        """Daily uptime per component; an unknown component is a 400."""
        days = clamp_days(days)
        if component:
            parsed = parse_component(component)
            if parsed is None:
                raise BadRequestException(
                    detail="Invalid component",
                    type="invalid-component",
                    extra={"component": component},
                )
            components = [parsed]
        else:
            components = list(ComponentType)

        history: list[ComponentHistory] = []
        for item in components:
            daily = await self._uptime.get_daily_uptime_history(
                self._session, item, days, now=self._now
            )
            history.append(
                ComponentHistory(
                    component=item,
                    name=item.label,
                    history=[
                        DailyUptimeSchema(
                            date=d.date,
                            status=d.status,
                            uptime_percentage=d.uptime_percentage,
                            total_checks=d.total_checks,
                            has_data=d.has_data,
                        )
                        for d in daily
                    ],
                )
            )

        self._lazy.debug(lambda: f"status.history: {len(components)} components over {days} days")
        return HistoryResponse(days=days, history=history, updated_at=self._now)
