"""Uptime statistics derived from stored status checks."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from .levels import ComponentType, StatusLevel, worst_status

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from .models import StatusCheck
    from .repository import StatusCheckRepository

UP_STATUSES = frozenset({StatusLevel.OPERATIONAL, StatusLevel.DEGRADED})
OUTAGE_STATUSES = frozenset({StatusLevel.PARTIAL_OUTAGE, StatusLevel.MAJOR_OUTAGE})


@dataclass(slots=True, frozen=True)
class UptimeStats:
    percentage: float
    total_checks: int
    operational_checks: int
    degraded_checks: int
    outage_checks: int


@dataclass(slots=True, frozen=True)
class DailyUptime:
    """Aggregate for one UTC calendar day.

    ``has_data`` is False for days without checks; those report operational
    and 100%.
    """

    date: str
    status: StatusLevel
    uptime_percentage: float
    total_checks: int
    has_data: bool


@dataclass(slots=True, frozen=True)
class ResponseTimePoint:
    timestamp: datetime
    response_time_ms: int


def round_percentage(value: float) -> float:
    """Round half-up to two decimals and clamp to [0, 100]."""
    rounded = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return min(100.0, max(0.0, float(rounded)))


def summarize(checks: Sequence[StatusCheck]) -> UptimeStats:
    """Compute uptime over ``checks``; degraded counts as up."""
    if not checks:
        return UptimeStats(
            percentage=100.0,
            total_checks=0,
            operational_checks=0,
            degraded_checks=0,
            outage_checks=0,
        )

    operational = degraded = outage = 0
    for check in checks:
        status = StatusLevel(check.status)
        if status is StatusLevel.OPERATIONAL:
            operational += 1
        elif status is StatusLevel.DEGRADED:
            degraded += 1
        elif status in OUTAGE_STATUSES:
            outage += 1

    total = len(checks)
    return UptimeStats(
        percentage=round_percentage((operational + degraded) / total * 100),
        total_checks=total,
        operational_checks=operational,
        degraded_checks=degraded,
        outage_checks=outage,
    )


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UptimeCalculator:
    """Read-side calculations over ``StatusCheck`` rows.

    Every method accepts an explicit ``now`` so results are reproducible.
    """

    def __init__(self, repository: StatusCheckRepository) -> None:
        self.repository = repository

    async def calculate_uptime(
        self,
        session: AsyncSession,
        component: ComponentType,
        days: int,
        *,
        now: datetime | None = None,
    ) -> UptimeStats:
        now = now or _utcnow()
        checks = await self.repository.checks_between(session, component, now - timedelta(days=days))
        return summarize(checks)

    async def get_uptime_for_all_components(
        self,
        session: AsyncSession,
        days: int,
        *,
        now: datetime | None = None,
    ) -> dict[ComponentType, UptimeStats]:
        now = now or _utcnow()
        return {
            component: await self.calculate_uptime(session, component, days, now=now)
            for component in ComponentType
        }

    async def get_daily_uptime_history(
        self,
        session: AsyncSession,
        component: ComponentType,
        days: int = 90,
        *,
        now: datetime | None = None,
    ) -> list[DailyUptime]:
        """One entry per UTC day from ``today - (days - 1)`` through today."""
        now = (now or _utcnow()).astimezone(UTC)
        today = now.date()
        first_day = today - timedelta(days=days - 1)
        window_start = datetime.combine(first_day, time.min, tzinfo=UTC)
        window_end = datetime.combine(today, time.max, tzinfo=UTC)

        checks = await self.repository.checks_between(session, component, window_start, window_end)

        by_day: dict[date, list[StatusCheck]] = defaultdict(list)
        for check in checks:
            by_day[check.timestamp.astimezone(UTC).date()].append(check)

        history: list[DailyUptime] = []
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            day_checks = by_day.get(day, [])
            if not day_checks:
                history.append(
                    DailyUptime(
                        date=day.isoformat(),
                        status=StatusLevel.OPERATIONAL,
                        uptime_percentage=100.0,
                        total_checks=0,
                        has_data=False,
                    )
                )
                continue

            stats = summarize(day_checks)
            history.append(
                DailyUptime(
                    date=day.isoformat(),
                    status=worst_status(check.status for check in day_checks),
                    uptime_percentage=stats.percentage,
                    total_checks=stats.total_checks,
                    has_data=True,
                )
            )
        return history

    async def get_average_response_time(
        self,
        session: AsyncSession,
        component: ComponentType,
        hours: int = 24,
        *,
        now: datetime | None = None,
    ) -> int:
        """Rounded mean response time over the window, 0 without checks."""
        now = now or _utcnow()
        checks = await self.repository.checks_between(session, component, now - timedelta(hours=hours))
        if not checks:
            return 0
        mean = sum(check.response_time_ms for check in checks) / len(checks)
        return int(Decimal(str(mean)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    async def get_response_time_history(
        self,
        session: AsyncSession,
        component: ComponentType,
        hours: int = 24,
        *,
        now: datetime | None = None,
    ) -> list[ResponseTimePoint]:
        now = now or _utcnow()
        checks = await self.repository.checks_between(session, component, now - timedelta(hours=hours))
        return [
            ResponseTimePoint(timestamp=check.timestamp, response_time_ms=check.response_time_ms)
            for check in checks
        ]
