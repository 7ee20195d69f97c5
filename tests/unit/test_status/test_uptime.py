"""Unit tests for uptime statistics."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from status_page.features.status.levels import ComponentType, StatusLevel
from status_page.features.status.models import StatusCheck
from status_page.features.status.repository import StatusCheckRepository
from status_page.features.status.uptime import UptimeCalculator, round_percentage, summarize


def _check(status: str, timestamp: datetime | None = None, response_time_ms: int = 100) -> StatusCheck:
    return StatusCheck(
        timestamp=timestamp or datetime(2026, 3, 15, tzinfo=UTC),
        component=ComponentType.API.value,
        status=status,
        response_time_ms=response_time_ms,
        status_code=200,
    )


class TestSummarize:
    def test_no_checks_is_full_uptime(self):
        stats = summarize([])
        assert stats.percentage == 100.0
        assert stats.total_checks == 0

    def test_degraded_counts_as_up(self):
        stats = summarize([_check("operational"), _check("degraded"), _check("major_outage")])

        assert stats.total_checks == 3
        assert stats.operational_checks == 1
        assert stats.degraded_checks == 1
        assert stats.outage_checks == 1
        assert stats.percentage == 66.67

    def test_partial_outage_counts_as_down(self):
        stats = summarize([_check("operational"), _check("partial_outage")])
        assert stats.percentage == 50.0


class TestRoundPercentage:
    def test_rounds_half_up(self):
        assert round_percentage(99.995) == 100.0
        assert round_percentage(12.345) == 12.35

    def test_clamps(self):
        assert round_percentage(-1) == 0.0
        assert round_percentage(100.4) == 100.0


class TestUptimeCalculator:
    @pytest.fixture
    def calculator(self) -> UptimeCalculator:
        return UptimeCalculator(StatusCheckRepository())

    async def _store(self, session, checks: list[StatusCheck]) -> None:
        session.add_all(checks)
        await session.flush()

    async def test_daily_history_spans_requested_days(self, session, calculator, fixed_now):
        history = await calculator.get_daily_uptime_history(
            session, ComponentType.API, 7, now=fixed_now
        )

        assert len(history) == 7
        assert history[0].date == "2026-03-09"
        assert history[-1].date == "2026-03-15"
        assert all(not day.has_data for day in history)
        assert all(day.uptime_percentage == 100.0 for day in history)
        assert all(day.status is StatusLevel.OPERATIONAL for day in history)

    async def test_daily_history_buckets_by_utc_day(self, session, calculator, fixed_now):
        yesterday = fixed_now - timedelta(days=1)
        await self._store(
            session,
            [
                _check("operational", yesterday.replace(hour=1)),
                _check("major_outage", yesterday.replace(hour=2)),
                _check("operational", fixed_now.replace(hour=3)),
            ],
        )

        first = await calculator.get_daily_uptime_history(session, ComponentType.API, 2, now=fixed_now)
        second = await calculator.get_daily_uptime_history(session, ComponentType.API, 2, now=fixed_now)

        assert first == second
        assert first[0].date == "2026-03-14"
        assert first[0].status is StatusLevel.MAJOR_OUTAGE
        assert first[0].uptime_percentage == 50.0
        assert first[0].total_checks == 2
        assert first[1].status is StatusLevel.OPERATIONAL
        assert first[1].has_data

    async def test_uptime_window_excludes_old_checks(self, session, calculator, fixed_now):
        await self._store(
            session,
            [
                _check("major_outage", fixed_now - timedelta(days=10)),
                _check("operational", fixed_now - timedelta(hours=1)),
            ],
        )

        day = await calculator.calculate_uptime(session, ComponentType.API, 1, now=fixed_now)
        month = await calculator.calculate_uptime(session, ComponentType.API, 30, now=fixed_now)

        assert day.percentage == 100.0
        assert month.percentage == 50.0

    async def test_average_response_time(self, session, calculator, fixed_now):
        await self._store(
            session,
            [
                _check("operational", fixed_now - timedelta(hours=2), response_time_ms=100),
                _check("operational", fixed_now - timedelta(hours=1), response_time_ms=201),
            ],
        )

        average = await calculator.get_average_response_time(
            session, ComponentType.API, 24, now=fixed_now
        )
        assert average == 151

    async def test_average_response_time_without_checks(self, session, calculator, fixed_now):
        assert await calculator.get_average_response_time(
            session, ComponentType.CACHE, 24, now=fixed_now
        ) == 0

    async def test_daily_history_is_stable_for_a_fixed_now(self, session, calculator, fixed_now):
        await self._store(
            session,
            [
                _check("operational", fixed_now - timedelta(days=6, hours=2)),
                _check("degraded", fixed_now - timedelta(days=3, hours=5)),
                _check("partial_outage", fixed_now - timedelta(days=3, hours=4)),
                _check("operational", fixed_now - timedelta(minutes=5)),
            ],
        )

        runs = [
            await calculator.get_daily_uptime_history(session, ComponentType.API, 30, now=fixed_now)
            for _ in range(2)
        ]

        assert runs[0] == runs[1]
        assert len(runs[0]) == 30
        assert runs[0][-1].date == "2026-03-15"
        assert [day.date for day in runs[0] if day.has_data] == [
            "2026-03-09",
            "2026-03-12",
            "2026-03-15",
        ]
