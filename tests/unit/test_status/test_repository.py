"""Unit tests for the status check repository against SQLite."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import select

from status_page.features.status.levels import ComponentType, StatusLevel
from status_page.features.status.models import StatusCheck
from status_page.features.status.repository import StatusCheckRepository
from status_page.features.status.results import CheckResult


def _row(component: ComponentType, created_at: datetime, status: str = "operational") -> StatusCheck:
    return StatusCheck(
        timestamp=created_at,
        created_at=created_at,
        component=component.value,
        status=status,
        response_time_ms=50,
        status_code=200,
    )


async def _components(session) -> list[tuple[str, datetime]]:
    result = await session.execute(select(StatusCheck).order_by(StatusCheck.created_at))
    return [(row.component, row.created_at) for row in result.scalars()]


class TestPurgeOlderThan:
    async def test_deletes_only_rows_before_cutoff(self, session, fixed_now):
        repository = StatusCheckRepository()
        cutoff = fixed_now - timedelta(days=90)
        session.add_all(
            [
                _row(ComponentType.API, cutoff - timedelta(days=5)),
                _row(ComponentType.CACHE, cutoff - timedelta(seconds=1)),
                _row(ComponentType.AUTH, cutoff),
                _row(ComponentType.API, fixed_now - timedelta(hours=1)),
            ]
        )
        await session.flush()

        purged = await repository.purge_older_than(session, cutoff)

        assert purged == 2
        assert await _components(session) == [
            ("auth", cutoff),
            ("api", fixed_now - timedelta(hours=1)),
        ]

    async def test_nothing_to_purge(self, session, fixed_now):
        repository = StatusCheckRepository()
        session.add(_row(ComponentType.API, fixed_now))
        await session.flush()

        assert await repository.purge_older_than(session, fixed_now - timedelta(days=90)) == 0
        assert len(await _components(session)) == 1


class TestLatestStatuses:
    async def test_latest_row_wins_and_missing_components_are_omitted(self, session, fixed_now):
        repository = StatusCheckRepository()
        await repository.save_results(
            session,
            [CheckResult(ComponentType.API, StatusLevel.OPERATIONAL, 40, 200)],
            fixed_now - timedelta(minutes=10),
        )
        await repository.save_results(
            session,
            [CheckResult(ComponentType.API, StatusLevel.DEGRADED, 4000, 200)],
            fixed_now,
        )

        assert await repository.get_latest_statuses(session) == {
            ComponentType.API: StatusLevel.DEGRADED
        }
