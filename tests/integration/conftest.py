"""Fixtures shared by API integration tests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta

import pytest

from status_page.features.status.models import StatusCheck
from status_page.infra.database import Database

SeedChecks = Callable[..., Awaitable[None]]


@pytest.fixture
def seed_checks(database: Database) -> SeedChecks:
    """Insert checks for one component, ``ago`` minutes before now, oldest first."""

    async def seed(
        component: str,
        entries: list[tuple[int, str, int]],
    ) -> None:
        now = datetime.now(UTC)
        async with database.session() as session:
            session.add_all(
                StatusCheck(
                    timestamp=now - timedelta(minutes=ago),
                    component=component,
                    status=status,
                    response_time_ms=response_time_ms,
                )
                for ago, status, response_time_ms in entries
            )
            await session.commit()

    return seed
