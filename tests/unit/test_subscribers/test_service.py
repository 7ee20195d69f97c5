"""Unit tests for the subscription service."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from status_page.features.subscribers.models import Subscriber
from status_page.features.subscribers.repository import SubscriberRepository
from status_page.features.subscribers.schemas import SubscribeRequest
from status_page.features.subscribers.service import (
    ALREADY_SUBSCRIBED,
    CHECK_YOUR_EMAIL,
    VERIFICATION_RESENT,
    SubscriberService,
)

EMAIL = "race@example.com"


class LateInsertRepository(SubscriberRepository):
    """Misses the first email lookup, as if another request inserted right after it."""

    def __init__(self) -> None:
        super().__init__()
        self.lookups = 0

    async def get_by_email(self, session, email):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return await super().get_by_email(session, email)


async def _insert(database, *, verified: bool) -> None:
    async with database.session() as session:
        session.add(
            Subscriber(
                email=EMAIL,
                verified=verified,
                verification_token=None if verified else "pending-token",
                unsubscribe_token="unsub-token",
                components=[],
            )
        )
        await session.commit()


@pytest.fixture
def notifier() -> AsyncMock:
    mock = AsyncMock()
    mock.send_verification_email.return_value = True
    return mock


class TestSubscribe:
    async def test_new_address(self, database, notifier):
        async with database.session() as session:
            message = await SubscriberService(session, notifier).subscribe(
                SubscribeRequest(email=EMAIL)
            )
            await session.commit()

        assert message == CHECK_YOUR_EMAIL
        notifier.send_verification_email.assert_awaited_once()

    async def test_concurrent_insert_of_verified_address(self, database, notifier):
        await _insert(database, verified=True)
        repository = LateInsertRepository()

        async with database.session() as session:
            service = SubscriberService(session, notifier, repository=repository)
            message = await service.subscribe(SubscribeRequest(email=EMAIL))
            await session.commit()

        assert message == ALREADY_SUBSCRIBED
        assert repository.lookups == 2
        notifier.send_verification_email.assert_not_awaited()

    async def test_concurrent_insert_of_pending_address(self, database, notifier):
        await _insert(database, verified=False)

        async with database.session() as session:
            service = SubscriberService(session, notifier, repository=LateInsertRepository())
            message = await service.subscribe(SubscribeRequest(email=EMAIL.upper()))
            await session.commit()

        assert message == VERIFICATION_RESENT
        notifier.send_verification_email.assert_awaited_once_with(EMAIL, "pending-token")
        async with database.session() as session:
            count = (await session.execute(select(func.count(Subscriber.id)))).scalar_one()
        assert count == 1
