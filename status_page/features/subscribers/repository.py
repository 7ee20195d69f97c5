"""Data access for subscribers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from status_page.core.database import BaseRepository

from .models import Subscriber

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class SubscriberRepository(BaseRepository[Subscriber]):
    def __init__(self) -> None:
        super().__init__(Subscriber)

    async def get_by_email(self, session: AsyncSession, email: str) -> Subscriber | None:
        return await self.get_by(session, Subscriber.email, email.strip().lower())

    async def get_by_verification_token(
        self, session: AsyncSession, token: str
    ) -> Subscriber | None:
        return await self.get_by(session, Subscriber.verification_token, token)

    async def get_by_unsubscribe_token(
        self, session: AsyncSession, token: str
    ) -> Subscriber | None:
        return await self.get_by(session, Subscriber.unsubscribe_token, token)

    async def list_verified(self, session: AsyncSession) -> Sequence[Subscriber]:
        stmt = select(Subscriber).where(Subscriber.verified.is_(True)).order_by(Subscriber.id)
        result = await session.execute(stmt)
        return result.scalars().all()


_subscriber_repository: SubscriberRepository | None = None


def get_subscriber_repository() -> SubscriberRepository:
    """Get the shared SubscriberRepository instance."""
    global _subscriber_repository
    if _subscriber_repository is None:
        _subscriber_repository = SubscriberRepository()
    return _subscriber_repository
