"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    from status_page.core.database import BaseRepository
    from status_page.features.subscribers.models import Subscriber

    class SubscriberRepository(BaseRepository[Subscriber]):
        async def get_by_email(self, session: AsyncSession, email: str) -> Subscriber | None:
            return await self.get_by(session, Subscriber.email, email.lower())

    repo = SubscriberRepository(Subscriber)
    subscriber = await repo.get(session, subscriber_id)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, func, select

from status_page.core.database.exceptions import NotFoundError
from status_page.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute


@dataclass(slots=True, frozen=True)
class SearchResult[T]:
    """Paginated search result container.

    Attributes:
        items: List of items for current page
        total: Total count across all pages
        limit: Page size
        offset: Current offset
    """

    items: Sequence[T]
    total: int
    limit: int
    offset: int

    @property
    def page(self) -> int:
        """Current page number (1-indexed)."""
        return (self.offset // self.limit) + 1 if self.limit else 1

    @property
    def pages(self) -> int:
        """Total number of pages."""
        if self.limit == 0:
            return 1
        return (self.total + self.limit - 1) // self.limit


class BaseRepository[T]:
    """Minimal generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - search(session, statement, limit, offset) -> SearchResult[T]
        - create(session, instance) -> T
        - create_many(session, instances) -> Sequence[T]
        - delete(session, instance) -> None

    Session is always explicit - no hidden state.
    """

    __slots__ = ("_lazy", "_logger", "model")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # DEBUG-only messages go through the lazy logger
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value

        Returns:
            Entity if found, None otherwise
        """
        instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(self, session: AsyncSession, id: Any) -> T:  # noqa: A002
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
    ) -> T | None:
        """Get entity by arbitrary attribute.

        Example:
            subscriber = await repo.get_by(session, Subscriber.unsubscribe_token, token)
        """
        result = await session.execute(select(self.model).where(attr == value))
        instance = result.scalars().first()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def search(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]],
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> SearchResult[T]:
        """Execute paginated search with total count.

        Takes a pre-built statement (with filters and ordering applied) and
        adds pagination.

        Args:
            session: Database session
            statement: SQLAlchemy select statement
            limit: Page size
            offset: Results to skip

        Returns:
            SearchResult with items, total count, and pagination info
        """
        count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await session.execute(count_stmt)).scalar_one()

        paginated = statement.limit(limit).offset(offset)
        result = await session.execute(paginated)
        items = result.scalars().all()

        search_result = SearchResult(items=items, total=total, limit=limit, offset=offset)
        self._lazy.debug(
            lambda: f"db.search: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(items)}/{total} items, page {search_result.page}/{search_result.pages}"
        )
        return search_result

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session and flushes to get generated values (like id).
        """
        session.add(instance)
        await session.flush()

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Persist multiple entities in one flush."""
        instances_list = list(instances)
        session.add_all(instances_list)
        await session.flush()

        self._lazy.debug(
            lambda: f"db.create_many: {self.model.__name__} -> {len(instances_list)} created"
        )
        return instances_list

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity."""
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(entity_id), "operation": "db.delete"},
        )

