"""Async engine and session factory ownership.

A ``Database`` is built during application lifespan (or by a CLI command) and
passed around explicitly; nothing here creates an engine at import time.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from status_page.core.database import Base

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from status_page.core.settings.database import DatabaseSettings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str, settings: DatabaseSettings | None) -> dict[str, Any]:
    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live per connection; share a single one.
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        return kwargs

    if settings is None:
        return {"pool_pre_ping": True}

    return {
        "pool_size": settings.pool_size,
        "max_overflow": settings.max_overflow,
        "pool_timeout": settings.pool_timeout,
        "pool_recycle": settings.pool_recycle,
        "pool_pre_ping": settings.pool_pre_ping,
    }


class Database:
    """Owns one async engine and its session factory.

    Example:
        db = Database.from_settings(get_db_settings())
        async with db.session() as session:
            await repository.get_latest_statuses(session)
        await db.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        settings: DatabaseSettings | None = None,
    ) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            **_engine_kwargs(url, settings),
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings, *, echo: bool | None = None) -> Database:
        return cls(
            settings.get_sqlalchemy_url(),
            echo=settings.echo if echo is None else echo,
            settings=settings,
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Yield a session that is rolled back on error and always closed.

        Callers commit explicitly.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises on connection failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self, *, attempts: int = 1, delay: float = 2.0) -> None:
        """Verify connectivity, retrying with exponential backoff.

        Args:
            attempts: Maximum number of connection attempts.
            delay: Initial delay between attempts in seconds.
        """
        for attempt in range(1, attempts + 1):
            try:
                await self.ping()
            except Exception as exc:
                if attempt >= attempts:
                    logger.error(
                        "Failed to connect to database",
                        extra={"dialect": self.dialect, "attempts": attempt, "error": str(exc)},
                    )
                    raise
                wait = min(delay * 2 ** (attempt - 1), 30.0)
                logger.warning(
                    "Database not reachable, retrying",
                    extra={"attempt": attempt, "retry_in": wait, "error": str(exc)},
                )
                await asyncio.sleep(wait)
            else:
                logger.info("Database connection established", extra={"dialect": self.dialect})
                return

    async def create_all(self) -> None:
        """Create all mapped tables that do not exist yet."""
        # Model modules must be imported so their tables are registered.
        import status_page.features.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        logger.info("Closing database connection")
        await self.engine.dispose()
