"""Database dependencies for FastAPI route handlers.

The ``Database`` built at startup lives on ``app.state.db``. Route handlers
receive a request-scoped session; CLI commands and background tasks open
their own with ``async with db.session()``.

Usage:
    @router.get("/items")
    async def list_items(session: Annotated[AsyncSession, Depends(get_db_session)]):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from status_page.infra.database import Database


def get_database(request: Request) -> Database:
    """Return the application's ``Database`` instance."""
    return request.app.state.db


async def get_db_session(
    db: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession]:
    """Yield a session that is closed when the request completes.

    Handlers commit explicitly; anything uncommitted is rolled back.
    """
    async with db.session() as session:
        yield session


DatabaseDep = Annotated[Database, Depends(get_database)]
SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

__all__ = ["DatabaseDep", "SessionDep", "get_database", "get_db_session"]
