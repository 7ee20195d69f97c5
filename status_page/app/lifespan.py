"""Application lifespan management.

Startup order:
1. Logging and the application info metric
2. Database (connect with retry, optionally create tables)
3. Shared HTTP client and the notification service

Shutdown runs in reverse.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

import httpx

from status_page.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_notification_settings,
    get_security_settings,
)
from status_page.features.notifications.service import build_notification_service
from status_page.infra.database import Database
from status_page.infra.logging import setup_logging
from status_page.infra.metrics import application_info

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)

HTTP_CLIENT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


async def _startup_core() -> None:
    """Configure logging and publish application metadata."""
    app_settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app_settings.service_name, "environment": app_settings.environment},
    )
    application_info.labels(
        version=app_settings.version,
        service=app_settings.service_name,
        environment=app_settings.environment,
    ).set(1)

    if get_security_settings().cron_secret is None:
        logger.warning("AUTH_CRON_SECRET is not set, /api/cron/check accepts any caller")


async def _startup_database() -> Database:
    settings = get_db_settings()
    database = Database.from_settings(settings)
    await database.connect(
        attempts=settings.startup_retry_attempts,
        delay=settings.startup_retry_delay,
    )
    if settings.create_tables_on_startup:
        await database.create_all()
        logger.info("Database tables ensured")
    return database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop shared resources stored on ``app.state``.

    Attributes already present on ``app.state`` are kept, which lets tests
    inject an in-memory database or a mocked HTTP client.
    """
    await _startup_core()

    owns_database = getattr(app.state, "db", None) is None
    if owns_database:
        app.state.db = await _startup_database()

    owns_client = getattr(app.state, "http_client", None) is None
    if owns_client:
        app.state.http_client = httpx.AsyncClient(
            timeout=HTTP_CLIENT_TIMEOUT, follow_redirects=False
        )

    if getattr(app.state, "notifier", None) is None:
        app.state.notifier = build_notification_service(
            database=app.state.db,
            client=app.state.http_client,
            app_settings=get_app_settings(),
            settings=get_notification_settings(),
        )

    logger.info("Application startup complete")
    try:
        yield
    finally:
        logger.info("Application shutting down")
        if owns_client:
            await app.state.http_client.aclose()
        if owns_database:
            await app.state.db.dispose()
        logger.info("Application shutdown complete")
