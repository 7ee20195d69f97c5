"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from status_page.features.cron.router import router as cron_router
from status_page.features.incidents.admin_router import router as incidents_admin_router
from status_page.features.incidents.router import router as incidents_router
from status_page.features.maintenance.admin_router import router as maintenance_admin_router
from status_page.features.maintenance.router import router as maintenance_router
from status_page.features.status.router import router as status_router
from status_page.features.subscribers.router import router as subscribers_router
from status_page.features.system.router import router as system_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from status_page.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings) -> None:
    """Register all feature routers with the application.

    Health probes and ``/metrics`` stay at the root; everything else lives
    under ``api_prefix``.
    """
    api_prefix = app_settings.api_prefix

    app.include_router(system_router)

    app.include_router(status_router, prefix=api_prefix)
    app.include_router(incidents_router, prefix=api_prefix)
    app.include_router(maintenance_router, prefix=api_prefix)
    app.include_router(subscribers_router, prefix=api_prefix)
    app.include_router(cron_router, prefix=api_prefix)

    app.include_router(incidents_admin_router, prefix=api_prefix)
    app.include_router(maintenance_admin_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})
