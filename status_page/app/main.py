"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from status_page.app.exception_handlers import configure_exception_handlers
from status_page.app.lifespan import lifespan
from status_page.app.middleware import configure_middleware
from status_page.app.router import setup_routers
from status_page.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are loaded once and cached via LRU cache.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.get_docs_url(),
        redoc_url=None,
        openapi_url=app_settings.get_openapi_url(),
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    configure_middleware(app, app_settings)
    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
