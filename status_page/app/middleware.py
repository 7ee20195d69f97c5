"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
import uuid

from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from status_page.infra.logging import clear_log_context, set_log_context
from status_page.infra.metrics import http_request_duration_seconds, http_requests_total

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI, Request, Response

    from status_page.core.settings import AppSettings

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request, the logging context and the response.

    The ID is taken from ``X-Request-ID`` when the caller sends one.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_log_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record request counts and latency per route template."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        method = request.method
        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Process-Time"] = f"{time.perf_counter() - start_time:.6f}"
            return response
        finally:
            # The route is resolved during call_next; unmatched paths share one label
            route = request.scope.get("route")
            endpoint = getattr(route, "path", "unmatched")
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                time.perf_counter() - start_time
            )
            http_requests_total.labels(
                method=method, endpoint=endpoint, status=str(status_code)
            ).inc()


def configure_middleware(app: FastAPI, app_settings: AppSettings) -> None:
    """Install CORS, metrics and request-ID middleware.

    Starlette runs the last-added middleware first, so request IDs are set
    before metrics and CORS see the request.
    """
    cors_origins = app_settings.cors_origins or ["*"]
    logger.debug("Configuring CORS", extra={"origins": cors_origins})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=bool(app_settings.cors_origins),
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-API-Key", "X-Request-ID"],
        max_age=3600,
    )
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
