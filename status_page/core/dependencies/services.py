"""Dependencies for long-lived clients created in the application lifespan."""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request

from status_page.features.notifications.service import NotificationService


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client (platform probes and webhooks)."""
    return request.app.state.http_client


def get_notifier(request: Request) -> NotificationService:
    return request.app.state.notifier


HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]
NotifierDep = Annotated[NotificationService, Depends(get_notifier)]

__all__ = ["HttpClientDep", "NotifierDep", "get_http_client", "get_notifier"]
