"""Subscription endpoints.

Endpoints:
    POST /subscribe                  - Subscribe an email address
    GET  /subscribe/verify           - Verify via emailed link, redirects to the site
    GET  /subscribe/unsubscribe      - Unsubscribe via emailed link, redirects to the site
    POST /subscribe/unsubscribe      - Unsubscribe with a token, JSON response
"""

from __future__ import annotations

import logging
from typing import Annotated
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from status_page.core.dependencies import NotifierDep, SessionDep
from status_page.core.schemas.common import MessageResponse
from status_page.core.settings import AppSettings, get_app_settings

from .schemas import SubscribeRequest, UnsubscribeRequest
from .service import UNSUBSCRIBED, SubscriberService, VerificationOutcome

router = APIRouter(prefix="/subscribe", tags=["subscribers"])
logger = logging.getLogger(__name__)

AppSettingsDep = Annotated[AppSettings, Depends(get_app_settings)]


def _redirect(settings: AppSettings, **params: str) -> RedirectResponse:
    return RedirectResponse(
        f"{settings.site_url}/subscribe?{urlencode(params)}",
        status_code=307,
    )


@router.post(
    "",
    response_model=MessageResponse,
    summary="Subscribe to status updates",
    description=(
        "Creates an unverified subscriber and emails a verification link. In "
        "development, a subscriber is auto-verified when the email cannot be sent."
    ),
)
async def subscribe(
    payload: SubscribeRequest,
    session: SessionDep,
    notifier: NotifierDep,
    settings: AppSettingsDep,
) -> MessageResponse:
    service = SubscriberService(
        session, notifier, auto_verify=settings.is_development
    )
    message = await service.subscribe(payload)
    await session.commit()
    return MessageResponse(message=message)


@router.get("/verify", summary="Verify a subscription", response_class=RedirectResponse)
async def verify(
    session: SessionDep,
    settings: AppSettingsDep,
    token: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    try:
        outcome = await SubscriberService(session).verify(token)
        await session.commit()
    except Exception:
        logger.exception("Subscription verification failed")
        return _redirect(settings, error="server_error")

    if outcome is VerificationOutcome.INVALID_TOKEN:
        return _redirect(settings, error="invalid_token")
    return _redirect(settings, status=outcome.value)


@router.get("/unsubscribe", summary="Unsubscribe via link", response_class=RedirectResponse)
async def unsubscribe_link(
    session: SessionDep,
    settings: AppSettingsDep,
    token: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    if not token:
        return _redirect(settings, error="invalid_token")
    try:
        removed = await SubscriberService(session).unsubscribe(token)
        await session.commit()
    except Exception:
        logger.exception("Unsubscribe failed")
        return _redirect(settings, error="server_error")

    if not removed:
        return _redirect(settings, error="not_found")
    return _redirect(settings, status="unsubscribed")


@router.post(
    "/unsubscribe",
    response_model=MessageResponse,
    summary="Unsubscribe with a token",
    responses={404: {"description": "Subscriber not found"}},
)
async def unsubscribe(payload: UnsubscribeRequest, session: SessionDep) -> MessageResponse:
    await SubscriberService(session).unsubscribe_or_raise(payload.token)
    await session.commit()
    return MessageResponse(message=UNSUBSCRIBED)
