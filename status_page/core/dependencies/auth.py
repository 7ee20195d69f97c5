"""Authorization dependencies for admin and scheduled-trigger endpoints.

Admins authenticate with a per-admin API key in the ``X-API-Key`` header; the
key identifies the admin's email, which is recorded as ``created_by``. The
scheduled trigger presents ``Authorization: Bearer <cron secret>``.

Usage:
    @router.post("/incidents")
    async def create_incident(admin: AdminDep, ...):
        ...

    @router.post("/check", dependencies=[Depends(verify_cron_secret)])
    async def run_check(...):
        ...
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header

from status_page.core.exceptions import UnauthorizedException
from status_page.core.settings import SecuritySettings, get_security_settings
from status_page.infra.logging import set_log_context

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AdminPrincipal:
    """Authenticated admin identity."""

    email: str


def _match_admin(settings: SecuritySettings, api_key: str) -> str | None:
    """Return the admin email owning ``api_key``; every key is compared."""
    matched: str | None = None
    for email, secret in settings.admin_api_keys.items():
        if hmac.compare_digest(secret.get_secret_value().encode(), api_key.encode()):
            matched = email
    return matched


async def require_admin(
    settings: Annotated[SecuritySettings, Depends(get_security_settings)],
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> AdminPrincipal:
    """Resolve the calling admin or raise 401."""
    if not x_api_key:
        raise UnauthorizedException(
            detail="Missing admin API key",
            type="missing-api-key",
        )

    email = _match_admin(settings, x_api_key)
    if email is None:
        logger.warning("Rejected admin request with unknown API key")
        raise UnauthorizedException(
            detail="Invalid admin API key",
            type="invalid-api-key",
        )

    set_log_context(admin=email)
    return AdminPrincipal(email=email)


async def verify_cron_secret(
    settings: Annotated[SecuritySettings, Depends(get_security_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Require ``Bearer <cron_secret>`` when a cron secret is configured."""
    if settings.cron_secret is None:
        return

    expected = f"Bearer {settings.cron_secret.get_secret_value()}"
    if authorization is None or not hmac.compare_digest(authorization.encode(), expected.encode()):
        logger.warning("Rejected scheduled trigger with bad credentials")
        raise UnauthorizedException(
            detail="Unauthorized",
            type="invalid-cron-secret",
        )


AdminDep = Annotated[AdminPrincipal, Depends(require_admin)]

__all__ = [
    "AdminDep",
    "AdminPrincipal",
    "require_admin",
    "verify_cron_secret",
]
