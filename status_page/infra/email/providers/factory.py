"""Select the email provider for the configured backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .console import ConsoleProvider
from .sendgrid import SendGridProvider
from .smtp import SMTPProvider

if TYPE_CHECKING:
    import httpx

    from status_page.core.settings.notifications import NotificationSettings

    from .base import BaseEmailProvider

logger = logging.getLogger(__name__)


def create_email_provider(
    settings: NotificationSettings,
    client: httpx.AsyncClient | None = None,
) -> BaseEmailProvider | None:
    """Build the provider for ``settings.email_backend``.

    Returns None when email is disabled or the backend lacks credentials,
    in which case email delivery is skipped.
    """
    if not settings.email_configured:
        logger.info(
            "Email delivery not configured, subscriber emails will be skipped",
            extra={"backend": settings.email_backend, "enabled": settings.email_enabled},
        )
        return None

    if settings.email_backend == "sendgrid":
        return SendGridProvider(settings, client=client)
    if settings.email_backend == "smtp":
        return SMTPProvider(settings)
    return ConsoleProvider(settings)
