"""Best-effort fan-out of status-change and incident notifications.

Every channel runs concurrently. A channel failure, including an unexpected
exception, is logged and counted, never raised to the caller.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from status_page.core.services import BaseService
from status_page.infra.email import create_email_provider
from status_page.infra.metrics import notifications_total

from .channels import DeliveryResult, DiscordChannel, EmailChannel, SlackChannel
from .messages import build_incident_alert

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    import httpx

    from status_page.core.settings import AppSettings, NotificationSettings
    from status_page.features.status.levels import ComponentType, IncidentSeverity
    from status_page.features.status.results import StatusChange
    from status_page.infra.database import Database

    from .channels import NotificationChannel


class NotificationService(BaseService):
    """Deliver notifications over every configured channel.

    Example:
        notifier = NotificationService([slack, discord], email_channel=email)
        await notifier.notify_status_changes(changes)
    """

    def __init__(
        self,
        channels: Sequence[NotificationChannel],
        *,
        email_channel: EmailChannel | None = None,
    ) -> None:
        super().__init__()
        self._channels = list(channels)
        self._email = email_channel
        if email_channel is not None and email_channel not in self._channels:
            self._channels.append(email_channel)

    @property
    def channels(self) -> list[NotificationChannel]:
        return list(self._channels)

    async def _deliver(
        self,
        channel: NotificationChannel,
        event: str,
        send: Awaitable[DeliveryResult],
    ) -> DeliveryResult:
        try:
            result = await send
        except Exception as exc:
            self.logger.exception(
                "Notification channel raised",
                extra={"channel": channel.name, "event": event},
            )
            result = DeliveryResult(
                channel=channel.name,
                success=False,
                error_message=str(exc) or exc.__class__.__name__,
                error_category="exception",
            )

        notifications_total.labels(
            channel=channel.name, event=event, result=result.outcome
        ).inc()

        if result.skipped:
            self._lazy.debug(lambda: f"notify.{event}: {channel.name} skipped ({result.metadata})")
        elif result.success:
            self.logger.info(
                "Notification delivered",
                extra={"channel": channel.name, "event": event, **result.metadata},
            )
        else:
            self.logger.warning(
                "Notification delivery failed",
                extra={
                    "channel": channel.name,
                    "event": event,
                    "status_code": result.status_code,
                    "error": result.error_message,
                    "error_category": result.error_category,
                },
            )
        return result

    async def notify_status_changes(self, changes: Sequence[StatusChange]) -> list[DeliveryResult]:
        """Announce component transitions; a no-op for an empty change list."""
        if not changes:
            return []

        self.logger.info(
            "Sending status change notifications",
            extra={"changes": [f"{c.component}:{c.previous_status}->{c.new_status}" for c in changes]},
        )
        return list(
            await asyncio.gather(
                *(
                    self._deliver(channel, "status_change", channel.send_status_changes(changes))
                    for channel in self._channels
                )
            )
        )

    async def notify_incident(
        self,
        title: str,
        severity: IncidentSeverity | str,
        message: str,
        components: Sequence[ComponentType | str],
    ) -> list[DeliveryResult]:
        alert = build_incident_alert(title, severity, message, components)
        self.logger.info(
            "Sending incident notifications",
            extra={"title": title, "severity": alert.severity.value},
        )
        return list(
            await asyncio.gather(
                *(
                    self._deliver(channel, "incident", channel.send_incident(alert))
                    for channel in self._channels
                )
            )
        )

    async def send_verification_email(self, email: str, token: str) -> bool:
        """Send the subscription verification link; True when the email went out."""
        if self._email is None:
            self.logger.info("Email channel unavailable, verification email not sent")
            return False
        result = await self._deliver(
            self._email, "verification", self._email.send_verification(email, token)
        )
        return result.success


def build_notification_service(
    *,
    database: Database,
    client: httpx.AsyncClient,
    app_settings: AppSettings,
    settings: NotificationSettings,
) -> NotificationService:
    """Wire Slack, Discord and email channels from settings."""
    common = {"brand": app_settings.brand_name, "site_url": app_settings.site_url}
    slack = SlackChannel(
        client, settings.slack_webhook_url, timeout=settings.webhook_timeout, **common
    )
    discord = DiscordChannel(
        client, settings.discord_webhook_url, timeout=settings.webhook_timeout, **common
    )
    email = EmailChannel(database, create_email_provider(settings, client=client), **common)
    return NotificationService([slack, discord], email_channel=email)
