"""Subscriber email channel.

Loads verified subscribers, filters by each subscriber's component
preferences and sends one rendered email per recipient through the
configured provider.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING

from status_page.features.notifications.messages import (
    change_rows,
    filter_changes,
    incident_subject,
    status_change_subject,
    unsubscribe_url,
    verification_subject,
    verify_url,
)
from status_page.features.subscribers.repository import (
    SubscriberRepository,
    get_subscriber_repository,
)
from status_page.infra.email import EmailMessage, get_template_renderer

from .base import DeliveryResult, utc_clock

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from status_page.features.notifications.messages import IncidentAlert
    from status_page.features.status.results import StatusChange
    from status_page.features.subscribers.models import Subscriber
    from status_page.infra.database import Database
    from status_page.infra.email import BaseEmailProvider, EmailDeliveryResult, EmailTemplateRenderer

logger = logging.getLogger(__name__)


class EmailChannel:
    name = "email"

    def __init__(
        self,
        database: Database,
        provider: BaseEmailProvider | None,
        *,
        brand: str,
        site_url: str,
        renderer: EmailTemplateRenderer | None = None,
        repository: SubscriberRepository | None = None,
        clock: Callable[[], datetime] = utc_clock,
    ) -> None:
        self._database = database
        self._provider = provider
        self._brand = brand
        self._site_url = site_url
        self._renderer = renderer or get_template_renderer()
        self._repository = repository or get_subscriber_repository()
        self._clock = clock

    @property
    def configured(self) -> bool:
        return self._provider is not None

    async def _verified_subscribers(self) -> Sequence[Subscriber]:
        async with self._database.session() as session:
            return await self._repository.list_verified(session)

    async def _send(
        self,
        provider: BaseEmailProvider,
        to: str,
        subject: str,
        template: str,
        **context: object,
    ) -> EmailDeliveryResult:
        html, text = self._renderer.render(
            template, brand_name=self._brand, site_url=self._site_url, **context
        )
        message = EmailMessage(to=[to], subject=subject, body_text=text, body_html=html)
        return await provider.send(message)

    def _summarize(self, sent: int, failed: int) -> DeliveryResult:
        if sent == 0 and failed == 0:
            return DeliveryResult.skip(self.name, "no_recipients")
        return DeliveryResult(
            channel=self.name,
            success=failed == 0,
            error_message=f"{failed} of {sent + failed} emails failed" if failed else None,
            error_category="provider" if failed else None,
            metadata={"sent": sent, "failed": failed},
        )

    async def send_status_changes(self, changes: Sequence[StatusChange]) -> DeliveryResult:
        provider = self._provider
        if provider is None:
            logger.info("Email delivery not configured, skipping status change emails")
            return DeliveryResult.skip(self.name, "not_configured")

        subscribers = await self._verified_subscribers()
        if not subscribers:
            logger.info("No verified subscribers to notify")
            return DeliveryResult.skip(self.name, "no_recipients")

        detected_at = self._clock()
        sent = failed = 0
        for subscriber in subscribers:
            relevant = filter_changes(changes, subscriber.components)
            if not relevant:
                continue
            result = await self._send(
                provider,
                subscriber.email,
                status_change_subject(relevant, brand=self._brand),
                "status_change",
                changes=change_rows(relevant),
                detected_at=detected_at,
                unsubscribe_url=unsubscribe_url(self._site_url, subscriber.unsubscribe_token),
            )
            if result.success:
                sent += 1
            else:
                failed += 1
        return self._summarize(sent, failed)

    async def send_incident(self, alert: IncidentAlert) -> DeliveryResult:
        provider = self._provider
        if provider is None:
            logger.info("Email delivery not configured, skipping incident emails")
            return DeliveryResult.skip(self.name, "not_configured")

        subscribers = await self._verified_subscribers()
        affected = [component.value for component in alert.components]
        sent = failed = 0
        for subscriber in subscribers:
            if not subscriber.wants(affected):
                continue
            result = await self._send(
                provider,
                subscriber.email,
                incident_subject(alert.title, brand=self._brand),
                "incident",
                title=alert.title,
                severity=alert.severity.value,
                message=alert.message,
                components=alert.component_labels,
                unsubscribe_url=unsubscribe_url(self._site_url, subscriber.unsubscribe_token),
            )
            if result.success:
                sent += 1
            else:
                failed += 1
        return self._summarize(sent, failed)

    async def send_verification(self, email: str, token: str) -> DeliveryResult:
        provider = self._provider
        if provider is None:
            logger.info("Email delivery not configured, skipping verification email")
            return DeliveryResult.skip(self.name, "not_configured")

        result = await self._send(
            provider,
            email,
            verification_subject(brand=self._brand),
            "verify_subscription",
            verify_url=verify_url(self._site_url, token),
        )
        return DeliveryResult(
            channel=self.name,
            success=result.success,
            response_time_ms=result.duration_ms,
            error_message=result.error,
            error_category=result.error_code,
        )
