"""Delivery result type and the channel contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
import logging
import time
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from status_page.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from status_page.features.notifications.messages import IncidentAlert
    from status_page.features.status.results import StatusChange

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


@dataclass
class DeliveryResult:
    """Result of one channel delivery attempt.

    Attributes:
        channel: Channel name (slack, discord, email)
        success: Whether delivery succeeded
        skipped: True when the channel is not configured or had no recipients
        status_code: HTTP status code for webhook channels
        response_time_ms: Time taken for delivery in milliseconds
        error_message: Error description if failed
        error_category: Error classification (network, http, exception)
        metadata: Channel-specific counters
    """

    channel: str
    success: bool
    skipped: bool = False
    status_code: int | None = None
    response_time_ms: int | None = None
    error_message: str | None = None
    error_category: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def skip(cls, channel: str, reason: str) -> DeliveryResult:
        return cls(channel=channel, success=False, skipped=True, metadata={"reason": reason})

    @property
    def outcome(self) -> str:
        """Metric label: ``success``, ``failure`` or ``skipped``."""
        if self.skipped:
            return "skipped"
        return "success" if self.success else "failure"


class NotificationChannel(Protocol):
    """Protocol every notification channel implements."""

    name: str

    @property
    def configured(self) -> bool: ...

    async def send_status_changes(self, changes: Sequence[StatusChange]) -> DeliveryResult: ...

    async def send_incident(self, alert: IncidentAlert) -> DeliveryResult: ...


def utc_clock() -> datetime:
    return datetime.now(UTC)


class WebhookChannel(ABC):
    """Chat webhook posting JSON payloads through a shared httpx client.

    Subclasses build the payloads; this class handles the POST, timing and
    error classification. Sends never raise.
    """

    name: str = "webhook"

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str | None,
        *,
        brand: str,
        site_url: str,
        timeout: float = 10.0,
        clock: Callable[[], datetime] = utc_clock,
    ) -> None:
        self._client = client
        self._url = url
        self._brand = brand
        self._site_url = site_url
        self._timeout = timeout
        self._clock = clock

    @property
    def configured(self) -> bool:
        return bool(self._url)

    @abstractmethod
    def status_payload(self, changes: Sequence[StatusChange]) -> dict[str, Any]: ...

    @abstractmethod
    def incident_payload(self, alert: IncidentAlert) -> dict[str, Any]: ...

    async def send_status_changes(self, changes: Sequence[StatusChange]) -> DeliveryResult:
        if not self.configured:
            logger.info(f"{self.name} webhook not configured, skipping")
            return DeliveryResult.skip(self.name, "not_configured")
        return await self.post(self.status_payload(changes))

    async def send_incident(self, alert: IncidentAlert) -> DeliveryResult:
        if not self.configured:
            logger.info(f"{self.name} webhook not configured, skipping")
            return DeliveryResult.skip(self.name, "not_configured")
        return await self.post(self.incident_payload(alert))

    async def post(self, payload: dict[str, Any]) -> DeliveryResult:
        """POST ``payload`` to the webhook; any 2xx is a success."""
        assert self._url is not None
        start_time = time.perf_counter()
        lazy_logger.debug(lambda: f"webhook.post: channel={self.name}")

        try:
            response = await self._client.post(self._url, json=payload, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            return DeliveryResult(
                channel=self.name,
                success=False,
                response_time_ms=self._elapsed_ms(start_time),
                error_message=f"Request timed out: {exc}",
                error_category="timeout",
            )
        except httpx.HTTPError as exc:
            return DeliveryResult(
                channel=self.name,
                success=False,
                response_time_ms=self._elapsed_ms(start_time),
                error_message=str(exc) or exc.__class__.__name__,
                error_category="network",
            )

        success = response.is_success
        return DeliveryResult(
            channel=self.name,
            success=success,
            status_code=response.status_code,
            response_time_ms=self._elapsed_ms(start_time),
            error_message=None if success else response.text[:500],
            error_category=None if success else "http",
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)
