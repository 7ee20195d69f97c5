"""Base email provider protocol and abstract class.

Defines the contract every email backend implements. Providers are built
from ``NotificationSettings``; sender defaults come from there.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
import logging
import time
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from status_page.core.settings.notifications import NotificationSettings
    from status_page.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Result of an email delivery attempt.

    Attributes:
        success: Whether delivery succeeded
        message_id: Provider-assigned message ID
        provider: Provider name (smtp, sendgrid, console)
        recipients_accepted: Accepted recipients
        recipients_rejected: Rejected recipients
        error: Error message if failed
        error_code: Error category for programmatic handling
        duration_ms: Time taken to send in milliseconds
        metadata: Provider-specific metadata
    """

    success: bool
    message_id: str | None
    provider: str
    recipients_accepted: list[str] = field(default_factory=list)
    recipients_rejected: list[str] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None
    duration_ms: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.success and not self.error:
            object.__setattr__(self, "error", "Unknown error")

    @classmethod
    def success_result(
        cls,
        message_id: str,
        provider: str,
        recipients: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmailDeliveryResult:
        return cls(
            success=True,
            message_id=message_id,
            provider=provider,
            recipients_accepted=recipients or [],
            metadata=metadata or {},
        )

    @classmethod
    def failure_result(
        cls,
        provider: str,
        error: str,
        error_code: str | None = None,
        recipients_rejected: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmailDeliveryResult:
        return cls(
            success=False,
            message_id=None,
            provider=provider,
            recipients_rejected=recipients_rejected or [],
            error=error,
            error_code=error_code,
            metadata=metadata or {},
        )


@runtime_checkable
class EmailProvider(Protocol):
    """Protocol defining the email provider interface."""

    @property
    def provider_name(self) -> str: ...

    async def send(self, message: EmailMessage) -> EmailDeliveryResult: ...


class BaseEmailProvider(ABC):
    """Abstract base class for email providers.

    Wraps ``_do_send`` with timing, logging and a catch-all that turns any
    unexpected exception into a failed result, so callers never see a raise.

    Subclasses must implement:
    - provider_name property
    - _do_send(): actual sending logic
    """

    def __init__(self, settings: NotificationSettings) -> None:
        self._settings = settings
        logger.info(f"{self.provider_name} email provider initialized")

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Implement the actual sending logic."""
        ...

    def _sender(self, message: EmailMessage) -> tuple[str, str | None]:
        from_email = str(message.from_email or self._settings.from_email)
        from_name = message.from_name or self._settings.from_name
        return from_email, from_name

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Send an email with timing and error handling.

        Args:
            message: The email message to send

        Returns:
            EmailDeliveryResult with delivery status
        """
        start_time = time.perf_counter()

        try:
            result = await self._do_send(message)
        except Exception as e:
            logger.exception(
                f"Unexpected error sending email via {self.provider_name}",
                extra={"provider": self.provider_name},
            )
            result = EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=str(e),
                error_code="UNEXPECTED_ERROR",
                recipients_rejected=message.all_recipients,
            )

        if result.duration_ms is None:
            result = replace(result, duration_ms=int((time.perf_counter() - start_time) * 1000))

        if result.success:
            logger.info(
                f"Email sent via {self.provider_name}",
                extra={
                    "message_id": result.message_id,
                    "provider": self.provider_name,
                    "recipients": len(result.recipients_accepted),
                    "duration_ms": result.duration_ms,
                },
            )
        else:
            logger.warning(
                f"Email send failed via {self.provider_name}",
                extra={
                    "provider": self.provider_name,
                    "error": result.error,
                    "error_code": result.error_code,
                    "duration_ms": result.duration_ms,
                },
            )
        return result
