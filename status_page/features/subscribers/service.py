"""Subscription lifecycle: subscribe, verify and unsubscribe."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
import secrets
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from status_page.core.exceptions import NotFoundException
from status_page.core.services import BaseService

from .models import Subscriber
from .repository import SubscriberRepository, get_subscriber_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from status_page.features.notifications.service import NotificationService

    from .schemas import SubscribeRequest

ALREADY_SUBSCRIBED = "You are already subscribed to status updates."
VERIFICATION_RESENT = "Verification email resent. Please check your inbox."
AUTO_VERIFIED = "Subscribed successfully! (auto-verified in development)"
CHECK_YOUR_EMAIL = "Please check your email to verify your subscription."
UNSUBSCRIBED = "Successfully unsubscribed"


class VerificationOutcome(StrEnum):
    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
    INVALID_TOKEN = "invalid_token"


def generate_token() -> str:
    """64 hex characters."""
    return secrets.token_hex(32)


class SubscriberService(BaseService):
    """Manage email subscribers.

    Mutating methods flush; the router commits.
    """

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationService | None = None,
        *,
        auto_verify: bool = False,
        repository: SubscriberRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._notifier = notifier
        self._auto_verify = auto_verify
        self._repository = repository or get_subscriber_repository()

    async def _send_verification(self, subscriber: Subscriber) -> bool:
        if self._notifier is None or subscriber.verification_token is None:
            return False
        return await self._notifier.send_verification_email(
            subscriber.email, subscriber.verification_token
        )

    def _mark_verified(self, subscriber: Subscriber) -> None:
        subscriber.verified = True
        subscriber.verified_at = datetime.now(UTC)
        subscriber.verification_token = None

    async def _resubscribe(self, existing: Subscriber) -> str:
        if existing.verified:
            return ALREADY_SUBSCRIBED
        if existing.verification_token is None:
            existing.verification_token = generate_token()
            await self._session.flush()
        await self._send_verification(existing)
        return VERIFICATION_RESENT

    async def subscribe(self, payload: SubscribeRequest) -> str:
        """Register ``payload.email`` and return the user-facing message.

        A verified address is left alone. An unverified one gets a fresh
        verification email. When the email cannot be sent and auto-verify is
        enabled, a new subscriber is verified immediately. A concurrent insert
        of the same address rolls back this session and is answered like an
        existing subscriber.
        """
        existing = await self._repository.get_by_email(self._session, payload.email)
        if existing is not None:
            return await self._resubscribe(existing)

        subscriber = Subscriber(
            email=payload.email,
            components=[c.value for c in payload.components],
            verified=False,
            verification_token=generate_token(),
            unsubscribe_token=generate_token(),
        )
        try:
            await self._repository.create(self._session, subscriber)
        except IntegrityError:
            # Another request inserted this email after our lookup
            await self._session.rollback()
            existing = await self._repository.get_by_email(self._session, payload.email)
            if existing is None:
                raise
            self.logger.info(
                "Subscriber created concurrently, reusing existing row",
                extra={"subscriber_id": existing.id},
            )
            return await self._resubscribe(existing)
        self.logger.info(
            "Subscriber created",
            extra={"subscriber_id": subscriber.id, "components": subscriber.components},
        )

        sent = await self._send_verification(subscriber)
        if not sent and self._auto_verify:
            self._mark_verified(subscriber)
            await self._session.flush()
            self.logger.info(
                "Subscriber auto-verified, verification email not sent",
                extra={"subscriber_id": subscriber.id},
            )
            return AUTO_VERIFIED
        return CHECK_YOUR_EMAIL

    async def verify(self, token: str | None) -> VerificationOutcome:
        if not token:
            return VerificationOutcome.INVALID_TOKEN
        subscriber = await self._repository.get_by_verification_token(self._session, token)
        if subscriber is None:
            return VerificationOutcome.INVALID_TOKEN
        if subscriber.verified:
            return VerificationOutcome.ALREADY_VERIFIED

        self._mark_verified(subscriber)
        await self._session.flush()
        self.logger.info("Subscriber verified", extra={"subscriber_id": subscriber.id})
        return VerificationOutcome.VERIFIED

    async def unsubscribe(self, token: str) -> bool:
        """Delete the subscriber owning ``token``; False when none does."""
        subscriber = await self._repository.get_by_unsubscribe_token(self._session, token)
        if subscriber is None:
            return False
        await self._repository.delete(self._session, subscriber)
        return True

    async def unsubscribe_or_raise(self, token: str) -> None:
        if not await self.unsubscribe(token):
            raise NotFoundException(detail="Subscriber not found", type="subscriber-not-found")
