"""Console email provider for development.

Logs emails instead of sending them. Always succeeds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
import uuid

from .base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from status_page.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleProvider(BaseEmailProvider):
    @property
    def provider_name(self) -> str:
        return "console"

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        message_id = f"console-{uuid.uuid4()}"
        from_email, from_name = self._sender(message)

        separator = "=" * 60
        output_lines = [
            "",
            separator,
            "EMAIL (Console Backend - Development Mode)",
            separator,
            f"Message-ID: {message_id}",
            f"From: {from_name} <{from_email}>" if from_name else f"From: {from_email}",
            f"To: {', '.join(message.all_recipients)}",
            f"Subject: {message.subject}",
            separator,
            message.body_text or "(no text body)",
            separator,
        ]
        logger.info("\n".join(output_lines))

        return EmailDeliveryResult.success_result(
            message_id=message_id,
            provider=self.provider_name,
            recipients=message.all_recipients,
        )
