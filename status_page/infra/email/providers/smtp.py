"""SMTP email provider using aiosmtplib."""

from __future__ import annotations

from datetime import UTC, datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
import ssl
from typing import TYPE_CHECKING
import uuid

import aiosmtplib

from .base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from status_page.core.settings.notifications import NotificationSettings
    from status_page.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class SMTPProvider(BaseEmailProvider):
    """SMTP email provider.

    Opens one connection per message. STARTTLS and implicit TLS follow
    ``smtp_use_tls`` / ``smtp_use_ssl``.
    """

    def __init__(self, settings: NotificationSettings) -> None:
        super().__init__(settings)
        self._host = settings.smtp_host
        self._port = settings.smtp_port
        self._username = settings.smtp_username
        self._password = (
            settings.smtp_password.get_secret_value() if settings.smtp_password else None
        )
        self._use_tls = settings.smtp_use_tls
        self._use_ssl = settings.smtp_use_ssl
        self._timeout = settings.email_timeout

    @property
    def provider_name(self) -> str:
        return "smtp"

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        mime_msg = self._build_mime_message(message)
        recipients = message.all_recipients

        smtp = aiosmtplib.SMTP(
            hostname=self._host,
            port=self._port,
            use_tls=self._use_ssl,
            start_tls=self._use_tls,
            tls_context=ssl.create_default_context() if (self._use_tls or self._use_ssl) else None,
            timeout=self._timeout,
        )

        try:
            async with smtp:
                if self._username and self._password:
                    await smtp.login(self._username, self._password)
                await smtp.send_message(mime_msg)
        except aiosmtplib.SMTPAuthenticationError as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"SMTP authentication failed: {e}",
                error_code="AUTH_FAILED",
                recipients_rejected=recipients,
            )
        except aiosmtplib.SMTPRecipientsRefused as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"Recipients refused: {e}",
                error_code="RECIPIENTS_REFUSED",
                recipients_rejected=recipients,
            )
        except aiosmtplib.SMTPConnectError as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"Could not connect to {self._host}:{self._port}: {e}",
                error_code="CONNECTION_ERROR",
                recipients_rejected=recipients,
            )
        except aiosmtplib.SMTPException as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"SMTP error: {e}",
                error_code="SMTP_ERROR",
                recipients_rejected=recipients,
            )

        return EmailDeliveryResult.success_result(
            message_id=mime_msg["Message-ID"],
            provider=self.provider_name,
            recipients=recipients,
        )

    def _build_mime_message(self, message: EmailMessage) -> MIMEMultipart:
        from_email, from_name = self._sender(message)

        mime_msg = MIMEMultipart("alternative")
        mime_msg["From"] = f"{from_name} <{from_email}>" if from_name else from_email
        mime_msg["To"] = ", ".join(message.all_recipients)
        mime_msg["Subject"] = message.subject
        mime_msg["Message-ID"] = f"<{uuid.uuid4()}@{self._host}>"
        mime_msg["Date"] = datetime.now(UTC).strftime("%a, %d %b %Y %H:%M:%S +0000")

        # Plain text first so clients prefer the HTML part
        if message.body_text:
            mime_msg.attach(MIMEText(message.body_text, "plain", "utf-8"))
        if message.body_html:
            mime_msg.attach(MIMEText(message.body_html, "html", "utf-8"))
        return mime_msg
