"""SendGrid email provider (API v3 over httpx)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from .base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from status_page.core.settings.notifications import NotificationSettings
    from status_page.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class SendGridProvider(BaseEmailProvider):
    """SendGrid email provider using API v3.

    A shared ``httpx.AsyncClient`` may be injected; otherwise a short-lived
    client is opened per send.

    Example:
        provider = SendGridProvider(settings, client=http_client)
        result = await provider.send(message)
    """

    SEND_ENDPOINT = "/mail/send"

    def __init__(
        self,
        settings: NotificationSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if settings.sendgrid_api_key is None:
            msg = "SendGrid provider requires NOTIFY_SENDGRID_API_KEY"
            raise ValueError(msg)
        super().__init__(settings)
        self._api_key = settings.sendgrid_api_key.get_secret_value()
        self._base_url = settings.sendgrid_api_url.rstrip("/")
        self._timeout = settings.email_timeout
        self._client = client

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        from_email, from_name = self._sender(message)

        payload: dict[str, Any] = {
            "personalizations": [{"to": [{"email": email} for email in message.all_recipients]}],
            "from": {"email": from_email},
            "subject": message.subject,
        }
        if from_name:
            payload["from"]["name"] = from_name

        content_parts: list[dict[str, str]] = []
        if message.body_text:
            content_parts.append({"type": "text/plain", "value": message.body_text})
        if message.body_html:
            content_parts.append({"type": "text/html", "value": message.body_html})
        if content_parts:
            payload["content"] = content_parts

        return payload

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self._base_url}{self.SEND_ENDPOINT}"
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self._client is not None:
            return await self._client.post(url, json=payload, headers=headers, timeout=self._timeout)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, json=payload, headers=headers)

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        payload = self._build_payload(message)

        try:
            response = await self._post(payload)
        except httpx.TimeoutException:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="SendGrid API request timed out",
                error_code="TIMEOUT",
                recipients_rejected=message.all_recipients,
            )
        except httpx.HTTPError as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"HTTP error: {e}",
                error_code="HTTP_ERROR",
                recipients_rejected=message.all_recipients,
            )

        # 202 Accepted is the only success status for /mail/send
        if response.status_code == 202:
            message_id = response.headers.get(
                "X-Message-Id", f"sg-{response.headers.get('X-Request-Id', 'unknown')}"
            )
            return EmailDeliveryResult.success_result(
                message_id=message_id,
                provider=self.provider_name,
                recipients=message.all_recipients,
            )

        return EmailDeliveryResult.failure_result(
            provider=self.provider_name,
            error=f"SendGrid API error ({response.status_code}): {self._error_body(response)}",
            error_code=self._classify_http_error(response.status_code),
            recipients_rejected=message.all_recipients,
            metadata={"status_code": response.status_code},
        )

    @staticmethod
    def _error_body(response: httpx.Response) -> str:
        try:
            error_json = response.json()
        except ValueError:
            return response.text
        if isinstance(error_json, dict) and "errors" in error_json:
            return "; ".join(
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in error_json["errors"]
            )
        return response.text

    @staticmethod
    def _classify_http_error(status_code: int) -> str:
        if status_code == 401:
            return "AUTH_FAILED"
        if status_code == 403:
            return "FORBIDDEN"
        if status_code == 429:
            return "RATE_LIMITED"
        if status_code == 400:
            return "BAD_REQUEST"
        if status_code >= 500:
            return "SERVER_ERROR"
        return "API_ERROR"
