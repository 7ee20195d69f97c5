"""Unit tests for email providers and the provider factory."""

from __future__ import annotations

import json

import httpx
import pytest

from status_page.core.settings import NotificationSettings
from status_page.infra.email import EmailMessage, create_email_provider
from status_page.infra.email.providers.console import ConsoleProvider
from status_page.infra.email.providers.sendgrid import SendGridProvider
from status_page.infra.email.providers.smtp import SMTPProvider


@pytest.fixture
def message() -> EmailMessage:
    return EmailMessage(
        to=["reader@example.com"],
        subject="Acme Status: API is Major Outage",
        body_text="API: Operational -> Major Outage",
        body_html="<p>API: Operational -&gt; Major Outage</p>",
    )


@pytest.fixture
def sendgrid_settings() -> NotificationSettings:
    return NotificationSettings(
        email_enabled=True,
        email_backend="sendgrid",
        sendgrid_api_key="SG.test-key",
        from_email="status@example.com",
        from_name="Acme Status",
    )


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestSendGridProvider:
    def test_requires_api_key(self):
        settings = NotificationSettings(email_enabled=True, email_backend="sendgrid")
        with pytest.raises(ValueError, match="SENDGRID_API_KEY"):
            SendGridProvider(settings)

    async def test_accepted(self, sendgrid_settings, message):
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(202, headers={"X-Message-Id": "sg-123"})

        async with _client(handler) as client:
            result = await SendGridProvider(sendgrid_settings, client=client).send(message)

        assert result.success
        assert result.message_id == "sg-123"
        assert result.duration_ms is not None

        request = captured[0]
        assert str(request.url) == "https://api.sendgrid.com/v3/mail/send"
        assert request.headers["Authorization"] == "Bearer SG.test-key"
        payload = json.loads(request.content)
        assert payload["from"] == {"email": "status@example.com", "name": "Acme Status"}
        assert payload["personalizations"] == [{"to": [{"email": "reader@example.com"}]}]
        assert [part["type"] for part in payload["content"]] == ["text/plain", "text/html"]

    @pytest.mark.parametrize(
        ("status_code", "error_code"),
        [(400, "BAD_REQUEST"), (401, "AUTH_FAILED"), (429, "RATE_LIMITED"), (503, "SERVER_ERROR")],
    )
    async def test_api_errors(self, sendgrid_settings, message, status_code, error_code):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"errors": [{"message": "nope"}]})

        async with _client(handler) as client:
            result = await SendGridProvider(sendgrid_settings, client=client).send(message)

        assert not result.success
        assert result.error_code == error_code
        assert "nope" in result.error
        assert result.recipients_rejected == ["reader@example.com"]

    async def test_timeout(self, sendgrid_settings, message):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async with _client(handler) as client:
            result = await SendGridProvider(sendgrid_settings, client=client).send(message)

        assert not result.success
        assert result.error_code == "TIMEOUT"


class TestConsoleProvider:
    async def test_always_succeeds(self, message):
        provider = ConsoleProvider(NotificationSettings(email_enabled=True, email_backend="console"))
        result = await provider.send(message)

        assert result.success
        assert result.message_id.startswith("console-")
        assert result.recipients_accepted == ["reader@example.com"]


class TestFactory:
    def test_disabled_returns_none(self):
        assert create_email_provider(NotificationSettings(email_enabled=False)) is None

    def test_sendgrid_without_key_returns_none(self):
        settings = NotificationSettings(email_enabled=True, email_backend="sendgrid")
        assert create_email_provider(settings) is None

    def test_backends(self, sendgrid_settings):
        assert isinstance(create_email_provider(sendgrid_settings), SendGridProvider)
        smtp = NotificationSettings(email_enabled=True, email_backend="smtp")
        assert isinstance(create_email_provider(smtp), SMTPProvider)
        console = NotificationSettings(email_enabled=True, email_backend="console")
        assert isinstance(create_email_provider(console), ConsoleProvider)


class TestEmailMessage:
    def test_requires_a_recipient(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            EmailMessage(to=[], subject="s", body_text="b")
