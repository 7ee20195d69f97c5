"""Unit tests for NotificationService fan-out."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from status_page.features.notifications.channels import DeliveryResult
from status_page.features.notifications.service import (
    NotificationService,
    build_notification_service,
)
from status_page.features.status.levels import ComponentType, StatusLevel
from status_page.features.status.results import StatusChange

CHANGE = StatusChange(
    component=ComponentType.DATABASE,
    previous_status=StatusLevel.OPERATIONAL,
    new_status=StatusLevel.PARTIAL_OUTAGE,
)


def _channel(name: str, *, result: DeliveryResult | None = None, error: Exception | None = None):
    channel = MagicMock()
    channel.name = name
    channel.configured = True
    if error is not None:
        channel.send_status_changes = AsyncMock(side_effect=error)
        channel.send_incident = AsyncMock(side_effect=error)
    else:
        outcome = result or DeliveryResult(channel=name, success=True)
        channel.send_status_changes = AsyncMock(return_value=outcome)
        channel.send_incident = AsyncMock(return_value=outcome)
    return channel


class TestNotificationService:
    async def test_empty_changes_are_a_no_op(self):
        slack = _channel("slack")
        service = NotificationService([slack])

        assert await service.notify_status_changes([]) == []
        slack.send_status_changes.assert_not_awaited()

    async def test_every_channel_receives_changes(self):
        slack, discord = _channel("slack"), _channel("discord")
        service = NotificationService([slack, discord])

        results = await service.notify_status_changes([CHANGE])

        assert [r.channel for r in results] == ["slack", "discord"]
        slack.send_status_changes.assert_awaited_once_with([CHANGE])
        discord.send_status_changes.assert_awaited_once_with([CHANGE])

    async def test_channel_exception_is_swallowed(self):
        broken = _channel("slack", error=RuntimeError("webhook exploded"))
        healthy = _channel("discord")
        service = NotificationService([broken, healthy])

        results = await service.notify_status_changes([CHANGE])

        assert results[0].success is False
        assert results[0].error_message == "webhook exploded"
        assert results[0].error_category == "exception"
        assert results[1].success is True

    async def test_incident_alert_is_normalized(self):
        slack = _channel("slack")
        service = NotificationService([slack])

        await service.notify_incident("Outage", "major", "Investigating", ["api", "storage"])

        alert = slack.send_incident.await_args.args[0]
        assert alert.title == "Outage"
        assert alert.components == (ComponentType.API, ComponentType.STORAGE)

    async def test_verification_without_email_channel(self):
        service = NotificationService([_channel("slack")])
        assert await service.send_verification_email("a@example.com", "tok") is False


class TestBuildNotificationService:
    async def test_wires_all_channels(self, database, http_client, app_settings):
        from status_page.core.settings import NotificationSettings

        service = build_notification_service(
            database=database,
            client=http_client,
            app_settings=app_settings,
            settings=NotificationSettings(slack_webhook_url="https://hooks.example.com/s"),
        )

        names = [channel.name for channel in service.channels]
        assert names == ["slack", "discord", "email"]
        configured = {channel.name: channel.configured for channel in service.channels}
        assert configured == {"slack": True, "discord": False, "email": False}
