"""Slack incoming-webhook channel (block kit messages)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from status_page.features.notifications.messages import (
    slack_incident_payload,
    slack_status_payload,
)

from .base import WebhookChannel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from status_page.features.notifications.messages import IncidentAlert
    from status_page.features.status.results import StatusChange


class SlackChannel(WebhookChannel):
    name = "slack"

    def status_payload(self, changes: Sequence[StatusChange]) -> dict[str, Any]:
        return slack_status_payload(changes, brand=self._brand, site_url=self._site_url)

    def incident_payload(self, alert: IncidentAlert) -> dict[str, Any]:
        return slack_incident_payload(alert, site_url=self._site_url)
