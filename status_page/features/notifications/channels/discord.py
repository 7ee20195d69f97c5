"""Discord webhook channel (embeds)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from status_page.features.notifications.messages import (
    discord_incident_payload,
    discord_status_payload,
)

from .base import WebhookChannel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from status_page.features.notifications.messages import IncidentAlert
    from status_page.features.status.results import StatusChange


class DiscordChannel(WebhookChannel):
    name = "discord"

    def status_payload(self, changes: Sequence[StatusChange]) -> dict[str, Any]:
        return discord_status_payload(changes, brand=self._brand, now=self._clock())

    def incident_payload(self, alert: IncidentAlert) -> dict[str, Any]:
        return discord_incident_payload(alert, brand=self._brand, now=self._clock())
