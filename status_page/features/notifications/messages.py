"""Subjects and chat payloads for status-change and incident notifications.

Everything here is pure: callers pass the brand, site URL and clock so the
output is deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from status_page.features.status.levels import (
    ComponentType,
    IncidentSeverity,
    StatusLevel,
    parse_component,
    worst_status,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from status_page.features.status.results import StatusChange

SLACK_STATUS_EMOJI: dict[StatusLevel, str] = {
    StatusLevel.OPERATIONAL: ":white_check_mark:",
    StatusLevel.DEGRADED: ":warning:",
    StatusLevel.PARTIAL_OUTAGE: ":large_orange_diamond:",
    StatusLevel.MAJOR_OUTAGE: ":red_circle:",
}

DISCORD_STATUS_EMOJI: dict[StatusLevel, str] = {
    StatusLevel.OPERATIONAL: "✅",
    StatusLevel.DEGRADED: "⚠️",
    StatusLevel.PARTIAL_OUTAGE: "🟠",
    StatusLevel.MAJOR_OUTAGE: "🔴",
}

STATUS_COLORS: dict[StatusLevel, int] = {
    StatusLevel.OPERATIONAL: 0x22C55E,
    StatusLevel.DEGRADED: 0xEAB308,
    StatusLevel.PARTIAL_OUTAGE: 0xF97316,
    StatusLevel.MAJOR_OUTAGE: 0xEF4444,
}

SLACK_SEVERITY_EMOJI: dict[IncidentSeverity, str] = {
    IncidentSeverity.CRITICAL: ":rotating_light:",
    IncidentSeverity.MAJOR: ":warning:",
    IncidentSeverity.MINOR: ":information_source:",
}

DISCORD_SEVERITY_EMOJI: dict[IncidentSeverity, str] = {
    IncidentSeverity.CRITICAL: "🚨",
    IncidentSeverity.MAJOR: "⚠️",
    IncidentSeverity.MINOR: "ℹ️",
}

SEVERITY_COLORS: dict[IncidentSeverity, int] = {
    IncidentSeverity.CRITICAL: STATUS_COLORS[StatusLevel.MAJOR_OUTAGE],
    IncidentSeverity.MAJOR: STATUS_COLORS[StatusLevel.PARTIAL_OUTAGE],
    IncidentSeverity.MINOR: STATUS_COLORS[StatusLevel.DEGRADED],
}


@dataclass(slots=True, frozen=True)
class IncidentAlert:
    """An incident announcement fanned out to every channel."""

    title: str
    severity: IncidentSeverity
    message: str
    components: tuple[ComponentType, ...]

    @property
    def severity_label(self) -> str:
        return self.severity.value.capitalize()

    @property
    def component_labels(self) -> list[str]:
        return [component.label for component in self.components]


def _severity(value: IncidentSeverity | str) -> IncidentSeverity:
    try:
        return IncidentSeverity(value)
    except ValueError:
        return IncidentSeverity.MINOR


def build_incident_alert(
    title: str,
    severity: IncidentSeverity | str,
    message: str,
    components: Sequence[ComponentType | str],
) -> IncidentAlert:
    """Normalize raw incident fields; unknown components are dropped."""
    parsed = [parse_component(str(component)) for component in components]
    return IncidentAlert(
        title=title,
        severity=_severity(severity),
        message=message,
        components=tuple(component for component in parsed if component is not None),
    )


# ──────────────────────────────────────────────────────────────
# Email
# ──────────────────────────────────────────────────────────────


def status_change_subject(changes: Sequence[StatusChange], *, brand: str) -> str:
    if len(changes) == 1:
        change = changes[0]
        return f"{brand} Status: {change.component.label} is {change.new_status.label}"
    return f"{brand} Status: Multiple component status changes"


def incident_subject(title: str, *, brand: str) -> str:
    return f"{brand} Incident: {title}"


def verification_subject(*, brand: str) -> str:
    return f"Verify your {brand} Status subscription"


def verify_url(site_url: str, token: str) -> str:
    return f"{site_url}/api/subscribe/verify?token={token}"


def unsubscribe_url(site_url: str, token: str) -> str:
    return f"{site_url}/api/subscribe/unsubscribe?token={token}"


def change_rows(changes: Sequence[StatusChange]) -> list[dict[str, str]]:
    """Template rows of ``label``, ``previous`` and ``new`` status labels."""
    return [
        {
            "label": change.component.label,
            "previous": change.previous_status.label,
            "new": change.new_status.label,
        }
        for change in changes
    ]


def filter_changes(
    changes: Sequence[StatusChange],
    components: Sequence[str],
) -> list[StatusChange]:
    """Changes a subscriber asked for; an empty filter means all of them."""
    if not components:
        return list(changes)
    return [change for change in changes if change.component.value in components]


# ──────────────────────────────────────────────────────────────
# Slack
# ──────────────────────────────────────────────────────────────


def _slack_context(site_url: str) -> dict[str, Any]:
    return {
        "type": "context",
        "elements": [{"type": "mrkdwn", "text": f"<{site_url}|View Status Page>"}],
    }


def slack_status_payload(
    changes: Sequence[StatusChange],
    *,
    brand: str,
    site_url: str,
) -> dict[str, Any]:
    worst = worst_status(change.new_status for change in changes)
    return {
        "blocks": [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"{SLACK_STATUS_EMOJI[worst]} {brand} Status Update",
                    "emoji": True,
                },
            },
            {
                "type": "section",
                "fields": [
                    {
                        "type": "mrkdwn",
                        "text": (
                            f"*{change.component.label}*\n"
                            f"{SLACK_STATUS_EMOJI[change.previous_status]} → "
                            f"{SLACK_STATUS_EMOJI[change.new_status]} {change.new_status.label}"
                        ),
                    }
                    for change in changes
                ],
            },
            _slack_context(site_url),
        ]
    }


def slack_incident_payload(alert: IncidentAlert, *, site_url: str) -> dict[str, Any]:
    return {
        "blocks": [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"{SLACK_SEVERITY_EMOJI[alert.severity]} Incident: {alert.title}",
                    "emoji": True,
                },
            },
            {"type": "section", "text": {"type": "mrkdwn", "text": alert.message}},
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Severity:*\n{alert.severity_label}"},
                    {
                        "type": "mrkdwn",
                        "text": f"*Affected:*\n{', '.join(alert.component_labels)}",
                    },
                ],
            },
            _slack_context(site_url),
        ]
    }


# ──────────────────────────────────────────────────────────────
# Discord
# ──────────────────────────────────────────────────────────────


def _iso(now: datetime) -> str:
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def discord_status_payload(
    changes: Sequence[StatusChange],
    *,
    brand: str,
    now: datetime,
) -> dict[str, Any]:
    worst = worst_status(change.new_status for change in changes)
    embed = {
        "title": f"{DISCORD_STATUS_EMOJI[worst]} {brand} Status Update",
        "color": STATUS_COLORS[worst],
        "fields": [
            {
                "name": change.component.label,
                "value": (
                    f"{DISCORD_STATUS_EMOJI[change.previous_status]} → "
                    f"{DISCORD_STATUS_EMOJI[change.new_status]} {change.new_status.label}"
                ),
                "inline": True,
            }
            for change in changes
        ],
        "timestamp": _iso(now),
        "footer": {"text": f"{brand} Status"},
    }
    return {"embeds": [embed]}


def discord_incident_payload(
    alert: IncidentAlert,
    *,
    brand: str,
    now: datetime,
) -> dict[str, Any]:
    embed = {
        "title": f"{DISCORD_SEVERITY_EMOJI[alert.severity]} Incident: {alert.title}",
        "description": alert.message,
        "color": SEVERITY_COLORS[alert.severity],
        "fields": [
            {"name": "Severity", "value": alert.severity_label, "inline": True},
            {
                "name": "Affected Components",
                "value": ", ".join(alert.component_labels),
                "inline": True,
            },
        ],
        "timestamp": _iso(now),
        "footer": {"text": f"{brand} Status"},
    }
    return {"embeds": [embed]}
