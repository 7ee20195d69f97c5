"""Unit tests for notification subjects and chat payloads."""

from __future__ import annotations

from datetime import UTC, datetime

from status_page.features.notifications.messages import (
    build_incident_alert,
    change_rows,
    discord_incident_payload,
    discord_status_payload,
    filter_changes,
    incident_subject,
    slack_incident_payload,
    slack_status_payload,
    status_change_subject,
    unsubscribe_url,
    verification_subject,
    verify_url,
)
from status_page.features.status.levels import ComponentType, IncidentSeverity, StatusLevel
from status_page.features.status.results import StatusChange

NOW = datetime(2026, 3, 15, 12, 30, tzinfo=UTC)


def _change(component: ComponentType, before: StatusLevel, after: StatusLevel) -> StatusChange:
    return StatusChange(component=component, previous_status=before, new_status=after)


API_DOWN = _change(ComponentType.API, StatusLevel.OPERATIONAL, StatusLevel.MAJOR_OUTAGE)
CACHE_SLOW = _change(ComponentType.CACHE, StatusLevel.OPERATIONAL, StatusLevel.DEGRADED)


class TestSubjects:
    def test_single_change_subject(self):
        assert status_change_subject([API_DOWN], brand="Acme") == "Acme Status: API is Major Outage"

    def test_multiple_change_subject(self):
        assert (
            status_change_subject([API_DOWN, CACHE_SLOW], brand="Acme")
            == "Acme Status: Multiple component status changes"
        )

    def test_incident_and_verification_subjects(self):
        assert incident_subject("Login failures", brand="Acme") == "Acme Incident: Login failures"
        assert verification_subject(brand="Acme") == "Verify your Acme Status subscription"

    def test_links(self):
        site = "https://status.example.com"
        assert verify_url(site, "abc") == f"{site}/api/subscribe/verify?token=abc"
        assert unsubscribe_url(site, "xyz") == f"{site}/api/subscribe/unsubscribe?token=xyz"


class TestFiltering:
    def test_empty_filter_keeps_everything(self):
        assert filter_changes([API_DOWN, CACHE_SLOW], []) == [API_DOWN, CACHE_SLOW]

    def test_filter_by_component(self):
        assert filter_changes([API_DOWN, CACHE_SLOW], ["cache"]) == [CACHE_SLOW]

    def test_change_rows_use_labels(self):
        assert change_rows([CACHE_SLOW]) == [
            {"label": "Cache", "previous": "Operational", "new": "Degraded Performance"}
        ]


class TestIncidentAlert:
    def test_normalizes_raw_values(self):
        alert = build_incident_alert("Outage", "critical", "Down", ["api", "bogus", "auth"])

        assert alert.severity is IncidentSeverity.CRITICAL
        assert alert.components == (ComponentType.API, ComponentType.AUTH)
        assert alert.component_labels == ["API", "Authentication"]
        assert alert.severity_label == "Critical"

    def test_unknown_severity_falls_back_to_minor(self):
        assert build_incident_alert("x", "apocalyptic", "m", []).severity is IncidentSeverity.MINOR


class TestSlackPayloads:
    def test_status_payload_uses_worst_status(self):
        payload = slack_status_payload(
            [CACHE_SLOW, API_DOWN], brand="Acme", site_url="https://status.example.com"
        )
        header, section, context = payload["blocks"]

        assert header["text"]["text"] == ":red_circle: Acme Status Update"
        assert len(section["fields"]) == 2
        assert section["fields"][1]["text"] == "*API*\n:white_check_mark: → :red_circle: Major Outage"
        assert "https://status.example.com" in context["elements"][0]["text"]

    def test_incident_payload(self):
        alert = build_incident_alert("Payments down", "major", "Investigating", ["payments"])
        blocks = slack_incident_payload(alert, site_url="https://status.example.com")["blocks"]

        assert blocks[0]["text"]["text"] == ":warning: Incident: Payments down"
        assert blocks[1]["text"]["text"] == "Investigating"
        assert blocks[2]["fields"][0]["text"] == "*Severity:*\nMajor"
        assert blocks[2]["fields"][1]["text"] == "*Affected:*\nPayments"


class TestDiscordPayloads:
    def test_status_payload(self):
        embed = discord_status_payload([CACHE_SLOW], brand="Acme", now=NOW)["embeds"][0]

        assert embed["title"] == "⚠️ Acme Status Update"
        assert embed["color"] == 0xEAB308
        assert embed["fields"] == [
            {"name": "Cache", "value": "✅ → ⚠️ Degraded Performance", "inline": True}
        ]
        assert embed["timestamp"] == "2026-03-15T12:30:00.000Z"
        assert embed["footer"] == {"text": "Acme Status"}

    def test_incident_payload(self):
        alert = build_incident_alert("DB down", "critical", "Failover running", ["database"])
        embed = discord_incident_payload(alert, brand="Acme", now=NOW)["embeds"][0]

        assert embed["title"] == "🚨 Incident: DB down"
        assert embed["description"] == "Failover running"
        assert embed["color"] == 0xEF4444
        assert embed["fields"][1] == {
            "name": "Affected Components",
            "value": "Database",
            "inline": True,
        }
