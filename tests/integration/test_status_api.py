"""Integration tests for the public status endpoints."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

COMPONENTS = ["api", "database", "cache", "auth", "payments", "storage"]


class TestStatus:
    async def test_no_checks_yet(self, client):
        response = await client.get("/api/status")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "operational"
        assert body["message"] == "All Systems Operational"
        assert [c["component"] for c in body["components"]] == COMPONENTS
        assert all(c["updated_at"] is None for c in body["components"])
        assert all(c["uptime_30d"] == 100.0 for c in body["components"])
        assert body["active_incidents"] == 0
        assert body["upcoming_maintenance"] == 0

    async def test_worst_component_wins(self, client, seed_checks):
        await seed_checks("api", [(10, "operational", 120), (5, "degraded", 2400)])
        await seed_checks("payments", [(5, "partial_outage", 900)])

        body = (await client.get("/api/status")).json()

        assert body["status"] == "partial_outage"
        assert body["status_label"] == "Partial Outage"
        assert body["message"] == "Partial System Outage"
        by_component = {c["component"]: c for c in body["components"]}
        assert by_component["api"]["status"] == "degraded"
        assert by_component["api"]["response_time_ms"] == 2400
        assert by_component["api"]["uptime_30d"] == 100.0
        assert by_component["payments"]["uptime_30d"] == 0.0

    async def test_counts_active_incidents(self, client, admin_headers):
        await client.post(
            "/api/admin/incidents",
            json={"title": "Slow API", "severity": "minor", "affected_components": ["api"]},
            headers=admin_headers,
        )

        body = (await client.get("/api/status")).json()

        assert body["active_incidents"] == 1


class TestComponents:
    async def test_uptime_windows_use_duration_keys(self, client, seed_checks):
        await seed_checks(
            "database",
            [(30, "operational", 100), (20, "major_outage", 0), (10, "operational", 200)],
        )

        body = (await client.get("/api/components")).json()

        database = next(c for c in body["components"] if c["component"] == "database")
        assert set(database["uptime"]) == {"24h", "7d", "30d", "90d"}
        assert database["uptime"]["24h"] == 66.67
        assert database["avg_response_time_24h"] == 100
        assert database["last_checked"] is not None


class TestResponseTimes:
    async def test_series(self, client, seed_checks):
        await seed_checks("api", [(90, "operational", 150), (30, "operational", 250)])

        response = await client.get("/api/components/api/response-times", params={"hours": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["hours"] == 1
        assert [p["response_time_ms"] for p in body["data"]] == [250]

    async def test_unknown_component(self, client):
        response = await client.get("/api/components/queue/response-times")

        assert response.status_code == 404
        assert response.json()["type"] == "component-not-found"


class TestHistory:
    async def test_days_are_clamped(self, client):
        body = (await client.get("/api/history", params={"days": 500})).json()

        assert body["days"] == 90
        assert len(body["history"]) == len(COMPONENTS)
        assert len(body["history"][0]["history"]) == 90

        body = (await client.get("/api/history", params={"days": 0})).json()
        assert body["days"] == 1

    async def test_single_component(self, client, seed_checks):
        await seed_checks("cache", [(0, "degraded", 300)])

        body = (await client.get("/api/history", params={"component": "cache", "days": 7})).json()

        assert [h["component"] for h in body["history"]] == ["cache"]
        days = body["history"][0]["history"]
        assert len(days) == 7
        assert days[-1]["has_data"] is True
        assert days[-1]["status"] == "degraded"
        assert days[0]["has_data"] is False

    async def test_unknown_component(self, client):
        response = await client.get("/api/history", params={"component": "queue"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid component"
