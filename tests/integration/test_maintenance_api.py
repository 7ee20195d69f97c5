"""Integration tests for maintenance scheduling and listing."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

pytestmark = pytest.mark.integration


def _window(start_in: timedelta, length: timedelta = timedelta(hours=2), **overrides) -> dict:
    start = datetime.now(UTC) + start_in
    return {
        "title": "Database upgrade",
        "description": "Upgrading the primary database.",
        "affected_components": ["database"],
        "scheduled_start": start.isoformat(),
        "scheduled_end": (start + length).isoformat(),
        **overrides,
    }


async def _create(client, headers, payload) -> dict:
    response = await client.post("/api/admin/maintenance", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateMaintenance:
    async def test_schedules_window(self, client, admin_headers):
        body = await _create(client, admin_headers, _window(timedelta(days=1)))

        assert body["status"] == "scheduled"
        assert body["created_by"] == "admin@example.com"
        assert body["duration"] == "2 hours"

    async def test_end_must_follow_start(self, client, admin_headers):
        response = await client.post(
            "/api/admin/maintenance",
            json=_window(timedelta(days=1), length=timedelta(0)),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "End time must be after start time"

    async def test_requires_admin(self, client):
        response = await client.post("/api/admin/maintenance", json=_window(timedelta(days=1)))
        assert response.status_code == 401


class TestListMaintenance:
    async def test_status_filters(self, client, admin_headers):
        later = await _create(client, admin_headers, _window(timedelta(days=3), title="Later"))
        sooner = await _create(client, admin_headers, _window(timedelta(days=1), title="Sooner"))
        running = await _create(client, admin_headers, _window(timedelta(hours=-1), title="Now"))
        await client.patch(
            f"/api/admin/maintenance/{running['id']}",
            json={"status": "in_progress"},
            headers=admin_headers,
        )
        done = await _create(client, admin_headers, _window(timedelta(days=-2), title="Done"))
        await client.patch(
            f"/api/admin/maintenance/{done['id']}",
            json={"status": "completed"},
            headers=admin_headers,
        )

        upcoming = (await client.get("/api/maintenance", params={"status": "upcoming"})).json()
        assert [m["id"] for m in upcoming["maintenance"]] == [sooner["id"], later["id"]]

        active = (await client.get("/api/maintenance", params={"status": "active"})).json()
        assert [m["id"] for m in active["maintenance"]] == [running["id"]]

        completed = (await client.get("/api/maintenance", params={"status": "completed"})).json()
        assert [m["id"] for m in completed["maintenance"]] == [done["id"]]

        everything = (await client.get("/api/maintenance")).json()
        assert len(everything["maintenance"]) == 4

        status = (await client.get("/api/status")).json()
        assert status["upcoming_maintenance"] == 3

    async def test_invalid_filter(self, client):
        response = await client.get("/api/maintenance", params={"status": "someday"})
        assert response.status_code == 422


class TestUpdateAndDelete:
    async def test_patch_and_delete(self, client, admin_headers):
        window = await _create(client, admin_headers, _window(timedelta(days=1)))
        url = f"/api/admin/maintenance/{window['id']}"

        patched = await client.patch(url, json={"status": "completed"}, headers=admin_headers)
        assert patched.json()["status"] == "completed"

        assert (await client.delete(url, headers=admin_headers)).json() == {"success": True}
        assert (await client.delete(url, headers=admin_headers)).status_code == 404

        listing = (await client.get("/api/admin/maintenance", headers=admin_headers)).json()
        assert listing["items"] == []
