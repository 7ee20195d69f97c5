"""Integration tests for incident reporting and the public incident feed."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

INCIDENT = {
    "title": "Elevated API error rates",
    "severity": "major",
    "affected_components": ["api", "database", "api"],
    "message": "We are looking into failed requests.",
}


async def _create(client, headers, **overrides) -> dict:
    response = await client.post(
        "/api/admin/incidents", json={**INCIDENT, **overrides}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAdminAuth:
    async def test_missing_key(self, client):
        response = await client.post("/api/admin/incidents", json=INCIDENT)
        assert response.status_code == 401

    async def test_wrong_key(self, client):
        response = await client.get("/api/admin/incidents", headers={"X-API-Key": "nope"})
        assert response.status_code == 401
        assert response.json()["type"] == "invalid-api-key"


class TestCreateIncident:
    async def test_creates_investigating_incident(self, client, admin_headers, notifier):
        body = await _create(client, admin_headers)

        assert body["status"] == "investigating"
        assert body["severity"] == "major"
        assert body["affected_components"] == ["api", "database"]
        assert body["created_by"] == "admin@example.com"
        assert body["resolved_at"] is None
        assert [u["message"] for u in body["updates"]] == [INCIDENT["message"]]
        assert body["updates"][0]["status"] == "investigating"

        notifier.notify_incident.assert_awaited_once_with(
            INCIDENT["title"], "major", INCIDENT["message"], ["api", "database"]
        )

    async def test_without_message_has_no_timeline(self, client, admin_headers, notifier):
        body = await _create(client, admin_headers, message=None)

        assert body["updates"] == []
        args = notifier.notify_incident.await_args.args
        assert args[2] == f"We are investigating an issue with {INCIDENT['title']}"

    async def test_blank_title_rejected(self, client, admin_headers):
        response = await client.post(
            "/api/admin/incidents", json={**INCIDENT, "title": "   "}, headers=admin_headers
        )
        assert response.status_code == 422


class TestUpdateIncident:
    async def test_status_change_appends_update(self, client, admin_headers):
        incident = await _create(client, admin_headers)

        response = await client.patch(
            f"/api/admin/incidents/{incident['id']}",
            json={"status": "identified", "message": "Bad deploy identified."},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "identified"
        assert [u["status"] for u in body["updates"]] == ["investigating", "identified"]
        assert body["resolved_at"] is None

    async def test_resolving_stamps_resolved_at_once(self, client, admin_headers):
        incident = await _create(client, admin_headers)
        url = f"/api/admin/incidents/{incident['id']}"

        first = (await client.patch(url, json={"status": "resolved"}, headers=admin_headers)).json()
        assert first["resolved_at"] is not None

        second = (
            await client.patch(url, json={"postmortem": "Root cause: config."}, headers=admin_headers)
        ).json()
        assert second["resolved_at"] == first["resolved_at"]
        assert second["postmortem"] == "Root cause: config."

    async def test_unknown_incident(self, client, admin_headers):
        response = await client.patch(
            "/api/admin/incidents/4242", json={"status": "resolved"}, headers=admin_headers
        )
        assert response.status_code == 404


class TestDeleteIncident:
    async def test_delete(self, client, admin_headers):
        incident = await _create(client, admin_headers)

        response = await client.delete(
            f"/api/admin/incidents/{incident['id']}", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert (await client.get(f"/api/incidents/{incident['id']}")).status_code == 404


class TestPublicIncidents:
    async def test_pagination_and_filters(self, client, admin_headers):
        ids = [(await _create(client, admin_headers, title=f"Incident {n}"))["id"] for n in range(3)]
        await client.patch(
            f"/api/admin/incidents/{ids[0]}", json={"status": "resolved"}, headers=admin_headers
        )

        page = (await client.get("/api/incidents", params={"limit": 2})).json()
        assert page["total"] == 3
        assert page["pages"] == 2
        assert [i["id"] for i in page["items"]] == [ids[2], ids[1]]

        second = (await client.get("/api/incidents", params={"limit": 2, "page": 2})).json()
        assert [i["id"] for i in second["items"]] == [ids[0]]

        active = (await client.get("/api/incidents", params={"status": "active"})).json()
        assert {i["id"] for i in active["items"]} == {ids[1], ids[2]}

        resolved = (await client.get("/api/incidents", params={"status": "resolved"})).json()
        assert [i["id"] for i in resolved["items"]] == [ids[0]]

    async def test_get_single(self, client, admin_headers):
        incident = await _create(client, admin_headers)

        body = (await client.get(f"/api/incidents/{incident['id']}")).json()

        assert body["title"] == INCIDENT["title"]
        assert body["duration"]
