"""Tests for RFC 7807 error responses."""

from __future__ import annotations

from status_page.app.exception_handlers import PROBLEM_JSON


async def test_not_found_is_problem_json(client):
    response = await client.get("/api/incidents/999", headers={"X-Request-ID": "req-404"})

    assert response.status_code == 404
    assert response.headers["content-type"].startswith(PROBLEM_JSON)
    body = response.json()
    assert body["type"] == "incident-not-found"
    assert body["title"] == "Not Found"
    assert body["status"] == 404
    assert body["detail"] == "Incident not found"
    assert body["instance"] == "/api/incidents/999"
    assert body["incident_id"] == 999
    assert body["request_id"] == "req-404"


async def test_unauthorized_sets_www_authenticate(client):
    response = await client.get("/api/admin/incidents")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["type"] == "missing-api-key"


async def test_validation_errors_list_fields(client, admin_headers):
    response = await client.post(
        "/api/admin/incidents",
        json={"title": "", "severity": "catastrophic", "affected_components": []},
        headers=admin_headers,
    )

    assert response.status_code == 422
    body = response.json()
    assert body["type"] == "validation-error"
    fields = {error["field"] for error in body["errors"]}
    assert {"body.title", "body.severity", "body.affected_components"} <= fields


async def test_query_validation(client):
    response = await client.get("/api/incidents", params={"page": 0})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "query.page"
