"""Integration tests for liveness, readiness and metrics endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

pytestmark = pytest.mark.integration


async def test_liveness(client, app_settings):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == app_settings.service_name
    assert body["version"] == app_settings.version


async def test_readiness(client):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["ready"] is True
    assert response.json()["checks"] == {"database": True}


async def test_readiness_database_down(client, database, monkeypatch):
    monkeypatch.setattr(
        database, "ping", AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))
    )

    response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["type"] == "database-unavailable"
    assert body["title"] == "Service Unavailable"
    assert body["ready"] is False
    assert body["checks"] == {"database": False}


async def test_metrics_exposition(client, cron_headers):
    await client.post("/api/cron/check", headers=cron_headers)

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "status_page_checks_total" in response.text
    assert 'component="api"' in response.text


async def test_openapi_schema_lists_routes(client):
    response = await client.get("/openapi.json")

    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/api/status" in paths
    assert "/api/cron/check" in paths
