"""Unit tests for component probes and the concurrent checker."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from status_page.features.status.checker import HealthChecker
from status_page.features.status.levels import ComponentType, StatusLevel
from status_page.features.status.probes import ApiProbe, CacheProbe, DatabaseProbe, PaymentsProbe


@pytest.fixture
def checker(http_client: httpx.AsyncClient, platform_settings) -> HealthChecker:
    return HealthChecker.from_settings(http_client, platform_settings)


def _by_component(results):
    return {r.component: r for r in results}


class TestHealthChecker:
    async def test_healthy_platform(self, checker: HealthChecker):
        results = await checker.run_checks()

        assert [r.component for r in results] == list(ComponentType)
        assert all(r.status is StatusLevel.OPERATIONAL for r in results)

    async def test_probe_requests(self, checker: HealthChecker, platform):
        await checker.run_checks()

        seen = {(r.method, r.url.path) for r in platform.requests}
        assert ("HEAD", "/sign-in") in seen
        assert ("HEAD", "/") in seen
        assert ("GET", "/api/health/system") in seen
        assert all(r.headers["User-Agent"] == "status-page-checker/1.0" for r in platform.requests)

    async def test_internal_api_key_header(self, http_client, platform):
        from status_page.core.settings import PlatformSettings

        settings = PlatformSettings(
            base_url="https://platform.example.com", internal_api_key="s3cret"
        )
        await HealthChecker.from_settings(http_client, settings).run_checks()

        assert all(r.headers["X-Internal-API-Key"] == "s3cret" for r in platform.requests)

    async def test_server_error_is_major_outage(self, checker: HealthChecker, platform):
        platform.set("HEAD", "/sign-in", 503)

        results = _by_component(await checker.run_checks())
        assert results[ComponentType.AUTH].status is StatusLevel.MAJOR_OUTAGE
        assert results[ComponentType.AUTH].status_code == 503

    async def test_connection_error_is_unreachable(self, checker: HealthChecker, platform):
        platform.failing.add("/")

        result = _by_component(await checker.run_checks())[ComponentType.STORAGE]
        assert result.status is StatusLevel.MAJOR_OUTAGE
        assert result.status_code == 0
        assert "error" in result.details

    async def test_disconnected_database(self, checker: HealthChecker, platform):
        platform.set("GET", "/api/health/ready", 200, {"checks": {"database": {"connected": False}}})

        result = _by_component(await checker.run_checks())[ComponentType.DATABASE]
        assert result.status is StatusLevel.MAJOR_OUTAGE

    @pytest.mark.parametrize(
        ("cache_status", "expected"),
        [
            ("healthy", StatusLevel.OPERATIONAL),
            ("degraded", StatusLevel.DEGRADED),
            ("unhealthy", StatusLevel.MAJOR_OUTAGE),
        ],
    )
    async def test_cache_sub_check(self, checker, platform, cache_status, expected):
        platform.set("GET", "/api/health", 200, {"checks": {"cache": {"status": cache_status}}})

        result = _by_component(await checker.run_checks())[ComponentType.CACHE]
        assert result.status is expected

    async def test_stripe_not_configured(self, checker: HealthChecker, platform):
        platform.set("GET", "/api/health/system", 200, {"environment": {"stripeConfigured": False}})

        result = _by_component(await checker.run_checks())[ComponentType.PAYMENTS]
        assert result.status is StatusLevel.PARTIAL_OUTAGE
        assert result.details == {"stripeConfigured": False}

    async def test_probe_exception_becomes_major_outage(self, http_client):
        class ExplodingProbe:
            component = ComponentType.API

            async def check(self, client):
                raise RuntimeError("boom")

        results = await HealthChecker(http_client, [ExplodingProbe()]).run_checks()

        assert results[0].status is StatusLevel.MAJOR_OUTAGE
        assert results[0].details == {"error": "boom"}


class TestProbeEvaluation:
    def test_probe_urls(self):
        assert DatabaseProbe("https://p.example.com/").url == "https://p.example.com/api/health/ready"
        assert PaymentsProbe("https://p.example.com").url == "https://p.example.com/api/health/system"

    async def test_cache_probe_ignores_http_status(self, platform, http_client):
        platform.set("GET", "/api/health", 503, {"checks": {"cache": {"status": "healthy"}}})

        result = await CacheProbe("https://platform.example.com").check(http_client)
        assert result.status is StatusLevel.OPERATIONAL


class TrickleStream(httpx.AsyncByteStream):
    """Body that arrives one byte at a time, never stalling long enough for a read timeout."""

    def __init__(self, chunks: int, delay: float) -> None:
        self.chunks = chunks
        self.delay = delay

    async def __aiter__(self):
        for _ in range(self.chunks):
            await asyncio.sleep(self.delay)
            yield b"x"


class TestProbeTimeout:
    async def test_slow_body_exceeds_total_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, headers={"Content-Length": "10"}, stream=TrickleStream(10, 0.05)
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await ApiProbe("https://platform.example.com", timeout=0.2).check(client)

        assert result.status is StatusLevel.MAJOR_OUTAGE
        assert result.status_code == 0
        assert result.details == {"error": "Timed out after 0.2s"}
        assert result.response_time_ms < 500

    async def test_fast_body_within_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"Content-Length": "2"}, stream=TrickleStream(2, 0))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await ApiProbe("https://platform.example.com", timeout=1.0).check(client)

        assert result.status is StatusLevel.OPERATIONAL
        assert result.status_code == 200
