"""Pytest configuration and shared fixtures.

Organization:
    - Settings: environment defaults and settings objects for overrides
    - Database: in-memory SQLite ``Database`` with all tables created
    - Platform: ``httpx.MockTransport`` standing in for the monitored platform
    - Application: FastAPI app wired to the fixtures above and an HTTP client
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
import os
from typing import Any
from unittest.mock import AsyncMock

import httpx
from httpx import ASGITransport, AsyncClient
import pytest

# Tests never read a developer's .env or reach real services
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("NOTIFY_EMAIL_ENABLED", "false")

from status_page.core.settings import (  # noqa: E402
    AppSettings,
    PlatformSettings,
    SecuritySettings,
    clear_all_caches,
    get_app_settings,
    get_platform_settings,
    get_security_settings,
)
from status_page.features.notifications.service import NotificationService  # noqa: E402
from status_page.infra.database import Database  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_KEY = "test-admin-key"
CRON_SECRET = "test-cron-secret"
PLATFORM_URL = "https://platform.example.com"


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Drop cached settings so environment changes in one test never leak."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(
        environment="test",
        site_url="https://status.example.com",
        brand_name="Acme",
    )


@pytest.fixture
def security_settings() -> SecuritySettings:
    return SecuritySettings(
        cron_secret=CRON_SECRET,
        admin_api_keys={ADMIN_EMAIL: ADMIN_KEY},
    )


@pytest.fixture
def platform_settings() -> PlatformSettings:
    return PlatformSettings(base_url=PLATFORM_URL, request_timeout=5.0)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-API-Key": ADMIN_KEY}


@pytest.fixture
def cron_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {CRON_SECRET}"}


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """Fresh in-memory SQLite database with every table created."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
async def session(database: Database):
    """Session on the test database; uncommitted work is rolled back."""
    async with database.session() as s:
        try:
            yield s
        finally:
            await s.rollback()


# ============================================================================
# Platform Fixtures
# ============================================================================


class PlatformStub:
    """Programmable fake of the monitored platform's health endpoints.

    ``responses`` maps ``(method, path)`` to ``(status_code, json_body)``.
    Paths in ``failing`` raise a connection error.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], tuple[int, dict[str, Any] | None]] = {
            ("GET", "/api/health"): (
                200,
                {"status": "healthy", "checks": {"cache": {"status": "healthy"}}},
            ),
            ("GET", "/api/health/ready"): (200, {"checks": {"database": {"connected": True}}}),
            ("HEAD", "/sign-in"): (200, None),
            ("GET", "/api/health/system"): (200, {"environment": {"stripeConfigured": True}}),
            ("HEAD", "/"): (200, None),
        }
        self.failing: set[str] = set()
        self.requests: list[httpx.Request] = []

    def set(self, method: str, path: str, status_code: int, body: dict[str, Any] | None = None) -> None:
        self.responses[(method, path)] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.failing:
            raise httpx.ConnectError("connection refused", request=request)
        status_code, body = self.responses.get((request.method, request.url.path), (404, None))
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)


@pytest.fixture
def platform() -> PlatformStub:
    return PlatformStub()


@pytest.fixture
async def http_client(platform: PlatformStub) -> AsyncGenerator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(platform.handler)) as client:
        yield client


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def notifier() -> AsyncMock:
    """Notification service double; no email channel, so nothing is verified by mail."""
    mock = AsyncMock(spec=NotificationService)
    mock.send_verification_email.return_value = False
    mock.notify_status_changes.return_value = []
    mock.notify_incident.return_value = []
    return mock


@pytest.fixture
def app(
    database: Database,
    http_client: httpx.AsyncClient,
    notifier: AsyncMock,
    app_settings: AppSettings,
    security_settings: SecuritySettings,
    platform_settings: PlatformSettings,
):
    """FastAPI app with test settings and shared resources on ``app.state``.

    The lifespan does not run under ``ASGITransport``, so state is set here.
    """
    from status_page.app.main import create_app

    application = create_app()
    application.state.db = database
    application.state.http_client = http_client
    application.state.notifier = notifier

    application.dependency_overrides[get_app_settings] = lambda: app_settings
    application.dependency_overrides[get_security_settings] = lambda: security_settings
    application.dependency_overrides[get_platform_settings] = lambda: platform_settings
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_clock(fixed_now: datetime) -> Callable[..., Callable[[], datetime]]:
    """Build a clock callable returning a fixed instant."""

    def factory(value: datetime | None = None) -> Callable[[], datetime]:
        instant = value or fixed_now
        return lambda: instant

    return factory
