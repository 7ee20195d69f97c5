"""Integration tests for the subscription flow."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from status_page.core.settings import get_app_settings
from status_page.features.subscribers.models import Subscriber

pytestmark = pytest.mark.integration

SITE = "https://status.example.com"


async def _subscriber(database, email: str) -> Subscriber | None:
    async with database.session() as session:
        result = await session.execute(select(Subscriber).where(Subscriber.email == email))
        return result.scalar_one_or_none()


class TestSubscribe:
    async def test_new_subscriber_gets_verification(self, client, database, notifier):
        response = await client.post(
            "/api/subscribe",
            json={"email": "Reader@Example.com", "components": ["api", "api", "cache"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Please check your email to verify your subscription."
        }

        subscriber = await _subscriber(database, "reader@example.com")
        assert subscriber is not None
        assert not subscriber.verified
        assert subscriber.components == ["api", "cache"]
        assert len(subscriber.verification_token) == 64
        assert len(subscriber.unsubscribe_token) == 64
        notifier.send_verification_email.assert_awaited_once_with(
            "reader@example.com", subscriber.verification_token
        )

    async def test_repeat_resends_verification(self, client, notifier):
        await client.post("/api/subscribe", json={"email": "reader@example.com"})
        response = await client.post("/api/subscribe", json={"email": "reader@example.com"})

        assert response.json()["message"] == "Verification email resent. Please check your inbox."
        assert notifier.send_verification_email.await_count == 2

    async def test_invalid_email(self, client):
        response = await client.post("/api/subscribe", json={"email": "not-an-email"})
        assert response.status_code == 422

    async def test_auto_verify_in_development(self, app, client, database):
        from status_page.core.settings import AppSettings

        app.dependency_overrides[get_app_settings] = lambda: AppSettings(
            environment="development", site_url=SITE
        )

        response = await client.post("/api/subscribe", json={"email": "dev@example.com"})

        assert response.json()["message"] == "Subscribed successfully! (auto-verified in development)"
        subscriber = await _subscriber(database, "dev@example.com")
        assert subscriber.verified
        assert subscriber.verification_token is None

        again = await client.post("/api/subscribe", json={"email": "dev@example.com"})
        assert again.json()["message"] == "You are already subscribed to status updates."


class TestVerify:
    async def test_verify_redirects(self, client, database):
        await client.post("/api/subscribe", json={"email": "reader@example.com"})
        token = (await _subscriber(database, "reader@example.com")).verification_token

        response = await client.get("/api/subscribe/verify", params={"token": token})

        assert response.status_code == 307
        assert response.headers["location"] == f"{SITE}/subscribe?status=verified"
        subscriber = await _subscriber(database, "reader@example.com")
        assert subscriber.verified
        assert subscriber.verified_at is not None

    @pytest.mark.parametrize("params", [{}, {"token": "unknown"}])
    async def test_invalid_token(self, client, params):
        response = await client.get("/api/subscribe/verify", params=params)

        assert response.status_code == 307
        assert response.headers["location"] == f"{SITE}/subscribe?error=invalid_token"


class TestUnsubscribe:
    async def test_link_removes_subscriber(self, client, database):
        await client.post("/api/subscribe", json={"email": "reader@example.com"})
        token = (await _subscriber(database, "reader@example.com")).unsubscribe_token

        response = await client.get("/api/subscribe/unsubscribe", params={"token": token})

        assert response.headers["location"] == f"{SITE}/subscribe?status=unsubscribed"
        assert await _subscriber(database, "reader@example.com") is None

        again = await client.get("/api/subscribe/unsubscribe", params={"token": token})
        assert again.headers["location"] == f"{SITE}/subscribe?error=not_found"

    async def test_post(self, client, database):
        await client.post("/api/subscribe", json={"email": "reader@example.com"})
        token = (await _subscriber(database, "reader@example.com")).unsubscribe_token

        response = await client.post("/api/subscribe/unsubscribe", json={"token": token})
        assert response.status_code == 200
        assert response.json() == {"message": "Successfully unsubscribed"}

        missing = await client.post("/api/subscribe/unsubscribe", json={"token": token})
        assert missing.status_code == 404
        assert missing.json()["type"] == "subscriber-not-found"
