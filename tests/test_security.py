"""
Sign-in hardening tests.

Verifies:
- Failed sign-ins are limited to 5 per minute per client address
- X-Forwarded-For cannot be used to get a fresh allowance
- Startup warns while the placeholder JWT secret is in use
"""
import logging

import pytest
from fastapi.testclient import TestClient

from portfolio.config import DEFAULT_JWT_SECRET_KEY, settings
from portfolio.main import app
from portfolio.utils.rate_limit import limiter


@pytest.fixture
def limited_client(client: TestClient):
    limiter.enabled = True
    limiter.reset()
    yield client
    limiter.reset()


class TestSignInRateLimit:

    def test_sixth_failed_sign_in_is_limited(self, limited_client: TestClient):
        statuses = [
            limited_client.post("/sign-in", data={"password": "wrong"}).status_code
            for _ in range(6)
        ]

        assert statuses == [401, 401, 401, 401, 401, 429]

    def test_forwarded_for_does_not_reset_the_count(self, limited_client: TestClient):
        statuses = [
            limited_client.post(
                "/sign-in",
                data={"password": "wrong"},
                headers={"X-Forwarded-For": f"10.0.0.{i}"},
            ).status_code
            for i in range(6)
        ]

        assert statuses[:5] == [401] * 5
        assert statuses[5] == 429

    def test_sign_in_page_is_not_limited(self, limited_client: TestClient):
        for _ in range(6):
            limited_client.post("/sign-in", data={"password": "wrong"})

        assert limited_client.get("/sign-in").status_code == 200


class TestJwtSecretWarning:

    def test_placeholder_secret_logs_warning(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "JWT_SECRET_KEY", DEFAULT_JWT_SECRET_KEY)

        with caplog.at_level(logging.WARNING, logger="portfolio.main"):
            with TestClient(app):
                pass

        assert any("JWT_SECRET_KEY" in record.getMessage() for record in caplog.records)

    def test_configured_secret_is_quiet(self, caplog):
        assert settings.JWT_SECRET_KEY != DEFAULT_JWT_SECRET_KEY

        with caplog.at_level(logging.WARNING, logger="portfolio.main"):
            with TestClient(app):
                pass

        assert not any("JWT_SECRET_KEY" in record.getMessage() for record in caplog.records)
