"""Shared test fixtures for the AuthKit test suite.

The IntegrationOS platform is simulated with ``httpx.MockTransport``; every
request the SDK makes is recorded on a ``FakePlatform`` instance.
"""

from __future__ import annotations

import json

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from authkit.core.authkit import AuthKit
from authkit.core.constants import clear_settings_cache

# ============================================================================
# Platform Paths
# ============================================================================

SETTINGS_PATH = "/internal/v1/settings/get"
EVENT_LINK_PATH = "/internal/v1/event-links/create"
CONNECTION_DEFINITIONS_PATH = "/v1/public/connection-definitions"
EMBED_TOKEN_PATH = "/internal/v1/embed-tokens/create"
SESSION_ID_PATH = "/v1/public/generate-id/session_id"

TEST_SECRET = "sk_test_1234567890abcdef"
LIVE_SECRET = "sk_live_1234567890abcdef"

#: Fixed clock value (seconds) used for expiresAt assertions
FIXED_NOW = 1_700_000_000.0

Outcome = dict[str, Any] | Exception | Callable[[httpx.Request], httpx.Response]


def default_settings() -> dict[str, Any]:
    return {
        "connectedPlatforms": [
            {"connectionDefinitionId": "conn_def::stripe", "active": True, "environment": "test", "title": "Stripe"},
            {"connectionDefinitionId": "conn_def::stripe", "active": True, "environment": "live", "title": "Stripe"},
            {"connectionDefinitionId": "conn_def::shopify", "active": True, "title": "Shopify"},
            {"connectionDefinitionId": "conn_def::hubspot", "active": True, "environment": "test"},
            {"connectionDefinitionId": "conn_def::slack", "active": False, "environment": "test"},
        ],
        "features": [{"key": "feature::custom-branding", "value": "enabled"}],
    }


def default_connection_definitions() -> dict[str, Any]:
    return {
        "rows": [
            {"_id": "conn_def::stripe", "active": True, "name": "Stripe"},
            {"_id": "conn_def::shopify", "active": True, "name": "Shopify"},
            {"_id": "conn_def::hubspot", "active": False, "name": "HubSpot"},
            {"_id": "conn_def::slack", "active": True, "name": "Slack"},
        ],
        "total": 4,
    }


def echo_embed_token(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"_id": "embed_token::1", **body})


class FakePlatform:
    """In-memory stand-in for the IntegrationOS services and public API."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.outcomes: dict[str, Outcome] = {
            SETTINGS_PATH: default_settings(),
            EVENT_LINK_PATH: {"_id": "event_link::1", "token": "evt_tok_123", "group": "customer-1", "label": "Acme"},
            CONNECTION_DEFINITIONS_PATH: default_connection_definitions(),
            SESSION_ID_PATH: {"id": "session_id::abc"},
            EMBED_TOKEN_PATH: echo_embed_token,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[request.url.path]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return httpx.Response(200, json=outcome)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def request_to(self, path: str) -> httpx.Request:
        return next(request for request in self.requests if request.url.path == path)

    def body_of(self, path: str) -> Any:
        return json.loads(self.request_to(path).content)


# ============================================================================
# Test Isolation: Settings Management
# ============================================================================


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start every test from default settings, independent of the host environment."""
    for name in ("AUTHKIT_SECRET", "AUTHKIT_BASE_URL", "AUTHKIT_DEBUG", "AUTHKIT_LOG_DIR", "AUTHKIT_APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# ============================================================================
# Platform Fixtures
# ============================================================================


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def test_authkit(platform: FakePlatform) -> AuthKit:
    return AuthKit(TEST_SECRET, http_client=platform.client(), clock=lambda: FIXED_NOW)


@pytest.fixture
def live_authkit(platform: FakePlatform) -> AuthKit:
    return AuthKit(LIVE_SECRET, http_client=platform.client(), clock=lambda: FIXED_NOW)
