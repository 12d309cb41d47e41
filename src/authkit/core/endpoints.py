"""
Endpoint and header resolution for the IntegrationOS platform.

Internal services endpoints live on the configured base URL; the public
connection definitions listing lives on the API origin derived from it.
"""

from __future__ import annotations

from enum import Enum

from authkit.core.constants import (
    BUILDABLE_SECRET_HEADER,
    CONNECTION_DEFINITIONS_LIMIT,
    DEVELOPMENT_API_URL,
    IOS_SECRET_HEADER,
    LOCAL_API_URL,
    PRODUCTION_API_URL,
)


class Endpoint(str, Enum):
    """Platform endpoints used by the embed token workflow."""

    GET_SETTINGS = "get_settings"
    CREATE_EVENT_LINK = "create_event_link"
    GET_CONNECTION_DEFINITIONS = "get_connection_definitions"
    CREATE_EMBED_TOKEN = "create_embed_token"
    GET_SESSION_ID = "get_session_id"


class HeaderKind(str, Enum):
    """Authentication header sets accepted by the platform."""

    BUILDABLE = "buildable"
    IOS_SECRET = "ios_secret"


_SERVICES_PATHS: dict[Endpoint, str] = {
    Endpoint.GET_SETTINGS: "/internal/v1/settings/get",
    Endpoint.CREATE_EVENT_LINK: "/internal/v1/event-links/create",
    Endpoint.CREATE_EMBED_TOKEN: "/internal/v1/embed-tokens/create",
    Endpoint.GET_SESSION_ID: "/v1/public/generate-id/session_id",
}

_API_PATHS: dict[Endpoint, str] = {
    Endpoint.GET_CONNECTION_DEFINITIONS: f"/v1/public/connection-definitions?limit={CONNECTION_DEFINITIONS_LIMIT}",
}


def resolve_api_url(services_url: str) -> str:
    """Derive the public API origin from the services origin."""
    if "localhost" in services_url:
        return LOCAL_API_URL
    if "development" in services_url:
        return DEVELOPMENT_API_URL
    return PRODUCTION_API_URL


def build_url(endpoint: Endpoint, services_url: str) -> str:
    """Full URL of ``endpoint``; ``services_url`` is used verbatim."""
    if endpoint in _API_PATHS:
        return f"{resolve_api_url(services_url)}{_API_PATHS[endpoint]}"
    return f"{services_url}{_SERVICES_PATHS[endpoint]}"


def build_headers(secret: str, kind: HeaderKind = HeaderKind.BUILDABLE) -> dict[str, str]:
    if kind is HeaderKind.IOS_SECRET:
        return {IOS_SECRET_HEADER: secret}
    return {
        BUILDABLE_SECRET_HEADER: secret,
        "Content-Type": "application/json",
    }


__all__ = [
    "Endpoint",
    "HeaderKind",
    "build_headers",
    "build_url",
    "resolve_api_url",
]
