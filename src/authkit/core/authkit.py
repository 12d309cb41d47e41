"""
Embed token issuing workflow.

``AuthKit.create`` runs the platform calls strictly in order:

1. fetch the account settings
2. register an event link for the caller's payload
3. list the public connection definitions
4. keep the connected platforms that are active, backed by an active
   definition and scoped to the secret's environment
5. mint a session id
6. exchange everything for an embed token

Any failure aborts the remaining calls and is returned as an
``EmbedTokenFailure``; nothing is retried.
"""

from __future__ import annotations

import time

from collections.abc import AsyncIterator, Callable, Iterable, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any, Literal, TypeVar

import httpx

from pydantic import ValidationError

from authkit.core.constants import (
    DEFAULT_BASE_URL,
    EMBED_TOKEN_TTL_MS,
    LIVE_SECRET_MARKER,
    TEST_SECRET_PREFIX,
    USAGE_SOURCE,
    get_settings,
)
from authkit.core.endpoints import Endpoint, HeaderKind, build_headers, build_url
from authkit.core.exceptions import AuthKitError, ConfigurationError, RemoteCallError, ResponseValidationError
from authkit.models.error_models import ErrorCode
from authkit.models.platform_models import (
    ConnectedPlatform,
    ConnectionDefinitionPage,
    EmbedTokenPayload,
    EventLink,
    LinkSettings,
    PlatformSettings,
    RemoteModel,
    SessionId,
)
from authkit.models.result_models import AuthKitConfig, EmbedTokenFailure, EmbedTokenResult, EmbedTokenSuccess
from authkit.utils.client_factory import create_http_client
from authkit.utils.logger import RemoteCall, logger

SecretEnvironment = Literal["live", "test"]

ModelT = TypeVar("ModelT", bound=RemoteModel)


def secret_environment(secret: str) -> SecretEnvironment:
    """Environment used to scope connected platforms."""
    return "live" if LIVE_SECRET_MARKER in secret else "test"


def payload_environment(secret: str) -> SecretEnvironment:
    """Environment tag sent with the event link and the embed token.

    Deliberately a separate check from ``secret_environment``: the platform
    tags anything that is not an ``sk_test`` secret as live.
    """
    return "test" if secret.startswith(TEST_SECRET_PREFIX) else "live"


def filter_connected_platforms(
    platforms: Iterable[ConnectedPlatform],
    active_definition_ids: set[str | int],
    environment: SecretEnvironment,
) -> list[ConnectedPlatform]:
    """Connected platforms usable in ``environment``, in their original order."""

    def matches_environment(platform: ConnectedPlatform) -> bool:
        if environment == "live":
            return platform.environment == "live"
        return platform.environment is None or platform.environment == "test"

    return [
        platform
        for platform in platforms
        if platform.connection_definition_id in active_definition_ids
        and platform.active is True
        and matches_environment(platform)
    ]


class AuthKit:
    """Issues embed tokens for the IntegrationOS embedded connection widget.

    Args:
        secret: IntegrationOS secret (``sk_live_...`` or ``sk_test_...``)
        config: Optional overrides; only ``base_url`` is recognized
        http_client: Optional client owned by the caller. When omitted each
            ``create`` call opens and closes its own client.
        clock: Returns the current Unix time in seconds (default: ``time.time``)
    """

    def __init__(
        self,
        secret: str,
        config: Mapping[str, Any] | AuthKitConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] | None = None,
    ):
        if not secret:
            raise ConfigurationError("An IntegrationOS secret is required")

        self._secret = secret
        self.config = config if isinstance(config, AuthKitConfig) else AuthKitConfig.model_validate(dict(config or {}))
        self.environment: SecretEnvironment = secret_environment(secret)
        self._http_client = http_client
        self._clock = clock

    def _now_ms(self) -> int:
        now = self._clock() if self._clock is not None else time.time()
        return int(now * 1000)

    @property
    def base_url(self) -> str:
        return self.config.base_url if self.config.base_url is not None else DEFAULT_BASE_URL

    @property
    def payload_environment(self) -> SecretEnvironment:
        return payload_environment(self._secret)

    def url_for(self, endpoint: Endpoint) -> str:
        return build_url(endpoint, self.base_url)

    def headers_for(self, kind: HeaderKind = HeaderKind.BUILDABLE) -> dict[str, str]:
        return build_headers(self._secret, kind)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _client(self, client: httpx.AsyncClient | None = None) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the given or injected client, or a short-lived one built from settings."""
        if client is not None:
            yield client
            return
        if self._http_client is not None:
            yield self._http_client
            return

        settings = get_settings()
        async with create_http_client(
            enable_logging=settings.http_request_logging,
            connect_timeout=settings.http_connect_timeout,
            read_timeout=settings.http_read_timeout,
        ) as owned:
            yield owned

    async def _call(
        self,
        client: httpx.AsyncClient,
        method: str,
        endpoint: Endpoint,
        headers: HeaderKind = HeaderKind.BUILDABLE,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Issue one platform request and return its JSON object body."""
        url = self.url_for(endpoint)
        call = RemoteCall(endpoint=endpoint.value, method=method, url=url)
        start = time.monotonic()

        try:
            response = await client.request(
                method,
                url,
                headers=self.headers_for(headers),
                json=dict(body) if body is not None else None,
            )
            call.status_code = response.status_code
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            call.error = str(e)
            raise RemoteCallError(
                endpoint.value,
                str(e),
                code=ErrorCode.EXTERNAL_HTTP_STATUS,
                status_code=e.response.status_code,
                cause=e,
            ) from e
        except httpx.TimeoutException as e:
            call.error = str(e) or type(e).__name__
            raise RemoteCallError(
                endpoint.value, f"Request to {url} timed out", code=ErrorCode.EXTERNAL_TIMEOUT, cause=e
            ) from e
        except httpx.HTTPError as e:
            call.error = str(e) or type(e).__name__
            raise RemoteCallError(endpoint.value, f"Request to {url} failed: {call.error}", cause=e) from e
        except ValueError as e:
            call.error = "invalid JSON"
            raise RemoteCallError(
                endpoint.value,
                f"Invalid JSON returned by {url}",
                code=ErrorCode.EXTERNAL_INVALID_RESPONSE,
                status_code=call.status_code,
                cause=e,
            ) from e
        finally:
            call.duration_ms = (time.monotonic() - start) * 1000
            logger.log_remote_call(call)

        if not isinstance(data, dict):
            raise RemoteCallError(
                endpoint.value,
                f"Expected a JSON object from {url}, got {type(data).__name__}",
                code=ErrorCode.EXTERNAL_INVALID_RESPONSE,
                status_code=call.status_code,
            )
        return data

    @staticmethod
    def _parse(model: type[ModelT], endpoint: Endpoint, data: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            fields = sorted({".".join(str(part) for part in error["loc"]) for error in e.errors()})
            raise ResponseValidationError(endpoint.value, fields, cause=e) from e

    # ------------------------------------------------------------------
    # Workflow steps
    # ------------------------------------------------------------------

    async def get_settings(self, client: httpx.AsyncClient | None = None) -> PlatformSettings:
        async with self._client(client) as http:
            data = await self._call(http, "POST", Endpoint.GET_SETTINGS, body={})
        return self._parse(PlatformSettings, Endpoint.GET_SETTINGS, data)

    async def create_event_link(
        self, payload: Mapping[str, Any], client: httpx.AsyncClient | None = None
    ) -> EventLink:
        body = {
            **payload,
            "environment": self.payload_environment,
            "usageSource": USAGE_SOURCE,
        }
        async with self._client(client) as http:
            data = await self._call(http, "POST", Endpoint.CREATE_EVENT_LINK, body=body)
        return self._parse(EventLink, Endpoint.CREATE_EVENT_LINK, data)

    async def get_connection_definitions(self, client: httpx.AsyncClient | None = None) -> ConnectionDefinitionPage:
        async with self._client(client) as http:
            data = await self._call(http, "GET", Endpoint.GET_CONNECTION_DEFINITIONS, headers=HeaderKind.IOS_SECRET)
        return self._parse(ConnectionDefinitionPage, Endpoint.GET_CONNECTION_DEFINITIONS, data)

    async def get_session_id(self, client: httpx.AsyncClient | None = None) -> SessionId:
        async with self._client(client) as http:
            data = await self._call(http, "GET", Endpoint.GET_SESSION_ID)
        return self._parse(SessionId, Endpoint.GET_SESSION_ID, data)

    def build_embed_token_payload(
        self,
        connected_platforms: Sequence[ConnectedPlatform],
        event_link: EventLink,
        settings: PlatformSettings,
        session_id: str,
    ) -> EmbedTokenPayload:
        return EmbedTokenPayload(
            link_settings=LinkSettings(
                connected_platforms=[platform.to_wire() for platform in connected_platforms],
                event_inc_token=event_link.token,
            ),
            group=event_link.group,
            label=event_link.label,
            environment=self.payload_environment,
            expires_at=self._now_ms() + EMBED_TOKEN_TTL_MS,
            session_id=session_id,
            features=settings.features,
        )

    async def create_embed_token(
        self,
        connected_platforms: Sequence[ConnectedPlatform],
        event_link: EventLink,
        settings: PlatformSettings,
        session_id: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> dict[str, Any]:
        """Exchange the assembled payload for an embed token.

        A session id is minted first when ``session_id`` is not given.
        """
        async with self._client(client) as http:
            if session_id is None:
                session_id = (await self.get_session_id(client=http)).id
            payload = self.build_embed_token_payload(connected_platforms, event_link, settings, session_id)
            return await self._call(http, "POST", Endpoint.CREATE_EMBED_TOKEN, body=payload.to_wire())

    async def create(self, payload: Mapping[str, Any] | None = None) -> EmbedTokenResult:
        """Run the full workflow and return the embed token or the failure."""
        try:
            async with self._client() as client:
                settings = await self.get_settings(client=client)
                event_link = await self.create_event_link(payload or {}, client=client)
                definitions = await self.get_connection_definitions(client=client)

                connected_platforms = filter_connected_platforms(
                    settings.connected_platforms,
                    definitions.active_ids(),
                    self.environment,
                )

                session = await self.get_session_id(client=client)
                token = await self.create_embed_token(
                    connected_platforms,
                    event_link,
                    settings,
                    session_id=session.id,
                    client=client,
                )
        except AuthKitError as e:
            endpoint = getattr(e, "endpoint", None)
            logger.error(f"Embed token creation failed: {e.message}", error_code=e.code.value, endpoint=endpoint)
            return EmbedTokenFailure.from_code(e.code, e.message, endpoint=endpoint)

        logger.info(
            f"Embed token issued with {len(connected_platforms)} connected platform(s)",
            environment=self.environment,
            platforms=len(connected_platforms),
        )
        return EmbedTokenSuccess(token=token)


__all__ = [
    "AuthKit",
    "SecretEnvironment",
    "filter_connected_platforms",
    "payload_environment",
    "secret_environment",
]
