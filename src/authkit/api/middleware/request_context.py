"""
Per-request identity for the embed token service.

The middleware binds a ``RequestContext`` for the duration of each request
so log records and error bodies produced deeper in the stack can carry the
request id without it being passed around.
"""

from __future__ import annotations

import secrets
import time

from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"
REQUEST_ID_PREFIX = "req_"

_current: ContextVar[RequestContext | None] = ContextVar("authkit_request", default=None)


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str = ""
    path: str = ""
    client_ip: str | None = None
    started: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000

    def log_fields(self) -> dict[str, Any]:
        """Fields merged into every log record emitted during the request."""
        fields: dict[str, Any] = {"request_id": self.request_id, "method": self.method, "path": self.path}
        if self.client_ip:
            fields["client_ip"] = self.client_ip
        return fields


def new_request_id() -> str:
    """``req_`` followed by 16 hex characters."""
    return f"{REQUEST_ID_PREFIX}{secrets.token_hex(8)}"


def current_request() -> RequestContext | None:
    return _current.get()


def current_request_id() -> str | None:
    ctx = _current.get()
    return ctx.request_id if ctx else None


def bind_request(context: RequestContext) -> Token[RequestContext | None]:
    return _current.set(context)


def unbind_request(token: Token[RequestContext | None]) -> None:
    _current.reset(token)


def _client_ip(request: Request) -> str | None:
    # First hop of X-Forwarded-For wins over the socket peer
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a ``RequestContext`` and echoes the request id and timing headers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        context = RequestContext(
            request_id=request.headers.get(REQUEST_ID_HEADER) or new_request_id(),
            method=request.method,
            path=request.url.path,
            client_ip=_client_ip(request),
        )
        token = bind_request(context)
        try:
            response = await call_next(request)
        finally:
            unbind_request(token)

        response.headers[REQUEST_ID_HEADER] = context.request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{context.elapsed_ms:.2f}ms"
        return response


__all__ = [
    "REQUEST_ID_PREFIX",
    "RequestContext",
    "RequestContextMiddleware",
    "bind_request",
    "current_request",
    "current_request_id",
    "new_request_id",
    "unbind_request",
]
