"""
HTTP request/response logging for debugging platform calls.

Captures request payloads and responses using httpx event hooks.
"""

from __future__ import annotations

import json

from typing import Any

import httpx

from authkit.core.constants import BUILDABLE_SECRET_HEADER, IOS_SECRET_HEADER, SECRET_VISIBLE_CHARS
from authkit.utils.logger import logger

SENSITIVE_HEADERS = ("authorization", BUILDABLE_SECRET_HEADER.lower(), IOS_SECRET_HEADER.lower())


class HTTPLogger:
    """Logs HTTP requests and responses for debugging."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    async def log_request(self, request: httpx.Request) -> None:
        """Log outgoing HTTP request.

        Args:
            request: The httpx request object
        """
        if not self.enabled:
            return

        try:
            body_str = request.content.decode("utf-8") if request.content else ""
            body_json = json.loads(body_str) if body_str else {}

            logger.info(
                f"HTTP Request: {request.method} {request.url}",
                http_request=True,
                http_method=request.method,
                url=str(request.url),
                headers=self._sanitize_headers(dict(request.headers)),
                payload=body_json,
            )

            if body_json:
                logger.debug(f"Request Payload:\n{json.dumps(body_json, indent=2)}")

        except Exception as e:
            logger.error(f"Error logging HTTP request: {e}", exc_info=True)

    async def log_response(self, response: httpx.Response) -> None:
        """Log HTTP response.

        Args:
            response: The httpx response object
        """
        if not self.enabled:
            return

        try:
            # Event hooks run before the body is read
            await response.aread()
            body_json: Any
            try:
                body_json = response.json() if response.content else {}
            except json.JSONDecodeError as e:
                body_json = {"_error": f"Invalid JSON: {e!s}"}

            logger.info(
                f"HTTP Response: {response.status_code} {response.request.method} {response.request.url}",
                http_response=True,
                http_method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                body=body_json,
            )

        except Exception as e:
            logger.error(f"Error logging HTTP response: {e}", exc_info=True)

    def _sanitize_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Mask secret-bearing headers, keeping the last few characters."""
        sanitized = headers.copy()
        for actual_key, value in headers.items():
            if actual_key.lower() in SENSITIVE_HEADERS:
                sanitized[actual_key] = (
                    f"***{value[-SECRET_VISIBLE_CHARS:]}" if len(value) > SECRET_VISIBLE_CHARS else "***"
                )
        return sanitized


def create_logging_client(
    enabled: bool = True,
    timeout: httpx.Timeout | None = None,
) -> httpx.AsyncClient:
    """Create an httpx client with request/response logging.

    Args:
        enabled: Whether to enable HTTP logging
        timeout: Optional timeout configuration

    Returns:
        Configured httpx.AsyncClient with event hooks
    """
    http_logger = HTTPLogger(enabled=enabled)

    event_hooks: dict[str, list[Any]] = {
        "request": [http_logger.log_request],
        "response": [http_logger.log_response],
    }

    return httpx.AsyncClient(event_hooks=event_hooks, timeout=timeout)
