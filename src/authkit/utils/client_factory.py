"""
HTTP client factory utilities.
Centralizes httpx.AsyncClient creation with consistent configuration.
"""

from __future__ import annotations

import httpx

from authkit.core.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_POOL_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
)
from authkit.utils.http_logger import create_logging_client


def create_http_client(
    enable_logging: bool = False,
    connect_timeout: float | None = None,
    read_timeout: float | None = None,
) -> httpx.AsyncClient:
    """Create HTTP client for platform calls.

    Args:
        enable_logging: Enable HTTP request/response logging
        connect_timeout: Connect timeout in seconds (default: 10s)
        read_timeout: Read timeout in seconds (default: 30s)

    Returns:
        Configured httpx.AsyncClient
    """
    timeout = httpx.Timeout(
        connect=connect_timeout if connect_timeout is not None else DEFAULT_CONNECT_TIMEOUT,
        read=read_timeout if read_timeout is not None else DEFAULT_READ_TIMEOUT,
        write=DEFAULT_WRITE_TIMEOUT,
        pool=DEFAULT_POOL_TIMEOUT,
    )

    if enable_logging:
        return create_logging_client(enabled=True, timeout=timeout)

    return httpx.AsyncClient(timeout=timeout)
