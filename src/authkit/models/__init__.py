"""Data models for AuthKit."""

from __future__ import annotations

from authkit.models.error_models import ERROR_CODE_TO_STATUS, ErrorCode, ErrorDetail, ErrorResponse, get_status_code
from authkit.models.platform_models import (
    ConnectedPlatform,
    ConnectionDefinition,
    ConnectionDefinitionPage,
    EmbedTokenPayload,
    EventLink,
    LinkSettings,
    PlatformSettings,
    SessionId,
)
from authkit.models.result_models import AuthKitConfig, EmbedTokenFailure, EmbedTokenResult, EmbedTokenSuccess

__all__ = [
    "ERROR_CODE_TO_STATUS",
    "AuthKitConfig",
    "ConnectedPlatform",
    "ConnectionDefinition",
    "ConnectionDefinitionPage",
    "EmbedTokenFailure",
    "EmbedTokenPayload",
    "EmbedTokenResult",
    "EmbedTokenSuccess",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "EventLink",
    "LinkSettings",
    "PlatformSettings",
    "SessionId",
    "get_status_code",
]
