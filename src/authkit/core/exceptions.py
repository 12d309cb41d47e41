"""
Exceptions raised while talking to the IntegrationOS platform.

``AuthKit.create`` catches these and converts them into an
``EmbedTokenFailure``; the individual step methods let them propagate.
"""

from __future__ import annotations

from typing import Any

from authkit.models.error_models import ErrorCode


class AuthKitError(Exception):
    """Base AuthKit exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        self.cause = cause
        super().__init__(message)


class RemoteCallError(AuthKitError):
    """A platform endpoint could not be reached or answered with an unusable response."""

    def __init__(
        self,
        endpoint: str,
        message: str,
        code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(
            code=code,
            message=message,
            details={"endpoint": endpoint, "status_code": status_code},
            cause=cause,
        )


class ResponseValidationError(AuthKitError):
    """A platform response is missing a field the workflow depends on."""

    def __init__(self, endpoint: str, fields: list[str], cause: Exception | None = None):
        self.endpoint = endpoint
        self.fields = fields
        super().__init__(
            code=ErrorCode.VALIDATION_MISSING_FIELD,
            message=f"Invalid {endpoint} response: missing or invalid {', '.join(fields)}",
            details={"endpoint": endpoint, "fields": fields},
            cause=cause,
        )


class ConfigurationError(AuthKitError):
    """AuthKit was set up with unusable configuration."""

    def __init__(self, message: str):
        super().__init__(code=ErrorCode.INTERNAL_CONFIGURATION_ERROR, message=message)


__all__ = [
    "AuthKitError",
    "ConfigurationError",
    "RemoteCallError",
    "ResponseValidationError",
]
