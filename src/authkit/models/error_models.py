"""
Error codes and error response models for AuthKit.

Every failure surfaced by ``AuthKit.create`` is categorized with an
``ErrorCode`` and mapped to the HTTP status the calling layer should use.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Application-specific error codes for categorization."""

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VAL_2001"
    VALIDATION_MISSING_FIELD = "VAL_2002"

    # External service errors (7xxx)
    EXTERNAL_SERVICE_ERROR = "EXT_7001"
    EXTERNAL_TIMEOUT = "EXT_7002"
    EXTERNAL_HTTP_STATUS = "EXT_7003"
    EXTERNAL_INVALID_RESPONSE = "EXT_7004"

    # Internal errors (9xxx)
    INTERNAL_ERROR = "INT_9001"
    INTERNAL_CONFIGURATION_ERROR = "INT_9002"
    INTERNAL_UNEXPECTED = "INT_9999"


class ErrorDetail(BaseModel):
    """Detailed information about a specific validation or sub-error."""

    field: str | None = None
    message: str
    code: str | None = None


class ErrorResponse(BaseModel):
    """Error body returned by the embed token service.

    The wire form is just ``{"message": ...}``; the remaining fields are kept
    for logging and are only emitted in debug mode.
    """

    message: str
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    request_id: str | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    details: list[ErrorDetail] | None = None
    path: str | None = None

    def to_dict(self, include_debug: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON response.

        Args:
            include_debug: Include code, request id and details (development only)
        """
        if not include_debug:
            return {"message": self.message}
        return self.model_dump(mode="json", exclude_none=True)


# Every AuthKit failure is reported as a server error; the code only refines it
ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.VALIDATION_MISSING_FIELD: 500,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 500,
    ErrorCode.EXTERNAL_TIMEOUT: 500,
    ErrorCode.EXTERNAL_HTTP_STATUS: 500,
    ErrorCode.EXTERNAL_INVALID_RESPONSE: 500,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.INTERNAL_CONFIGURATION_ERROR: 500,
    ErrorCode.INTERNAL_UNEXPECTED: 500,
}


def get_status_code(error_code: ErrorCode) -> int:
    """Get HTTP status code for an error code."""
    return ERROR_CODE_TO_STATUS.get(error_code, 500)


__all__ = [
    "ERROR_CODE_TO_STATUS",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "get_status_code",
]
