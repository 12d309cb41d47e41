"""
Typed outcome of ``AuthKit.create``.

A call either yields the issued embed token or a failure carrying the
message and the HTTP status the caller is expected to surface. Nothing is
written to process-wide state; the calling layer decides what to do.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from authkit.models.error_models import ErrorCode, get_status_code


class AuthKitConfig(BaseModel):
    """Client configuration overrides. Only ``base_url`` is recognized."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    base_url: str | None = None


class EmbedTokenSuccess(BaseModel):
    """Embed token issued by the platform."""

    ok: Literal[True] = True
    token: dict[str, Any]
    status_code: int = 200

    def to_dict(self) -> dict[str, Any]:
        return dict(self.token)


class EmbedTokenFailure(BaseModel):
    """Aborted workflow; ``to_dict`` is the message-only error body."""

    ok: Literal[False] = False
    message: str
    code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code: int = Field(default=500)
    endpoint: str | None = None

    @classmethod
    def from_code(cls, code: ErrorCode, message: str, endpoint: str | None = None) -> EmbedTokenFailure:
        return cls(message=message, code=code, status_code=get_status_code(code), endpoint=endpoint)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


EmbedTokenResult = EmbedTokenSuccess | EmbedTokenFailure


__all__ = [
    "AuthKitConfig",
    "EmbedTokenFailure",
    "EmbedTokenResult",
    "EmbedTokenSuccess",
]
