"""
Embed token endpoint (v1).

The SDK returns a typed result; this route is the calling layer that turns
it into an HTTP status.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from authkit.api.dependencies import AuthKitDep

router = APIRouter()


@router.post(
    "",
    summary="Issue an embed token",
    description="Registers an event link for the payload and exchanges it for a short-lived embed token.",
    responses={
        200: {"description": "Embed token issued"},
        500: {
            "description": "A platform call failed",
            "content": {"application/json": {"example": {"message": "Client error '401 Unauthorized'"}}},
        },
    },
)
async def create_embed_token(
    authkit: AuthKitDep,
    payload: Annotated[dict[str, Any], Body()],
) -> JSONResponse:
    result = await authkit.create(payload)
    return JSONResponse(status_code=result.status_code, content=result.to_dict())
