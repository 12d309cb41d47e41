"""
API v1 Router - Aggregates all v1 endpoints.

Usage in main.py:
    from authkit.api.routes.v1 import router as v1_router
    app.include_router(v1_router, prefix="/v1")
"""

from fastapi import APIRouter

from authkit.api.routes.v1 import embed_tokens

router = APIRouter()

router.include_router(
    embed_tokens.router,
    prefix="/embed-tokens",
    tags=["Embed Tokens"],
)

__all__ = ["router"]
