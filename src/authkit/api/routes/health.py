"""Liveness probe."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

router = APIRouter()


class LivenessResponse(BaseModel):
    alive: bool = Field(default=True, description="Process is running")


@router.get("/health/live", response_model=LivenessResponse, summary="Liveness check")
async def liveness() -> LivenessResponse:
    return LivenessResponse()
