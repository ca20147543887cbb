"""Health check and cache round-trip API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    cache: str = Field(
        default="disabled", description="Response cache state: up, down or disabled"
    )


class CacheTestResponse(BaseModel):
    """Response for GET /cache/test when the store round-trip succeeds."""

    status: str = "ok"
    key: str
    value: Any


class CacheTestErrorResponse(BaseModel):
    """Response for GET /cache/test when the store is unavailable (503)."""

    status: str = "unavailable"
    message: str
