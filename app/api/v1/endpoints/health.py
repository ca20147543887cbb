"""Health check endpoint. Used for liveness checks; reports cache state without failing."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_cache
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> HealthResponse:
    """Return ok; the cache being down degrades performance, not health."""
    if cache is None:
        return HealthResponse(cache="disabled")
    return HealthResponse(cache="up" if cache.is_available() else "down")
