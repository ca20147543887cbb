"""Cache diagnostics: a store round-trip check."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_cache
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.schemas.health import CacheTestErrorResponse, CacheTestResponse
from app.shared.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

TEST_KEY_TTL = 10

router = APIRouter()


@router.get(
    "/test",
    response_model=CacheTestResponse,
    responses={503: {"description": "Store unavailable", "model": CacheTestErrorResponse}},
)
async def cache_test(
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> CacheTestResponse | JSONResponse:
    """Write, read back and delete a short-lived test key; 503 if any step fails."""

    def unavailable(message: str) -> JSONResponse:
        logger.warning("Cache round-trip failed: %s", message)
        return JSONResponse(
            status_code=503,
            content=CacheTestErrorResponse(message=message).model_dump(),
        )

    if cache is None:
        return unavailable("Cache is disabled")
    if not cache.is_available():
        return unavailable("Cache store is unavailable")
    key = f"cache:test:{generate_id()}"
    value = {"written_at": utc_now().isoformat()}
    if not await cache.set(key, value, ttl=TEST_KEY_TTL):
        return unavailable("Write to cache store failed")
    echoed = await cache.get(key)
    await cache.delete(key)
    if echoed != value:
        return unavailable("Read back from cache store failed")
    return CacheTestResponse(key=key, value=echoed)
