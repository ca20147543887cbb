"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring of infrastructure (response cache).
No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the Redis cache (if enabled), yield, then disconnect it.

    A store that is down at startup does not prevent the app from serving:
    CacheService starts unavailable and reconnects in the background.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis cache disabled (REDIS_ENABLED=false)")

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")
