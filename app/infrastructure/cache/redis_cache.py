"""Redis-based cache service backing the HTTP response cache.

Provides async Redis caching with TTL support and glob invalidation.
Every failure is swallowed here and reported as None/False plus a log
line: the cache can slow a request down but never fail it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import AbstractBackoff, ExponentialBackoff

from app.core.config import Settings, get_settings
from app.core.constants import CACHE_DELETE_CHUNK_SIZE

logger = logging.getLogger(__name__)

# Per-operation retry backoff; kept short so a dead store fails fast.
_OPERATION_BACKOFF_BASE = 0.05
_OPERATION_BACKOFF_CAP = 0.5


class LinearBackoff(AbstractBackoff):
    """Backoff of ``base * failures`` seconds, capped at ``cap``."""

    def __init__(self, base: float = 1.0, cap: float = 30.0) -> None:
        self._base = base
        self._cap = cap

    def reset(self) -> None:
        pass

    def compute(self, failures: int) -> float:
        return min(self._cap, self._base * max(failures, 1))


class CacheService:
    """Async Redis cache service with TTL support.

    Holds one long-lived client. When the store becomes unreachable the
    service marks itself unavailable (operations short-circuit) and a single
    background task pings with linear backoff until the store is back.
    Call connect() at startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = False
        self._closing = False
        self._reconnect_task: asyncio.Task[None] | None = None
        self._pending_patterns: set[str] = set()
        self._reconnect_backoff = LinearBackoff(
            base=self.settings.cache_reconnect_base_delay,
            cap=self.settings.cache_reconnect_max_delay,
        )

    def _build_client(self) -> redis.Redis:
        return redis.Redis.from_url(
            self.settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=self.settings.cache_socket_timeout,
            socket_timeout=self.settings.cache_socket_timeout,
            socket_keepalive=True,
            retry=Retry(
                ExponentialBackoff(
                    cap=_OPERATION_BACKOFF_CAP, base=_OPERATION_BACKOFF_BASE
                ),
                self.settings.cache_max_retries,
            ),
            retry_on_error=[redis.ConnectionError, redis.TimeoutError],
        )

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup.

        A failed first connect does not raise: the cache starts disabled and
        reconnects in the background.
        """
        self._closing = False
        if self.redis is None:
            try:
                self.redis = self._build_client()
            except ValueError as e:
                logger.error("Invalid REDIS_URL: %s. Cache disabled.", e)
                return
        if await self._ping():
            logger.info("Redis cache connected")
        else:
            logger.warning("Redis connection failed. Cache disabled until reconnect.")
            self._mark_unavailable()

    async def disconnect(self) -> None:
        """Close Redis connection and stop reconnecting. Call on app shutdown."""
        self._closing = True
        task = self._reconnect_task
        self._reconnect_task = None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.warning("Error while closing Redis connection", exc_info=True)
            self.redis = None
            logger.info("Redis cache disconnected")
        self._connected = False

    async def _ping(self) -> bool:
        """Ping the store; on success replay missed invalidations, then mark available."""
        client = self.redis
        if client is None:
            return False
        try:
            await client.ping()
            await self._replay_pending(client)
        except (redis.RedisError, OSError) as e:
            logger.debug("Redis ping failed: %s", e)
            self._connected = False
            return False
        self._connected = True
        return True

    async def _replay_pending(self, client: redis.Redis) -> None:
        """Purge patterns whose invalidation was missed while the store was unreachable.

        Entries written before an outage would otherwise be served stale once
        the store is back. Raises on store errors; the caller stays unavailable.
        """
        while self._pending_patterns:
            pattern = next(iter(self._pending_patterns))
            deleted = await self._scan_unlink(client, pattern)
            self._pending_patterns.discard(pattern)
            logger.info("Cache INVALIDATE (replayed): %s (%s keys)", pattern, deleted)

    def _mark_unavailable(self) -> None:
        """Disable the cache and start the reconnect loop if not already running."""
        self._connected = False
        if self._closing or self.redis is None:
            return
        if self._reconnect_task is None or self._reconnect_task.done():
            self._reconnect_task = asyncio.create_task(self._reconnect_loop())

    async def _reconnect_loop(self) -> None:
        attempt = 0
        while not self._closing:
            attempt += 1
            delay = self._reconnect_backoff.compute(attempt)
            logger.warning(
                "Redis reconnect attempt %s in %.1fs", attempt, delay
            )
            await asyncio.sleep(delay)
            if await self._ping():
                logger.info("Redis cache reconnected after %s attempt(s)", attempt)
                return

    def _on_connection_error(self, operation: str, target: str, exc: Exception) -> None:
        logger.warning(
            "Cache %s unavailable for %s (Redis disconnected: %s)", operation, target, exc
        )
        self._mark_unavailable()

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def ping(self) -> bool:
        """Round-trip to the store. Returns True if it answered."""
        if self.redis is None:
            return False
        if await self._ping():
            return True
        self._mark_unavailable()
        return False

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Undecodable entries are reported as a miss, same as absent ones.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            self._on_connection_error("get", key, e)
            return None
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Cache entry for %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds (default settings.cache_default_ttl).

        Returns:
            True if stored, False otherwise.
        """
        if not self.is_available() or self.redis is None:
            return False
        ttl = ttl or self.settings.cache_default_ttl
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache value for %s is not JSON-serializable; not cached", key)
            return False
        try:
            await self.redis.setex(key, ttl, serialized)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            self._on_connection_error("set", key, e)
            return False
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True unless the store failed.

        Args:
            key: Cache key to delete.

        Returns:
            True if the delete ran (including when the key was absent).
        """
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.delete(key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            self._on_connection_error("delete", key, e)
            return False
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)
            return False
        logger.debug("Cache DELETE: %s", key)
        return True

    async def delete_pattern(self, pattern: str) -> bool:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Uses scan_iter to avoid KEYS blocking; collects keys in chunks and
        UNLINKs each chunk to minimize round-trips and keep deletion async on server.

        Args:
            pattern: Redis SCAN match pattern (e.g. transactions:user-1:*).

        Returns:
            True if the scan completed (including when nothing matched).
            When the store is unreachable the pattern is queued and purged
            on reconnect, and False is returned.
        """
        client = self.redis
        if client is None:
            return False
        if not self.is_available():
            self._pending_patterns.add(pattern)
            return False
        try:
            deleted = await self._scan_unlink(client, pattern)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            self._pending_patterns.add(pattern)
            self._on_connection_error("delete_pattern", pattern, e)
            return False
        except redis.RedisError:
            logger.exception("Cache delete_pattern error for %s", pattern)
            return False
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return True

    async def _scan_unlink(self, client: redis.Redis, pattern: str) -> int:
        deleted = 0
        chunk: list[str] = []
        async for key in client.scan_iter(match=pattern):
            chunk.append(key)
            if len(chunk) >= CACHE_DELETE_CHUNK_SIZE:
                deleted += await self._unlink(client, chunk)
                chunk = []
        if chunk:
            deleted += await self._unlink(client, chunk)
        return deleted

    async def _unlink(self, client: redis.Redis, keys: list[str]) -> int:
        async with client.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)

    async def clear_all(self) -> bool:
        """Clear entire cache. Use with caution.

        Returns:
            True if cleared, False otherwise.
        """
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.flushdb()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            self._on_connection_error("clear", "*", e)
            return False
        except redis.RedisError:
            logger.exception("Cache clear error")
            return False
        logger.warning("Cache CLEARED: all keys deleted")
        return True
