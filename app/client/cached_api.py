"""HTTP client for the Spendiq API with an in-memory TTL cache for GET requests.

One CachedApiClient holds the cache for one signed-in session. Entries are
keyed by the request URL as passed to get() and expire through event-loop
timers; clear() cancels those timers. Mutating calls are passed through
uncached; callers clear affected entries themselves.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DURATION = 10.0


class CachedApiClient:
    """Async API client whose GETs are served from memory for cache_duration seconds."""

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        default_cache_duration: float = DEFAULT_CACHE_DURATION,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None
        self.default_cache_duration = default_cache_duration
        self.headers: dict[str, str] = {}
        self._data: dict[str, Any] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        # Bumped by a full clear so fetches started before it do not repopulate the cache.
        self._generation = 0

    async def __aenter__(self) -> CachedApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cancel expiry timers and close the HTTP client if we created it."""
        self.clear()
        if self._owns_http:
            await self._http.aclose()

    def set_token(self, token: str | None) -> None:
        """Send ``Authorization: Bearer <token>`` on every request (None removes it)."""
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        else:
            self.headers.pop("Authorization", None)

    def _url(self, url: str) -> str:
        return f"{self._base_url}{url}"

    def cached(self, url: str) -> bool:
        """Return True if a live cache entry exists for url."""
        return url in self._data

    async def get(
        self,
        url: str,
        *,
        use_cache: bool = True,
        cache_duration: float | None = None,
        force_refresh: bool = False,
    ) -> Any:
        """Return the JSON body of GET url, from the cache when possible.

        Args:
            url: Path (and query) relative to base_url; also the cache key.
            use_cache: When False, neither read nor write the cache.
            cache_duration: Seconds to keep the result (default_cache_duration if None).
            force_refresh: Fetch even if a cached entry exists, then replace it.

        Raises:
            httpx.HTTPStatusError: For 4xx/5xx responses (which are never cached).
        """
        if use_cache and not force_refresh and url in self._data:
            logger.debug("Client cache HIT: %s", url)
            return self._data[url]
        generation = self._generation
        response = await self._http.get(self._url(url), headers=self.headers)
        response.raise_for_status()
        data = response.json()
        if use_cache and generation == self._generation:
            if cache_duration is None:
                cache_duration = self.default_cache_duration
            self._store(url, data, cache_duration)
        return data

    def _store(self, url: str, data: Any, duration: float) -> None:
        self._cancel_timer(url)
        self._data[url] = data
        loop = asyncio.get_running_loop()
        self._timers[url] = loop.call_later(duration, self._expire, url)
        logger.debug("Client cache SET: %s (TTL: %ss)", url, duration)

    def _expire(self, url: str) -> None:
        self._timers.pop(url, None)
        self._data.pop(url, None)

    def _cancel_timer(self, url: str) -> None:
        handle = self._timers.pop(url, None)
        if handle is not None:
            handle.cancel()

    def clear(self, url: str | None = None) -> None:
        """Drop one cached URL, or every entry (session change) when url is None."""
        if url is not None:
            self._cancel_timer(url)
            self._data.pop(url, None)
            return
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._data.clear()
        self._generation += 1
        logger.debug("Client cache cleared")

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._http.post(self._url(url), headers=self.headers, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._http.put(self._url(url), headers=self.headers, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._http.patch(self._url(url), headers=self.headers, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        """DELETE url. A JSON body (bulk delete) may be passed as json=."""
        return await self._http.request(
            "DELETE", self._url(url), headers=self.headers, **kwargs
        )
