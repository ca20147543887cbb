"""Response cache middleware (read path).

Serves cached JSON for configured GET routes and snapshots successful
responses into the cache. Uses raw ASGI (no BaseHTTPMiddleware): the
downstream response streams through a recording send wrapper untouched,
and only after the last body chunk has been forwarded is it stored.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable

from starlette.responses import JSONResponse

from app.infrastructure.cache.keys import request_key
from app.middleware.cache_rules import (
    CacheRule,
    RouteTable,
    build_request,
    get_cache,
    scope_user_id,
)

logger = logging.getLogger(__name__)


class ResponseRecorder:
    """ASGI send wrapper: records status, headers and body while forwarding every message."""

    def __init__(self, send: Callable) -> None:
        self._send = send
        self.status: int | None = None
        self.headers: list[tuple[bytes, bytes]] = []
        self._chunks: list[bytes] = []
        self.complete = False

    async def __call__(self, message: dict) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            self._chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                self.complete = True
        await self._send(message)

    @property
    def is_success(self) -> bool:
        return self.status is not None and 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        want = name.lower().encode()
        for k, v in self.headers:
            if k.lower() == want:
                return v.decode("latin-1")
        return None

    def json_body(self) -> object | None:
        """Return the parsed JSON body, or None if the response is not cacheable JSON."""
        content_type = self.header("content-type") or ""
        if "json" not in content_type or self.header("content-encoding"):
            return None
        try:
            return json.loads(b"".join(self._chunks))
        except (UnicodeDecodeError, ValueError):
            logger.warning("Response body is not valid JSON; not caching")
            return None


def ResponseCacheMiddleware(
    app: Callable,
    rules: Iterable[CacheRule],
    prefix: str = "",
) -> Callable:
    """Serve and populate cached responses for the routes in ``rules``. Raw ASGI.

    Requests without an authenticated user, or when no cache is configured
    on app.state, pass straight through.
    """
    table: RouteTable[CacheRule] = RouteTable(rules, prefix)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        matched = table.match(scope["method"], scope["path"])
        cache = get_cache(scope)
        user_id = scope_user_id(scope)
        if matched is None or cache is None or not user_id or not cache.is_available():
            await app(scope, receive, send)
            return
        rule, path_params = matched
        request = build_request(scope, path_params)
        try:
            if rule.key_builder is not None:
                cache_key = rule.key_builder(request)
            else:
                cache_key = request_key(
                    rule.prefix,
                    user_id,
                    scope["path"],
                    scope.get("query_string", b"").decode("latin-1"),
                )
        except (ValueError, KeyError) as e:
            logger.warning(
                "Cache key generation failed for %s (%s); bypassing cache", scope["path"], e
            )
            await app(scope, receive, send)
            return

        cached = await cache.get(cache_key)
        if cached is not None:
            response = JSONResponse(cached, status_code=200)
            await response(scope, receive, send)
            return

        recorder = ResponseRecorder(send)
        await app(scope, receive, recorder)
        if not (recorder.complete and recorder.is_success):
            return
        payload = recorder.json_body()
        if payload is None:
            return
        if not await cache.set(cache_key, payload, ttl=rule.ttl):
            logger.warning("Failed to cache response for %s", cache_key)

    return asgi_app
