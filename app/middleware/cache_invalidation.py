"""Cache invalidation middleware (write path).

After a mutating request succeeds, purges every cache entry matching the
route's patterns. Purging happens when the handler emits its status line
and before that line is forwarded, so a read issued after the client sees
the response cannot hit an entry the mutation made stale. Failed requests
mutate nothing and purge nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from starlette.requests import Request

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.middleware.cache_rules import (
    InvalidationRule,
    RouteTable,
    build_request,
    get_cache,
    resolve_pattern,
)

logger = logging.getLogger(__name__)


async def invalidate_patterns(
    cache: CacheProtocol,
    rule: InvalidationRule,
    request: Request,
) -> list[str]:
    """Resolve and purge each of rule.patterns. Returns the patterns that failed.

    One failing pattern does not stop the others.
    """
    failed: list[str] = []
    for spec in rule.patterns:
        try:
            pattern = resolve_pattern(spec, request)
        except (ValueError, KeyError) as e:
            logger.warning("Could not resolve invalidation pattern %r: %s", spec, e)
            failed.append(str(spec))
            continue
        if not await cache.delete_pattern(pattern):
            logger.warning("Cache invalidation failed for pattern %s", pattern)
            failed.append(pattern)
    return failed


def CacheInvalidationMiddleware(
    app: Callable,
    rules: Iterable[InvalidationRule],
    prefix: str = "",
) -> Callable:
    """Purge cache patterns after 2xx responses to the routes in ``rules``. Raw ASGI."""
    table: RouteTable[InvalidationRule] = RouteTable(rules, prefix)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        matched = table.match(scope["method"], scope["path"])
        cache = get_cache(scope)
        if matched is None or cache is None:
            await app(scope, receive, send)
            return
        rule, path_params = matched
        request = build_request(scope, path_params)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start" and 200 <= message["status"] < 300:
                await invalidate_patterns(cache, rule, request)
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
