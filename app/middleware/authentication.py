"""Authentication context middleware.

Resolves the acting user id from ``Authorization: Bearer <jwt>`` or the
auth cookie and stores it on scope state (``request.state.user_id``) before
the cache layers run, since cache keys and invalidation patterns are scoped
per user. Never rejects a request: routes enforce authentication through
the get_current_user dependency.
"""

from __future__ import annotations

import logging
from typing import Callable

from starlette.requests import cookie_parser

from app.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _token_from_scope(scope: dict, cookie_name: str) -> str | None:
    auth = _get_header(scope, "authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:].strip() or None
    raw_cookie = _get_header(scope, "cookie")
    if raw_cookie:
        return cookie_parser(raw_cookie).get(cookie_name) or None
    return None


def AuthenticationMiddleware(app: Callable, cookie_name: str = "auth_token") -> Callable:
    """Set scope state user_id from a valid access token; None otherwise. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        user_id: str | None = None
        token = _token_from_scope(scope, cookie_name)
        if token:
            try:
                user_id = verify_token(token)["sub"]
            except ValueError as e:
                logger.debug("Ignoring invalid access token: %s", e)
        scope.setdefault("state", {})["user_id"] = user_id
        await app(scope, receive, send)

    return asgi_app
