"""Per-route cache configuration shared by the response cache and invalidation middleware.

Rules are declared against route path templates (``/transactions/{transaction_id}``)
and matched before routing, so the middleware can compute keys and patterns
without depending on FastAPI internals. The first matching rule wins; declare
literal paths before parameterized siblings, as the routers do.
"""

from __future__ import annotations

import re
import string
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from starlette.requests import Request
from starlette.routing import compile_path

from app.core.constants import CACHE_KEY_SEP, USER_ID_PLACEHOLDER

KeyBuilder = Callable[[Request], str]
PatternSpec = str | Callable[[Request], str]

_FORMATTER = string.Formatter()
_UNSAFE_SUBSTITUTION = re.compile(r"[*?\[\]\\" + re.escape(CACHE_KEY_SEP) + r"]")


@dataclass(frozen=True)
class CacheRule:
    """Read-side rule: cache successful responses of ``path`` under ``prefix`` for ``ttl`` seconds.

    key_builder derives the key from the request; when omitted the key is
    ``prefix:user_id:<path>?<normalized query>``.
    """

    path: str
    prefix: str
    ttl: int
    key_builder: KeyBuilder | None = None
    methods: frozenset[str] = field(default_factory=lambda: frozenset({"GET"}))


@dataclass(frozen=True)
class InvalidationRule:
    """Write-side rule: after a 2xx response to ``methods`` on ``path``, purge ``patterns``.

    A pattern is either a template (``{user_id}`` and path parameters are
    substituted from the request) or a callable computing the glob from the
    request.
    """

    path: str
    methods: frozenset[str]
    patterns: tuple[PatternSpec, ...]


RuleT = TypeVar("RuleT", CacheRule, InvalidationRule)


class RouteTable(Generic[RuleT]):
    """Ordered (method, path template) lookup for cache rules."""

    def __init__(self, rules: Iterable[RuleT], prefix: str = "") -> None:
        self._entries: list[tuple[re.Pattern[str], RuleT]] = []
        for rule in rules:
            regex, _, _ = compile_path(prefix + rule.path)
            self._entries.append((regex, rule))

    def match(self, method: str, path: str) -> tuple[RuleT, dict[str, str]] | None:
        """Return the first rule matching method and path, with its path parameters."""
        for regex, rule in self._entries:
            if method not in rule.methods:
                continue
            m = regex.match(path)
            if m is not None:
                return rule, m.groupdict()
        return None


def get_cache(scope: dict[str, Any]) -> Any:
    """Return the cache configured on the application (app.state.cache) or None."""
    app = scope.get("app")
    state = getattr(app, "state", None)
    return getattr(state, "cache", None)


def scope_user_id(scope: dict[str, Any]) -> str | None:
    """Return the authenticated user id placed on scope state, if any."""
    return scope.get("state", {}).get("user_id")


def request_user_id(request: Request) -> str | None:
    """Return the authenticated user id from request.state, if any."""
    return getattr(request.state, "user_id", None)


def build_request(scope: dict[str, Any], path_params: dict[str, str]) -> Request:
    """Request view over scope with the rule's path parameters (body is not read)."""
    return Request({**scope, "path_params": path_params})


def resolve_pattern(spec: PatternSpec, request: Request) -> str:
    """Resolve an invalidation pattern for this request.

    Template fields are filled from the acting user id and path parameters.
    A field that cannot be resolved, or whose value is unsafe inside a key,
    becomes ``*``: the pattern only ever widens.
    """
    if callable(spec):
        return spec(request)
    values: dict[str, Any] = dict(request.path_params)
    values[USER_ID_PLACEHOLDER] = request_user_id(request)
    parts: list[str] = []
    for literal, field_name, _, _ in _FORMATTER.parse(spec):
        parts.append(literal)
        if field_name is None:
            continue
        value = values.get(field_name)
        if not value or _UNSAFE_SUBSTITUTION.search(str(value)):
            parts.append("*")
        else:
            parts.append(str(value))
    return "".join(parts)
