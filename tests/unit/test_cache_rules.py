"""Tests for route matching and invalidation pattern resolution."""

import fnmatch

from starlette.requests import Request

from app.api.v1.cache_policy import (
    ANALYTICS_PATTERN,
    CACHE_RULES,
    INVALIDATION_RULES,
    TRANSACTIONS_PATTERN,
)
from app.infrastructure.cache.keys import query_key
from app.middleware.cache_rules import (
    CacheRule,
    InvalidationRule,
    RouteTable,
    build_request,
    resolve_pattern,
)


def _request(user_id: str | None = "u1", path_params: dict | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "PUT",
        "path": "/",
        "query_string": b"",
        "headers": [],
        "state": {"user_id": user_id},
    }
    return build_request(scope, path_params or {})


def test_route_table_prefers_first_matching_rule() -> None:
    table = RouteTable(CACHE_RULES, prefix="/api/v1")
    rule, params = table.match("GET", "/api/v1/transactions/p2p")
    assert rule.prefix == "p2p"
    assert params == {}
    rule, params = table.match("GET", "/api/v1/transactions/abc")
    assert rule.prefix == "transaction:detail"
    assert params == {"transaction_id": "abc"}
    rule, params = table.match("GET", "/api/v1/transactions/categories")
    assert rule.prefix == "categories"
    assert params == {}


def test_route_table_filters_by_method() -> None:
    table = RouteTable(CACHE_RULES, prefix="/api/v1")
    assert table.match("POST", "/api/v1/transactions") is None
    assert table.match("GET", "/api/v1/analytics/export") is None


def test_bulk_delete_is_not_taken_for_a_transaction_id() -> None:
    table = RouteTable(INVALIDATION_RULES, prefix="/api/v1")
    rule, params = table.match("DELETE", "/api/v1/transactions/bulk")
    assert rule.path == "/transactions/bulk"
    assert params == {}


def test_every_cache_rule_is_get_only() -> None:
    assert all(r.methods == frozenset({"GET"}) for r in CACHE_RULES)


def test_resolve_template_substitutes_user_and_path_params() -> None:
    request = _request(path_params={"transaction_id": "t1"})
    assert (
        resolve_pattern("transaction:detail:{user_id}:{transaction_id}", request)
        == "transaction:detail:u1:t1"
    )


def test_resolve_template_widens_missing_values() -> None:
    request = _request(user_id=None)
    assert resolve_pattern("transactions:{user_id}:*", request) == "transactions:*:*"


def test_resolve_template_widens_unsafe_values() -> None:
    request = _request(path_params={"transaction_id": "a*b"})
    assert (
        resolve_pattern("transaction:detail:{user_id}:{transaction_id}", request)
        == "transaction:detail:u1:*"
    )


def test_resolve_callable_pattern() -> None:
    request = _request()
    assert resolve_pattern(lambda r: f"custom:{r.state.user_id}", request) == "custom:u1"


def test_rules_are_hashable_value_objects() -> None:
    rule = CacheRule("/x", "x", 60)
    assert rule == CacheRule("/x", "x", 60)
    inv = InvalidationRule("/x", frozenset({"POST"}), ("x:{user_id}:*",))
    assert {inv} == {InvalidationRule("/x", frozenset({"POST"}), ("x:{user_id}:*",))}


def test_user_scoped_pattern_does_not_match_other_users() -> None:
    pattern = resolve_pattern(TRANSACTIONS_PATTERN, _request())
    assert fnmatch.fnmatchcase(query_key("transactions", "u1", "limit=5"), pattern)
    assert not fnmatch.fnmatchcase(query_key("transactions", "u10", "limit=5"), pattern)


def test_analytics_pattern_spans_sub_resources() -> None:
    pattern = resolve_pattern(ANALYTICS_PATTERN, _request())
    assert fnmatch.fnmatchcase("analytics:summary:u1:default", pattern)
    assert fnmatch.fnmatchcase("analytics:top-categories:u1:limit=3", pattern)
    assert not fnmatch.fnmatchcase("analytics:summary:u2:default", pattern)
