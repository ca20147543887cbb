"""Raw-ASGI tests for the cache middleware and the authentication context."""

from types import SimpleNamespace

from starlette.responses import JSONResponse, PlainTextResponse, Response

from app.infrastructure.security.jwt import create_access_token
from app.middleware import (
    AuthenticationMiddleware,
    CacheInvalidationMiddleware,
    CacheRule,
    InvalidationRule,
    ResponseCacheMiddleware,
)
from app.middleware.response_cache import ResponseRecorder


def _scope(cache, method="GET", path="/items", query=b"", user_id="u1", headers=None):
    return {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": headers or [],
        "app": SimpleNamespace(state=SimpleNamespace(cache=cache)),
        "state": {"user_id": user_id},
    }


async def _receive():
    return {"type": "http.request", "body": b"", "more_body": False}


class Collector:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)

    @property
    def status(self) -> int:
        return self.messages[0]["status"]

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages[1:])


def _endpoint(response_factory):
    calls: list[dict] = []

    async def app(scope, receive, send):
        calls.append(scope)
        await response_factory()(scope, receive, send)

    app.calls = calls
    return app


async def test_recorder_forwards_and_records_chunks() -> None:
    sink = Collector()
    recorder = ResponseRecorder(sink)
    await recorder(
        {"type": "http.response.start", "status": 200, "headers": [(b"content-type", b"application/json")]}
    )
    await recorder({"type": "http.response.body", "body": b'{"a":', "more_body": True})
    assert not recorder.complete
    await recorder({"type": "http.response.body", "body": b"1}"})
    assert recorder.complete
    assert recorder.json_body() == {"a": 1}
    assert len(sink.messages) == 3


async def test_recorder_rejects_non_json() -> None:
    recorder = ResponseRecorder(Collector())
    await recorder(
        {"type": "http.response.start", "status": 200, "headers": [(b"content-type", b"text/plain")]}
    )
    await recorder({"type": "http.response.body", "body": b"{}"})
    assert recorder.json_body() is None


async def test_non_json_response_is_not_cached(fake_cache) -> None:
    inner = _endpoint(lambda: PlainTextResponse("hello"))
    app = ResponseCacheMiddleware(inner, [CacheRule("/items", "items", 60)])
    sink = Collector()
    await app(_scope(fake_cache), _receive, sink)
    assert sink.body == b"hello"
    assert fake_cache.entries == {}


async def test_default_key_includes_path_and_sorted_query(fake_cache) -> None:
    inner = _endpoint(lambda: JSONResponse({"ok": True}))
    app = ResponseCacheMiddleware(inner, [CacheRule("/items", "items", 60)])
    await app(_scope(fake_cache, query=b"b=2&a=1"), _receive, Collector())
    assert fake_cache.keys() == ["items:u1:/items?a=1&b=2"]


async def test_key_builder_failure_bypasses_cache(fake_cache) -> None:
    def broken(_request):
        raise ValueError("unsafe component")

    inner = _endpoint(lambda: JSONResponse({"ok": True}))
    app = ResponseCacheMiddleware(inner, [CacheRule("/items", "items", 60, key_builder=broken)])
    sink = Collector()
    await app(_scope(fake_cache), _receive, sink)
    assert sink.status == 200
    assert fake_cache.gets == []
    assert fake_cache.entries == {}


async def test_hit_is_served_without_calling_the_app(fake_cache) -> None:
    inner = _endpoint(lambda: JSONResponse({"n": 1}))
    app = ResponseCacheMiddleware(inner, [CacheRule("/items", "items", 60)])
    first, second = Collector(), Collector()
    await app(_scope(fake_cache), _receive, first)
    await app(_scope(fake_cache), _receive, second)
    assert len(inner.calls) == 1
    assert first.body == second.body


async def test_prefix_is_applied_to_rule_paths(fake_cache) -> None:
    inner = _endpoint(lambda: JSONResponse({"n": 1}))
    app = ResponseCacheMiddleware(inner, [CacheRule("/items", "items", 60)], prefix="/api/v1")
    await app(_scope(fake_cache, path="/items"), _receive, Collector())
    assert fake_cache.entries == {}
    await app(_scope(fake_cache, path="/api/v1/items"), _receive, Collector())
    assert fake_cache.keys() == ["items:u1:/api/v1/items"]


async def test_invalidation_continues_after_a_failing_pattern(fake_cache) -> None:
    fake_cache.entries = {"a:u1:x": 1, "b:u1:x": 2}

    def broken(_request):
        raise KeyError("missing")

    rule = InvalidationRule(
        "/items/{item_id}", frozenset({"DELETE"}), (broken, "a:{user_id}:*", "b:{user_id}:*")
    )
    inner = _endpoint(lambda: Response(status_code=204))
    app = CacheInvalidationMiddleware(inner, [rule])
    await app(_scope(fake_cache, method="DELETE", path="/items/7"), _receive, Collector())
    assert fake_cache.entries == {}
    assert fake_cache.deleted_patterns == ["a:u1:*", "b:u1:*"]


async def test_invalidation_happens_before_status_is_forwarded(fake_cache) -> None:
    fake_cache.entries = {"a:u1:x": 1}
    seen: list[dict] = []

    async def send(message):
        if message["type"] == "http.response.start":
            seen.append(dict(fake_cache.entries))

    rule = InvalidationRule("/items", frozenset({"POST"}), ("a:{user_id}:*",))
    app = CacheInvalidationMiddleware(_endpoint(lambda: JSONResponse({}, status_code=201)), [rule])
    await app(_scope(fake_cache, method="POST"), _receive, send)
    assert seen == [{}]


async def test_failed_mutation_purges_nothing(fake_cache) -> None:
    fake_cache.entries = {"a:u1:x": 1}
    rule = InvalidationRule("/items", frozenset({"POST"}), ("a:{user_id}:*",))
    app = CacheInvalidationMiddleware(_endpoint(lambda: JSONResponse({}, status_code=422)), [rule])
    await app(_scope(fake_cache, method="POST"), _receive, Collector())
    assert fake_cache.deleted_patterns == []
    assert fake_cache.entries == {"a:u1:x": 1}


def _capture_user():
    captured: dict = {}

    async def app(scope, receive, send):
        captured["user_id"] = scope["state"]["user_id"]

    return app, captured


async def test_authentication_reads_bearer_token() -> None:
    inner, captured = _capture_user()
    token = create_access_token("user-42")
    scope = {"type": "http", "headers": [(b"authorization", f"Bearer {token}".encode())]}
    await AuthenticationMiddleware(inner)(scope, _receive, Collector())
    assert captured["user_id"] == "user-42"


async def test_authentication_reads_cookie() -> None:
    inner, captured = _capture_user()
    token = create_access_token("user-7")
    scope = {"type": "http", "headers": [(b"cookie", f"theme=dark; auth_token={token}".encode())]}
    await AuthenticationMiddleware(inner)(scope, _receive, Collector())
    assert captured["user_id"] == "user-7"


async def test_authentication_reads_cookie_next_to_non_rfc_cookies() -> None:
    inner, captured = _capture_user()
    token = create_access_token("user-9")
    raw = f'prefs={{"a":1,"b":2}}; theme="dark mode"; auth_token={token}'
    scope = {"type": "http", "headers": [(b"cookie", raw.encode())]}
    await AuthenticationMiddleware(inner)(scope, _receive, Collector())
    assert captured["user_id"] == "user-9"


async def test_authentication_ignores_invalid_token() -> None:
    inner, captured = _capture_user()
    scope = {"type": "http", "headers": [(b"authorization", b"Bearer not-a-jwt")]}
    await AuthenticationMiddleware(inner)(scope, _receive, Collector())
    assert captured["user_id"] is None
