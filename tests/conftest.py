"""Pytest configuration and fixtures for spendiq.

Each HTTP test gets a fresh app from app.main.create_app() with its own
in-memory DocumentStore and an in-memory cache double on app.state.cache.
ASGITransport does not run the lifespan, so Redis is never contacted.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import copy
import fnmatch
import json
from datetime import UTC, datetime
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.domain.entities import CategoryEntity, UserEntity
from app.domain.enums import TransactionType
from app.infrastructure.security.jwt import create_access_token
from app.main import create_app


class FakeCache:
    """In-memory CacheProtocol implementation with Redis-style glob matching.

    Values are JSON round-tripped like the real adapter. Flip ``available`` or
    ``fail_writes`` to simulate an outage or a failing SETEX.
    """

    def __init__(self) -> None:
        self.entries: dict[str, Any] = {}
        self.ttls: dict[str, int | None] = {}
        self.available = True
        self.fail_writes = False
        self.gets: list[str] = []
        self.sets: list[str] = []
        self.deleted_patterns: list[str] = []

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any:
        self.gets.append(key)
        if not self.available or key not in self.entries:
            return None
        return copy.deepcopy(self.entries[key])

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        if not self.available or self.fail_writes:
            return False
        self.sets.append(key)
        self.entries[key] = json.loads(json.dumps(value))
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        if not self.available:
            return False
        self.entries.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> bool:
        self.deleted_patterns.append(pattern)
        if not self.available:
            return False
        for key in [k for k in self.entries if fnmatch.fnmatchcase(k, pattern)]:
            del self.entries[key]
        return True

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self.entries if k.startswith(prefix))


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def app(fake_cache: FakeCache) -> FastAPI:
    """Fresh application with an empty store and the cache double installed."""
    application = create_app()
    application.state.cache = fake_cache
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_user(user_id: str = "user1", email: str | None = None, **kwargs: Any) -> UserEntity:
    return UserEntity(
        id=user_id,
        email=email or f"{user_id}@example.com",
        name=kwargs.pop("name", f"User {user_id}"),
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        **kwargs,
    )


def auth_headers_for(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
async def user(app: FastAPI) -> UserEntity:
    """A user saved in the app's store (no password; authenticate with a token)."""
    return await app.state.store.users.save(make_user("user1"))


@pytest.fixture
async def other_user(app: FastAPI) -> UserEntity:
    return await app.state.store.users.save(make_user("user2"))


@pytest.fixture
def auth_headers(user: UserEntity) -> dict[str, str]:
    return auth_headers_for(user.id)


@pytest.fixture
async def expense_category(app: FastAPI, user: UserEntity) -> CategoryEntity:
    return await app.state.store.categories.save(
        CategoryEntity(
            id="cat-food",
            user_id=user.id,
            name="Food",
            type=TransactionType.EXPENSE,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
            color="#ff0000",
        )
    )


@pytest.fixture
async def income_category(app: FastAPI, user: UserEntity) -> CategoryEntity:
    return await app.state.store.categories.save(
        CategoryEntity(
            id="cat-salary",
            user_id=user.id,
            name="Salary",
            type=TransactionType.INCOME,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
            color="#00ff00",
        )
    )


@pytest.fixture
def headers_for():
    """Return a function building Bearer headers for any user id."""
    return auth_headers_for
