"""Auth API tests: login, register (disabled), logout and profile."""

import pytest
from httpx import AsyncClient

from app.application.services import AuthService
from app.infrastructure.security.jwt import create_access_token


@pytest.fixture
async def local_user(app):
    service = AuthService(app.state.store.users)
    return await service.create_local_user("ada@example.com", "Ada Lovelace", "correct-horse")


async def test_login_returns_token_and_profile(client: AsyncClient, local_user) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "ada@example.com", "password": "correct-horse"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == local_user.id
    assert "password_hash" not in data["user"]
    assert "auth_token" in response.headers.get("set-cookie", "")


async def test_login_wrong_password_returns_401(client: AsyncClient, local_user) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "ada@example.com", "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_login_unknown_email_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@example.com", "password": "whatever"},
    )
    assert response.status_code == 401


async def test_register_is_disabled(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "new@example.com", "name": "New User", "password": "long-enough"},
    )
    assert response.status_code == 403
    assert response.json()["error"] == "REGISTRATION_DISABLED"


async def test_token_from_login_reads_profile(client: AsyncClient, local_user) -> None:
    login = await client.post(
        "/api/v1/auth/login",
        json={"email": "ada@example.com", "password": "correct-horse"},
    )
    token = login.json()["access_token"]
    response = await client.get(
        "/api/v1/auth/profile", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json()["email"] == "ada@example.com"


async def test_cookie_authenticates(client: AsyncClient, user) -> None:
    token = create_access_token(user.id)
    response = await client.get(
        "/api/v1/auth/profile", headers={"Cookie": f"auth_token={token}"}
    )
    assert response.status_code == 200
    assert response.json()["id"] == user.id


async def test_cookie_authenticates_alongside_json_cookie(client: AsyncClient, user) -> None:
    token = create_access_token(user.id)
    cookie = f'prefs={{"a":1,"b":2}}; auth_token={token}'
    response = await client.get("/api/v1/auth/profile", headers={"Cookie": cookie})
    assert response.status_code == 200
    assert response.json()["id"] == user.id


async def test_invalid_token_is_unauthenticated(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/profile", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_profile_update_requires_a_field(client: AsyncClient, auth_headers) -> None:
    response = await client.put("/api/v1/auth/profile", json={}, headers=auth_headers)
    assert response.status_code == 400


async def test_logout_purges_profile_cache(
    client: AsyncClient, fake_cache, auth_headers
) -> None:
    await client.get("/api/v1/auth/profile", headers=auth_headers)
    assert "auth:profile:user1" in fake_cache.entries
    response = await client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert "auth:profile:user1" not in fake_cache.entries
