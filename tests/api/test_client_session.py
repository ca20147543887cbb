"""ApiSession end to end against the app over ASGITransport."""

import httpx
import pytest
from httpx import ASGITransport

from app.application.services import AuthService
from app.client import ApiSession, CachedApiClient


@pytest.fixture
async def session(app):
    service = AuthService(app.state.store.users)
    await service.create_local_user("grace@example.com", "Grace Hopper", "cobol-1959")
    async with httpx.AsyncClient(transport=ASGITransport(app=app)) as http:
        client = CachedApiClient("http://test/api/v1", http_client=http)
        yield ApiSession(client)
        await client.aclose()


async def test_login_sets_token_and_user(session) -> None:
    user = await session.login("grace@example.com", "cobol-1959")
    assert user["email"] == "grace@example.com"
    assert session.is_authenticated
    assert session.client.headers["Authorization"].startswith("Bearer ")


async def test_bad_login_raises(session) -> None:
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await session.login("grace@example.com", "wrong")
    assert exc_info.value.response.status_code == 401
    assert not session.is_authenticated


async def test_profile_is_cached_until_forced(session, fake_cache) -> None:
    await session.login("grace@example.com", "cobol-1959")
    await session.load_profile()
    server_reads = len(fake_cache.gets)
    await session.load_profile()
    assert len(fake_cache.gets) == server_reads
    await session.load_profile(force_refresh=True)
    assert len(fake_cache.gets) == server_reads + 1


async def test_dashboard_loads_every_section(session) -> None:
    await session.login("grace@example.com", "cobol-1959")
    dashboard = await session.load_dashboard()
    assert dashboard.summary["balance"] == 0
    assert dashboard.recent_transactions == []
    assert dashboard.recent_p2p == []
    assert dashboard.categories == []
    assert session.client.cached("/analytics/summary")
    assert session.client.cached("/transactions/p2p/summary")


async def test_logout_clears_client_cache(session) -> None:
    await session.login("grace@example.com", "cobol-1959")
    await session.load_profile()
    assert session.client.cached("/auth/profile")
    await session.logout()
    assert not session.client.cached("/auth/profile")
    assert not session.is_authenticated
    assert "Authorization" not in session.client.headers
