"""Signed-in session over CachedApiClient: login/logout and the dashboard reads.

Login and logout clear the whole client cache, so one user's cached reads
are never served to the next.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

import httpx

from app.client.cached_api import CachedApiClient
from app.shared.utils import utc_now

logger = logging.getLogger(__name__)

PROFILE_CACHE_SECONDS = 30.0
DASHBOARD_CACHE_SECONDS = {
    "summary": 60.0,
    "recent_transactions": 30.0,
    "recent_p2p": 30.0,
    "p2p_summary": 60.0,
    "categories": 60.0,
    "trend": 60.0,
}
TREND_DAYS = 30
RECENT_TRANSACTIONS = 5
RECENT_P2P = 3
TOP_DASHBOARD_CATEGORIES = 6


@dataclass
class Dashboard:
    summary: dict[str, Any]
    recent_transactions: list[dict[str, Any]] = field(default_factory=list)
    recent_p2p: list[dict[str, Any]] = field(default_factory=list)
    p2p_summary: dict[str, Any] = field(default_factory=dict)
    categories: list[dict[str, Any]] = field(default_factory=list)
    trend: list[dict[str, Any]] = field(default_factory=list)


class ApiSession:
    """Authentication state plus cached reads for one API user."""

    def __init__(self, client: CachedApiClient) -> None:
        self.client = client
        self.token: str | None = None
        self.user: dict[str, Any] | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Sign in and return the user profile.

        Raises:
            httpx.HTTPStatusError: Invalid credentials (401) or other API errors.
        """
        self.client.clear()
        response = await self.client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        response.raise_for_status()
        body = response.json()
        self.token = body["access_token"]
        self.user = body["user"]
        self.client.set_token(self.token)
        return self.user

    async def logout(self) -> None:
        """Sign out locally; a failing server call does not keep the session alive."""
        self.client.clear()
        try:
            if self.token is not None:
                response = await self.client.post("/auth/logout")
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Server logout failed: %s", e)
        finally:
            self.token = None
            self.user = None
            self.client.set_token(None)

    async def load_profile(self, force_refresh: bool = False) -> dict[str, Any]:
        self.user = await self.client.get(
            "/auth/profile",
            cache_duration=PROFILE_CACHE_SECONDS,
            force_refresh=force_refresh,
        )
        return self.user

    async def load_dashboard(self) -> Dashboard:
        """Fetch every dashboard read concurrently, each with its own cache duration."""
        today = utc_now().date()
        start = today - timedelta(days=TREND_DAYS - 1)
        trend_url = (
            f"/analytics/by-date?start_date={start.isoformat()}"
            f"&end_date={today.isoformat()}&grouping=day"
        )
        durations = DASHBOARD_CACHE_SECONDS
        (
            summary,
            transactions,
            p2p,
            p2p_summary,
            categories,
            trend,
        ) = await asyncio.gather(
            self.client.get("/analytics/summary", cache_duration=durations["summary"]),
            self.client.get(
                f"/transactions?limit={RECENT_TRANSACTIONS}",
                cache_duration=durations["recent_transactions"],
            ),
            self.client.get(
                f"/transactions/p2p?limit={RECENT_P2P}", cache_duration=durations["recent_p2p"]
            ),
            self.client.get("/transactions/p2p/summary", cache_duration=durations["p2p_summary"]),
            self.client.get("/analytics/by-category", cache_duration=durations["categories"]),
            self.client.get(trend_url, cache_duration=durations["trend"]),
        )
        return Dashboard(
            summary=summary,
            recent_transactions=transactions["transactions"],
            recent_p2p=p2p,
            p2p_summary=p2p_summary,
            categories=categories[:TOP_DASHBOARD_CATEGORIES],
            trend=trend,
        )
