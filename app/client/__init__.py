"""Python client for the Spendiq API with a client-side response cache."""

from app.client.cached_api import CachedApiClient
from app.client.session import ApiSession, Dashboard

__all__ = ["ApiSession", "CachedApiClient", "Dashboard"]
