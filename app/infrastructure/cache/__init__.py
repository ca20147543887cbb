"""Cache: Redis service and cache key utilities.

Used by the response cache and invalidation middleware. CacheService uses
app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import (
    normalize_query,
    profile_key,
    query_key,
    request_key,
    scoped_key,
    transaction_detail_key,
)
from app.infrastructure.cache.redis_cache import CacheService, LinearBackoff

__all__ = [
    "CacheProtocol",
    "CacheService",
    "LinearBackoff",
    "normalize_query",
    "profile_key",
    "query_key",
    "request_key",
    "scoped_key",
    "transaction_detail_key",
]
