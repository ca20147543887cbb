"""HTTP middleware: authentication context, cache invalidation, response cache.

Applied in main app; order matters (last added = outermost). Authentication
must wrap both cache layers, and invalidation must wrap the response cache.
Import and use from app.main.
"""

from app.middleware.authentication import AuthenticationMiddleware
from app.middleware.cache_invalidation import CacheInvalidationMiddleware
from app.middleware.cache_rules import CacheRule, InvalidationRule
from app.middleware.response_cache import ResponseCacheMiddleware

__all__ = [
    "AuthenticationMiddleware",
    "CacheInvalidationMiddleware",
    "CacheRule",
    "InvalidationRule",
    "ResponseCacheMiddleware",
]
