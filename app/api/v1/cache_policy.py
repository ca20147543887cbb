"""Which API v1 reads are cached, for how long, and which writes purge them.

Paths are relative to the API prefix. Within each list, literal paths come
before parameterized siblings (``/transactions/p2p`` before
``/transactions/{transaction_id}``) because the first matching rule wins.
"""

from starlette.requests import Request

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_ANALYTICS,
    CACHE_PREFIX_ANALYTICS_BY_CATEGORY,
    CACHE_PREFIX_ANALYTICS_BY_DATE,
    CACHE_PREFIX_ANALYTICS_CATEGORIES,
    CACHE_PREFIX_ANALYTICS_SUMMARY,
    CACHE_PREFIX_ANALYTICS_TOP_CATEGORIES,
    CACHE_PREFIX_CATEGORIES,
    CACHE_PREFIX_P2P,
    CACHE_PREFIX_P2P_SUMMARY,
    CACHE_PREFIX_PROFILE,
    CACHE_PREFIX_TRANSACTION_DETAIL,
    CACHE_PREFIX_TRANSACTIONS,
    CACHE_TTL_ANALYTICS,
    CACHE_TTL_ANALYTICS_CATEGORIES,
    CACHE_TTL_ANALYTICS_TOP_CATEGORIES,
    CACHE_TTL_CATEGORIES,
    CACHE_TTL_P2P,
    CACHE_TTL_PROFILE,
    CACHE_TTL_TRANSACTIONS,
    USER_ID_PLACEHOLDER,
)
from app.infrastructure.cache.keys import (
    profile_key,
    query_key,
    scoped_key,
    transaction_detail_key,
)
from app.middleware.cache_rules import (
    CacheRule,
    InvalidationRule,
    KeyBuilder,
    request_user_id,
)

_USER = "{" + USER_ID_PLACEHOLDER + "}"


def _user_glob(prefix: str) -> str:
    """Template purging every entry under prefix for the acting user."""
    return f"{prefix}{CACHE_KEY_SEP}{_USER}{CACHE_KEY_SEP}*"


PROFILE_PATTERN = f"{CACHE_PREFIX_PROFILE}{CACHE_KEY_SEP}{_USER}"
TRANSACTIONS_PATTERN = _user_glob(CACHE_PREFIX_TRANSACTIONS)
TRANSACTION_DETAILS_PATTERN = _user_glob(CACHE_PREFIX_TRANSACTION_DETAIL)
TRANSACTION_DETAIL_PATTERN = (
    f"{CACHE_PREFIX_TRANSACTION_DETAIL}{CACHE_KEY_SEP}{_USER}{CACHE_KEY_SEP}{{transaction_id}}"
)
ANALYTICS_PATTERN = f"{CACHE_PREFIX_ANALYTICS}{CACHE_KEY_SEP}*{CACHE_KEY_SEP}{_USER}{CACHE_KEY_SEP}*"
CATEGORIES_PATTERN = _user_glob(CACHE_PREFIX_CATEGORIES)
P2P_PATTERN = _user_glob(CACHE_PREFIX_P2P)
P2P_SUMMARY_PATTERN = _user_glob(CACHE_PREFIX_P2P_SUMMARY)


def _by_query(prefix: str) -> KeyBuilder:
    def build(request: Request) -> str:
        return query_key(prefix, request_user_id(request), request.url.query)

    return build


def _profile(request: Request) -> str:
    return profile_key(request_user_id(request))


def _categories(request: Request) -> str:
    return scoped_key(
        CACHE_PREFIX_CATEGORIES,
        request_user_id(request),
        request.query_params.get("type") or "all",
    )


def _transaction_detail(request: Request) -> str:
    return transaction_detail_key(
        request_user_id(request), request.path_params["transaction_id"]
    )


CACHE_RULES: list[CacheRule] = [
    CacheRule("/auth/profile", CACHE_PREFIX_PROFILE, CACHE_TTL_PROFILE, _profile),
    CacheRule("/categories", CACHE_PREFIX_CATEGORIES, CACHE_TTL_CATEGORIES, _categories),
    CacheRule(
        "/transactions",
        CACHE_PREFIX_TRANSACTIONS,
        CACHE_TTL_TRANSACTIONS,
        _by_query(CACHE_PREFIX_TRANSACTIONS),
    ),
    CacheRule(
        "/transactions/p2p", CACHE_PREFIX_P2P, CACHE_TTL_P2P, _by_query(CACHE_PREFIX_P2P)
    ),
    CacheRule(
        "/transactions/p2p/summary",
        CACHE_PREFIX_P2P_SUMMARY,
        CACHE_TTL_P2P,
        _by_query(CACHE_PREFIX_P2P_SUMMARY),
    ),
    CacheRule(
        "/transactions/categories",
        CACHE_PREFIX_CATEGORIES,
        CACHE_TTL_CATEGORIES,
        _categories,
    ),
    CacheRule(
        "/transactions/{transaction_id}",
        CACHE_PREFIX_TRANSACTION_DETAIL,
        CACHE_TTL_TRANSACTIONS,
        _transaction_detail,
    ),
    CacheRule(
        "/analytics/summary",
        CACHE_PREFIX_ANALYTICS_SUMMARY,
        CACHE_TTL_ANALYTICS,
        _by_query(CACHE_PREFIX_ANALYTICS_SUMMARY),
    ),
    CacheRule(
        "/analytics/by-category",
        CACHE_PREFIX_ANALYTICS_BY_CATEGORY,
        CACHE_TTL_ANALYTICS,
        _by_query(CACHE_PREFIX_ANALYTICS_BY_CATEGORY),
    ),
    CacheRule(
        "/analytics/by-date",
        CACHE_PREFIX_ANALYTICS_BY_DATE,
        CACHE_TTL_ANALYTICS,
        _by_query(CACHE_PREFIX_ANALYTICS_BY_DATE),
    ),
    CacheRule(
        "/analytics/top-categories",
        CACHE_PREFIX_ANALYTICS_TOP_CATEGORIES,
        CACHE_TTL_ANALYTICS_TOP_CATEGORIES,
        _by_query(CACHE_PREFIX_ANALYTICS_TOP_CATEGORIES),
    ),
    CacheRule(
        "/analytics/categories",
        CACHE_PREFIX_ANALYTICS_CATEGORIES,
        CACHE_TTL_ANALYTICS_CATEGORIES,
        _by_query(CACHE_PREFIX_ANALYTICS_CATEGORIES),
    ),
]

_TRANSACTION_WRITE = (TRANSACTIONS_PATTERN, ANALYTICS_PATTERN)
_CATEGORY_WRITE = (
    CATEGORIES_PATTERN,
    TRANSACTIONS_PATTERN,
    TRANSACTION_DETAILS_PATTERN,
    ANALYTICS_PATTERN,
)
_P2P_WRITE = (P2P_PATTERN, P2P_SUMMARY_PATTERN)

INVALIDATION_RULES: list[InvalidationRule] = [
    InvalidationRule("/auth/profile", frozenset({"PUT"}), (PROFILE_PATTERN,)),
    InvalidationRule("/auth/logout", frozenset({"POST"}), (PROFILE_PATTERN,)),
    InvalidationRule("/transactions", frozenset({"POST"}), _TRANSACTION_WRITE),
    InvalidationRule(
        "/transactions/bulk",
        frozenset({"DELETE"}),
        (*_TRANSACTION_WRITE, TRANSACTION_DETAILS_PATTERN),
    ),
    InvalidationRule("/transactions/p2p", frozenset({"POST"}), _P2P_WRITE),
    InvalidationRule("/transactions/p2p/{p2p_id}/status", frozenset({"PATCH"}), _P2P_WRITE),
    InvalidationRule(
        "/transactions/{transaction_id}",
        frozenset({"PUT", "DELETE"}),
        (*_TRANSACTION_WRITE, TRANSACTION_DETAIL_PATTERN),
    ),
    InvalidationRule("/categories", frozenset({"POST"}), _CATEGORY_WRITE),
    InvalidationRule(
        "/categories/{category_id}", frozenset({"PUT", "DELETE"}), _CATEGORY_WRITE
    ),
]
