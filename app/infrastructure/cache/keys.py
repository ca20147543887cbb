"""Cache key builders. Single place for key format.

Keys follow ``<prefix>:<user_id>:<qualifier>``. Key components (user_id,
record ids) must not contain CACHE_KEY_SEP or glob metacharacters, so that a
user-scoped invalidation pattern can never match another user's keys.
Qualifiers built from query strings are URL-encoded, which keeps the
separator out of them as well.
"""

from urllib.parse import parse_qsl, urlencode

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_PROFILE,
    CACHE_PREFIX_TRANSACTION_DETAIL,
    CACHE_QUALIFIER_DEFAULT,
)

_GLOB_CHARS = frozenset("*?[]\\")


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the separator or a glob character.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or unsafe as a key component.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )
    if _GLOB_CHARS.intersection(value):
        raise ValueError(
            f"Cache key component {name!r} must not contain glob characters"
        )


def normalize_query(query_string: str) -> str:
    """Return a canonical qualifier for a raw query string.

    Parameters are sorted so that ``?b=2&a=1`` and ``?a=1&b=2`` share a key,
    and re-encoded so the qualifier never contains the key separator. An empty
    query yields CACHE_QUALIFIER_DEFAULT.
    """
    pairs = parse_qsl(query_string, keep_blank_values=True)
    if not pairs:
        return CACHE_QUALIFIER_DEFAULT
    return urlencode(sorted(pairs))


def scoped_key(prefix: str, user_id: str, qualifier: str) -> str:
    """Cache key for a user-scoped resource: ``prefix:user_id:qualifier``."""
    _validate_key_component(user_id, "user_id")
    return f"{prefix}{CACHE_KEY_SEP}{user_id}{CACHE_KEY_SEP}{qualifier}"


def request_key(prefix: str, user_id: str, path: str, query_string: str = "") -> str:
    """Default key for a cached route: prefix, user and full request path.

    The query part is normalized so parameter order does not split entries.
    """
    qualifier = path
    if query_string:
        qualifier = f"{path}?{normalize_query(query_string)}"
    return scoped_key(prefix, user_id, qualifier)


def query_key(prefix: str, user_id: str, query_string: str) -> str:
    """Key qualified only by the normalized query (list and analytics reads)."""
    return scoped_key(prefix, user_id, normalize_query(query_string))


def profile_key(user_id: str) -> str:
    """Cache key for a user's profile."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_PROFILE}{CACHE_KEY_SEP}{user_id}"


def transaction_detail_key(user_id: str, transaction_id: str) -> str:
    """Cache key for one transaction as seen by its owner."""
    _validate_key_component(transaction_id, "transaction_id")
    return scoped_key(CACHE_PREFIX_TRANSACTION_DETAIL, user_id, transaction_id)
