"""Core constants: cache key prefixes, TTLs and shared literal values.

Single source of truth for cache key structure. Both the read-side cache
rules and the invalidation patterns are built from these prefixes, so a
prefix changed here changes both sides together.
"""

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Qualifier used when a request carries no distinguishing parameters
CACHE_QUALIFIER_DEFAULT = "default"

# Placeholder in invalidation patterns for the acting user's id
USER_ID_PLACEHOLDER = "user_id"

# Cache key prefixes (resource[:sub-resource])
CACHE_PREFIX_PROFILE = "auth:profile"
CACHE_PREFIX_CATEGORIES = "categories"
CACHE_PREFIX_TRANSACTIONS = "transactions"
CACHE_PREFIX_TRANSACTION_DETAIL = "transaction:detail"
CACHE_PREFIX_P2P = "p2p"
CACHE_PREFIX_P2P_SUMMARY = "p2p:summary"
CACHE_PREFIX_ANALYTICS = "analytics"
CACHE_PREFIX_ANALYTICS_SUMMARY = "analytics:summary"
CACHE_PREFIX_ANALYTICS_BY_CATEGORY = "analytics:by-category"
CACHE_PREFIX_ANALYTICS_BY_DATE = "analytics:by-date"
CACHE_PREFIX_ANALYTICS_TOP_CATEGORIES = "analytics:top-categories"
CACHE_PREFIX_ANALYTICS_CATEGORIES = "analytics:categories"

# TTLs in seconds
CACHE_TTL_PROFILE = 2 * 60
CACHE_TTL_CATEGORIES = 60 * 60
CACHE_TTL_TRANSACTIONS = 5 * 60
CACHE_TTL_P2P = 5 * 60
CACHE_TTL_ANALYTICS = 5 * 60
CACHE_TTL_ANALYTICS_TOP_CATEGORIES = 10 * 60
CACHE_TTL_ANALYTICS_CATEGORIES = 60 * 60

# Store adapter internals
CACHE_DELETE_CHUNK_SIZE = 500
