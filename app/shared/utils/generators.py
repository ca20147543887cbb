"""ID generators (CUID2)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_id() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    CUIDs are lowercase alphanumeric, so they are safe as cache key
    components and inside glob patterns.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result
