"""Input sanitization for user-supplied text."""

import nh3


def clean_text(value: str) -> str:
    """Strip all HTML from free text (descriptions, names) and trim whitespace.

    Args:
        value: Raw string that may contain HTML.

    Returns:
        Plain text safe for display.
    """
    if not value:
        return value
    return nh3.clean(value, tags=set(), attributes={}).strip()
