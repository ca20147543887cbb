"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import (
    bucket_label,
    end_of_day,
    ensure_utc,
    start_of_day,
    utc_now,
)
from app.shared.utils.generators import generate_id
from app.shared.utils.sanitization import clean_text

__all__ = [
    "bucket_label",
    "clean_text",
    "end_of_day",
    "ensure_utc",
    "generate_id",
    "start_of_day",
    "utc_now",
]
