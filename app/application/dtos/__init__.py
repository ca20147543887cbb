"""Application DTOs (no persistence dependency)."""

from app.application.dtos.analytics import (
    CategoryTotal,
    CategoryUsage,
    DateTotal,
    P2PSummary,
    Summary,
)
from app.application.dtos.transaction import (
    TransactionFilter,
    TransactionListItem,
    TransactionPage,
)

__all__ = [
    "CategoryTotal",
    "CategoryUsage",
    "DateTotal",
    "P2PSummary",
    "Summary",
    "TransactionFilter",
    "TransactionListItem",
    "TransactionPage",
]
