"""DTOs for analytics (no dependency on persistence)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Summary:
    """Income/expense totals over a date range."""

    total_income: float
    total_expenses: float
    balance: float
    transaction_count: int
    income_count: int
    expense_count: int


@dataclass(frozen=True)
class CategoryTotal:
    """Amount spent or earned in one category, with its share of the type total."""

    category_id: str
    category_name: str
    color: str
    total: float
    count: int
    percentage: float


@dataclass(frozen=True)
class DateTotal:
    """Income and expenses within one day or month bucket."""

    period: str
    income: float
    expenses: float
    net: float


@dataclass(frozen=True)
class CategoryUsage:
    """A category with how many transactions reference it."""

    id: str
    name: str
    type: str
    color: str
    transaction_count: int


@dataclass(frozen=True)
class P2PSummary:
    """Outstanding and settled amounts across the user's P2P records."""

    total_lent: float
    total_borrowed: float
    net_balance: float
    pending_count: int
    settled_count: int
    by_counterparty: dict[str, float] = field(default_factory=dict)
