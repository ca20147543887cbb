"""Domain enumerations for Spendiq.

Enums represent fixed sets of domain values (transaction types, P2P states).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation messages)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class TransactionType(_ValuesMixin, str, Enum):
    """Direction of money for a transaction or category."""

    INCOME = "income"
    EXPENSE = "expense"


class AuthType(_ValuesMixin, str, Enum):
    """How an account signs in."""

    LOCAL = "local"
    GOOGLE = "google"


class P2PDirection(_ValuesMixin, str, Enum):
    """Whether the user lent money to, or borrowed it from, the counterparty."""

    LENT = "lent"
    BORROWED = "borrowed"


class P2PStatus(_ValuesMixin, str, Enum):
    """Lifecycle of a peer-to-peer debt.

    Only pending debts can change status; settled and cancelled are final.
    """

    PENDING = "pending"
    SETTLED = "settled"
    CANCELLED = "cancelled"


class DateGrouping(_ValuesMixin, str, Enum):
    """Bucket size for time series analytics."""

    DAY = "day"
    MONTH = "month"
