"""DTOs for transaction use cases (no dependency on persistence)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities import TransactionEntity
from app.domain.enums import TransactionType


@dataclass(frozen=True)
class TransactionFilter:
    """Criteria for listing a user's transactions. None means no constraint."""

    type: TransactionType | None = None
    category_id: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    search: str | None = None

    def matches(self, t: TransactionEntity) -> bool:
        if self.type is not None and t.type != self.type:
            return False
        if self.category_id is not None and t.category_id != self.category_id:
            return False
        if self.start is not None and t.date < self.start:
            return False
        if self.end is not None and t.date > self.end:
            return False
        if self.search and self.search.lower() not in t.description.lower():
            return False
        return True


@dataclass(frozen=True)
class TransactionListItem:
    """Transaction joined with its category's display fields."""

    transaction: TransactionEntity
    category_name: str | None
    category_color: str | None


@dataclass(frozen=True)
class TransactionPage:
    """One page of transactions plus pagination counters."""

    items: list[TransactionListItem]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
