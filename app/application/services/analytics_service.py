"""Analytics service: totals, breakdowns and CSV export over a user's transactions."""

from __future__ import annotations

import csv
import io
from collections import defaultdict
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.analytics import (
    CategoryTotal,
    CategoryUsage,
    DateTotal,
    Summary,
)
from app.application.dtos.transaction import TransactionFilter
from app.domain.enums import DateGrouping, TransactionType
from app.domain.exceptions import ValidationException
from app.shared.utils import bucket_label

if TYPE_CHECKING:
    from app.application.interfaces import ICategoryRepository, ITransactionRepository

UNCATEGORIZED = "Uncategorized"
DEFAULT_COLOR = "#6b7280"
EXPORT_COLUMNS = ("date", "type", "category", "amount", "description")


class AnalyticsService:
    """Read-only aggregates. Every method accepts an optional inclusive date range."""

    def __init__(
        self,
        transaction_repo: ITransactionRepository,
        category_repo: ICategoryRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._category_repo = category_repo

    async def _transactions(
        self,
        user_id: str,
        start: datetime | None,
        end: datetime | None,
        type: TransactionType | None = None,
    ):
        if start is not None and end is not None and start > end:
            raise ValidationException("start_date must be before end_date", field="start_date")
        return await self._transaction_repo.list_by_user(
            user_id, TransactionFilter(type=type, start=start, end=end)
        )

    async def summary(
        self, user_id: str, start: datetime | None = None, end: datetime | None = None
    ) -> Summary:
        transactions = await self._transactions(user_id, start, end)
        income = [t.amount for t in transactions if t.type == TransactionType.INCOME]
        expenses = [t.amount for t in transactions if t.type == TransactionType.EXPENSE]
        total_income = round(sum(income), 2)
        total_expenses = round(sum(expenses), 2)
        return Summary(
            total_income=total_income,
            total_expenses=total_expenses,
            balance=round(total_income - total_expenses, 2),
            transaction_count=len(transactions),
            income_count=len(income),
            expense_count=len(expenses),
        )

    async def by_category(
        self,
        user_id: str,
        type: TransactionType = TransactionType.EXPENSE,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CategoryTotal]:
        """Totals per category for one type, largest first, with percentage of the type total."""
        transactions = await self._transactions(user_id, start, end, type)
        categories = {c.id: c for c in await self._category_repo.list_by_user(user_id)}
        totals: dict[str, float] = defaultdict(float)
        counts: dict[str, int] = defaultdict(int)
        for t in transactions:
            totals[t.category_id] += t.amount
            counts[t.category_id] += 1
        grand_total = sum(totals.values())
        result = []
        for category_id, total in totals.items():
            category = categories.get(category_id)
            result.append(
                CategoryTotal(
                    category_id=category_id,
                    category_name=category.name if category else UNCATEGORIZED,
                    color=category.color if category else DEFAULT_COLOR,
                    total=round(total, 2),
                    count=counts[category_id],
                    percentage=round(total / grand_total * 100, 2) if grand_total else 0.0,
                )
            )
        return sorted(result, key=lambda c: (-c.total, c.category_name))

    async def by_date(
        self,
        user_id: str,
        grouping: DateGrouping = DateGrouping.DAY,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[DateTotal]:
        """Income and expenses per day or month, oldest bucket first."""
        transactions = await self._transactions(user_id, start, end)
        income: dict[str, float] = defaultdict(float)
        expenses: dict[str, float] = defaultdict(float)
        for t in transactions:
            label = bucket_label(t.date, grouping.value)
            if t.type == TransactionType.INCOME:
                income[label] += t.amount
            else:
                expenses[label] += t.amount
        return [
            DateTotal(
                period=label,
                income=round(income[label], 2),
                expenses=round(expenses[label], 2),
                net=round(income[label] - expenses[label], 2),
            )
            for label in sorted(income.keys() | expenses.keys())
        ]

    async def top_categories(
        self,
        user_id: str,
        limit: int = 5,
        type: TransactionType = TransactionType.EXPENSE,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CategoryTotal]:
        if not 1 <= limit <= 20:
            raise ValidationException("Limit must be between 1 and 20", field="limit")
        return (await self.by_category(user_id, type, start, end))[:limit]

    async def categories(self, user_id: str) -> list[CategoryUsage]:
        """Every category with its transaction count (unused categories included)."""
        transactions = await self._transaction_repo.list_by_user(user_id)
        counts: dict[str, int] = defaultdict(int)
        for t in transactions:
            counts[t.category_id] += 1
        return [
            CategoryUsage(
                id=c.id,
                name=c.name,
                type=c.type.value,
                color=c.color,
                transaction_count=counts[c.id],
            )
            for c in await self._category_repo.list_by_user(user_id)
        ]

    async def export_csv(
        self, user_id: str, start: datetime | None = None, end: datetime | None = None
    ) -> str:
        """Render transactions in the range as CSV, newest first."""
        transactions = await self._transactions(user_id, start, end)
        names = {c.id: c.name for c in await self._category_repo.list_by_user(user_id)}
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(EXPORT_COLUMNS)
        for t in transactions:
            writer.writerow(
                (
                    t.date.date().isoformat(),
                    t.type.value,
                    names.get(t.category_id, UNCATEGORIZED),
                    f"{t.amount:.2f}",
                    t.description,
                )
            )
        return buffer.getvalue()
