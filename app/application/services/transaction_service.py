"""Transaction service: list, create, update, delete income/expense records."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.transaction import (
    TransactionFilter,
    TransactionListItem,
    TransactionPage,
)
from app.domain.entities import CategoryEntity, TransactionEntity
from app.domain.enums import TransactionType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils import clean_text, ensure_utc, generate_id, utc_now

if TYPE_CHECKING:
    from app.application.interfaces import ICategoryRepository, ITransactionRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
MAX_BULK_DELETE = 100


class TransactionService:
    """User-scoped transaction operations.

    A transaction's category must belong to the same user and have the same
    type (an expense cannot be filed under an income category).
    """

    def __init__(
        self,
        transaction_repo: ITransactionRepository,
        category_repo: ICategoryRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._category_repo = category_repo

    async def _category_for(
        self, user_id: str, category_id: str, type: TransactionType
    ) -> CategoryEntity:
        category = await self._category_repo.get(user_id, category_id)
        if category is None:
            raise ValidationException("Category does not exist", field="category_id")
        if category.type != type:
            raise ValidationException(
                f"Category is for {category.type.value}, not {type.value}",
                field="category_id",
            )
        return category

    async def _with_categories(
        self, user_id: str, transactions: list[TransactionEntity]
    ) -> list[TransactionListItem]:
        categories = {c.id: c for c in await self._category_repo.list_by_user(user_id)}
        items = []
        for t in transactions:
            category = categories.get(t.category_id)
            items.append(
                TransactionListItem(
                    transaction=t,
                    category_name=category.name if category else None,
                    category_color=category.color if category else None,
                )
            )
        return items

    async def list_transactions(
        self,
        user_id: str,
        filters: TransactionFilter | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> TransactionPage:
        if page < 1:
            raise ValidationException("Page must be at least 1", field="page")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationException(
                f"Limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        matching = await self._transaction_repo.list_by_user(user_id, filters)
        offset = (page - 1) * limit
        items = await self._with_categories(user_id, matching[offset : offset + limit])
        return TransactionPage(items=items, page=page, limit=limit, total=len(matching))

    async def get_transaction(self, user_id: str, transaction_id: str) -> TransactionListItem:
        transaction = await self._transaction_repo.get(user_id, transaction_id)
        if transaction is None:
            raise ResourceNotFoundException("transaction", transaction_id)
        return (await self._with_categories(user_id, [transaction]))[0]

    async def create_transaction(
        self,
        user_id: str,
        type: TransactionType,
        amount: float,
        category_id: str,
        date: datetime | None = None,
        description: str = "",
    ) -> TransactionListItem:
        await self._category_for(user_id, category_id, type)
        now = utc_now()
        transaction = TransactionEntity(
            id=generate_id(),
            user_id=user_id,
            type=type,
            amount=round(amount, 2),
            category_id=category_id,
            date=ensure_utc(date) or now,
            created_at=now,
            updated_at=now,
            description=clean_text(description),
        )
        saved = await self._transaction_repo.save(transaction)
        logger.debug("Created transaction %s for user %s", saved.id, user_id)
        return (await self._with_categories(user_id, [saved]))[0]

    async def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        type: TransactionType,
        amount: float,
        category_id: str,
        date: datetime | None = None,
        description: str = "",
    ) -> TransactionListItem:
        """Replace a transaction's fields (full update)."""
        existing = await self._transaction_repo.get(user_id, transaction_id)
        if existing is None:
            raise ResourceNotFoundException("transaction", transaction_id)
        await self._category_for(user_id, category_id, type)
        updated = dataclasses.replace(
            existing,
            type=type,
            amount=round(amount, 2),
            category_id=category_id,
            date=ensure_utc(date) or existing.date,
            description=clean_text(description),
            updated_at=utc_now(),
        )
        saved = await self._transaction_repo.save(updated)
        return (await self._with_categories(user_id, [saved]))[0]

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        if not await self._transaction_repo.delete(user_id, transaction_id):
            raise ResourceNotFoundException("transaction", transaction_id)

    async def bulk_delete(self, user_id: str, transaction_ids: list[str]) -> int:
        """Delete up to MAX_BULK_DELETE transactions; unknown ids are skipped."""
        if not transaction_ids:
            raise ValidationException("At least one transaction id is required", field="ids")
        if len(transaction_ids) > MAX_BULK_DELETE:
            raise ValidationException(
                f"At most {MAX_BULK_DELETE} transactions can be deleted at once", field="ids"
            )
        deleted = await self._transaction_repo.delete_many(user_id, transaction_ids)
        logger.info("Bulk deleted %s transaction(s) for user %s", deleted, user_id)
        return deleted
