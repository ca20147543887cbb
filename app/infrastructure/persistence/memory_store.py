"""In-process document store and repositories.

Each collection is a dict of immutable entities keyed by id, so readers never
observe a partially updated record. One DocumentStore lives on app.state for
the lifetime of the process; swap in another implementation of the
app.application.interfaces protocols for durable storage.
"""

from __future__ import annotations

from app.application.dtos.transaction import TransactionFilter
from app.domain.entities import (
    CategoryEntity,
    P2PTransactionEntity,
    TransactionEntity,
    UserEntity,
)
from app.domain.enums import P2PStatus, TransactionType


class InMemoryUserRepository:
    """Users keyed by id, with a case-insensitive email index."""

    def __init__(self) -> None:
        self._users: dict[str, UserEntity] = {}

    async def get_by_id(self, user_id: str) -> UserEntity | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> UserEntity | None:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    async def save(self, user: UserEntity) -> UserEntity:
        self._users[user.id] = user
        return user


class InMemoryCategoryRepository:
    def __init__(self) -> None:
        self._categories: dict[str, CategoryEntity] = {}

    async def list_by_user(
        self, user_id: str, type: TransactionType | None = None
    ) -> list[CategoryEntity]:
        found = [
            c
            for c in self._categories.values()
            if c.user_id == user_id and (type is None or c.type == type)
        ]
        return sorted(found, key=lambda c: (c.type.value, c.name.lower()))

    async def get(self, user_id: str, category_id: str) -> CategoryEntity | None:
        category = self._categories.get(category_id)
        if category is None or category.user_id != user_id:
            return None
        return category

    async def get_by_name(
        self, user_id: str, name: str, type: TransactionType
    ) -> CategoryEntity | None:
        wanted = name.strip().lower()
        for c in self._categories.values():
            if c.user_id == user_id and c.type == type and c.name.lower() == wanted:
                return c
        return None

    async def save(self, category: CategoryEntity) -> CategoryEntity:
        self._categories[category.id] = category
        return category

    async def delete(self, user_id: str, category_id: str) -> bool:
        if await self.get(user_id, category_id) is None:
            return False
        del self._categories[category_id]
        return True


class InMemoryTransactionRepository:
    def __init__(self) -> None:
        self._transactions: dict[str, TransactionEntity] = {}

    async def list_by_user(
        self, user_id: str, filters: TransactionFilter | None = None
    ) -> list[TransactionEntity]:
        filters = filters or TransactionFilter()
        found = [
            t
            for t in self._transactions.values()
            if t.user_id == user_id and filters.matches(t)
        ]
        return sorted(found, key=lambda t: (t.date, t.created_at), reverse=True)

    async def get(self, user_id: str, transaction_id: str) -> TransactionEntity | None:
        transaction = self._transactions.get(transaction_id)
        if transaction is None or transaction.user_id != user_id:
            return None
        return transaction

    async def save(self, transaction: TransactionEntity) -> TransactionEntity:
        self._transactions[transaction.id] = transaction
        return transaction

    async def delete(self, user_id: str, transaction_id: str) -> bool:
        if await self.get(user_id, transaction_id) is None:
            return False
        del self._transactions[transaction_id]
        return True

    async def delete_many(self, user_id: str, transaction_ids: list[str]) -> int:
        deleted = 0
        for transaction_id in dict.fromkeys(transaction_ids):
            if await self.delete(user_id, transaction_id):
                deleted += 1
        return deleted

    async def count_by_category(self, user_id: str, category_id: str) -> int:
        return sum(
            1
            for t in self._transactions.values()
            if t.user_id == user_id and t.category_id == category_id
        )


class InMemoryP2PRepository:
    def __init__(self) -> None:
        self._records: dict[str, P2PTransactionEntity] = {}

    async def list_by_user(
        self, user_id: str, status: P2PStatus | None = None
    ) -> list[P2PTransactionEntity]:
        found = [
            r
            for r in self._records.values()
            if r.user_id == user_id and (status is None or r.status == status)
        ]
        return sorted(found, key=lambda r: (r.date, r.created_at), reverse=True)

    async def get(self, user_id: str, p2p_id: str) -> P2PTransactionEntity | None:
        record = self._records.get(p2p_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    async def save(self, record: P2PTransactionEntity) -> P2PTransactionEntity:
        self._records[record.id] = record
        return record


class DocumentStore:
    """All collections of one process (composition root for repositories)."""

    def __init__(self) -> None:
        self.users = InMemoryUserRepository()
        self.categories = InMemoryCategoryRepository()
        self.transactions = InMemoryTransactionRepository()
        self.p2p = InMemoryP2PRepository()
