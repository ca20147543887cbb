"""Repository interfaces (ports) for the application layer.

Protocols define contracts that the document store implementations must
fulfill. Every finance read is scoped by user_id; a record owned by another
user is indistinguishable from a missing one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.transaction import TransactionFilter
    from app.domain.entities import (
        CategoryEntity,
        P2PTransactionEntity,
        TransactionEntity,
        UserEntity,
    )
    from app.domain.enums import P2PStatus, TransactionType


class IUserRepository(Protocol):
    """Protocol for user repository."""

    async def get_by_id(self, user_id: str) -> UserEntity | None:
        """Return user by ID."""

    async def get_by_email(self, email: str) -> UserEntity | None:
        """Return user by email (case-insensitive)."""

    async def save(self, user: UserEntity) -> UserEntity:
        """Insert or replace a user."""


class ICategoryRepository(Protocol):
    """Protocol for category repository."""

    async def list_by_user(
        self, user_id: str, type: TransactionType | None = None
    ) -> list[CategoryEntity]:
        """Return the user's categories ordered by name, optionally of one type."""

    async def get(self, user_id: str, category_id: str) -> CategoryEntity | None:
        """Return one of the user's categories."""

    async def get_by_name(
        self, user_id: str, name: str, type: TransactionType
    ) -> CategoryEntity | None:
        """Return the user's category with this name and type (case-insensitive)."""

    async def save(self, category: CategoryEntity) -> CategoryEntity:
        """Insert or replace a category."""

    async def delete(self, user_id: str, category_id: str) -> bool:
        """Delete a category. Returns False if it did not exist."""


class ITransactionRepository(Protocol):
    """Protocol for transaction repository."""

    async def list_by_user(
        self, user_id: str, filters: TransactionFilter | None = None
    ) -> list[TransactionEntity]:
        """Return the user's transactions matching filters, newest first."""

    async def get(self, user_id: str, transaction_id: str) -> TransactionEntity | None:
        """Return one of the user's transactions."""

    async def save(self, transaction: TransactionEntity) -> TransactionEntity:
        """Insert or replace a transaction."""

    async def delete(self, user_id: str, transaction_id: str) -> bool:
        """Delete a transaction. Returns False if it did not exist."""

    async def delete_many(self, user_id: str, transaction_ids: list[str]) -> int:
        """Delete several transactions. Returns how many existed."""

    async def count_by_category(self, user_id: str, category_id: str) -> int:
        """Return how many of the user's transactions use category_id."""


class IP2PRepository(Protocol):
    """Protocol for peer-to-peer debt repository."""

    async def list_by_user(
        self, user_id: str, status: P2PStatus | None = None
    ) -> list[P2PTransactionEntity]:
        """Return the user's P2P records, newest first."""

    async def get(self, user_id: str, p2p_id: str) -> P2PTransactionEntity | None:
        """Return one of the user's P2P records."""

    async def save(self, record: P2PTransactionEntity) -> P2PTransactionEntity:
        """Insert or replace a P2P record."""
