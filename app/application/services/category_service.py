"""Category service: per-user income/expense categories."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from app.domain.entities import CategoryEntity
from app.domain.enums import TransactionType
from app.domain.exceptions import (
    CategoryInUseException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils import clean_text, generate_id, utc_now

if TYPE_CHECKING:
    from app.application.interfaces import ICategoryRepository, ITransactionRepository


class CategoryService:
    """CRUD for categories. Names are unique per user and type."""

    def __init__(
        self,
        category_repo: ICategoryRepository,
        transaction_repo: ITransactionRepository,
    ) -> None:
        self._category_repo = category_repo
        self._transaction_repo = transaction_repo

    async def list_categories(
        self, user_id: str, type: TransactionType | None = None
    ) -> list[CategoryEntity]:
        return await self._category_repo.list_by_user(user_id, type)

    async def get_category(self, user_id: str, category_id: str) -> CategoryEntity:
        category = await self._category_repo.get(user_id, category_id)
        if category is None:
            raise ResourceNotFoundException("category", category_id)
        return category

    async def _ensure_unique(
        self, user_id: str, name: str, type: TransactionType, exclude_id: str | None = None
    ) -> None:
        existing = await self._category_repo.get_by_name(user_id, name, type)
        if existing is not None and existing.id != exclude_id:
            raise ValidationException(
                f"A {type.value} category named {name!r} already exists", field="name"
            )

    async def create_category(
        self,
        user_id: str,
        name: str,
        type: TransactionType,
        color: str | None = None,
        icon: str | None = None,
    ) -> CategoryEntity:
        name = clean_text(name)
        await self._ensure_unique(user_id, name, type)
        category = CategoryEntity(
            id=generate_id(),
            user_id=user_id,
            name=name,
            type=type,
            created_at=utc_now(),
            color=color or "#6b7280",
            icon=icon,
        )
        return await self._category_repo.save(category)

    async def update_category(
        self,
        user_id: str,
        category_id: str,
        name: str | None = None,
        color: str | None = None,
        icon: str | None = None,
    ) -> CategoryEntity:
        """Rename or restyle a category. Its type is fixed once transactions use it."""
        category = await self.get_category(user_id, category_id)
        changes: dict[str, object] = {}
        if name is not None:
            name = clean_text(name)
            await self._ensure_unique(user_id, name, category.type, exclude_id=category.id)
            changes["name"] = name
        if color is not None:
            changes["color"] = color
        if icon is not None:
            changes["icon"] = icon
        if not changes:
            return category
        return await self._category_repo.save(dataclasses.replace(category, **changes))

    async def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete a category no transaction references."""
        await self.get_category(user_id, category_id)
        in_use = await self._transaction_repo.count_by_category(user_id, category_id)
        if in_use:
            raise CategoryInUseException(category_id, in_use)
        await self._category_repo.delete(user_id, category_id)
