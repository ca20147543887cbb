"""Transaction API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.dtos.transaction import TransactionListItem, TransactionPage
from app.domain.entities.transaction import MAX_AMOUNT
from app.domain.enums import TransactionType


class TransactionCreateRequest(BaseModel):
    """Body for POST /transactions and PUT /transactions/{id} (full replace)."""

    type: TransactionType
    amount: float = Field(..., gt=0, le=MAX_AMOUNT)
    category_id: str = Field(..., min_length=1)
    date: datetime | None = Field(default=None, description="Defaults to now (UTC)")
    description: str = Field(default="", max_length=200)


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1, max_length=100)


class BulkDeleteResponse(BaseModel):
    deleted: int


class TransactionResponse(BaseModel):
    """Transaction with its category's display fields."""

    id: str
    type: TransactionType
    amount: float
    category_id: str
    category_name: str | None = None
    category_color: str | None = None
    date: datetime
    description: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_item(cls, item: TransactionListItem) -> TransactionResponse:
        t = item.transaction
        return cls(
            id=t.id,
            type=t.type,
            amount=t.amount,
            category_id=t.category_id,
            category_name=item.category_name,
            category_color=item.category_color,
            date=t.date,
            description=t.description,
            created_at=t.created_at,
            updated_at=t.updated_at,
        )


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionListResponse(BaseModel):
    """One page of transactions."""

    transactions: list[TransactionResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: TransactionPage) -> TransactionListResponse:
        return cls(
            transactions=[TransactionResponse.from_item(i) for i in page.items],
            pagination=PaginationResponse(
                page=page.page, limit=page.limit, total=page.total, pages=page.pages
            ),
        )
