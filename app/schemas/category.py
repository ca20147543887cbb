"""Category API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import TransactionType

_COLOR = r"^#[0-9a-fA-F]{6}$"


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    type: TransactionType
    color: str | None = Field(default=None, pattern=_COLOR)
    icon: str | None = Field(default=None, max_length=50)


class CategoryUpdateRequest(BaseModel):
    """Partial update; the type of a category cannot change."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    color: str | None = Field(default=None, pattern=_COLOR)
    icon: str | None = Field(default=None, max_length=50)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: TransactionType
    color: str
    icon: str | None = None
    created_at: datetime
