"""Category domain entity."""

import re
from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import TransactionType
from app.domain.exceptions import ValidationException

_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class CategoryEntity:
    """User-defined label for transactions of one type (income or expense)."""

    id: str
    user_id: str
    name: str
    type: TransactionType
    created_at: datetime
    color: str = "#6b7280"
    icon: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate category invariants. Raises ValidationException if invalid."""
        if not self.user_id:
            raise ValidationException("Category must belong to a user", field="user_id")
        if not 1 <= len(self.name.strip()) <= 50:
            raise ValidationException(
                "Category name must be between 1 and 50 characters", field="name"
            )
        if not _COLOR_PATTERN.match(self.color):
            raise ValidationException("Color must be a hex value like #1a2b3c", field="color")
