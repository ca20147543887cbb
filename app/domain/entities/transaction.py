"""Transaction domain entity."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import TransactionType
from app.domain.exceptions import ValidationException

MAX_AMOUNT = 1_000_000_000


@dataclass(frozen=True)
class TransactionEntity:
    """Single income or expense record.

    Amounts are positive; the type carries the sign. Updates produce a new
    entity via dataclasses.replace.
    """

    id: str
    user_id: str
    type: TransactionType
    amount: float
    category_id: str
    date: datetime
    created_at: datetime
    updated_at: datetime
    description: str = ""

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate transaction invariants. Raises ValidationException if invalid."""
        if not self.user_id:
            raise ValidationException("Transaction must belong to a user", field="user_id")
        if not 0 < self.amount <= MAX_AMOUNT:
            raise ValidationException(
                f"Amount must be greater than 0 and at most {MAX_AMOUNT}", field="amount"
            )
        if not self.category_id:
            raise ValidationException("Category is required", field="category_id")
        if len(self.description) > 200:
            raise ValidationException(
                "Description must be at most 200 characters", field="description"
            )

    @property
    def signed_amount(self) -> float:
        """Amount with the sign implied by type (expenses negative)."""
        return self.amount if self.type == TransactionType.INCOME else -self.amount
