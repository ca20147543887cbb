"""User domain entity."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import AuthType
from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class UserEntity:
    """Account owner. All finance data is scoped to a user id.

    Google accounts may have no password hash; they cannot use password login.
    """

    id: str
    email: str
    name: str
    created_at: datetime
    password_hash: str | None = None
    auth_type: AuthType = AuthType.LOCAL
    currency: str = "USD"
    avatar_url: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate user invariants. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("User ID is required", field="id")
        if "@" not in self.email:
            raise ValidationException("A valid email is required", field="email")
        if not 2 <= len(self.name.strip()) <= 50:
            raise ValidationException(
                "Name must be between 2 and 50 characters", field="name"
            )
        if len(self.currency) != 3:
            raise ValidationException("Currency must be a 3-letter code", field="currency")

    def can_use_password_login(self) -> bool:
        return self.password_hash is not None
