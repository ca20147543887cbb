"""Domain exceptions for the Spendiq application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class SpendiqException(Exception):
    """Base exception for all Spendiq application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(SpendiqException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(SpendiqException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class RegistrationDisabledException(SpendiqException):
    """Raised on direct sign-up; new accounts are created through Google sign-in only."""

    def __init__(self) -> None:
        super().__init__(
            "Direct registration is disabled. Please sign up with Google.",
            "REGISTRATION_DISABLED",
        )


class ResourceNotFoundException(SpendiqException):
    """Raised when a requested resource does not exist (or belongs to another user)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and ID.

        Args:
            resource_type: Type of resource (e.g. 'transaction', 'category').
            resource_id: ID of the missing resource.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class CategoryInUseException(SpendiqException):
    """Raised when deleting a category that transactions still reference."""

    def __init__(self, category_id: str, transaction_count: int) -> None:
        super().__init__(
            "Category is used by existing transactions",
            "CATEGORY_IN_USE",
            {"category_id": category_id, "transaction_count": transaction_count},
        )


class InvalidStatusTransitionException(SpendiqException):
    """Raised when a P2P record's status cannot change as requested."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot change status from {current} to {requested}",
            "INVALID_STATUS_TRANSITION",
            {"current": current, "requested": requested},
        )
