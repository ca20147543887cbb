"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    CategoryEntity,
    P2PTransactionEntity,
    TransactionEntity,
    UserEntity,
)
from app.domain.enums import AuthType, P2PDirection, P2PStatus, TransactionType
from app.domain.exceptions import (
    AuthenticationException,
    CategoryInUseException,
    InvalidStatusTransitionException,
    RegistrationDisabledException,
    ResourceNotFoundException,
    SpendiqException,
    ValidationException,
)

__all__ = [
    # Entities
    "CategoryEntity",
    "P2PTransactionEntity",
    "TransactionEntity",
    "UserEntity",
    # Enums
    "AuthType",
    "P2PDirection",
    "P2PStatus",
    "TransactionType",
    # Exceptions
    "AuthenticationException",
    "CategoryInUseException",
    "InvalidStatusTransitionException",
    "RegistrationDisabledException",
    "ResourceNotFoundException",
    "SpendiqException",
    "ValidationException",
]
