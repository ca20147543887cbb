"""Domain entities.

Pure domain models; no persistence concerns.
"""

from app.domain.entities.category import CategoryEntity
from app.domain.entities.p2p import P2PTransactionEntity
from app.domain.entities.transaction import TransactionEntity
from app.domain.entities.user import UserEntity

__all__ = [
    "CategoryEntity",
    "P2PTransactionEntity",
    "TransactionEntity",
    "UserEntity",
]
