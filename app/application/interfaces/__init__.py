"""Application ports (repository protocols)."""

from app.application.interfaces.repositories import (
    ICategoryRepository,
    IP2PRepository,
    ITransactionRepository,
    IUserRepository,
)

__all__ = [
    "ICategoryRepository",
    "IP2PRepository",
    "ITransactionRepository",
    "IUserRepository",
]
