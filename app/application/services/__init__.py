"""Application services: auth, categories, transactions, P2P debts, analytics."""

from app.application.services.analytics_service import AnalyticsService
from app.application.services.auth_service import AuthService
from app.application.services.category_service import CategoryService
from app.application.services.p2p_service import P2PService
from app.application.services.transaction_service import TransactionService

__all__ = [
    "AnalyticsService",
    "AuthService",
    "CategoryService",
    "P2PService",
    "TransactionService",
]
