"""Pydantic request/response schemas for the API."""

from app.schemas.analytics import (
    CategoryTotalResponse,
    CategoryUsageResponse,
    DateTotalResponse,
    SummaryResponse,
)
from app.schemas.auth import (
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.category import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
)
from app.schemas.health import CacheTestResponse, HealthResponse
from app.schemas.p2p import (
    P2PCreateRequest,
    P2PResponse,
    P2PStatusUpdateRequest,
    P2PSummaryResponse,
)
from app.schemas.transaction import (
    BulkDeleteRequest,
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
)

__all__ = [
    "BulkDeleteRequest",
    "CacheTestResponse",
    "CategoryCreateRequest",
    "CategoryResponse",
    "CategoryTotalResponse",
    "CategoryUpdateRequest",
    "CategoryUsageResponse",
    "DateTotalResponse",
    "HealthResponse",
    "LoginRequest",
    "P2PCreateRequest",
    "P2PResponse",
    "P2PStatusUpdateRequest",
    "P2PSummaryResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "SummaryResponse",
    "TokenResponse",
    "TransactionCreateRequest",
    "TransactionListResponse",
    "TransactionResponse",
]
