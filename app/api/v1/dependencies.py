"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the current user and application services.
Services are built from the DocumentStore on app.state; routes depend only on
these dependencies, not on infrastructure directly.

The user id itself is resolved once per request by AuthenticationMiddleware
(request.state.user_id), so the response cache and the routes agree on who
is asking.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from app.application.services import (
    AnalyticsService,
    AuthService,
    CategoryService,
    P2PService,
    TransactionService,
)
from app.domain.entities import UserEntity
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.persistence.memory_store import DocumentStore


def get_store(request: Request) -> DocumentStore:
    """Process-wide document store (created in create_app)."""
    return request.app.state.store


def get_cache(request: Request) -> CacheProtocol | None:
    """Response cache service, or None when REDIS_ENABLED is false."""
    return getattr(request.app.state, "cache", None)


def get_auth_service(store: Annotated[DocumentStore, Depends(get_store)]) -> AuthService:
    return AuthService(store.users)


def get_category_service(
    store: Annotated[DocumentStore, Depends(get_store)],
) -> CategoryService:
    return CategoryService(store.categories, store.transactions)


def get_transaction_service(
    store: Annotated[DocumentStore, Depends(get_store)],
) -> TransactionService:
    return TransactionService(store.transactions, store.categories)


def get_p2p_service(store: Annotated[DocumentStore, Depends(get_store)]) -> P2PService:
    return P2PService(store.p2p)


def get_analytics_service(
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AnalyticsService:
    return AnalyticsService(store.transactions, store.categories)


async def get_current_user_optional(
    request: Request,
    store: Annotated[DocumentStore, Depends(get_store)],
) -> UserEntity | None:
    """Return the authenticated user if the token named an existing user; else None."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        return None
    return await store.users.get_by_id(user_id)


async def get_current_user(
    current_user: Annotated[UserEntity | None, Depends(get_current_user_optional)],
) -> UserEntity:
    """Return current user; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


CurrentUser = Annotated[UserEntity, Depends(get_current_user)]
