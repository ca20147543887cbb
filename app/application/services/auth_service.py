"""Authentication and profile service: password login, profile read/update, local accounts."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING

from app.domain.entities import UserEntity
from app.domain.enums import AuthType
from app.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.security.jwt import create_access_token
from app.infrastructure.security.password import get_password_hash, verify_password
from app.shared.utils import clean_text, generate_id, utc_now

if TYPE_CHECKING:
    from app.application.interfaces import IUserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Issue access tokens and manage the signed-in user's profile."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self._user_repo = user_repo

    async def login(self, email: str, password: str) -> tuple[str, UserEntity]:
        """Verify credentials and return (access_token, user).

        Raises:
            AuthenticationException: Unknown email or wrong password.
            ValidationException: Account was created with Google and has no password.
        """
        user = await self._user_repo.get_by_email(email)
        if user is None:
            raise AuthenticationException()
        if user.auth_type == AuthType.GOOGLE and not user.can_use_password_login():
            raise ValidationException(
                "This account was created with Google. Please sign in with Google."
            )
        valid = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not valid:
            raise AuthenticationException()
        logger.info("User %s logged in", user.id)
        return create_access_token(user.id), user

    async def get_profile(self, user_id: str) -> UserEntity:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def update_profile(
        self,
        user_id: str,
        name: str | None = None,
        currency: str | None = None,
        avatar_url: str | None = None,
    ) -> UserEntity:
        """Update display fields. Raises ValidationException if nothing to update."""
        if name is None and currency is None and avatar_url is None:
            raise ValidationException("At least one of name, currency or avatar_url is required")
        user = await self.get_profile(user_id)
        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = clean_text(name)
        if currency is not None:
            changes["currency"] = currency.upper()
        if avatar_url is not None:
            changes["avatar_url"] = avatar_url
        return await self._user_repo.save(dataclasses.replace(user, **changes))

    async def create_local_user(self, email: str, name: str, password: str) -> UserEntity:
        """Create an email/password account (seeding and administration)."""
        if await self._user_repo.get_by_email(email) is not None:
            raise ValidationException("Email is already registered", field="email")
        password_hash = await asyncio.to_thread(get_password_hash, password)
        user = UserEntity(
            id=generate_id(),
            email=email.strip().lower(),
            name=clean_text(name),
            created_at=utc_now(),
            password_hash=password_hash,
            auth_type=AuthType.LOCAL,
        )
        return await self._user_repo.save(user)
