"""Auth API: login, logout, and the current user's profile.

Direct registration is disabled (accounts come from Google sign-in). The
access token is returned in the body and set as an HttpOnly cookie, which
AuthenticationMiddleware accepts as an alternative to the Bearer header.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import CurrentUser, get_auth_service
from app.application.services import AuthService
from app.core.config import get_settings
from app.core.limiter import limit_auth, limit_writes
from app.domain.exceptions import RegistrationDisabledException
from app.schemas.auth import (
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter()


@router.post("/register", status_code=403, responses={403: {"description": "Disabled"}})
@limit_auth
async def register(request: Request, body: RegisterRequest):
    """Always rejected: sign up with Google instead."""
    raise RegistrationDisabledException()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Authenticate with email and password; return JWT and set the auth cookie."""
    token, user = await auth_service.login(body.email, body.password)
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
    )
    return TokenResponse(access_token=token, user=ProfileResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, current_user: CurrentUser):
    """Clear the auth cookie. The profile cache entry is purged on success."""
    response.delete_cookie(get_settings().auth_cookie_name)
    return MessageResponse(message="Logged out")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(current_user: CurrentUser):
    """Return the currently authenticated user."""
    return ProfileResponse.model_validate(current_user)


@router.put("/profile", response_model=ProfileResponse)
@limit_writes
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    current_user: CurrentUser,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Update name, currency and/or avatar."""
    user = await auth_service.update_profile(
        current_user.id,
        name=body.name,
        currency=body.currency,
        avatar_url=body.avatar_url,
    )
    return ProfileResponse.model_validate(user)
