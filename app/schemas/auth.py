"""Auth and profile API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.domain.enums import AuthType


class LoginRequest(BaseModel):
    """Request body for email/password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Request body for direct registration (always rejected; sign up with Google)."""

    email: EmailStr
    name: str = Field(..., min_length=2, max_length=50)
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class ProfileResponse(BaseModel):
    """Current user's profile (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    auth_type: AuthType
    currency: str
    avatar_url: str | None = None
    created_at: datetime


class TokenResponse(BaseModel):
    """JWT token response; the same token is also set as an HttpOnly cookie."""

    access_token: str
    token_type: str = "bearer"
    user: ProfileResponse


class ProfileUpdateRequest(BaseModel):
    """Partial profile update."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    avatar_url: str | None = Field(default=None, max_length=2048)


class MessageResponse(BaseModel):
    message: str
