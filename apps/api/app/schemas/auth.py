"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuthPrincipal(BaseModel):
    """Authenticated identity carried inside every issued token."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    username: str = Field(min_length=1)
    role: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=8)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthSession(BaseModel):
    token: str
    user: AuthPrincipal


class TokenClaims(BaseModel):
    id: str
    username: str
    role: str
    expires_at: datetime = Field(serialization_alias="expiresAt")


class AuthContext(BaseModel):
    """Request-scoped result of a successful authorization check."""

    model_config = ConfigDict(frozen=True)

    principal: AuthPrincipal
    expires_at: datetime
    seconds_remaining: int
    expires_soon: bool
