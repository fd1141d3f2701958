"""Token and credential adapters."""

from .base import IssuedToken, TokenIssuer, TokenVerifier, VerifiedToken
from .jwt_tokens import JwtTokenService
from .passwords import PasswordHasher

__all__ = [
    "IssuedToken",
    "JwtTokenService",
    "PasswordHasher",
    "TokenIssuer",
    "TokenVerifier",
    "VerifiedToken",
]
