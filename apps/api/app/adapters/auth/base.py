"""Token provider interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from app.domain.auth_failures import AuthFailure
from app.schemas.auth import AuthPrincipal


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class VerifiedToken:
    principal: AuthPrincipal
    issued_at: datetime
    expires_at: datetime


class TokenVerifier(ABC):
    """Checks a bearer token and decodes its principal."""

    @abstractmethod
    def verify(self, token: str, *, allow_expired: bool = False) -> VerifiedToken | AuthFailure:
        """Return decoded claims, or the failure kind when the token is not acceptable."""


class TokenIssuer(ABC):
    """Mints signed tokens for a principal."""

    @abstractmethod
    def issue(self, principal: AuthPrincipal) -> IssuedToken:
        """Sign a fresh token for ``principal``."""


__all__ = ["IssuedToken", "TokenIssuer", "TokenVerifier", "VerifiedToken"]
