"""HS256 JWT issuer and verifier."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
import logging
from typing import Any

import jwt
from pydantic import ValidationError

from app.adapters.auth.base import IssuedToken, TokenIssuer, TokenVerifier, VerifiedToken
from app.core.config import AuthConfig
from app.domain.auth_failures import AuthFailure
from app.domain.token_policy import is_expired
from app.schemas.auth import AuthPrincipal

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32
_REQUIRED_CLAIMS = ["id", "username", "role", "iat", "exp"]

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenVerifier, TokenIssuer):
    """Signs and checks tokens under one process-wide secret.

    Expiry is compared against the injected clock rather than PyJWT's, so
    verification stays a pure function of (token, clock, secret).
    """

    def __init__(self, config: AuthConfig, *, clock: Clock = utc_now) -> None:
        if len(config.secret or "") < MIN_SECRET_LENGTH:
            raise ValueError(f"JWT secret must be at least {MIN_SECRET_LENGTH} characters")
        self._config = config
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._config.ttl

    def issue(self, principal: AuthPrincipal) -> IssuedToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._config.ttl
        payload: dict[str, Any] = {
            "id": principal.id,
            "username": principal.username,
            "role": principal.role,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def verify(self, token: str, *, allow_expired: bool = False) -> VerifiedToken | AuthFailure:
        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
            principal = AuthPrincipal(
                id=str(payload["id"]),
                username=payload["username"],
                role=payload["role"],
            )
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (jwt.InvalidTokenError, ValidationError, TypeError, ValueError):
            return AuthFailure.MALFORMED_TOKEN
        except Exception:
            logger.exception("token.verify_error")
            return AuthFailure.TOKEN_VERIFICATION_FAILED

        if not allow_expired and is_expired(expires_at, self._clock()):
            return AuthFailure.EXPIRED_TOKEN

        return VerifiedToken(principal=principal, issued_at=issued_at, expires_at=expires_at)


__all__ = ["Clock", "JwtTokenService", "MIN_SECRET_LENGTH", "utc_now"]
