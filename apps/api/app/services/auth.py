"""Authentication service layer: register, login, verify and refresh."""

from __future__ import annotations

import logging

from app.adapters.auth import JwtTokenService, PasswordHasher, VerifiedToken
from app.adapters.auth.jwt_tokens import Clock, utc_now
from app.core.config import AuthConfig
from app.core.logging_safety import safe_log_identifier
from app.domain.auth_failures import AuthFailure
from app.domain.token_policy import refresh_window_failure
from app.repositories.base import DuplicateRowError, Row, RowStore
from app.schemas.auth import AuthPrincipal, AuthSession, TokenClaims

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


def principal_from_row(row: Row) -> AuthPrincipal:
    return AuthPrincipal(id=str(row["id"]), username=row["username"], role=row["role"])


class AuthService:
    def __init__(
        self,
        *,
        store: RowStore,
        tokens: JwtTokenService,
        passwords: PasswordHasher,
        config: AuthConfig,
        register_role: str = "admin",
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._tokens = tokens
        self._passwords = passwords
        self._config = config
        self._register_role = register_role
        self._clock = clock

    def _session_for(self, principal: AuthPrincipal) -> AuthSession:
        issued = self._tokens.issue(principal)
        return AuthSession(token=issued.token, user=principal)

    async def register(self, *, username: str, password: str) -> AuthSession | AuthFailure:
        if await self._store.find_row(USERS_TABLE, "username", username) is not None:
            logger.info("auth.register_rejected reason=username_taken")
            return AuthFailure.USERNAME_TAKEN

        password_hash = await self._passwords.hash(password)
        try:
            row = await self._store.insert_row(
                USERS_TABLE,
                {"username": username, "password_hash": password_hash, "role": self._register_role},
            )
        except DuplicateRowError:
            # Lost a race with a concurrent registration for the same name.
            logger.info("auth.register_rejected reason=username_taken")
            return AuthFailure.USERNAME_TAKEN

        principal = principal_from_row(row)
        logger.info(
            "auth.registered principal_id=%s role=%s",
            safe_log_identifier(principal.id, prefix="pid"),
            principal.role,
        )
        return self._session_for(principal)

    async def login(self, *, username: str, password: str) -> AuthSession | AuthFailure:
        row = await self._store.find_row(USERS_TABLE, "username", username)
        if row is None or not await self._passwords.verify(password, row.get("password_hash")):
            logger.warning("auth.login_rejected reason=invalid_credentials")
            return AuthFailure.INVALID_CREDENTIALS

        principal = principal_from_row(row)
        logger.info("auth.login principal_id=%s", safe_log_identifier(principal.id, prefix="pid"))
        return self._session_for(principal)

    def describe(self, token: str) -> TokenClaims | AuthFailure:
        verified = self._tokens.verify(token)
        if isinstance(verified, AuthFailure):
            return verified
        principal = verified.principal
        return TokenClaims(
            id=principal.id,
            username=principal.username,
            role=principal.role,
            expires_at=verified.expires_at,
        )

    async def refresh(self, token: str) -> AuthSession | AuthFailure:
        """Exchange a token for a new one, tolerating expiry up to the grace period.

        The replacement is minted from the user's current row, not from the
        presented claims, so renamed or re-roled accounts get up-to-date tokens
        and deleted accounts cannot refresh. The presented token is not revoked.
        """
        verified = self._tokens.verify(token, allow_expired=True)
        if isinstance(verified, AuthFailure):
            logger.warning("auth.refresh_rejected reason=%s", verified.value)
            return verified

        window_failure = refresh_window_failure(verified.expires_at, self._clock(), self._config.grace_period)
        if window_failure is not None:
            logger.warning("auth.refresh_rejected reason=%s", window_failure.value)
            return window_failure

        return await self._reissue(verified)

    async def _reissue(self, verified: VerifiedToken) -> AuthSession | AuthFailure:
        safe_principal_id = safe_log_identifier(verified.principal.id, prefix="pid")
        row = await self._store.get_row(USERS_TABLE, verified.principal.id)
        if row is None:
            logger.warning("auth.refresh_rejected principal_id=%s reason=principal_not_found", safe_principal_id)
            return AuthFailure.PRINCIPAL_NOT_FOUND

        principal = principal_from_row(row)
        logger.info("auth.refreshed principal_id=%s", safe_principal_id)
        return self._session_for(principal)


__all__ = ["AuthService", "USERS_TABLE", "principal_from_row"]
