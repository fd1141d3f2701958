"""Token issuing, verification and time-window policy tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import os
import unittest
from unittest.mock import patch

import jwt
from pydantic import ValidationError

from app.adapters.auth import JwtTokenService, PasswordHasher
from app.core.config import AuthConfig, Settings, get_settings, parse_duration
from app.domain.access_policy import AccessLevel, RouteClass, required_access
from app.domain.auth_failures import AuthFailure, failure_message, failure_status
from app.domain.token_policy import expiry_advisory, refresh_window_failure
from app.main import create_app
from app.schemas.auth import AuthPrincipal

SECRET = "unit-test-secret-that-is-long-enough-0123"
START = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def _config(**overrides) -> AuthConfig:
    values = {
        "secret": SECRET,
        "algorithm": "HS256",
        "ttl": timedelta(days=7),
        "grace_period": timedelta(days=7),
        "expiry_warning": timedelta(minutes=5),
    }
    values.update(overrides)
    return AuthConfig(**values)


ALICE = AuthPrincipal(id="user-1", username="alice", role="admin")


class JwtTokenServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _Clock(START)
        self.tokens = JwtTokenService(_config(), clock=self.clock)

    def test_issued_token_verifies_to_same_principal(self) -> None:
        issued = self.tokens.issue(ALICE)

        verified = self.tokens.verify(issued.token)

        self.assertNotIsInstance(verified, AuthFailure)
        self.assertEqual(verified.principal, ALICE)
        self.assertEqual(verified.issued_at, START)
        self.assertEqual(verified.expires_at, START + timedelta(days=7))
        self.assertEqual(issued.expires_at, verified.expires_at)

    def test_issue_truncates_to_whole_seconds(self) -> None:
        self.clock.now = START + timedelta(microseconds=750_000)

        issued = self.tokens.issue(ALICE)

        self.assertEqual(issued.issued_at, START)

    def test_token_is_expired_exactly_at_expiry(self) -> None:
        issued = self.tokens.issue(ALICE)

        self.clock.now = issued.expires_at - timedelta(seconds=1)
        self.assertNotIsInstance(self.tokens.verify(issued.token), AuthFailure)

        self.clock.now = issued.expires_at
        self.assertIs(self.tokens.verify(issued.token), AuthFailure.EXPIRED_TOKEN)

    def test_allow_expired_still_returns_claims(self) -> None:
        issued = self.tokens.issue(ALICE)
        self.clock.advance(days=30)

        verified = self.tokens.verify(issued.token, allow_expired=True)

        self.assertNotIsInstance(verified, AuthFailure)
        self.assertEqual(verified.principal.username, "alice")

    def test_wrong_secret_and_garbage_are_malformed(self) -> None:
        other = JwtTokenService(_config(secret="another-secret-that-is-also-long-enough"), clock=self.clock)
        foreign = other.issue(ALICE).token

        self.assertIs(self.tokens.verify(foreign), AuthFailure.MALFORMED_TOKEN)
        self.assertIs(self.tokens.verify("not-a-jwt"), AuthFailure.MALFORMED_TOKEN)
        self.assertIs(self.tokens.verify(""), AuthFailure.MALFORMED_TOKEN)

    def test_token_missing_claims_is_malformed(self) -> None:
        token = jwt.encode({"id": "user-1", "exp": int(START.timestamp()) + 60}, SECRET, algorithm="HS256")

        self.assertIs(self.tokens.verify(token), AuthFailure.MALFORMED_TOKEN)

    def test_unexpected_decoder_error_is_verification_failure(self) -> None:
        token = self.tokens.issue(ALICE).token

        with patch("app.adapters.auth.jwt_tokens.jwt.decode", side_effect=RuntimeError("boom")):
            with self.assertLogs("app.adapters.auth.jwt_tokens", level="ERROR"):
                result = self.tokens.verify(token)

        self.assertIs(result, AuthFailure.TOKEN_VERIFICATION_FAILED)

    def test_short_secret_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            JwtTokenService(_config(secret="too-short"))


class TokenPolicyTests(unittest.TestCase):
    def test_refresh_window_boundaries(self) -> None:
        grace = timedelta(days=7)
        expires_at = START

        self.assertIsNone(refresh_window_failure(expires_at, START - timedelta(seconds=1), grace))
        self.assertIsNone(refresh_window_failure(expires_at, START + grace - timedelta(seconds=1), grace))
        self.assertIsNone(refresh_window_failure(expires_at, START + grace, grace))
        self.assertIs(
            refresh_window_failure(expires_at, START + grace + timedelta(seconds=1), grace),
            AuthFailure.GRACE_EXPIRED,
        )

    def test_expiry_advisory_threshold(self) -> None:
        threshold = timedelta(minutes=5)

        soon = expiry_advisory(START + timedelta(seconds=120.5), START, threshold)
        later = expiry_advisory(START + timedelta(minutes=10), START, threshold)

        self.assertTrue(soon.expires_soon)
        self.assertEqual(soon.seconds_remaining, 120)
        self.assertFalse(later.expires_soon)
        self.assertEqual(later.seconds_remaining, 600)


class AccessPolicyTests(unittest.TestCase):
    def test_only_resource_writes_need_authentication(self) -> None:
        for route_class in (RouteClass.HEALTH, RouteClass.AUTH, RouteClass.CONTACT_FORM, RouteClass.RESOURCE):
            for method in ("GET", "HEAD", "OPTIONS"):
                self.assertIs(required_access(route_class, method), AccessLevel.PUBLIC)

        for method in ("POST", "PUT", "PATCH", "DELETE"):
            self.assertIs(required_access(RouteClass.RESOURCE, method), AccessLevel.AUTHENTICATED)
            self.assertIs(required_access(RouteClass.AUTH, method), AccessLevel.PUBLIC)
            self.assertIs(required_access(RouteClass.HEALTH, method), AccessLevel.PUBLIC)
            self.assertIs(required_access(RouteClass.CONTACT_FORM, method), AccessLevel.PUBLIC)

    def test_admin_routes_need_admin_for_every_method(self) -> None:
        for method in ("GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"):
            self.assertIs(required_access(RouteClass.ADMIN, method), AccessLevel.ADMIN)

    def test_method_matching_is_case_insensitive(self) -> None:
        self.assertIs(required_access(RouteClass.RESOURCE, "post"), AccessLevel.AUTHENTICATED)

    def test_failure_mapping(self) -> None:
        self.assertEqual(failure_status(AuthFailure.FORBIDDEN), 403)
        self.assertEqual(failure_status(AuthFailure.USERNAME_TAKEN), 409)
        for failure in AuthFailure:
            self.assertTrue(failure_message(failure))
            if failure not in (AuthFailure.FORBIDDEN, AuthFailure.USERNAME_TAKEN):
                self.assertEqual(failure_status(failure), 401)


class PasswordHasherTests(unittest.IsolatedAsyncioTestCase):
    async def test_hash_and_verify(self) -> None:
        hasher = PasswordHasher(rounds=4)
        password_hash = await hasher.hash("correct horse")

        self.assertNotEqual(password_hash, "correct horse")
        self.assertTrue(await hasher.verify("correct horse", password_hash))
        self.assertFalse(await hasher.verify("wrong horse", password_hash))

    async def test_malformed_hash_does_not_verify(self) -> None:
        hasher = PasswordHasher(rounds=4)

        self.assertFalse(await hasher.verify("anything", "not-a-bcrypt-hash"))
        self.assertFalse(await hasher.verify("anything", None))


class SettingsTests(unittest.TestCase):
    _memory_backends = {"store_backend": "memory", "media_backend": "memory", "mail_backend": "memory"}

    def test_secret_is_required_and_long_enough(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, **self._memory_backends)
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, jwt_secret="short", **self._memory_backends)

    def test_duration_shorthand(self) -> None:
        settings = Settings(
            _env_file=None,
            jwt_secret=SECRET,
            jwt_expires_in="2h",
            jwt_refresh_grace_period="7d",
            jwt_expiry_warning="300",
            **self._memory_backends,
        )

        config = settings.auth_config()
        self.assertEqual(config.ttl, timedelta(hours=2))
        self.assertEqual(config.grace_period, timedelta(days=7))
        self.assertEqual(config.expiry_warning, timedelta(seconds=300))
        self.assertEqual(parse_duration("1w"), timedelta(weeks=1))
        self.assertEqual(parse_duration(42), 42)

    def test_zero_ttl_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, jwt_secret=SECRET, jwt_expires_in="0s", **self._memory_backends)

    def test_selected_backends_require_credentials(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError) as ctx:
                Settings(_env_file=None, jwt_secret=SECRET, media_backend="memory", mail_backend="memory")

        self.assertIn("supabase_url", str(ctx.exception))

    def test_create_app_fails_without_secret(self) -> None:
        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, {"PORTFOLIO_STORE_BACKEND": "memory"}, clear=True):
                with self.assertRaises(ValidationError):
                    create_app()
        finally:
            get_settings.cache_clear()

    def test_environment_prefix(self) -> None:
        env = {
            "PORTFOLIO_JWT_SECRET": SECRET,
            "PORTFOLIO_STORE_BACKEND": "memory",
            "PORTFOLIO_MEDIA_BACKEND": "memory",
            "PORTFOLIO_MAIL_BACKEND": "memory",
            "PORTFOLIO_JWT_EXPIRES_IN": "1d",
        }
        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, env, clear=True):
                settings = get_settings()
        finally:
            get_settings.cache_clear()

        self.assertEqual(settings.jwt_expires_in, timedelta(days=1))
        self.assertEqual(settings.store_backend, "memory")
