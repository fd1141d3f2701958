"""Register, login, verify and refresh API tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import unittest

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.repositories.memory import InMemoryStore
from app.services.auth import USERS_TABLE

SECRET = "api-test-secret-that-is-long-enough-0123456"
START = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def _settings(**overrides) -> Settings:
    values = {
        "jwt_secret": SECRET,
        "environment": "test",
        "store_backend": "memory",
        "media_backend": "memory",
        "mail_backend": "memory",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class AuthApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _Clock(START)
        self.store = InMemoryStore()
        self.client = TestClient(create_app(_settings(), clock=self.clock, store=self.store))

    def _register(self, username: str = "alice", password: str = "password123"):
        return self.client.post("/api/auth/register", json={"username": username, "password": password})

    def test_register_returns_token_and_admin_user(self) -> None:
        response = self._register()

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["message"], "User registered successfully")
        self.assertEqual(body["data"]["user"]["username"], "alice")
        self.assertEqual(body["data"]["user"]["role"], "admin")
        self.assertTrue(body["data"]["token"])

        stored = next(iter(self.store.tables[USERS_TABLE].values()))
        self.assertNotEqual(stored["password_hash"], "password123")
        self.assertNotIn("password", stored)

    def test_duplicate_username_is_conflict(self) -> None:
        self._register()

        response = self._register(password="different-password")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "USERNAME_TAKEN")
        self.assertEqual(len(self.store.tables[USERS_TABLE]), 1)

    def test_register_validation(self) -> None:
        response = self._register(username="al", password="short")

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertEqual({error["field"] for error in body["errors"]}, {"username", "password"})

    def test_login_success_and_failures(self) -> None:
        self._register()

        ok = self.client.post("/api/auth/login", json={"username": "alice", "password": "password123"})
        wrong_password = self.client.post("/api/auth/login", json={"username": "alice", "password": "nope-nope"})
        unknown_user = self.client.post("/api/auth/login", json={"username": "bob", "password": "password123"})

        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["message"], "Login successful")
        for response in (wrong_password, unknown_user):
            self.assertEqual(response.status_code, 401)
            self.assertEqual(response.json()["code"], "INVALID_CREDENTIALS")
            self.assertEqual(response.json()["message"], "Invalid username or password")

    def test_verify_reports_claims_and_expiry(self) -> None:
        token = self._register().json()["data"]["token"]

        response = self.client.get("/api/auth/verify", headers=_bearer(token))

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["username"], "alice")
        self.assertEqual(data["role"], "admin")
        expires_at = datetime.fromisoformat(data["expiresAt"].replace("Z", "+00:00"))
        self.assertEqual(expires_at, START + timedelta(days=7))

    def test_verify_failures(self) -> None:
        token = self._register().json()["data"]["token"]

        missing = self.client.get("/api/auth/verify")
        garbage = self.client.get("/api/auth/verify", headers=_bearer("garbage"))
        self.clock.advance(days=7)
        expired = self.client.get("/api/auth/verify", headers=_bearer(token))

        self.assertEqual((missing.status_code, missing.json()["code"]), (401, "NO_TOKEN"))
        self.assertEqual((garbage.status_code, garbage.json()["code"]), (401, "MALFORMED_TOKEN"))
        self.assertEqual((expired.status_code, expired.json()["code"]), (401, "EXPIRED_TOKEN"))

    def test_refresh_within_grace_issues_new_token(self) -> None:
        token = self._register().json()["data"]["token"]
        self.clock.advance(days=10)

        response = self.client.post("/api/auth/refresh", headers=_bearer(token))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Token refreshed successfully")
        new_token = response.json()["data"]["token"]
        verified = self.client.get("/api/auth/verify", headers=_bearer(new_token))
        self.assertEqual(verified.status_code, 200)
        expires_at = datetime.fromisoformat(verified.json()["data"]["expiresAt"].replace("Z", "+00:00"))
        self.assertEqual(expires_at, self.clock.now + timedelta(days=7))

    def test_refresh_beyond_grace_is_rejected(self) -> None:
        token = self._register().json()["data"]["token"]
        self.clock.advance(days=14, seconds=1)

        response = self.client.post("/api/auth/refresh", headers=_bearer(token))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "GRACE_EXPIRED")

    def test_refresh_at_grace_boundary_succeeds(self) -> None:
        token = self._register().json()["data"]["token"]
        self.clock.advance(days=14)

        response = self.client.post("/api/auth/refresh", headers=_bearer(token))

        self.assertEqual(response.status_code, 200)

    def test_refresh_for_deleted_user_is_rejected(self) -> None:
        token = self._register().json()["data"]["token"]
        self.store.tables[USERS_TABLE].clear()

        response = self.client.post("/api/auth/refresh", headers=_bearer(token))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "PRINCIPAL_NOT_FOUND")

    def test_refresh_reflects_current_user_row(self) -> None:
        session = self._register().json()["data"]
        self.store.tables[USERS_TABLE][session["user"]["id"]]["role"] = "editor"

        response = self.client.post("/api/auth/refresh", headers=_bearer(session["token"]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["user"]["role"], "editor")

    def test_refresh_without_token(self) -> None:
        response = self.client.post("/api/auth/refresh")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "NO_TOKEN")

    def test_register_role_is_configurable(self) -> None:
        client = TestClient(create_app(_settings(register_role="editor"), clock=self.clock, store=InMemoryStore()))

        response = client.post("/api/auth/register", json={"username": "carol", "password": "password123"})

        self.assertEqual(response.json()["data"]["user"]["role"], "editor")


class RegisterLoginRefreshScenarioTests(unittest.TestCase):
    def test_full_session_lifecycle(self) -> None:
        clock = _Clock(START)
        client = TestClient(create_app(_settings(), clock=clock, store=InMemoryStore()))
        credentials = {"username": "alice", "password": "longenough1"}

        registered = client.post("/api/auth/register", json=credentials)
        self.assertEqual(registered.status_code, 201)
        token = registered.json()["data"]["token"]
        self.assertEqual(registered.json()["data"]["user"]["role"], "admin")

        again = client.post("/api/auth/register", json=credentials)
        self.assertEqual((again.status_code, again.json()["code"]), (409, "USERNAME_TAKEN"))

        wrong = client.post("/api/auth/login", json={"username": "alice", "password": "wrong-password"})
        self.assertEqual((wrong.status_code, wrong.json()["code"]), (401, "INVALID_CREDENTIALS"))

        verified = client.get("/api/auth/verify", headers=_bearer(token))
        self.assertEqual(verified.status_code, 200)
        expires_at = datetime.fromisoformat(verified.json()["data"]["expiresAt"].replace("Z", "+00:00"))
        self.assertEqual(expires_at, START + timedelta(days=7))

        clock.advance(days=7 + 8)
        refreshed = client.post("/api/auth/refresh", headers=_bearer(token))
        self.assertEqual((refreshed.status_code, refreshed.json()["code"]), (401, "GRACE_EXPIRED"))

    def test_refresh_one_second_inside_grace(self) -> None:
        clock = _Clock(START)
        client = TestClient(create_app(_settings(), clock=clock, store=InMemoryStore()))
        token = client.post("/api/auth/register", json={"username": "alice", "password": "longenough1"}).json()[
            "data"
        ]["token"]

        clock.advance(days=14, seconds=-1)
        response = client.post("/api/auth/refresh", headers=_bearer(token))

        self.assertEqual(response.status_code, 200)
