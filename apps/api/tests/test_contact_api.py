"""Contact form and inbox API tests."""

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from app.adapters.mail import InMemoryMailer
from app.core.config import Settings
from app.main import create_app
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal

SECRET = "contact-test-secret-that-is-long-enough-012345"
FORM = {
    "name": "Bob <script>",
    "email": "bob@example.com",
    "subject": "Collaboration",
    "message": "Hi!\nLet's build something.",
}


def _settings(**overrides) -> Settings:
    values = {
        "jwt_secret": SECRET,
        "environment": "test",
        "store_backend": "memory",
        "media_backend": "memory",
        "mail_backend": "memory",
        "contact_email_to": "owner@example.com",
        "site_name": "Alice Dev",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ContactApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()
        self.mailer = InMemoryMailer()
        self.app = create_app(_settings(), store=self.store, mailer=self.mailer)
        self.client = TestClient(self.app)
        token = self.app.state.tokens.issue(AuthPrincipal(id="user-1", username="alice", role="admin")).token
        self.auth = {"Authorization": f"Bearer {token}"}

    def _submit(self, **overrides) -> dict:
        response = self.client.post("/api/contact", json={**FORM, **overrides})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_submission_is_stored_unread_and_emails_are_sent(self) -> None:
        body = self._submit()

        self.assertEqual(body["message"], "Message sent successfully! I will get back to you soon.")
        self.assertFalse(body["data"]["is_read"])
        notification, confirmation = self.mailer.outbox
        self.assertEqual(notification.to, "owner@example.com")
        self.assertEqual(notification.subject, "New contact: Collaboration")
        self.assertEqual(notification.reply_to, "bob@example.com")
        self.assertIn("Bob &lt;script&gt;", notification.html)
        self.assertIn("Hi!<br>Let&#x27;s build something.", notification.html)
        self.assertEqual(confirmation.to, "bob@example.com")
        self.assertEqual(confirmation.subject, "Thanks for reaching out!")
        self.assertIn("Alice Dev", confirmation.text)

    def test_mail_failure_does_not_fail_submission(self) -> None:
        self.mailer.fail_with = "smtp down"

        with self.assertLogs("app.services.contact", level="ERROR"):
            body = self._submit()

        self.assertEqual(body["status"], "success")
        self.assertEqual(len(self.store.tables["contact_messages"]), 1)
        self.assertEqual(self.mailer.outbox, [])

    def test_no_owner_notification_without_recipient(self) -> None:
        mailer = InMemoryMailer()
        client = TestClient(create_app(_settings(contact_email_to=None), store=InMemoryStore(), mailer=mailer))

        response = client.post("/api/contact", json=FORM)

        self.assertEqual(response.status_code, 201)
        self.assertEqual([email.to for email in mailer.outbox], ["bob@example.com"])

    def test_invalid_submission(self) -> None:
        response = self.client.post("/api/contact", json={"name": "", "email": "not-an-email", "message": ""})

        self.assertEqual(response.status_code, 400)
        fields = {error["field"] for error in response.json()["errors"]}
        self.assertEqual(fields, {"name", "email", "message"})
        self.assertEqual(self.mailer.outbox, [])

    def test_inbox_listing_marking_and_stats(self) -> None:
        first = self._submit(subject="First")["data"]
        self._submit(subject="Second")

        marked = self.client.patch(f"/api/contact/{first['id']}/mark-read", headers=self.auth)
        inbox = self.client.get("/api/contact").json()
        unread_only = self.client.get("/api/contact", params={"is_read": "false"}).json()
        stats = self.client.get("/api/contact/stats/summary").json()

        self.assertEqual(marked.json()["message"], "Message marked as read")
        self.assertTrue(marked.json()["data"]["is_read"])
        self.assertEqual([message["subject"] for message in inbox["data"]], ["Second", "First"])
        self.assertEqual(inbox["count"], 2)
        self.assertEqual(inbox["unread"], 1)
        self.assertEqual(unread_only["count"], 1)
        self.assertEqual(stats["data"], {"total": 2, "read": 1, "unread": 1})

        unmarked = self.client.patch(f"/api/contact/{first['id']}/mark-unread", headers=self.auth)
        self.assertEqual(unmarked.json()["message"], "Message marked as unread")
        self.assertEqual(self.client.get("/api/contact/stats/summary").json()["data"]["unread"], 2)

    def test_get_and_delete(self) -> None:
        message = self._submit()["data"]

        fetched = self.client.get(f"/api/contact/{message['id']}")
        deleted = self.client.delete(f"/api/contact/{message['id']}", headers=self.auth)
        missing = self.client.get(f"/api/contact/{message['id']}")

        self.assertEqual(fetched.json()["data"]["email"], "bob@example.com")
        self.assertEqual(deleted.json()["message"], "Message deleted successfully")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "Contact message not found")
