"""Contact message service layer."""

from __future__ import annotations

import logging

from app.adapters.mail import Mailer, OutboundEmail
from app.adapters.mail.templates import contact_confirmation, contact_notification
from app.core.logging_safety import safe_log_identifier
from app.repositories.base import RowStore
from app.schemas.contact import ContactMessage, ContactStats, CreateContactMessageRequest
from app.services.catalog import CatalogService

logger = logging.getLogger(__name__)


class ContactService(CatalogService[ContactMessage]):
    table = "contact_messages"
    label = "Contact message"
    record_model = ContactMessage
    order_by = "created_at"
    descending = True

    def __init__(self, store: RowStore, *, mailer: Mailer, notify_to: str | None, site_name: str) -> None:
        super().__init__(store)
        self._mailer = mailer
        self._notify_to = notify_to
        self._site_name = site_name

    async def submit(self, form: CreateContactMessageRequest) -> ContactMessage:
        """Persist a contact form submission, then email the owner and the sender.

        Delivery failures are logged and never fail the submission: the stored
        message is the source of truth.
        """
        values = form.model_dump(mode="json", exclude_none=True)
        values["is_read"] = False
        message = await self.create(values)

        if self._notify_to:
            await self._deliver(
                contact_notification(form, to=self._notify_to, site_name=self._site_name),
                kind="notification",
                message_id=message.id,
            )
        await self._deliver(
            contact_confirmation(form, site_name=self._site_name),
            kind="confirmation",
            message_id=message.id,
        )
        return message

    async def _deliver(self, email: OutboundEmail, *, kind: str, message_id: str) -> None:
        safe_message_id = safe_log_identifier(message_id, prefix="msg")
        try:
            await self._mailer.send(email)
        except Exception:
            logger.exception("contact.mail_failed kind=%s message_id=%s", kind, safe_message_id)
            return
        logger.info("contact.mail_sent kind=%s message_id=%s", kind, safe_message_id)

    async def unread_count(self) -> int:
        return await self._store.count_rows(self.table, filters={"is_read": False})

    async def stats(self) -> ContactStats:
        total = await self._store.count_rows(self.table)
        unread = await self.unread_count()
        return ContactStats(total=total, read=total - unread, unread=unread)


__all__ = ["ContactService"]
