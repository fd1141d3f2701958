"""In-memory outbox for local development and tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.adapters.mail.base import Mailer, MailDeliveryError, OutboundEmail


@dataclass(slots=True)
class InMemoryMailer(Mailer):
    outbox: list[OutboundEmail] = field(default_factory=list)
    fail_with: str | None = None

    async def send(self, message: OutboundEmail) -> None:
        if self.fail_with is not None:
            raise MailDeliveryError(self.fail_with)
        self.outbox.append(message)

    async def ping(self) -> None:
        if self.fail_with is not None:
            raise MailDeliveryError(self.fail_with)


__all__ = ["InMemoryMailer"]
