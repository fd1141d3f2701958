"""Outbound email interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class MailDeliveryError(Exception):
    """Raised when the relay refuses or cannot deliver a message."""


@dataclass(frozen=True, slots=True)
class OutboundEmail:
    to: str
    subject: str
    text: str
    html: str | None = None
    reply_to: str | None = None


class Mailer(ABC):
    @abstractmethod
    async def send(self, message: OutboundEmail) -> None:
        """Deliver ``message`` or raise ``MailDeliveryError``."""

    @abstractmethod
    async def ping(self) -> None:
        """Check relay credentials; raise ``MailDeliveryError`` on failure."""


__all__ = ["Mailer", "MailDeliveryError", "OutboundEmail"]
