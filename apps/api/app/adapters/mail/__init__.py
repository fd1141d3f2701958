"""Outbound email adapters."""

from .base import Mailer, MailDeliveryError, OutboundEmail
from .memory_mailer import InMemoryMailer
from .smtp_mailer import SmtpMailer

__all__ = ["InMemoryMailer", "Mailer", "MailDeliveryError", "OutboundEmail", "SmtpMailer"]
