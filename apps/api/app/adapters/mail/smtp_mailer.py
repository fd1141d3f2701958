"""SMTP relay adapter."""

from __future__ import annotations

from email.message import EmailMessage
from email.utils import formataddr
import logging
import smtplib

from starlette.concurrency import run_in_threadpool

from app.adapters.mail.base import Mailer, MailDeliveryError, OutboundEmail
from app.core.logging_safety import safe_log_identifier

logger = logging.getLogger(__name__)

_IMPLICIT_TLS_PORT = 465
_TIMEOUT_SECONDS = 15


class SmtpMailer(Mailer):
    """Opens one connection per message; implicit TLS on 465, STARTTLS elsewhere."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        sender_name: str,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = formataddr((sender_name, username))

    def _connect(self) -> smtplib.SMTP:
        if self._port == _IMPLICIT_TLS_PORT:
            connection: smtplib.SMTP = smtplib.SMTP_SSL(self._host, self._port, timeout=_TIMEOUT_SECONDS)
        else:
            connection = smtplib.SMTP(self._host, self._port, timeout=_TIMEOUT_SECONDS)
            connection.starttls()
        connection.login(self._username, self._password)
        return connection

    def _build(self, message: OutboundEmail) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self._sender
        email["To"] = message.to
        email["Subject"] = message.subject
        if message.reply_to:
            email["Reply-To"] = message.reply_to
        email.set_content(message.text)
        if message.html:
            email.add_alternative(message.html, subtype="html")
        return email

    def _deliver(self, message: OutboundEmail) -> None:
        with self._connect() as connection:
            connection.send_message(self._build(message))

    async def send(self, message: OutboundEmail) -> None:
        try:
            await run_in_threadpool(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(str(exc) or "SMTP delivery failed") from exc
        logger.info(
            "mail.sent recipient=%s subject_length=%s",
            safe_log_identifier(message.to, prefix="rcpt"),
            len(message.subject),
        )

    async def ping(self) -> None:
        def _check() -> None:
            with self._connect():
                pass

        try:
            await run_in_threadpool(_check)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(str(exc) or "SMTP login failed") from exc


__all__ = ["SmtpMailer"]
