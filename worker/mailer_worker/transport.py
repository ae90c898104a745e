"""SMTP mail transport built on aiosmtplib."""

from __future__ import annotations

from email.message import EmailMessage
from email.utils import formatdate, make_msgid

import aiosmtplib
import structlog

from mailer_common import DecoratedMail

from .config import SmtpConfig

logger = structlog.get_logger()


def text_to_html(body: str) -> str:
    """HTML alternative of a plain-text body: newlines become ``<br>``."""
    return body.replace("\n", "<br>")


class SmtpTransport:
    """Sends decorated mail through one configured SMTP account.

    Each :meth:`send` opens its own connection, so one instance can be
    shared by all concurrent requests.
    """

    def __init__(self, config: SmtpConfig) -> None:
        if not config.has_credentials:
            raise ValueError("SMTP transport requires a user and a password")
        self._config = config

    @property
    def sender(self) -> str:
        return self._config.sender or self._config.user  # type: ignore[return-value]

    def build_message(self, mail: DecoratedMail) -> EmailMessage:
        """Build a multipart/alternative message (plain text + HTML)."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = mail.to
        message["Subject"] = mail.subject
        message["Date"] = formatdate(localtime=False)
        message["Message-ID"] = make_msgid(domain=self.sender.rpartition("@")[2] or None)
        message["X-Mail-Id"] = mail.id
        message.set_content(mail.body)
        message.add_alternative(text_to_html(mail.body), subtype="html")
        return message

    async def send(self, mail: DecoratedMail) -> str:
        """Send *mail* and return its ``Message-ID``.

        Raises :class:`aiosmtplib.SMTPException` or :class:`OSError` on failure.
        """
        message = self.build_message(mail)
        await aiosmtplib.send(
            message,
            hostname=self._config.host,
            port=self._config.port,
            username=self._config.user,
            password=self._config.password,
            start_tls=self._config.start_tls,
            timeout=self._config.timeout_seconds,
        )
        message_id = message["Message-ID"]
        logger.debug("smtp_message_sent", mail_id=mail.id, message_id=message_id, host=self._config.host)
        return message_id
