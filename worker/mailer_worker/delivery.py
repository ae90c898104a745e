"""Delivery stage: send a decorated mail for real or simulate it.

The mode is chosen once at startup from the SMTP credentials and passed
to :func:`deliver` as a :data:`DeliveryMode` value.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import assert_never

import aiosmtplib
import structlog

from mailer_common import DecoratedMail, DeliveryOutcome, MailStatus, MailStatusResponse

from .config import SmtpConfig
from .transport import SmtpTransport

logger = structlog.get_logger()


@dataclass(frozen=True)
class MockMode:
    """No credentials configured: log the mail instead of sending it."""

    delay_seconds: float = 1.0


@dataclass(frozen=True)
class SmtpMode:
    """Credentials configured: send through *transport*."""

    transport: SmtpTransport


DeliveryMode = MockMode | SmtpMode


def select_delivery_mode(smtp: SmtpConfig, *, mock_delay_seconds: float = 1.0) -> DeliveryMode:
    """Pick the delivery mode for the lifetime of the process."""
    if smtp.has_credentials:
        logger.info("delivery_mode_selected", mode="smtp", host=smtp.host, port=smtp.port)
        return SmtpMode(SmtpTransport(smtp))

    logger.warning(
        "delivery_mode_selected",
        mode="mock",
        hint="Configure SMTP_USER and SMTP_PASSWORD to enable real email sending",
    )
    return MockMode(delay_seconds=mock_delay_seconds)


def is_email_configured(mode: DeliveryMode) -> bool:
    return isinstance(mode, SmtpMode)


async def deliver(mail: DecoratedMail, mode: DeliveryMode) -> DeliveryOutcome:
    """Send *mail* according to *mode* and report the outcome.

    Transport failures are returned as a ``DeliveryFailed`` outcome, not raised.
    """
    logger.info("mail_delivery_started", mail_id=mail.id, to=mail.to)

    if isinstance(mode, MockMode):
        return await _deliver_mock(mail, mode)
    if isinstance(mode, SmtpMode):
        return await _deliver_smtp(mail, mode)
    assert_never(mode)


async def _deliver_mock(mail: DecoratedMail, mode: MockMode) -> DeliveryOutcome:
    logger.info(
        "mock_email_send",
        mail_id=mail.id,
        to=mail.to,
        subject=mail.subject,
        body=mail.body,
    )
    await asyncio.sleep(mode.delay_seconds)
    return DeliveryOutcome.sent(mail.id, "Email sent successfully (mock mode)")


async def _deliver_smtp(mail: DecoratedMail, mode: SmtpMode) -> DeliveryOutcome:
    try:
        message_id = await mode.transport.send(mail)
    except (aiosmtplib.SMTPException, OSError) as exc:
        logger.error("delivery_failed", mail_id=mail.id, error=str(exc))
        return DeliveryOutcome.failed(mail.id, str(exc))

    logger.info("email_sent", mail_id=mail.id, message_id=message_id)
    return DeliveryOutcome.sent(mail.id, "Email sent successfully", message_id=message_id)


def lookup_status(mail_id: str) -> MailStatusResponse:
    """Report the status of *mail_id*.

    Nothing is persisted, so every id (known or not) is reported as sent.
    """
    return MailStatusResponse(id=mail_id, status=MailStatus.SENT)
