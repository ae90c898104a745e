"""Intake stage: validate a raw mail request and hand it to the decorator."""

from __future__ import annotations

from typing import Any

import structlog

from mailer_common import (
    AcceptedResponse,
    DownstreamClient,
    InternalServiceError,
    InvalidEmailFormatError,
    MailRequest,
    MissingFieldsError,
    SubmittedMail,
    to_wire,
    utc_now,
    validate_email,
)
from mailer_common.models import PRIMARY_SOURCE

logger = structlog.get_logger()

REQUIRED_FIELDS = ("to", "subject", "body")


def validate_mail_request(payload: Any) -> MailRequest:
    """Check field presence, then address syntax, in that order.

    A field counts as missing when absent, empty or not a string.
    """
    if not isinstance(payload, dict):
        payload = {}

    missing = [name for name in REQUIRED_FIELDS if not isinstance(payload.get(name), str) or not payload[name]]
    if missing:
        logger.info("mail_request_rejected", reason="missing_fields", fields=missing)
        raise MissingFieldsError("Please provide to, subject, and body")

    if not validate_email(payload["to"]):
        logger.info("mail_request_rejected", reason="invalid_email_format")
        raise InvalidEmailFormatError("Please provide a valid email address")

    return MailRequest(to=payload["to"], subject=payload["subject"], body=payload["body"])


async def submit(mail: MailRequest, decorator: DownstreamClient) -> AcceptedResponse:
    """Stamp *mail* and forward it to the decorator, echoing the id it assigns."""
    submitted = SubmittedMail(
        to=mail.to,
        subject=mail.subject,
        body=mail.body,
        timestamp=utc_now(),
        source=PRIMARY_SOURCE,
    )
    logger.info("mail_request_received", to=mail.to, subject=mail.subject)

    answer = await decorator.post_json(
        "/api/mail/decorate",
        to_wire(submitted),
        failure_message="Failed to process mail request",
    )
    mail_id = answer.get("id") if isinstance(answer, dict) else None
    if not isinstance(mail_id, str) or not mail_id:
        logger.error("decorator_answer_without_id", answer=answer)
        raise InternalServiceError("Failed to process mail request")

    logger.info("mail_request_forwarded", mail_id=mail_id)
    return AcceptedResponse(id=mail_id, message="Email queued for sending")
