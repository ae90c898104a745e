"""Decoration stage: assign an id, add the system banner, forward to the worker.

Decoration only acknowledges that the worker *accepted* the mail (a 2xx
answer).  Whether the worker reports the mail as sent is not inspected;
the acknowledgement means "submitted", not "delivered".
"""

from __future__ import annotations

from datetime import UTC, datetime

import structlog

from mailer_common import (
    AcceptedResponse,
    DecoratedMail,
    DecorationMetadata,
    DownstreamClient,
    SubmittedMail,
    generate_mail_id,
    to_wire,
    utc_now,
)
from mailer_common.models import DECORATOR_SERVICE, SYSTEM_SUBJECT_TAG

logger = structlog.get_logger()

BANNER_RULE = "=" * 32

FOOTER = (
    f"\n\n{BANNER_RULE}\n"
    "This email was processed by the System Mailer microservice system.\n"
    "If you received this email in error, please contact the administrator.\n"
    f"{BANNER_RULE}\n"
)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def decorate_subject(subject: str) -> str:
    return f"{SYSTEM_SUBJECT_TAG} {subject}"


def decorate_body(
    original_body: str,
    *,
    processed_at: datetime,
    source: str,
    original_timestamp: datetime,
) -> str:
    """Wrap *original_body* between the processing header and the footer.

    The original text is kept verbatim as one contiguous block.
    """
    header = (
        "\n=== SYSTEM-MAILER ===\n"
        f"Processed: {format_timestamp(processed_at)}\n"
        f"Source: {source}\n"
        f"Original Timestamp: {format_timestamp(original_timestamp)}\n"
        f"{BANNER_RULE}\n\n"
    )
    return header + original_body + FOOTER


def build_decorated_mail(
    submitted: SubmittedMail,
    *,
    mail_id: str | None = None,
    now: datetime | None = None,
) -> DecoratedMail:
    """Create the :class:`DecoratedMail` for *submitted*.  Pure, no I/O."""
    processed_at = now or utc_now()
    return DecoratedMail(
        id=mail_id or generate_mail_id(),
        to=submitted.to,
        subject=decorate_subject(submitted.subject),
        body=decorate_body(
            submitted.body,
            processed_at=processed_at,
            source=submitted.source,
            original_timestamp=submitted.timestamp,
        ),
        original_body=submitted.body,
        metadata=DecorationMetadata(
            processed_at=processed_at,
            processed_by=DECORATOR_SERVICE,
            source=submitted.source,
            original_timestamp=submitted.timestamp,
        ),
    )


async def decorate(submitted: SubmittedMail, worker: DownstreamClient) -> AcceptedResponse:
    """Decorate *submitted* and hand it to the worker, returning the new id."""
    logger.info("mail_decoration_started", to=submitted.to, subject=submitted.subject)

    mail = build_decorated_mail(submitted)
    logger.info("mail_decorated", mail_id=mail.id)

    await worker.post_json(
        "/api/mail/send",
        to_wire(mail),
        failure_message="Failed to decorate mail",
    )
    logger.info("mail_forwarded_to_worker", mail_id=mail.id)

    return AcceptedResponse(id=mail.id, message="Email decorated and forwarded to worker")
