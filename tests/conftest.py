"""Shared test fixtures for the mailer test suite."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mailer_common.models import DecoratedMail, DecorationMetadata
from mailer_decorator.config import DecoratorConfig, WorkerServiceConfig
from mailer_primary.config import DecoratorServiceConfig, PrimaryConfig
from mailer_worker.config import SmtpConfig, WorkerConfig

DECORATOR_URL = "http://decorator.test"
WORKER_URL = "http://worker.test"


@pytest.fixture
def primary_config() -> PrimaryConfig:
    return PrimaryConfig(
        port=13001,
        decorator=DecoratorServiceConfig(url=DECORATOR_URL, timeout_seconds=5.0),
    )


@pytest.fixture
def decorator_config() -> DecoratorConfig:
    return DecoratorConfig(
        port=13002,
        worker=WorkerServiceConfig(url=WORKER_URL, timeout_seconds=5.0),
    )


@pytest.fixture
def smtp_config() -> SmtpConfig:
    return SmtpConfig(
        host="smtp.example.com",
        port=2525,
        user="mailer@example.com",
        password="secret",
    )


@pytest.fixture
def worker_config() -> WorkerConfig:
    return WorkerConfig(port=13003, mock_delay_seconds=0.01, smtp=SmtpConfig(user=None, password=None))


# ------------------------------------------------------------------
# Sample payloads
# ------------------------------------------------------------------


def make_mail_request(
    *,
    to: str = "a@b.com",
    subject: str = "Hi",
    body: str = "Hello",
) -> dict:
    """Build a raw ``{to, subject, body}`` request as the form would send it."""
    return {"to": to, "subject": subject, "body": body}


def make_submitted_mail(
    *,
    to: str = "a@b.com",
    subject: str = "Hi",
    body: str = "Hello",
    timestamp: str = "2025-06-01T12:00:00.000Z",
    source: str = "primary-server",
) -> dict:
    """Build the JSON the primary service sends to the decorator."""
    return {"to": to, "subject": subject, "body": body, "timestamp": timestamp, "source": source}


def make_decorated_mail(
    *,
    mail_id: str = "mail_1748779200000_abc123xyz",
    to: str = "a@b.com",
    subject: str = "[SYSTEM-MAILER] Hi",
    body: str = "header\n\nHello\n\nfooter",
    original_body: str = "Hello",
) -> DecoratedMail:
    stamp = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    return DecoratedMail(
        id=mail_id,
        to=to,
        subject=subject,
        body=body,
        original_body=original_body,
        metadata=DecorationMetadata(
            processed_at=stamp,
            processed_by="decorator-server",
            source="primary-server",
            original_timestamp=stamp,
        ),
    )
