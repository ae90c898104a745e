"""Wire models shared by the primary, decorator and worker services.

Python attributes are snake_case; JSON keys keep the camelCase names the
services exchange (``originalBody``, ``processedAt``, ``messageId`` ...).
Dump with :func:`to_wire` so aliases are applied and absent optionals dropped.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .utils import EMAIL_PATTERN, utc_now

SYSTEM_SUBJECT_TAG = "[SYSTEM-MAILER]"
PRIMARY_SOURCE = "primary-server"
DECORATOR_SERVICE = "decorator-server"


class MailStatus(str, Enum):
    """Lifecycle status of a mail as reported by the worker."""

    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"


class MailRequest(BaseModel):
    """A raw send request as typed into the form."""

    model_config = ConfigDict(frozen=True)

    to: str = Field(min_length=1, pattern=EMAIL_PATTERN.pattern, description="Recipient address")
    subject: str = Field(min_length=1, description="Email subject")
    body: str = Field(min_length=1, description="Plain-text email body")


class SubmittedMail(MailRequest):
    """A validated request stamped by the primary service."""

    timestamp: datetime = Field(description="When the primary service accepted the request (UTC)")
    source: str = Field(description="Service that submitted the mail")


class DecorationMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    processed_at: datetime = Field(alias="processedAt")
    processed_by: str = Field(alias="processedBy")
    source: str
    original_timestamp: datetime = Field(alias="originalTimestamp")


class DecoratedMail(BaseModel):
    """A mail after subject/body decoration and id assignment.

    ``id`` is the only handle the caller and the worker use for this mail.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    to: str
    subject: str
    body: str
    original_body: str = Field(alias="originalBody")
    metadata: DecorationMetadata


class DeliveryOutcome(BaseModel):
    """Terminal record of one delivery attempt.  Never persisted."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    id: str
    message: str
    message_id: str | None = Field(
        default=None,
        alias="messageId",
        description="Provider-assigned Message-ID (real delivery only)",
    )
    error: str | None = None
    timestamp: datetime | None = None

    @classmethod
    def sent(cls, mail_id: str, message: str, *, message_id: str | None = None) -> DeliveryOutcome:
        return cls(success=True, id=mail_id, message=message, message_id=message_id, timestamp=utc_now())

    @classmethod
    def failed(cls, mail_id: str, message: str) -> DeliveryOutcome:
        return cls(success=False, id=mail_id, message=message, error="DeliveryFailed")


class AcceptedResponse(BaseModel):
    """Acknowledgement returned by the primary and decorator services."""

    success: bool = True
    id: str
    message: str


class MailStatusResponse(BaseModel):
    id: str
    status: MailStatus
    timestamp: datetime = Field(default_factory=utc_now)


class ErrorResponse(BaseModel):
    """Body of every user-visible failure."""

    error: str
    message: str


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "OK"
    service: str
    timestamp: datetime = Field(default_factory=utc_now)
    email_configured: bool | None = Field(default=None, alias="emailConfigured")


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Serialize *model* into the JSON shape used between services."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
