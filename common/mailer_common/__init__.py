"""Shared building blocks for the mailer services.

Public API re-exported here for convenience::

    from mailer_common import DecoratedMail, DownstreamClient, setup_logging
"""

from .client import DownstreamClient
from .config import DownstreamConfig, ServiceConfig
from .errors import (
    InternalServiceError,
    InvalidEmailFormatError,
    MailerError,
    MissingFieldsError,
    ServiceUnavailableError,
    ValidationError,
    install_error_handlers,
)
from .health import create_health_router
from .logging import setup_logging
from .middleware import install_middleware
from .models import (
    AcceptedResponse,
    DecoratedMail,
    DecorationMetadata,
    DeliveryOutcome,
    ErrorResponse,
    HealthResponse,
    MailRequest,
    MailStatus,
    MailStatusResponse,
    SubmittedMail,
    to_wire,
)
from .utils import generate_mail_id, utc_now, validate_email

__all__ = [
    "AcceptedResponse",
    "DecoratedMail",
    "DecorationMetadata",
    "DeliveryOutcome",
    "DownstreamClient",
    "DownstreamConfig",
    "ErrorResponse",
    "HealthResponse",
    "InternalServiceError",
    "InvalidEmailFormatError",
    "MailRequest",
    "MailStatus",
    "MailStatusResponse",
    "MailerError",
    "MissingFieldsError",
    "ServiceConfig",
    "ServiceUnavailableError",
    "SubmittedMail",
    "ValidationError",
    "create_health_router",
    "generate_mail_id",
    "install_error_handlers",
    "install_middleware",
    "setup_logging",
    "to_wire",
    "utc_now",
    "validate_email",
]
