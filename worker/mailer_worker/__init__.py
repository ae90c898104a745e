"""Mailer worker: final delivery of decorated mail over SMTP, or a mock of it."""

from .app import create_app
from .config import SmtpConfig, WorkerConfig
from .delivery import DeliveryMode, MockMode, SmtpMode, deliver, lookup_status, select_delivery_mode
from .transport import SmtpTransport

__all__ = [
    "DeliveryMode",
    "MockMode",
    "SmtpConfig",
    "SmtpMode",
    "SmtpTransport",
    "WorkerConfig",
    "create_app",
    "deliver",
    "lookup_status",
    "select_delivery_mode",
]
