"""Mailer primary server: validate send requests and relay them to the decorator."""

from .app import create_app
from .config import PrimaryConfig
from .intake import submit, validate_mail_request

__all__ = [
    "PrimaryConfig",
    "create_app",
    "submit",
    "validate_mail_request",
]
