"""Mailer decorator server: brand outgoing mail and assign its id."""

from .app import create_app
from .config import DecoratorConfig
from .decoration import build_decorated_mail, decorate, decorate_body, decorate_subject

__all__ = [
    "DecoratorConfig",
    "build_decorated_mail",
    "create_app",
    "decorate",
    "decorate_body",
    "decorate_subject",
]
