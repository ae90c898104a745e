"""Worker service configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from mailer_common.config import ServiceConfig


class SmtpConfig(BaseSettings):
    """SMTP transport settings.

    Leaving ``user`` or ``password`` unset puts the worker in mock mode.
    """

    model_config = {"env_prefix": "SMTP_"}

    host: str = Field(default="smtp.gmail.com", description="SMTP server hostname")
    port: int = Field(default=587, description="SMTP server port")
    start_tls: bool = Field(default=True, description="Upgrade the connection with STARTTLS")
    user: str | None = Field(default=None, description="SMTP login user")
    password: str | None = Field(default=None, description="SMTP login password")
    sender: str | None = Field(
        default=None,
        description="From address (defaults to the login user)",
    )
    timeout_seconds: float = Field(default=30.0, description="SMTP operation timeout")

    @property
    def has_credentials(self) -> bool:
        return bool(self.user and self.password)


class WorkerConfig(ServiceConfig):
    """Top-level worker service configuration."""

    model_config = {"env_prefix": "WORKER_"}

    port: int = Field(default=3003, description="Bind port")
    mock_delay_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Simulated processing time of a mock-mode send",
    )
    smtp: SmtpConfig = Field(default_factory=SmtpConfig)
