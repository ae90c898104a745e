"""Settings shared by every mailer service.

Uses pydantic-settings so every field can be overridden via env vars.
Each service subclasses these with its own ``env_prefix``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ServiceConfig(BaseSettings):
    """HTTP listener and logging settings common to all stages."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(
        default=True,
        description="Use JSON log output (True for prod, False for dev)",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the service from a browser",
    )


class DownstreamConfig(BaseSettings):
    """Location of the next stage in the pipeline."""

    url: str = Field(default="http://localhost:8000", description="Base URL of the downstream service")
    timeout_seconds: float = Field(default=30.0, description="HTTP request timeout")
