"""Primary (intake) service configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field

from mailer_common.config import DownstreamConfig, ServiceConfig


class DecoratorServiceConfig(DownstreamConfig):
    """Where the decorator service listens."""

    model_config = {"env_prefix": "DECORATOR_SERVICE_"}

    url: str = Field(default="http://localhost:3002", description="Base URL of the decorator service")


class PrimaryConfig(ServiceConfig):
    """Top-level primary service configuration."""

    model_config = {"env_prefix": "PRIMARY_"}

    port: int = Field(default=3001, description="Bind port")
    decorator: DecoratorServiceConfig = Field(default_factory=DecoratorServiceConfig)
