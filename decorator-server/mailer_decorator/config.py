"""Decorator service configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field

from mailer_common.config import DownstreamConfig, ServiceConfig


class WorkerServiceConfig(DownstreamConfig):
    """Where the worker (delivery) service listens."""

    model_config = {"env_prefix": "WORKER_SERVICE_"}

    url: str = Field(default="http://localhost:3003", description="Base URL of the worker service")


class DecoratorConfig(ServiceConfig):
    """Top-level decorator service configuration."""

    model_config = {"env_prefix": "DECORATOR_"}

    port: int = Field(default=3002, description="Bind port")
    worker: WorkerServiceConfig = Field(default_factory=WorkerServiceConfig)
