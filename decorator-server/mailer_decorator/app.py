"""FastAPI application factory for the decorator service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from mailer_common import (
    DownstreamClient,
    SubmittedMail,
    create_health_router,
    install_error_handlers,
    install_middleware,
    to_wire,
)

from .config import DecoratorConfig
from .decoration import decorate

SERVICE_NAME = "decorator-server"

logger = structlog.get_logger()

router = APIRouter(tags=["mail"])


def get_worker_client(request: Request) -> DownstreamClient:
    return request.app.state.worker


@router.post("/api/mail/decorate")
async def decorate_mail(
    body: SubmittedMail,
    worker: Annotated[DownstreamClient, Depends(get_worker_client)],
) -> JSONResponse:
    """Decorate a submitted mail and forward it to the worker."""
    accepted = await decorate(body, worker)
    return JSONResponse(to_wire(accepted))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the worker client. Shutdown: close it."""
    config: DecoratorConfig = app.state.config
    await app.state.worker.start()
    logger.info("decorator_server_started", port=config.port, worker_url=config.worker.url)
    yield
    await app.state.worker.stop()
    logger.info("shutdown_complete")


def create_app(
    config: DecoratorConfig | None = None,
    *,
    worker: DownstreamClient | None = None,
) -> FastAPI:
    """Build and return the decorator service application."""
    if config is None:
        config = DecoratorConfig()

    app = FastAPI(title="Mailer Decorator Server", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.worker = worker or DownstreamClient(config.worker, service_name="worker")

    install_middleware(app, cors_origins=config.cors_origins)
    install_error_handlers(app)
    app.include_router(create_health_router(SERVICE_NAME))
    app.include_router(router)
    return app
