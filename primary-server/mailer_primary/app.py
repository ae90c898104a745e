"""FastAPI application factory for the primary (intake) service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from mailer_common import (
    DownstreamClient,
    create_health_router,
    install_error_handlers,
    install_middleware,
    to_wire,
)

from .config import PrimaryConfig
from .intake import submit, validate_mail_request

SERVICE_NAME = "primary-server"

logger = structlog.get_logger()

router = APIRouter(tags=["mail"])


def get_decorator_client(request: Request) -> DownstreamClient:
    return request.app.state.decorator


@router.post("/api/mail/send")
async def send_mail(
    request: Request,
    decorator: Annotated[DownstreamClient, Depends(get_decorator_client)],
) -> JSONResponse:
    """Validate a ``{to, subject, body}`` request and relay it downstream."""
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    mail = validate_mail_request(payload)
    accepted = await submit(mail, decorator)
    return JSONResponse(to_wire(accepted))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the decorator client. Shutdown: close it."""
    config: PrimaryConfig = app.state.config
    await app.state.decorator.start()
    logger.info("primary_server_started", port=config.port, decorator_url=config.decorator.url)
    yield
    await app.state.decorator.stop()
    logger.info("shutdown_complete")


def create_app(
    config: PrimaryConfig | None = None,
    *,
    decorator: DownstreamClient | None = None,
) -> FastAPI:
    """Build and return the primary service application."""
    if config is None:
        config = PrimaryConfig()

    app = FastAPI(title="Mailer Primary Server", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.decorator = decorator or DownstreamClient(config.decorator, service_name="decorator")

    install_middleware(app, cors_origins=config.cors_origins)
    install_error_handlers(app)
    app.include_router(create_health_router(SERVICE_NAME))
    app.include_router(router)
    return app
