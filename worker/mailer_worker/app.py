"""FastAPI application factory for the worker (delivery) service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from mailer_common import (
    DecoratedMail,
    create_health_router,
    install_error_handlers,
    install_middleware,
    to_wire,
)

from .config import WorkerConfig
from .delivery import DeliveryMode, deliver, is_email_configured, lookup_status, select_delivery_mode

SERVICE_NAME = "worker"

logger = structlog.get_logger()

router = APIRouter(tags=["mail"])


def get_delivery_mode(request: Request) -> DeliveryMode:
    return request.app.state.delivery_mode


@router.post("/api/mail/send")
async def send_mail(
    body: DecoratedMail,
    mode: Annotated[DeliveryMode, Depends(get_delivery_mode)],
) -> JSONResponse:
    """Deliver a decorated mail; 500 with ``DeliveryFailed`` if the transport fails."""
    outcome = await deliver(body, mode)
    code = status.HTTP_200_OK if outcome.success else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(to_wire(outcome), status_code=code)


@router.get("/api/mail/status/{mail_id}")
async def mail_status(mail_id: str) -> JSONResponse:
    return JSONResponse(to_wire(lookup_status(mail_id)))


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: WorkerConfig = app.state.config
    logger.info(
        "worker_started",
        port=config.port,
        email_configured=is_email_configured(app.state.delivery_mode),
    )
    yield
    logger.info("shutdown_complete")


def create_app(
    config: WorkerConfig | None = None,
    *,
    delivery_mode: DeliveryMode | None = None,
) -> FastAPI:
    """Build and return the worker application.

    The delivery mode is fixed here for the lifetime of the app.
    """
    if config is None:
        config = WorkerConfig()
    if delivery_mode is None:
        delivery_mode = select_delivery_mode(config.smtp, mock_delay_seconds=config.mock_delay_seconds)

    app = FastAPI(title="Mailer Worker", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.delivery_mode = delivery_mode

    install_middleware(app, cors_origins=config.cors_origins)
    install_error_handlers(app)
    app.include_router(
        create_health_router(
            SERVICE_NAME,
            details=lambda: {"email_configured": is_email_configured(delivery_mode)},
        )
    )
    app.include_router(router)
    return app
