"""``/health`` endpoint shared by all stages."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .models import HealthResponse, to_wire


def create_health_router(
    service: str,
    *,
    details: Callable[[], dict[str, Any]] | None = None,
) -> APIRouter:
    """Build a router answering ``GET /health`` for *service*.

    *details* may return extra fields (e.g. ``email_configured``) to merge
    into the response.
    """
    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def health() -> JSONResponse:
        extra = details() if details is not None else {}
        return JSONResponse(to_wire(HealthResponse(service=service, **extra)))

    return router
