"""HTTP middleware installed on every mailer service."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

logger = structlog.get_logger()

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
}


def install_middleware(app: FastAPI, *, cors_origins: list[str]) -> None:
    """Add CORS, security headers and access logging to *app*."""

    @app.middleware("http")
    async def access_log(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Rendered as the generic 500 by the outermost error handler.
            _log_request(request, 500, started)
            raise
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        _log_request(request, response.status_code, started)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _log_request(request: Request, status_code: int, started: float) -> None:
    logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        client=request.client.host if request.client else None,
    )
