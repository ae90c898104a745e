"""Error taxonomy and the FastAPI handlers that render it.

Every failure a caller sees is a JSON object ``{"error": ..., "message": ...}``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .middleware import SECURITY_HEADERS
from .models import ErrorResponse, to_wire

logger = structlog.get_logger()


class MailerError(Exception):
    """Base class for failures rendered as ``{error, message}``."""

    error: str = "InternalError"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> JSONResponse:
        body = ErrorResponse(error=self.error, message=self.message)
        return JSONResponse(content=to_wire(body), status_code=self.status_code)


class ValidationError(MailerError):
    """Request rejected locally; never forwarded downstream."""

    error = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST


class MissingFieldsError(ValidationError):
    error = "MissingFields"


class InvalidEmailFormatError(ValidationError):
    error = "InvalidEmailFormat"


class ServiceUnavailableError(MailerError):
    """The downstream service could not be connected to."""

    error = "ServiceUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class InternalServiceError(MailerError):
    """Any other downstream or internal failure."""

    error = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def install_error_handlers(app: FastAPI) -> None:
    """Register handlers that turn exceptions into ``{error, message}`` bodies."""

    @app.exception_handler(MailerError)
    async def mailer_error(request: Request, exc: MailerError) -> JSONResponse:
        return exc.to_response()

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors()})
        logger.warning("request_validation_failed", path=request.url.path, fields=fields)
        return ValidationError(f"Invalid request payload: {', '.join(fields)}").to_response()

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        # Served by ServerErrorMiddleware, outside the header-setting middleware.
        response = InternalServiceError("Something went wrong!").to_response()
        response.headers.update(SECURITY_HEADERS)
        return response
