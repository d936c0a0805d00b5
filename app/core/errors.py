"""
Application error taxonomy.

Every error carries a human-readable message and the HTTP status it maps to
at the API boundary.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors surfaced by CareerBridge."""
    status_code = 500
    kind = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AppError):
    """A deployment defect, e.g. the selected provider has no API key."""
    status_code = 503
    kind = "configuration_error"


class ExternalServiceError(AppError):
    """A remote AI provider call failed or returned unusable output."""
    status_code = 502
    kind = "external_service_error"

    def __init__(self, message: str, status: Optional[int] = None, retryable: bool = False):
        super().__init__(message)
        self.status = status
        self.retryable = retryable


class ValidationError(AppError):
    """Request payload is missing a required field or carries an invalid one."""
    status_code = 400
    kind = "validation_error"


class NotFoundError(AppError):
    status_code = 404
    kind = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every AppError as a JSON error body with its mapped status."""
    app.add_exception_handler(AppError, _app_error_handler)
