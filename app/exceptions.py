# =============================================================================
# app/exceptions.py - Application Errors and Exception Handlers
# =============================================================================
# Centralized error handling for the API.
#
# Every error response has the same envelope:
#   {"error": "<CODE>", "message": "<human readable>", "details": [...]?}
#
# Services raise AppError subclasses; register_exception_handlers() wires the
# handlers that turn them (and framework errors) into that envelope.
# =============================================================================

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base exception for errors that map to an HTTP response.

    Attributes:
        status_code: HTTP status returned to the client
        error_code: Machine-readable code (the `error` field)
        is_operational: False for programming errors that should be alerted on
        details: Optional list of problems (validation failures)
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        is_operational: bool = True,
        details: list[Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.is_operational = is_operational
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# =============================================================================
# HTTP Errors
# =============================================================================

class BadRequestError(AppError):
    """400 - the request is malformed or out of range."""

    def __init__(self, message: str = "Bad request", error_code: str = "BAD_REQUEST"):
        super().__init__(message, 400, error_code)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(message, 401, error_code)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden", error_code: str = "FORBIDDEN"):
        super().__init__(message, 403, error_code)


class NotFoundError(AppError):
    """404 - the addressed resource does not exist."""

    def __init__(self, message: str = "Resource not found", error_code: str = "NOT_FOUND"):
        super().__init__(message, 404, error_code)


class ConflictError(AppError):
    """409 - the write would violate a uniqueness rule."""

    def __init__(self, message: str = "Resource conflict", error_code: str = "CONFLICT"):
        super().__init__(message, 409, error_code)


class ValidationError(AppError):
    """
    422 - the request body, query or path failed validation.

    details is a list of {"property", "constraints", "value"} entries.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: list[Any] | None = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, 422, error_code, details=details)


class InternalServerError(AppError):
    """500 - unexpected failure; never operational."""

    def __init__(self, message: str = "Internal server error", error_code: str = "INTERNAL_ERROR"):
        super().__init__(message, 500, error_code, is_operational=False)


# =============================================================================
# Exception Handlers
# =============================================================================

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert an AppError to its JSON envelope."""
    if exc.status_code >= 500 or not exc.is_operational:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_dict()),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle FastAPI's own request validation errors.

    Handlers in this service read the request themselves, so this only fires
    for malformed framework-level input.
    """
    details = [
        {
            "property": ".".join(str(part) for part in error.get("loc", ())),
            "constraints": {error.get("type", "invalid"): error.get("msg", "")},
            "value": error.get("input"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({
            "error": "VALIDATION_ERROR",
            "message": "Data validation failed",
            "details": details,
        }),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, wrong methods) in the envelope."""
    if exc.status_code == 404:
        content: dict[str, Any] = {
            "error": "NOT_FOUND",
            "message": "Requested resource not found",
            "path": request.url.path,
        }
    else:
        content = {
            "error": "HTTP_ERROR" if exc.status_code != 405 else "METHOD_NOT_ALLOWED",
            "message": str(exc.detail),
        }
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Internal server error",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler above to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
