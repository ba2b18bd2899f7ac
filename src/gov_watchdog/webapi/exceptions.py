"""Custom exception classes and error handling for the Watchdog API.

Every error response has the shape ``{"error": "<message>"}``. Store and
unexpected failures are logged with full detail and answered with a generic
message only.
"""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ..config.logging import get_logger
from .models.responses import ErrorResponse

logger = get_logger(__name__)

DATABASE_ERROR_MESSAGE = "Database error"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class WatchdogException(Exception):
    """Base exception for Watchdog application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    @property
    def public_message(self) -> str:
        """Message safe to return to the client."""
        return self.message


class ValidationException(WatchdogException):
    """User-correctable input error."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            message=message,
            status_code=400,
            details={"field_errors": field_errors or {}},
        )


class DatabaseError(WatchdogException):
    """Store connectivity or query execution failure."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation},
        )

    @property
    def public_message(self) -> str:
        return DATABASE_ERROR_MESSAGE


class ConfigurationError(WatchdogException):
    """Missing or invalid server-side configuration."""

    def __init__(self, setting: str, message: str):
        super().__init__(
            message=f"Configuration error for '{setting}': {message}",
            status_code=500,
            details={"setting": setting},
        )

    @property
    def public_message(self) -> str:
        return f"{self.details['setting']} not configured"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def watchdog_exception_handler(
    request: Request, exc: WatchdogException
) -> JSONResponse:
    """Handle Watchdog custom exceptions."""
    request_id = getattr(request.state, "request_id", None)

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Watchdog exception occurred",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    return _error_response(exc.status_code, exc.public_message)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as user-correctable 400s."""
    request_id = getattr(request.state, "request_id", None)

    field_errors = {}
    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        field_errors[field_path] = error["msg"]

    logger.warning(
        "Validation error occurred",
        field_errors=field_errors,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    if field_errors:
        field, reason = next(iter(field_errors.items()))
        message = f"Invalid request: {field}: {reason}"
    else:
        message = "Invalid request"
    return _error_response(400, message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.error(
        "Unexpected exception occurred",
        exception_type=type(exc).__name__,
        message=str(exc),
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    return _error_response(500, INTERNAL_ERROR_MESSAGE)


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""
    app.add_exception_handler(WatchdogException, watchdog_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
