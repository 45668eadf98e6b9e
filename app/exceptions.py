"""Custom exception classes and global exception handlers.

Every handler answers with the same JSON envelope: ``{"message": ...}``
plus ``errors`` (field-level detail) for validation failures and ``error``
(the underlying text) for unexpected failures.
"""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class EduTrackException(Exception):
    """Base exception for all EduTrack-specific errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BadRequestException(EduTrackException):
    """Missing or malformed request parameter."""

    def __init__(self, message: str = "Bad request"):
        super().__init__(message, 400)


class NotFoundException(EduTrackException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource", message: str | None = None):
        super().__init__(message or f"{resource} not found", 404)


class ForbiddenException(EduTrackException):
    """Access forbidden exception."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, 403)


class UnauthorizedException(EduTrackException):
    """Authentication required exception."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, 401)


class ConflictException(EduTrackException):
    """Resource conflict exception."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, 409)


class ValidationException(EduTrackException):
    """Validation error exception with field-level errors."""

    def __init__(self, errors: list[dict] | str):
        if isinstance(errors, str):
            errors = [{"field": "general", "message": errors}]
        super().__init__("Invalid input", 400)
        self.errors = errors


class UserContextError(EduTrackException):
    """User context not set error."""

    def __init__(self, message: str = "User context is required"):
        super().__init__(message, 401)


def _format_validation_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic errors into ``{field, message}`` pairs."""
    errors = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" location segment
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors.append({
            "field": ".".join(location) or "general",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


async def edutrack_exception_handler(request: Request, exc: EduTrackException):
    """Handle EduTrack custom exceptions."""
    logger.warning(f"EduTrackException on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

    content = {"message": exc.message}
    if hasattr(exc, "errors"):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Map schema validation failures to 400 with field-level detail."""
    errors = _format_validation_errors(exc)
    logger.warning(f"Invalid input on {request.method} {request.url.path}: {errors}")

    return JSONResponse(
        status_code=400,
        content={"message": "Invalid input", "errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Keep the status of framework HTTP errors, reshaped into the envelope."""
    logger.warning(f"HTTPException on {request.method} {request.url.path}: {exc.detail} (status={exc.status_code})")

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Handle unique and foreign key violations raised by the database."""
    logger.warning(f"IntegrityError on {request.method} {request.url.path}: {exc.orig}")

    return JSONResponse(
        status_code=409,
        content={"message": "Unique constraint violation", "error": str(exc.orig)},
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}")
    logger.error(f"Exception: {type(exc).__name__}: {exc}")
    tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("".join(tb_lines))

    return JSONResponse(
        status_code=500,
        content={"message": "An unexpected error occurred", "error": str(exc)},
    )


def create_exception_handlers() -> dict:
    """Map exception classes to their handlers for app registration."""
    return {
        EduTrackException: edutrack_exception_handler,
        RequestValidationError: request_validation_handler,
        StarletteHTTPException: http_exception_handler,
        IntegrityError: integrity_error_handler,
        Exception: generic_exception_handler,
    }
