"""
Exception handlers for FastAPI application.

Domain exceptions are translated here, in one place, into the response
envelope. Use cases and repositories never build HTTP responses themselves.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fieldfeed.api.responses import error_response
from fieldfeed.core.domain import (
    AccountLockedException,
    AuthenticationException,
    AuthorizationException,
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Most specific first
_STATUS_BY_EXCEPTION: tuple[tuple[type[DomainException], int], ...] = (
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (InvalidOperationException, status.HTTP_400_BAD_REQUEST),
    (AuthenticationException, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationException, status.HTTP_403_FORBIDDEN),
    (AccountLockedException, status.HTTP_423_LOCKED),
    (ConcurrencyException, status.HTTP_409_CONFLICT),
)


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def _field_errors(exc: DomainException) -> list[dict[str, Any]] | None:
    if isinstance(exc, ValidationException) and exc.field:
        return [{"field": exc.field, "message": exc.message}]
    if isinstance(exc, InvalidOperationException):
        return [{"field": "status", "message": exc.message, "value": exc.current_state}]
    return None


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map domain exceptions onto HTTP status codes."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    code = status_code_for(exc)
    if code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return error_response(code, exc.message, errors=_field_errors(exc), headers=headers)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    if not isinstance(exc, StarletteHTTPException):
        return await global_exception_handler(request, exc)
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from custom validators
    return message.removeprefix("Value error, ")


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Request validation failures answer 400 with field-level messages."""
    if not isinstance(exc, RequestValidationError):
        return await global_exception_handler(request, exc)

    errors = []
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        entry: dict[str, Any] = {
            "field": ".".join(location),
            "message": _clean_message(error["msg"]),
        }
        if "input" in error and not isinstance(error["input"], dict):
            entry["value"] = jsonable_encoder(error["input"])
        errors.append(entry)

    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors=errors)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback; the detail is only returned to
    the caller in development mode.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=exc,
    )

    settings = getattr(request.app.state, "settings", None)
    detail = str(exc) if settings is not None and settings.is_development else None
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        error=detail,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
