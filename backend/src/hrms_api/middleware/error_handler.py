"""Global exception handlers that map errors to HTTP responses."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hrms_api.config import get_settings
from hrms_api.exceptions import HRMSError, NotFoundError, ValidationError
from hrms_api.utils.secure_logging import log_error, log_warning

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Reduce an error detail to a message that is safe to return.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str) and status_code < 500:
        return detail
    if isinstance(detail, list):
        # Request validation errors, keep field names and messages only
        safe_errors = []
        for error in detail:
            if isinstance(error, dict):
                loc = error.get("loc", [])
                msg = error.get("msg", "Invalid value")
                field = loc[-1] if loc else "field"
                if isinstance(field, str) and not field.startswith("_"):
                    safe_errors.append(f"{field}: {msg}")
        if safe_errors:
            return "; ".join(safe_errors[:3])

    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


def _domain_error_response(exc: HRMSError, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "details": exc.details},
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle missing resources."""
    return _domain_error_response(exc, status.HTTP_404_NOT_FOUND)


async def domain_validation_exception_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle rejected business preconditions."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return _domain_error_response(exc, status.HTTP_400_BAD_REQUEST)


async def hrms_exception_handler(request: Request, exc: HRMSError) -> JSONResponse:
    """Handle domain errors that have no more specific handler."""
    return _domain_error_response(exc, status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    if get_settings().debug:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": sanitize_error_detail(exc.detail, exc.status_code)},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body and parameter validation errors.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    log_warning(logger, f"Validation error for {request.method} {request.url.path}")

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": sanitize_error_detail(exc.errors(), status.HTTP_422_UNPROCESSABLE_ENTITY)
        },
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Integrity errors that slip past the service checks, for example two
    concurrent writers racing for the current history record or the primary
    account, become 409 or 400 responses.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    if isinstance(exc, IntegrityError):
        log_warning(logger, f"Integrity error for {request.method} {request.url.path}", exc)
        error_text = str(exc).lower()
        if "unique" in error_text or "duplicate" in error_text:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"detail": "Resource already exists"},
            )
        if "foreign key" in error_text:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": "Referenced resource not found"},
            )

    log_error(logger, f"Database error for {request.method} {request.url.path}", exc)

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Database error", "type": type(exc).__name__},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information."""
    log_error(logger, f"Unhandled exception for {request.method} {request.url.path}", exc)

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "type": type(exc).__name__},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SAFE_ERROR_MESSAGES[500]},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler of this module to the application."""
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(ValidationError, domain_validation_exception_handler)
    app.add_exception_handler(HRMSError, hrms_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
