"""
Exception handling module for the RepoHub Dashboard API.

This module contains all application-wide exception handlers, including custom handlers
(e.g. for domain-specific exceptions) and the fallback handler for unhandled errors.

To keep the main application setup clean, all exception handlers defined here are registered
via the centralized `register.py` module. That module exposes a `register_exception_handlers(app)`
function which imports this file and binds each handler to the FastAPI app instance.

If you are adding a new custom exception and want it globally handled:
1. Define its handler function here.
2. Import and register it inside `register_exception_handlers()` in `register.py`.
"""

import logging
from typing import Dict

from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.requests import Request

from app.exceptions import exception_constants
from app.exceptions.custom_exceptions import (
    ErrorPayload,
    RepoHubAPIException,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

generic_exception_handler_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def generic_exception_handler(request: Request, exc: Exception) -> ErrorPayload:
    """
    Handle all uncaught exceptions with standardized error response.

    Args:
        request: The incoming request that triggered the exception
        exc: The uncaught exception

    Returns:
        Standardized error payload, the exception detail only goes to the logs
    """

    path = request.url.path
    method = getattr(request, "method", None) or request.scope.get("method") or "HTTP"
    exc_type = type(exc).__name__
    status_code = generic_exception_handler_status_code

    logger.exception(
        "[UNHANDLED_EXCEPTION] %s occurred | Path: %s | Method: %s | Status: %s",
        exc_type,
        path,
        method,
        status_code,
    )

    return ErrorPayload(
        message=exception_constants.SERVICE_UNAVAILABLE,
        status_code=status_code,
        error_type=exc_type,
    )


def repohub_base_exception_handler(
    request: Request, exc: RepoHubAPIException
) -> ErrorPayload:
    """
    Handle RepoHubAPIException with structured logging and response.

    Args:
        request: The incoming request that triggered the exception
        exc: The RepoHubAPIException instance

    Returns:
        Standardized error payload
    """
    path = request.url.path
    method = getattr(request, "method", None) or request.scope.get("method") or "HTTP"
    exc_error_type = exc.error_type

    log_parts = [
        f"[{exc_error_type}] {exc.log_message}",
        f"Path: {path}",
        f"Method: {method}",
        f"Http Status: {exc.http_status}",
    ]

    if exc.internal_context:
        log_parts.append(f"Context: {exc.internal_context}")

    log_message = " | ".join(log_parts)

    # Log with traceback if `from e` __cause__ present
    if exc.log_level == "error":
        logger.error(log_message, exc_info=exc.__cause__ or exc)
    elif exc.log_level == "exception":
        logger.exception(log_message, exc_info=exc.__cause__ or exc)
    elif exc.log_level == "info":
        logger.info(log_message)
    else:
        logger.warning(log_message)

    return ErrorPayload(
        message=exc.user_message,
        status_code=exc.http_status,
        details=exc.public_context or None,
        error_type=exc_error_type,
    )


def validation_exception_handler(request: Request, exc: RequestValidationError) -> ErrorPayload:
    """
    Catch FastAPI/Pydantic validation errors and return structured per-field feedback.
    """
    field_errors: Dict[str, list] = {}

    for err in exc.errors():
        # Remove "body"/"query"/"path"/etc. from loc and turn it into a dotted field name
        loc_parts = [str(part) for part in err["loc"] if part not in {"body", "query", "path", "header"}]
        field = ".".join(loc_parts) or "general"
        field_errors.setdefault(field, []).append(err["msg"])

    exception = ValidationFailed(field_errors)

    logger.warning(
        "[%s] Request validation failed | Path: %s | Fields: %s",
        exception.error_type,
        request.url.path,
        list(field_errors),
    )

    return ErrorPayload(
        message=exception.user_message,
        status_code=exception.http_status,
        details=exception.public_context,
        error_type=exception.error_type,
    )
