"""
Exception registration module for the RepoHub Dashboard API.

This module is responsible for binding all exception handlers defined in `handlers.py`
to the FastAPI application instance, and for turning their payloads into `APIResponse`
error responses.

Example usage in your main application file:
    from app.exceptions.register import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from dataclasses import asdict

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request

from app.config import settings
from app.exceptions.custom_exceptions import RepoHubAPIException
from app.exceptions.handlers import (
    generic_exception_handler,
    repohub_base_exception_handler,
    validation_exception_handler,
)
from app.utils.api_response import APIResponse


def handle_exception_debug_payload(exc):
    debug_payload = None
    if settings.API_ENV in {"development", "test"}:
        debug_payload = {"exception": type(exc).__name__, "str": str(exc)}

    return debug_payload


def handle_validation_debug_payload(exc):
    debug_payload = None
    if settings.API_ENV in {"development", "test"}:
        # ctx may hold exception instances that JSONResponse cannot render
        debug_payload = {
            "raw": [
                {key: value for key, value in err.items() if key != "ctx"}
                for err in exc.errors()
            ]
        }

    return debug_payload


def manage_generic_exception(request: Request, exc: Exception):
    payload = generic_exception_handler(request, exc)
    payload.debug = handle_exception_debug_payload(exc)

    return APIResponse.error(**asdict(payload))


def manage_repohub_base_exception(request: Request, exc: RepoHubAPIException):
    payload = repohub_base_exception_handler(request, exc)
    payload.debug = handle_exception_debug_payload(exc)

    return APIResponse.error(**asdict(payload))


def manage_validation_exception(request: Request, exc: RequestValidationError):
    """
    example return:
    ```
        {
          "success": false,
          "message": "Your request contains validation errors",
          "status_code": 400,
          "error_type": "VALIDATIONFAILED",
          "details": {
            "platform": [
              "Input should be 'github', 'gitlab', 'replit' or 'lovable'"
            ]
          }
        }
    ```
    """
    payload = validation_exception_handler(request, exc)
    payload.debug = handle_validation_debug_payload(exc)

    return APIResponse.error(**asdict(payload))


def register_exception_handlers(app: FastAPI):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance to register handlers with.
    """
    app.add_exception_handler(Exception, manage_generic_exception)
    app.add_exception_handler(RepoHubAPIException, manage_repohub_base_exception)
    app.add_exception_handler(RequestValidationError, manage_validation_exception)
