"""
Trace ID middleware and logging integration for the RepoHub Dashboard API.

This module enables request traceability by assigning a `trace_id` to every API call.
It handles:

1. Reading an incoming `X-Trace-Id` HTTP header (if provided), or generating a new UUID.
2. Storing the trace ID in:
   - `request.state.trace_id`: used when you have access to the FastAPI `Request` object.
   - `trace_id_var` (`ContextVar`): used to inject the trace ID into log records
     without passing `Request` explicitly.
3. Adding the trace ID back into the response header (`X-Trace-Id`), allowing clients
   to correlate responses with logs.

The authenticated user id is kept in `user_id_var` the same way, it is set by the
authenticator once the caller is known.

Usage:
- Add `TraceIDMiddleware` to your FastAPI app.
- Attach `RequestContextLogFilter` to all log handlers using `setup_logging()`.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

# The HTTP header name used to propagate the trace ID between systems
TRACE_HEADER_NAME = "X-Trace-Id"

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="-")
user_id_var: ContextVar[str] = ContextVar("user_id", default="-")


class RequestContextLogFilter(logging.Filter):
    """
    Logging filter that injects the current request's trace ID and user ID into each log record.

    Your formatter can then include them like:

        '%(asctime)s - %(name)s - [trace_id=%(trace_id)s, user_id=%(user_id)s] - %(message)s'

    Returns:
        True (to allow log record propagation)
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = trace_id_var.get()
        record.user_id = user_id_var.get()
        return True


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that ensures every request has a unique trace ID, and that it is
    available for logging, diagnostics, and response propagation.

    Workflow:
    1. If the client provides `X-Trace-Id`, use it. Otherwise, generate a new UUID.
    2. Store the trace ID in `request.state.trace_id` and in `trace_id_var`.
    3. Add the trace ID to the response as the `X-Trace-Id` header.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        incoming_trace_id = request.headers.get(TRACE_HEADER_NAME)
        trace_id = incoming_trace_id or str(uuid.uuid4())

        request.state.trace_id = trace_id
        trace_id_var.set(trace_id)
        user_id_var.set("-")

        response = await call_next(request)
        response.headers[TRACE_HEADER_NAME] = trace_id
        return response
