"""
Custom exception base class for the RepoHub Dashboard API.

This module defines `RepoHubAPIException`, the base exception from which all
application-specific errors should inherit, and the concrete errors raised by the
repository connection workflow, the platform token flows and the stores.

Key responsibilities:
- Clean separation of user-facing messages vs. developer/debugging logs
- Standard structure for error codes, contexts, and HTTP status mapping
- Centralized support for structured API responses and log formatting

To create a new custom exception:
1. Subclass `RepoHubAPIException`
2. Optionally override `http_status`
3. Pass `user_message`, `log_message`, `error_type`, etc.

Example:
    class RepoConflictError(RepoHubAPIException):
        http_status = 409
        def __init__(self, repo_id: str):
            super().__init__(
                user_message="Repository conflict detected.",
                log_message=f"Conflict when syncing repo ID: {repo_id}",
                error_type="REPO_CONFLICT",
                internal_context={"repo_id": repo_id},
            )

These exceptions are globally handled and logged by the handlers defined in
`handlers.py`, and registered into the FastAPI app via `register.py`.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from starlette import status

from app.exceptions.exception_constants import (
    AUTH_FAILED,
    GENERIC_BAD_REQUEST,
    GENERIC_RESOURCE_NOT_FOUND,
    GENERIC_VALIDATION_FAILED_USER_MESSAGE,
    REPOSITORY_ALREADY_CONNECTED,
    REPOSITORY_STORE_FAILED_LOG_MESSAGE,
)


@dataclass
class ErrorPayload:
    message: str
    status_code: int
    error_type: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    debug: Optional[Any] = None


class RepoHubAPIException(Exception):
    """
    Base exception class for RepoHub Dashboard API.

    This exception is designed to cleanly separate:
    - What is returned to the **user**
    - What is logged for **developers**
    """

    http_status = (
        status.HTTP_500_INTERNAL_SERVER_ERROR
    )  # Subclasses may override this default

    def __init__(
        self,
        *,
        user_message: str,
        log_message: Optional[str] = None,
        error_type: Optional[str] = None,
        public_context: Optional[Dict[str, Any]] = None,
        internal_context: Optional[Dict[str, Any]] = None,
        http_status_override: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        """
        Args:
                user_message: Safe, generic message returned to the user.
                public_context: Optional context to return in the API response (e.g., {"limit": 10}).

                log_message: Detailed internal message for logs/debugging.
                internal_context: Optional context to include in logs only (e.g., {"repo_id": 123}).

                error_type: Optional machine-readable code.
                http_status_override: Override the default HTTP status for this exception.
                log_level: specifies the level of the logging system of exception instance
        """
        super().__init__(user_message)

        self.user_message = user_message
        self.log_message = log_message or user_message
        self.error_type = error_type or self.__class__.__name__.upper()
        self.public_context = public_context or {}
        self.internal_context = internal_context or {}
        self.http_status = http_status_override or self.http_status
        self.log_level = log_level.lower() if log_level else "warning"

    def __str__(self):
        return f"[{self.error_type}] {self.user_message}"


class UnauthorizedAccess(RepoHubAPIException):
    http_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, reason=None, log_message=None, log_level=None):

        if not reason or not reason.strip():
            reason = AUTH_FAILED

        super().__init__(
            user_message=reason, log_message=log_message, log_level=log_level
        )


class BadRequest(RepoHubAPIException):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason=None, log_message: Optional[str] = None, **kwargs):

        if not reason or not reason.strip():
            reason = GENERIC_BAD_REQUEST

        super().__init__(user_message=reason, log_message=log_message, **kwargs)


class ResourceNotFound(RepoHubAPIException):
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, reason=None):

        if not reason or not reason.strip():
            reason = GENERIC_RESOURCE_NOT_FOUND

        super().__init__(user_message=reason)


class ValidationFailed(RepoHubAPIException):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, field_errors: Dict[str, list]):
        super().__init__(
            user_message=GENERIC_VALIDATION_FAILED_USER_MESSAGE,
            public_context=field_errors,
        )


class FormatError(BadRequest):
    """A user supplied value (repository URL, token) does not have the expected shape."""


class RepositoryUrlFormatError(FormatError):
    pass


class RepositoryUrlParseError(FormatError):
    pass


class TokenFormatError(FormatError):
    pass


class DuplicateRepository(RepoHubAPIException):
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, repo_url: str, log_message: Optional[str] = None):
        super().__init__(
            user_message=REPOSITORY_ALREADY_CONNECTED,
            log_message=log_message,
            internal_context={"repo_url": repo_url},
        )


class RepositoryLimitReached(RepoHubAPIException):
    http_status = status.HTTP_403_FORBIDDEN

    def __init__(self, reason: str, limit: int):
        super().__init__(user_message=reason, public_context={"limit": limit})


class PlatformFetchFailed(BadRequest):
    """
    A platform adapter classified the upstream response as a failure.

    `error_type` carries the classification (e.g. `RATE_LIMITED`), the user message is
    the adapter's own message.
    """

    def __init__(self, reason: str, error_type: str, is_private: Optional[bool] = None):
        public_context = {"is_private": is_private} if is_private is not None else None
        super().__init__(
            reason=reason,
            error_type=error_type,
            public_context=public_context,
        )


class RepositoryStoreError(RepoHubAPIException):
    """
    The store rejected a write. The store's own message is returned verbatim.
    """

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, store_message: str):
        super().__init__(
            user_message=store_message,
            log_message=REPOSITORY_STORE_FAILED_LOG_MESSAGE.format(operation=operation),
            internal_context={"operation": operation},
            log_level="exception",
        )


class FeatureNotAvailable(RepoHubAPIException):
    http_status = status.HTTP_501_NOT_IMPLEMENTED

    def __init__(self, reason: str):
        super().__init__(user_message=reason, log_level="info")
