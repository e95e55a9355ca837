"""
Shapes exchanged between the platform adapters and the services.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class FetchFailureReason(str, Enum):
    NOT_FOUND_OR_PRIVATE = "NOT_FOUND_OR_PRIVATE"
    INVALID_TOKEN = "INVALID_TOKEN"
    RATE_LIMITED = "RATE_LIMITED"
    ACCESS_DENIED = "ACCESS_DENIED"
    NETWORK_ERROR = "NETWORK_ERROR"
    PLATFORM_ERROR = "PLATFORM_ERROR"


@dataclass
class PlatformFetchResult:
    """
    Outcome of a single repository lookup against a hosting platform.

    Exactly one of `data` or `error` is set. `is_private` is only known when the
    platform told us (a public payload, or a 404 that may hide a private repository).
    """

    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    is_private: Optional[bool] = None
    reason: Optional[FetchFailureReason] = None
    languages: Optional[Dict[str, int]] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None

    @classmethod
    def success(
        cls,
        data: Dict[str, Any],
        is_private: bool,
        languages: Optional[Dict[str, int]] = None,
    ) -> "PlatformFetchResult":
        return cls(data=data, is_private=is_private, languages=languages)

    @classmethod
    def failure(
        cls,
        reason: FetchFailureReason,
        error: str,
        is_private: Optional[bool] = None,
    ) -> "PlatformFetchResult":
        return cls(error=error, reason=reason, is_private=is_private)
