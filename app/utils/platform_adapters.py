from typing import Any, Dict, Iterator, Optional, Protocol

import requests

from app.config import Platform
from app.exceptions.custom_exceptions import BadRequest
from app.schemas.platform import PlatformFetchResult
from app.schemas.repository import RepositoryMetadata
from app.utils.github_manager import GitHubManager
from app.utils.gitlab_manager import GitLabManager


class IPlatformAdapter(Protocol):
    platform: Platform

    def fetch_repo(self, owner: str, repo: str, token: Optional[str] = None) -> PlatformFetchResult: ...

    def to_metadata(self, data: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> RepositoryMetadata: ...

    def verify_token(self, access_token: str) -> Dict[str, Any]: ...

    def list_user_repositories(self, access_token: str, page: int = 1, per_page: int = 20) -> Dict[str, Any]: ...


class PlatformAdapterRegistry:
    """Maps a platform to its adapter. Replit and Lovable have none."""

    def __init__(self, adapters: Optional[Dict[Platform, IPlatformAdapter]] = None):
        self._adapters = dict(adapters or {})

    @classmethod
    def default(cls, session: Optional[requests.Session] = None) -> "PlatformAdapterRegistry":
        session = session or requests.Session()
        return cls(
            {
                Platform.GITHUB: GitHubManager(session=session),
                Platform.GITLAB: GitLabManager(session=session),
            }
        )

    def get(self, platform: Platform) -> Optional[IPlatformAdapter]:
        return self._adapters.get(Platform(platform))


def get_platform_adapter_registry() -> Iterator[PlatformAdapterRegistry]:
    """One HTTP session per request, closed once the request is done."""
    session = requests.Session()
    try:
        yield PlatformAdapterRegistry.default(session=session)
    finally:
        session.close()


def retrieve_adapter_or_die(
    registry: PlatformAdapterRegistry, platform: Platform, reason: str
) -> IPlatformAdapter:
    adapter = registry.get(platform)
    if not adapter:
        raise BadRequest(
            reason=reason,
            log_message=f"No adapter registered for platform '{platform}'",
        )
    return adapter
