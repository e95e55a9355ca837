import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

import gitlab
import requests
from gitlab.exceptions import GitlabAuthenticationError, GitlabError

from app.config import Platform, settings
from app.exceptions.custom_exceptions import PlatformFetchFailed
from app.exceptions.exception_constants import (
    GITLAB_GENERIC_FETCH_FAILED,
    GITLAB_NOT_FOUND_OR_PRIVATE,
    PLATFORM_ACCESS_DENIED,
    PLATFORM_INVALID_TOKEN,
    PLATFORM_LISTING_FAILED,
    PLATFORM_NETWORK_ERROR,
    PLATFORM_RATE_LIMITED,
)
from app.schemas.platform import FetchFailureReason, PlatformFetchResult
from app.schemas.repository import RepositoryMetadata

logger = logging.getLogger(__name__)

DISPLAY_NAME = "GitLab"


def primary_language(languages: Optional[Dict[str, Any]]) -> Optional[str]:
    """Language with the largest share; on a tie the first one listed wins."""
    if not languages:
        return None
    ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)
    return ranked[0][0]


def _error_message(body: Dict[str, Any], fallback: str) -> str:
    message = body.get("message")
    if isinstance(message, list):
        message = ", ".join(str(part) for part in message)
    elif isinstance(message, dict):
        message = ", ".join(f"{key} {value}" for key, value in message.items())
    return str(message or body.get("error") or fallback)


class GitLabManager:
    """
    GitLab adapter.

    Project lookups and listings use the REST API through a `requests` session,
    token verification goes through python-gitlab.
    """

    platform = Platform.GITLAB
    default_base_url = "https://gitlab.com/api/v4"

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.base_url = (base_url or settings.GITLAB_API_BASE_URL).rstrip("/")
        self.instance_url = re.sub(r"/api/v4$", "", self.base_url)
        self.timeout = timeout if timeout is not None else settings.PLATFORM_API_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.PLATFORM_API_USER_AGENT
        self._session = session or requests.Session()

    def _headers(self, token: Optional[str] = None) -> Dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        if token:
            headers["PRIVATE-TOKEN"] = token
        return headers

    @staticmethod
    def _safe_json(response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _classify(self, response, not_found_message: str, fallback: str) -> PlatformFetchResult:
        if response.status_code == 404:
            return PlatformFetchResult.failure(
                FetchFailureReason.NOT_FOUND_OR_PRIVATE, not_found_message, is_private=True
            )
        if response.status_code == 401:
            return PlatformFetchResult.failure(
                FetchFailureReason.INVALID_TOKEN,
                PLATFORM_INVALID_TOKEN.format(platform=DISPLAY_NAME),
            )
        if response.status_code == 403:
            return PlatformFetchResult.failure(
                FetchFailureReason.ACCESS_DENIED, PLATFORM_ACCESS_DENIED
            )
        if response.status_code == 429:
            return PlatformFetchResult.failure(
                FetchFailureReason.RATE_LIMITED,
                PLATFORM_RATE_LIMITED.format(platform=DISPLAY_NAME),
            )
        return PlatformFetchResult.failure(
            FetchFailureReason.PLATFORM_ERROR,
            _error_message(self._safe_json(response), fallback),
        )

    def fetch_repo(self, owner: str, repo: str, token: Optional[str] = None) -> PlatformFetchResult:
        project_path = quote(f"{owner}/{repo}", safe="")
        url = f"{self.base_url}/projects/{project_path}"

        try:
            response = self._session.get(url, headers=self._headers(token), timeout=self.timeout)
        except requests.exceptions.RequestException:
            logger.warning("GitLab request for %s/%s failed", owner, repo, exc_info=True)
            return PlatformFetchResult.failure(
                FetchFailureReason.NETWORK_ERROR, PLATFORM_NETWORK_ERROR
            )

        if not response.ok:
            return self._classify(
                response, GITLAB_NOT_FOUND_OR_PRIVATE, GITLAB_GENERIC_FETCH_FAILED
            )

        try:
            data = response.json()
        except ValueError:
            logger.warning("GitLab returned an unreadable body for %s/%s", owner, repo)
            return PlatformFetchResult.failure(
                FetchFailureReason.NETWORK_ERROR, PLATFORM_NETWORK_ERROR
            )

        languages = self.fetch_languages(data.get("id"), token)

        return PlatformFetchResult.success(
            data=data,
            is_private=data.get("visibility") != "public",
            languages=languages,
        )

    def fetch_languages(self, project_id, token: Optional[str] = None) -> Optional[Dict[str, float]]:
        """Language histogram of a project, None when GitLab does not answer."""
        if project_id is None:
            return None

        url = f"{self.base_url}/projects/{project_id}/languages"
        try:
            response = self._session.get(url, headers=self._headers(token), timeout=self.timeout)
            if not response.ok:
                return None
            languages = response.json()
        except (requests.exceptions.RequestException, ValueError):
            logger.info("GitLab languages for project %s unavailable", project_id)
            return None

        return languages if isinstance(languages, dict) else None

    def to_metadata(
        self, data: Dict[str, Any], extra: Optional[Dict[str, float]] = None
    ) -> RepositoryMetadata:
        return RepositoryMetadata(
            stars=data.get("star_count"),
            forks=data.get("forks_count"),
            language=primary_language(extra),
            description=data.get("description"),
            last_commit=data.get("last_activity_at"),
            default_branch=data.get("default_branch"),
        )

    def verify_token(self, access_token: str) -> Dict[str, Any]:
        try:
            gl = gitlab.Gitlab(
                url=self.instance_url,
                private_token=access_token,
                timeout=self.timeout,
                user_agent=self.user_agent,
            )
            gl.auth()
            user = gl.user
        except GitlabAuthenticationError as e:
            raise PlatformFetchFailed(
                reason=PLATFORM_INVALID_TOKEN.format(platform=DISPLAY_NAME),
                error_type=FetchFailureReason.INVALID_TOKEN.value,
            ) from e
        except GitlabError as e:
            if e.response_code == 403:
                reason, message = FetchFailureReason.ACCESS_DENIED, PLATFORM_ACCESS_DENIED
            elif e.response_code == 429:
                reason = FetchFailureReason.RATE_LIMITED
                message = PLATFORM_RATE_LIMITED.format(platform=DISPLAY_NAME)
            else:
                reason = FetchFailureReason.PLATFORM_ERROR
                message = str(e.error_message or GITLAB_GENERIC_FETCH_FAILED)
            raise PlatformFetchFailed(reason=message, error_type=reason.value) from e
        except requests.exceptions.RequestException as e:
            raise PlatformFetchFailed(
                reason=PLATFORM_NETWORK_ERROR,
                error_type=FetchFailureReason.NETWORK_ERROR.value,
            ) from e

        return {
            "login": user.username,
            "id": user.id,
            "name": user.name,
            "email": getattr(user, "email", None),
            "avatar_url": getattr(user, "avatar_url", None),
            "html_url": getattr(user, "web_url", None),
        }

    def list_user_repositories(
        self, access_token: str, page: int = 1, per_page: int = 20
    ) -> Dict[str, Any]:
        per_page = max(1, min(per_page, 100))
        page = max(1, page)

        try:
            response = self._session.get(
                f"{self.base_url}/projects",
                headers=self._headers(access_token),
                params={
                    "membership": "true",
                    "min_access_level": 30,
                    "per_page": per_page,
                    "page": page,
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise PlatformFetchFailed(
                reason=PLATFORM_NETWORK_ERROR,
                error_type=FetchFailureReason.NETWORK_ERROR.value,
            ) from e

        if not response.ok:
            failure = self._classify(response, PLATFORM_LISTING_FAILED, PLATFORM_LISTING_FAILED)
            raise PlatformFetchFailed(reason=failure.error, error_type=failure.reason.value)

        try:
            projects = response.json()
        except ValueError as e:
            raise PlatformFetchFailed(
                reason=PLATFORM_NETWORK_ERROR,
                error_type=FetchFailureReason.NETWORK_ERROR.value,
            ) from e

        headers = response.headers or {}
        pagination = {
            "current_page": page,
            "per_page": per_page,
            "total_count": int(headers.get("X-Total") or len(projects)),
            "total_pages": int(headers.get("X-Total-Pages") or 1),
            "next_page": int(headers.get("X-Next-Page") or 0) or None,
            "prev_page": int(headers.get("X-Prev-Page") or 0) or None,
        }
        return {
            "repositories": [self.extract_project_info(project) for project in projects],
            "pagination_info": pagination,
        }

    @staticmethod
    def extract_project_info(project: Dict[str, Any]) -> Dict[str, Any]:
        namespace = project.get("namespace") or {}
        return {
            "id": project.get("id"),
            "name": project.get("name"),
            "full_name": project.get("path_with_namespace"),
            "description": project.get("description"),
            "private": project.get("visibility") != "public",
            "html_url": project.get("web_url"),
            "default_branch": project.get("default_branch"),
            "stargazers_count": project.get("star_count"),
            "forks_count": project.get("forks_count"),
            "pushed_at": project.get("last_activity_at"),
            "owner": namespace.get("path"),
        }
