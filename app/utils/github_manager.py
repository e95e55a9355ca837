import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from github import Auth, Github
from github.GithubException import (
    BadCredentialsException,
    GithubException,
    RateLimitExceededException,
)

from app.config import Platform, settings
from app.exceptions.custom_exceptions import PlatformFetchFailed
from app.exceptions.exception_constants import (
    GITHUB_GENERIC_FETCH_FAILED,
    PLATFORM_ACCESS_DENIED,
    PLATFORM_INVALID_TOKEN,
    PLATFORM_LISTING_FAILED,
    PLATFORM_NETWORK_ERROR,
    PLATFORM_NOT_FOUND_OR_PRIVATE,
    PLATFORM_RATE_LIMITED,
)
from app.schemas.platform import FetchFailureReason, PlatformFetchResult
from app.schemas.repository import RepositoryMetadata

logger = logging.getLogger(__name__)

DISPLAY_NAME = "GitHub"


def _github_failure(e: Exception) -> PlatformFetchFailed:
    """Translate a PyGithub or transport error into the adapter failure taxonomy."""
    if isinstance(e, RateLimitExceededException):
        reason, message = FetchFailureReason.RATE_LIMITED, PLATFORM_RATE_LIMITED.format(
            platform=DISPLAY_NAME
        )
    elif isinstance(e, BadCredentialsException) or getattr(e, "status", None) == 401:
        reason, message = FetchFailureReason.INVALID_TOKEN, PLATFORM_INVALID_TOKEN.format(
            platform=DISPLAY_NAME
        )
    elif getattr(e, "status", None) == 403:
        reason, message = FetchFailureReason.ACCESS_DENIED, PLATFORM_ACCESS_DENIED
    elif isinstance(e, GithubException):
        data = e.data if isinstance(e.data, dict) else {}
        reason = FetchFailureReason.PLATFORM_ERROR
        message = data.get("message") or PLATFORM_LISTING_FAILED
    else:
        reason, message = FetchFailureReason.NETWORK_ERROR, PLATFORM_NETWORK_ERROR

    return PlatformFetchFailed(reason=message, error_type=reason.value)


class AuthenticatedGitHubManager:

    def __init__(self, base_url, git_client):
        self.base_url = base_url
        self._git_client: Github = git_client

    def get_user(self) -> Dict[str, Any]:
        """Get the authenticated user information using PyGithub."""
        try:
            user = self._git_client.get_user()
            return {
                "login": user.login,
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "avatar_url": user.avatar_url,
                "html_url": user.html_url,
            }
        except (GithubException, requests.exceptions.RequestException) as e:
            raise _github_failure(e) from e

    def get_user_repositories(
        self,
        page=1,
        per_page=20,
        visibility="all",
        affiliation="owner,collaborator,organization_member",
        sort="updated",
        direction="desc",
    ) -> Dict[str, Any]:
        """
        List the repositories the token owner can access, one page at a time.

        The page size comes from the client (`per_page` given to `Github`), `page` is
        one based like the REST API.
        """
        try:
            user = self._git_client.get_user()

            repos_paginated = user.get_repos(
                visibility=visibility,
                affiliation=affiliation,
                sort=sort,
                direction=direction,
            )

            repos_page = repos_paginated.get_page(page - 1)
            repo_list = [GitHubManager.extract_repo_info(repo) for repo in repos_page]

            pagination_info = GitHubManager.get_pagination_info(
                total_count=repos_paginated.totalCount,
                page=page,
                per_page=per_page,
            )

            return {
                "repositories": repo_list,
                "pagination_info": pagination_info,
            }

        except (GithubException, requests.exceptions.RequestException) as e:
            raise _github_failure(e) from e


class GitHubManager:
    """
    GitHub adapter.

    Single repository lookups go straight to the REST API through a `requests`
    session so every status code can be classified. Account level calls (token
    verification, repository listing) go through PyGithub.
    """

    platform = Platform.GITHUB
    default_base_url = "https://api.github.com"

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.base_url = (base_url or settings.GITHUB_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PLATFORM_API_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.PLATFORM_API_USER_AGENT
        self._session = session or requests.Session()

    def _headers(self, token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.user_agent,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _safe_json(response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def fetch_repo(self, owner: str, repo: str, token: Optional[str] = None) -> PlatformFetchResult:
        url = f"{self.base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

        try:
            response = self._session.get(url, headers=self._headers(token), timeout=self.timeout)
        except requests.exceptions.RequestException:
            logger.warning("GitHub request for %s/%s failed", owner, repo, exc_info=True)
            return PlatformFetchResult.failure(
                FetchFailureReason.NETWORK_ERROR, PLATFORM_NETWORK_ERROR
            )

        if response.status_code == 404:
            return PlatformFetchResult.failure(
                FetchFailureReason.NOT_FOUND_OR_PRIVATE,
                PLATFORM_NOT_FOUND_OR_PRIVATE,
                is_private=True,
            )

        if response.status_code == 401:
            return PlatformFetchResult.failure(
                FetchFailureReason.INVALID_TOKEN,
                PLATFORM_INVALID_TOKEN.format(platform=DISPLAY_NAME),
            )

        if response.status_code == 403:
            message = str(self._safe_json(response).get("message") or "")
            if "rate limit" in message.lower():
                return PlatformFetchResult.failure(
                    FetchFailureReason.RATE_LIMITED,
                    PLATFORM_RATE_LIMITED.format(platform=DISPLAY_NAME),
                )
            return PlatformFetchResult.failure(
                FetchFailureReason.ACCESS_DENIED, PLATFORM_ACCESS_DENIED
            )

        if not response.ok:
            message = self._safe_json(response).get("message") or GITHUB_GENERIC_FETCH_FAILED
            return PlatformFetchResult.failure(FetchFailureReason.PLATFORM_ERROR, str(message))

        try:
            data = response.json()
        except ValueError:
            logger.warning("GitHub returned an unreadable body for %s/%s", owner, repo)
            return PlatformFetchResult.failure(
                FetchFailureReason.NETWORK_ERROR, PLATFORM_NETWORK_ERROR
            )

        return PlatformFetchResult.success(data=data, is_private=bool(data.get("private", False)))

    def to_metadata(
        self, data: Dict[str, Any], extra: Optional[Dict[str, int]] = None
    ) -> RepositoryMetadata:
        return RepositoryMetadata(
            stars=data.get("stargazers_count"),
            forks=data.get("forks_count"),
            language=data.get("language"),
            description=data.get("description"),
            last_commit=data.get("pushed_at"),
            default_branch=data.get("default_branch"),
        )

    def authenticate(self, access_token: str, per_page: int = 30) -> AuthenticatedGitHubManager:
        client_kwargs: Dict[str, Any] = {
            "auth": Auth.Token(access_token),
            "base_url": self.base_url,
            "per_page": self.validate_per_page(per_page),
            "user_agent": self.user_agent,
        }
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout

        return AuthenticatedGitHubManager(
            base_url=self.base_url, git_client=Github(**client_kwargs)
        )

    def verify_token(self, access_token: str) -> Dict[str, Any]:
        return self.authenticate(access_token).get_user()

    def list_user_repositories(
        self, access_token: str, page: int = 1, per_page: int = 20
    ) -> Dict[str, Any]:
        per_page = self.validate_per_page(per_page)
        page = self.validate_page(page)
        return self.authenticate(access_token, per_page=per_page).get_user_repositories(
            page=page, per_page=per_page
        )

    @staticmethod
    def validate_per_page(per_page):
        return per_page if 1 <= per_page <= 100 else 30

    @staticmethod
    def validate_page(page):
        return page if page >= 1 else 1

    @staticmethod
    def extract_repo_info(repo) -> Dict[str, Any]:
        return {
            "id": repo.id,
            "name": repo.name,
            "full_name": repo.full_name,
            "description": repo.description,
            "private": repo.private,
            "html_url": repo.html_url,
            "default_branch": repo.default_branch,
            "language": repo.language,
            "stargazers_count": repo.stargazers_count,
            "forks_count": repo.forks_count,
            "pushed_at": repo.pushed_at.isoformat() if repo.pushed_at else None,
            "owner": repo.owner.login if repo.owner else None,
        }

    @staticmethod
    def get_pagination_info(total_count, page, per_page):
        total_pages = (total_count + per_page - 1) // per_page
        has_next_page = page < total_pages
        has_prev_page = page > 1

        return {
            "current_page": page,
            "per_page": per_page,
            "total_count": total_count,
            "total_pages": total_pages,
            "next_page": page + 1 if has_next_page else None,
            "prev_page": page - 1 if has_prev_page else None,
        }
