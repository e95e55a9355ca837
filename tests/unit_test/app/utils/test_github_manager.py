import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests
from github.GithubException import (
    BadCredentialsException,
    GithubException,
    RateLimitExceededException,
)

from app.exceptions.custom_exceptions import PlatformFetchFailed
from app.exceptions.exception_constants import (
    PLATFORM_ACCESS_DENIED,
    PLATFORM_NETWORK_ERROR,
    PLATFORM_NOT_FOUND_OR_PRIVATE,
)
from app.schemas.platform import FetchFailureReason
from app.utils.github_manager import GitHubManager
from tests.test_doubles.utils.platform.fake_http import FakeResponse, FakeSession

BASE_URL = "https://api.github.com"
REPO_URL = f"{BASE_URL}/repos/acme/widgets"

REPO_PAYLOAD = {
    "name": "widgets",
    "private": False,
    "stargazers_count": 42,
    "forks_count": 7,
    "language": "Python",
    "description": "Widgets for everyone",
    "pushed_at": "2026-10-01T10:00:00Z",
    "default_branch": "main",
}


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def manager(session):
    return GitHubManager(base_url=BASE_URL, session=session, user_agent="RepoHubTests/1.0")


class TestFetchRepo:
    def test_success_returns_payload_and_visibility(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(200, REPO_PAYLOAD))

        result = manager.fetch_repo("acme", "widgets")

        assert result.ok
        assert result.data == REPO_PAYLOAD
        assert result.is_private is False

    def test_private_repository_visible_with_token(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(200, {**REPO_PAYLOAD, "private": True}))

        result = manager.fetch_repo("acme", "widgets", token="ghp_1234567890")

        assert result.is_private is True

    def test_sends_expected_headers(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(200, REPO_PAYLOAD))

        manager.fetch_repo("acme", "widgets", token="ghp_1234567890")

        url, kwargs = session.received_calls[0]
        assert url == REPO_URL
        assert kwargs["headers"]["Accept"] == "application/vnd.github.v3+json"
        assert kwargs["headers"]["User-Agent"] == "RepoHubTests/1.0"
        assert kwargs["headers"]["Authorization"] == "Bearer ghp_1234567890"

    def test_no_authorization_header_without_token(self, manager, session):
        manager.fetch_repo("acme", "widgets")

        _, kwargs = session.received_calls[0]
        assert "Authorization" not in kwargs["headers"]

    def test_not_found_is_reported_as_possibly_private(self, manager):
        result = manager.fetch_repo("acme", "widgets")

        assert not result.ok
        assert result.reason == FetchFailureReason.NOT_FOUND_OR_PRIVATE
        assert result.error == PLATFORM_NOT_FOUND_OR_PRIVATE
        assert result.is_private is True

    def test_unauthorized_is_invalid_token(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(401, {"message": "Bad credentials"}))

        result = manager.fetch_repo("acme", "widgets", token="expired-token")

        assert result.reason == FetchFailureReason.INVALID_TOKEN
        assert "GitHub" in result.error

    def test_forbidden_with_rate_limit_message(self, manager, session):
        session.set_response(
            REPO_URL,
            FakeResponse(403, {"message": "API rate limit exceeded for 1.2.3.4."}),
        )

        result = manager.fetch_repo("acme", "widgets")

        assert result.reason == FetchFailureReason.RATE_LIMITED

    def test_forbidden_without_rate_limit_is_access_denied(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(403, {"message": "Resource protected"}))

        result = manager.fetch_repo("acme", "widgets")

        assert result.reason == FetchFailureReason.ACCESS_DENIED
        assert result.error == PLATFORM_ACCESS_DENIED

    def test_other_status_uses_platform_message(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(451, {"message": "Unavailable for legal reasons"}))

        result = manager.fetch_repo("acme", "widgets")

        assert result.reason == FetchFailureReason.PLATFORM_ERROR
        assert result.error == "Unavailable for legal reasons"

    def test_transport_error_is_network_error(self, manager, session):
        session.set_exception(REPO_URL, requests.exceptions.ConnectionError("boom"))

        result = manager.fetch_repo("acme", "widgets")

        assert result.reason == FetchFailureReason.NETWORK_ERROR
        assert result.error == PLATFORM_NETWORK_ERROR

    def test_unreadable_body_is_network_error(self, manager, session):
        session.set_response(REPO_URL, FakeResponse(200, invalid_json=True))

        result = manager.fetch_repo("acme", "widgets")

        assert result.reason == FetchFailureReason.NETWORK_ERROR


class TestToMetadata:
    def test_maps_github_fields(self, manager):
        metadata = manager.to_metadata(REPO_PAYLOAD)

        assert metadata.model_dump() == {
            "stars": 42,
            "forks": 7,
            "language": "Python",
            "description": "Widgets for everyone",
            "last_commit": "2026-10-01T10:00:00Z",
            "default_branch": "main",
        }

    def test_missing_fields_are_none(self, manager):
        metadata = manager.to_metadata({})
        assert metadata.model_dump(exclude_none=True) == {}


class TestAccountCalls:
    def test_verify_token_returns_user(self, manager):
        git_user = MagicMock(
            login="octocat",
            id=1,
            email="octo@example.com",
            avatar_url="https://avatars/1",
            html_url="https://github.com/octocat",
        )
        git_user.name = "The Octocat"

        with patch("app.utils.github_manager.Github") as github_cls:
            github_cls.return_value.get_user.return_value = git_user
            account = manager.verify_token("ghp_1234567890")

        assert account["login"] == "octocat"
        assert account["name"] == "The Octocat"
        assert github_cls.call_args.kwargs["base_url"] == BASE_URL

    @pytest.mark.parametrize(
        "error, reason",
        [
            (BadCredentialsException(401, {"message": "Bad credentials"}), "INVALID_TOKEN"),
            (RateLimitExceededException(403, {"message": "rate limit"}), "RATE_LIMITED"),
            (GithubException(403, {"message": "Forbidden"}), "ACCESS_DENIED"),
            (GithubException(500, {"message": "Server Error"}), "PLATFORM_ERROR"),
            (requests.exceptions.Timeout("slow"), "NETWORK_ERROR"),
        ],
    )
    def test_verify_token_failures_are_classified(self, manager, error, reason):
        with patch("app.utils.github_manager.Github") as github_cls:
            github_cls.return_value.get_user.side_effect = error
            with pytest.raises(PlatformFetchFailed) as exc:
                manager.verify_token("ghp_1234567890")

        assert exc.value.error_type == reason

    def test_list_user_repositories_pages(self, manager):
        owner = MagicMock(login="acme")
        repo = MagicMock(
            id=10,
            full_name="acme/widgets",
            description=None,
            private=False,
            html_url="https://github.com/acme/widgets",
            default_branch="main",
            language="Python",
            stargazers_count=3,
            forks_count=1,
            pushed_at=datetime.datetime(2026, 10, 1, tzinfo=datetime.timezone.utc),
            owner=owner,
        )
        repo.name = "widgets"
        paginated = MagicMock(totalCount=45)
        paginated.get_page.return_value = [repo]

        with patch("app.utils.github_manager.Github") as github_cls:
            github_cls.return_value.get_user.return_value.get_repos.return_value = paginated
            result = manager.list_user_repositories("ghp_1234567890", page=2, per_page=20)

        paginated.get_page.assert_called_once_with(1)
        assert result["repositories"][0]["full_name"] == "acme/widgets"
        assert result["repositories"][0]["owner"] == "acme"
        assert result["pagination_info"] == {
            "current_page": 2,
            "per_page": 20,
            "total_count": 45,
            "total_pages": 3,
            "next_page": 3,
            "prev_page": 1,
        }


class TestHelpers:
    @pytest.mark.parametrize("per_page, expected", [(0, 30), (1, 1), (100, 100), (101, 30)])
    def test_validate_per_page(self, per_page, expected):
        assert GitHubManager.validate_per_page(per_page) == expected

    @pytest.mark.parametrize("page, expected", [(-1, 1), (0, 1), (1, 1), (5, 5)])
    def test_validate_page(self, page, expected):
        assert GitHubManager.validate_page(page) == expected

    def test_pagination_on_last_page(self):
        info = GitHubManager.get_pagination_info(total_count=40, page=2, per_page=20)
        assert info["total_pages"] == 2
        assert info["next_page"] is None
        assert info["prev_page"] == 1
