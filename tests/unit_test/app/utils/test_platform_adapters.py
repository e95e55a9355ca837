from unittest.mock import patch

import pytest

from app.config import Platform
from app.exceptions.custom_exceptions import BadRequest
from app.utils.github_manager import GitHubManager
from app.utils.gitlab_manager import GitLabManager
from app.utils.platform_adapters import (
    PlatformAdapterRegistry,
    get_platform_adapter_registry,
    retrieve_adapter_or_die,
)
from tests.test_doubles.utils.platform.fake_http import FakeSession


class TestPlatformAdapterRegistry:
    def test_default_registry_covers_github_and_gitlab(self):
        registry = PlatformAdapterRegistry.default(session=FakeSession())

        assert isinstance(registry.get(Platform.GITHUB), GitHubManager)
        assert isinstance(registry.get(Platform.GITLAB), GitLabManager)

    @pytest.mark.parametrize("platform", [Platform.REPLIT, Platform.LOVABLE])
    def test_no_adapter_for_replit_and_lovable(self, platform):
        registry = PlatformAdapterRegistry.default(session=FakeSession())
        assert registry.get(platform) is None

    def test_lookup_by_plain_string(self):
        registry = PlatformAdapterRegistry.default(session=FakeSession())
        assert registry.get("github") is registry.get(Platform.GITHUB)

    def test_adapters_share_the_session(self):
        session = FakeSession()
        registry = PlatformAdapterRegistry.default(session=session)

        registry.get(Platform.GITHUB).fetch_repo("a", "b")
        registry.get(Platform.GITLAB).fetch_repo("a", "b")

        assert len(session.received_calls) == 2


class TestRetrieveAdapterOrDie:
    def test_returns_adapter(self):
        registry = PlatformAdapterRegistry.default(session=FakeSession())
        adapter = retrieve_adapter_or_die(registry, Platform.GITLAB, "unsupported")
        assert adapter.platform == Platform.GITLAB

    def test_missing_adapter_is_bad_request(self):
        with pytest.raises(BadRequest) as exc:
            retrieve_adapter_or_die(PlatformAdapterRegistry(), Platform.REPLIT, "Not supported for Replit")

        assert exc.value.user_message == "Not supported for Replit"
        assert exc.value.http_status == 400


class TestGetPlatformAdapterRegistry:
    @patch("app.utils.platform_adapters.requests.Session")
    def test_session_is_closed_after_the_request(self, mock_session_cls):
        session = mock_session_cls.return_value
        dependency = get_platform_adapter_registry()

        registry = next(dependency)
        assert registry.get(Platform.GITHUB)._session is session
        session.close.assert_not_called()

        dependency.close()

        session.close.assert_called_once()
