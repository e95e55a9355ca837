import pytest
from fastapi import status

from app.exceptions.exception_constants import PROFILE_NOT_FOUND
from app.main import app
from app.services.profile_service import ProfileService
from app.utils import constants
from tests.test_doubles.repositories.store_doubles import FakeProfileStore, make_fake_profile


class TestProfileRoute:
    endpoint = "/api/v1/profile"

    @pytest.fixture(autouse=True)
    def setup(self, mock_authenticated_user):
        self.user_id = mock_authenticated_user.sub
        self.profile_store = FakeProfileStore()
        app.dependency_overrides[ProfileService.with_dependency] = lambda: ProfileService(
            self.profile_store
        )

    def test_get_profile(self, client):
        self.profile_store.set_fake_data(
            [make_fake_profile(user_id=self.user_id, email="user@example.com")]
        )

        response = client.get(self.endpoint)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == constants.RESOURCE_RETRIEVED_SUCCESSFULLY
        assert response.json()["data"]["email"] == "user@example.com"

    def test_profile_not_synced_yet(self, client):
        response = client.get(self.endpoint)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == PROFILE_NOT_FOUND


class TestOAuthRoute:
    @pytest.mark.parametrize(
        "platform, display_name",
        [("github", "GitHub"), ("gitlab", "GitLab"), ("replit", "Replit"), ("lovable", "Lovable")],
    )
    def test_oauth_is_coming_soon(self, client, mock_authenticated_user, platform, display_name):
        response = client.post(f"/api/v1/oauth/{platform}")

        assert response.status_code == status.HTTP_501_NOT_IMPLEMENTED
        assert response.json()["message"] == f"{display_name} OAuth coming soon!"

    def test_oauth_unknown_platform(self, client, mock_authenticated_user):
        response = client.post("/api/v1/oauth/bitbucket")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_oauth_requires_authentication(self, client):
        response = client.post("/api/v1/oauth/github")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
