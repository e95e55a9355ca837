import pytest
from starlette.testclient import TestClient

from app.main import app
from app.utils.auth import get_authenticated_user, UserClaims


@pytest.fixture
def mock_user() -> UserClaims:
    return UserClaims(sub="user_abc123", email="user@example.com", name="Test User")


@pytest.fixture
def mock_authenticated_user(mock_user):
    """
    Overrides the authenticated user dependency globally during tests.
    """

    def _override():
        return mock_user

    app.dependency_overrides[get_authenticated_user] = _override
    yield mock_user
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # no context manager: the lifespan would open a real database connection
    return TestClient(app)


@pytest.fixture
def client_permissive():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    yield
    app.dependency_overrides.clear()
