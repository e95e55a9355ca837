from fastapi.testclient import TestClient

from app.config import settings
from app.main import app
from app.middlewares.trace_id_middleware import TRACE_HEADER_NAME

client = TestClient(app)


def test_root_endpoint():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "message": "RepoHub Dashboard API is running!",
        "version": settings.VERSION,
    }


def test_health_check_endpoint():
    response = client.get("/health_check")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_trace_id_is_generated():
    response = client.get("/health_check")
    assert response.headers[TRACE_HEADER_NAME]


def test_trace_id_is_propagated():
    response = client.get("/health_check", headers={TRACE_HEADER_NAME: "trace-123"})
    assert response.headers[TRACE_HEADER_NAME] == "trace-123"
