"""Tests for main API endpoints."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from vocabcoach.config import get_settings
from vocabcoach.main import run


def test_root_endpoint(client: TestClient) -> None:
    """Test root endpoint returns welcome message."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to VocabCoach API"}


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_api_root_endpoint(client: TestClient) -> None:
    """Test API v1 root endpoint."""
    response = client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "VocabCoach API v1"
    assert data["version"] == "0.1.0"
    assert data["docs"] == "/api/v1/docs"


def test_run_serves_app_with_configured_address() -> None:
    with patch("vocabcoach.main.uvicorn.run") as uvicorn_run:
        run()

    settings = get_settings()
    uvicorn_run.assert_called_once_with(
        "vocabcoach.main:app", host=settings.HOST, port=settings.PORT
    )
