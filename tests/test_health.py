"""
Tests for health check endpoints.
"""

from fastapi.testclient import TestClient

from blog_api.core.config import settings
from blog_api.db.store import JsonFileStore


def test_health_check(client: TestClient) -> None:
    """Test basic health check."""
    response = client.get(f"{settings.API_PREFIX}/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == settings.PROJECT_NAME
    assert data["version"] == settings.VERSION


def test_storage_health_check(client: TestClient, store: JsonFileStore) -> None:
    """Test storage health check."""
    response = client.get(f"{settings.API_PREFIX}/health/storage")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["storage"] == "ok"
    assert data["path"] == str(store.base_path)
