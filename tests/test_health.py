"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from storefront.infrastructure.database import get_session
from storefront.main import app


def test_health_check() -> None:
    """Test health endpoint returns healthy status."""
    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront-api"
    assert "version" in data


def test_readiness_check(session_factory) -> None:
    """Test readiness endpoint queries the database."""

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    try:
        response = TestClient(app).get("/ready")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["status"] == "ready"
