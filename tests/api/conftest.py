"""Shared fixtures for API tests."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from storefront.api.dependencies import get_file_storage
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import get_session
from storefront.main import app

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def client(session_factory, file_storage):
    """Create test client bound to the per-test database."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_file_storage] = lambda: file_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


def _headers(user_id: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {settings.auth_api_key}",
        "X-User-ID": user_id,
    }


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get authentication headers for the store owner."""
    return _headers(USER_ID)


@pytest.fixture
def other_headers() -> dict[str, str]:
    """Get authentication headers for a user who owns nothing."""
    return _headers(OTHER_USER_ID)


@pytest.fixture
def store_id(client, auth_headers) -> str:
    """Create a store owned by the default user."""
    response = client.post("/stores", json={"name": "Test Store"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def make_category(client, auth_headers, store_id) -> Callable[..., dict[str, Any]]:
    """Factory creating categories through the API."""

    def make(name: str, parent_id: str | None = None, **extra: Any) -> dict[str, Any]:
        payload = {
            "name": name,
            "description": f"All about {name} and more",
            "store_id": store_id,
            "is_subcategory": parent_id is not None,
            "parent_category_id": parent_id,
            **extra,
        }
        response = client.post("/categories", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return make


@pytest.fixture
def make_product(client, auth_headers) -> Callable[..., dict[str, Any]]:
    """Factory creating products through the API."""
    counter = {"n": 0}

    def make(name: str = "Product", base_price: int = 1000, **extra: Any) -> dict[str, Any]:
        counter["n"] += 1
        payload = {
            "name": name,
            "sku": extra.pop("sku", f"SKU-{counter['n']:04d}"),
            "base_price": base_price,
            **extra,
        }
        response = client.post("/products", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return make


@pytest.fixture
def promotion_dates() -> dict[str, str]:
    """A window far enough out to stay SCHEDULED during the test."""
    return {
        "start_date": "2099-01-01T00:00:00+00:00",
        "end_date": "2099-02-01T00:00:00+00:00",
    }
