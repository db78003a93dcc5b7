"""Tests for store endpoints."""

from fastapi.testclient import TestClient


class TestCreateStore:
    """Tests for POST /stores."""

    def test_create_store(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/stores",
            json={
                "name": "Corner Shop",
                "description": "Everything on the corner",
                "images": [{"url": "https://cdn/logo.png", "key": "logo.png"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Corner Shop"
        assert data["user_id"] == "user-1"
        assert [i["key"] for i in data["images"]] == ["logo.png"]

    def test_create_requires_session(self, client: TestClient) -> None:
        """Without the shared key and user header the request is rejected."""
        response = client.post("/stores", json={"name": "Corner Shop"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_user_header_alone_is_not_a_session(self, client: TestClient) -> None:
        response = client.post(
            "/stores", json={"name": "Corner Shop"}, headers={"X-User-ID": "user-1"}
        )
        assert response.status_code == 401

    def test_blank_name(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post("/stores", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "name"


class TestManageStore:
    """Tests for listing, updating and deleting stores."""

    def test_list_only_own_stores(
        self, client: TestClient, auth_headers: dict, other_headers: dict, store_id: str
    ) -> None:
        client.post("/stores", json={"name": "Elsewhere"}, headers=other_headers)

        response = client.get("/stores", headers=auth_headers)

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [store_id]

    def test_update_appends_images(
        self, client: TestClient, auth_headers: dict, store_id: str
    ) -> None:
        response = client.patch(
            f"/stores/{store_id}",
            json={
                "description": "Now with a banner",
                "images": [{"url": "https://cdn/a.png", "key": "a.png"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Test Store"
        assert data["description"] == "Now with a banner"
        assert len(data["images"]) == 1

    def test_update_by_other_user(
        self, client: TestClient, other_headers: dict, store_id: str
    ) -> None:
        response = client.patch(
            f"/stores/{store_id}", json={"name": "Mine now"}, headers=other_headers
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    def test_update_missing_store(self, client: TestClient, auth_headers: dict) -> None:
        response = client.patch("/stores/missing", json={"name": "X"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "STORE_NOT_FOUND"

    def test_delete_forwards_image_keys(
        self, client: TestClient, auth_headers: dict, file_storage
    ) -> None:
        created = client.post(
            "/stores",
            json={
                "name": "Short lived",
                "images": [{"url": "https://cdn/s.png", "key": "s.png"}],
            },
            headers=auth_headers,
        ).json()

        response = client.delete(f"/stores/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "deleted": True}
        file_storage.delete_files.assert_awaited_once_with(["s.png"])
