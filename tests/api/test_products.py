"""Tests for product and variant endpoints."""

from fastapi.testclient import TestClient

from storefront.catalog.filters import MAX_PRICE
from storefront.infrastructure.file_storage import FileStorageError


def _variant(name: str, **extra) -> dict:
    return {"name": name, "price": 2500, "stock": 3, **extra}


class TestCreateProduct:
    """Tests for POST /products."""

    def test_create_with_variants_and_images(self, make_product, make_category) -> None:
        category = make_category("Apparel")
        product = make_product(
            "Linen shirt",
            2500,
            category_id=category["id"],
            images=[{"url": "https://cdn/p.png", "key": "p.png"}],
            variants=[
                _variant(
                    "White / M",
                    attributes=[
                        {"name": "Color", "value": "White"},
                        {"name": "Size", "value": "M"},
                    ],
                    images=[{"url": "https://cdn/v.png", "key": "v.png"}],
                )
            ],
        )

        assert product["category_name"] == "Apparel"
        assert product["is_new"] is True
        assert [i["key"] for i in product["images"]] == ["p.png"]
        variant = product["variants"][0]
        assert variant["value"] == "White, M"
        assert variant["attributes"] == [
            {"name": "Color", "value": "White"},
            {"name": "Size", "value": "M"},
        ]
        assert variant["product_id"] == product["id"]

    def test_duplicate_sku(self, client: TestClient, auth_headers: dict, make_product) -> None:
        make_product(sku="TEE-001")

        response = client.post(
            "/products",
            json={"name": "Another tee", "sku": "TEE-001", "base_price": 100},
            headers=auth_headers,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "DUPLICATE_SKU"
        assert "TEE-001" in data["message"]

    def test_negative_price(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/products",
            json={"name": "Tee", "sku": "TEE-1", "base_price": -1},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_price_above_max(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/products",
            json={"name": "Tee", "sku": "TEE-1", "base_price": MAX_PRICE + 1},
            headers=auth_headers,
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "base_price"
        assert client.get("/products").json() == []

    def test_variant_price_above_max(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/products",
            json={
                "name": "Tee",
                "sku": "TEE-1",
                "base_price": 100,
                "variants": [{"name": "Large", "price": MAX_PRICE + 1}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "variants.0.price"

    def test_unknown_category(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/products",
            json={"name": "Tee", "sku": "TEE-1", "base_price": 100, "category_id": "missing"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"

    def test_requires_session(self, client: TestClient) -> None:
        response = client.post("/products", json={"name": "Tee", "sku": "T", "base_price": 1})
        assert response.status_code == 401


class TestUpdateProduct:
    """Tests for PATCH /products/{id}."""

    def test_only_given_fields_change(
        self, client: TestClient, auth_headers: dict, make_product
    ) -> None:
        product = make_product("Tee", 1000, description="Plain tee")

        response = client.patch(
            f"/products/{product['id']}", json={"base_price": 800}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["base_price"] == 800
        assert data["description"] == "Plain tee"

    def test_empty_string_clears_category(
        self, client: TestClient, auth_headers: dict, make_product, make_category
    ) -> None:
        category = make_category("Apparel")
        product = make_product(category_id=category["id"])

        response = client.patch(
            f"/products/{product['id']}", json={"category_id": ""}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["category_id"] is None
        assert response.json()["category_name"] is None

    def test_variants_and_images_appended(
        self, client: TestClient, auth_headers: dict, make_product
    ) -> None:
        product = make_product(variants=[_variant("Small")])

        response = client.patch(
            f"/products/{product['id']}",
            json={
                "variants": [_variant("Large")],
                "images": [{"url": "https://cdn/x.png", "key": "x.png"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert {v["name"] for v in data["variants"]} == {"Small", "Large"}
        assert len(data["images"]) == 1

    def test_sku_taken(self, client: TestClient, auth_headers: dict, make_product) -> None:
        make_product(sku="TAKEN")
        product = make_product(sku="FREE")

        response = client.patch(
            f"/products/{product['id']}", json={"sku": "TAKEN"}, headers=auth_headers
        )
        assert response.status_code == 400


class TestDeleteProduct:
    """Tests for DELETE /products/{id}."""

    def test_delete_forwards_all_image_keys(
        self, client: TestClient, auth_headers: dict, make_product, file_storage
    ) -> None:
        product = make_product(
            images=[{"url": "https://cdn/a.png", "key": "a.png"}],
            variants=[_variant("One", images=[{"url": "https://cdn/b.png", "key": "b.png"}])],
        )

        response = client.delete(f"/products/{product['id']}", headers=auth_headers)

        assert response.status_code == 200
        file_storage.delete_files.assert_awaited_once_with(["a.png", "b.png"])
        assert client.get(f"/products/{product['id']}").status_code == 404

    def test_storage_failure_keeps_product(
        self, client: TestClient, auth_headers: dict, make_product, file_storage
    ) -> None:
        product = make_product(images=[{"url": "https://cdn/a.png", "key": "a.png"}])
        file_storage.delete_files.side_effect = FileStorageError("boom", 500)

        response = client.delete(f"/products/{product['id']}", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error_code"] == "FILE_STORAGE_ERROR"
        assert client.get(f"/products/{product['id']}").status_code == 200

    def test_delete_missing(self, client: TestClient, auth_headers: dict) -> None:
        response = client.delete("/products/missing", headers=auth_headers)
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestVariants:
    """Tests for the variant endpoints."""

    def test_add_variant(self, client: TestClient, auth_headers: dict, make_product) -> None:
        product = make_product()

        response = client.post(
            "/variants",
            json={
                "product_id": product["id"],
                "name": "Blue",
                "attributes": [{"name": "Color", "value": "Blue"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["value"] == "Blue"
        product = client.get(f"/products/{product['id']}").json()
        assert [v["name"] for v in product["variants"]] == ["Blue"]

    def test_add_variant_to_missing_product(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/variants", json={"product_id": "missing", "name": "Blue"}, headers=auth_headers
        )
        assert response.status_code == 404

    def test_update_and_delete_variant(
        self, client: TestClient, auth_headers: dict, make_product
    ) -> None:
        product = make_product(variants=[_variant("Red")])
        variant_id = product["variants"][0]["id"]

        response = client.patch(
            f"/variants/{variant_id}", json={"stock": 0}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["stock"] == 0
        assert response.json()["name"] == "Red"

        response = client.delete(f"/variants/{variant_id}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get(f"/products/{product['id']}").json()["variants"] == []
