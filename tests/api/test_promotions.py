"""Tests for collection, discount and sale endpoints."""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient


def _iso(value: datetime) -> str:
    return value.isoformat()


class TestDiscounts:
    """Tests for /discounts."""

    def test_create_scheduled(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        response = client.post(
            "/discounts",
            json={
                "name": "Launch",
                "status": "SCHEDULED",
                "store_id": store_id,
                "code": "LAUNCH-10",
                "type": "PERCENTAGE",
                "value": 10,
                **promotion_dates,
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "SCHEDULED"
        assert data["code"] == "LAUNCH-10"
        assert data["start_date"].startswith("2099-01-01")

    def test_percentage_over_hundred_rejected(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        """Nothing is written when validation fails."""
        response = client.post(
            "/discounts",
            json={
                "name": "Too generous",
                "store_id": store_id,
                "type": "PERCENTAGE",
                "value": 150,
                **promotion_dates,
            },
            headers=auth_headers,
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert [d["field"] for d in data["details"]] == ["value"]
        assert client.get("/discounts", params={"store_id": store_id}).json() == []

    def test_expired_collapses_window(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        before = datetime.now(timezone.utc)
        response = client.post(
            "/discounts",
            json={
                "name": "Old news",
                "status": "EXPIRED",
                "store_id": store_id,
                "type": "FIXED",
                "value": 500,
                **promotion_dates,
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["start_date"] == data["end_date"]
        end = datetime.fromisoformat(data["end_date"])
        assert before <= end <= datetime.now(timezone.utc)

    def test_filter_by_status(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        for status in ("INACTIVE", "SCHEDULED"):
            client.post(
                "/discounts",
                json={
                    "name": status.title(),
                    "status": status,
                    "store_id": store_id,
                    "type": "PERCENTAGE",
                    "value": 5,
                    **promotion_dates,
                },
                headers=auth_headers,
            )

        response = client.get("/discounts", params={"status": "SCHEDULED"})

        assert response.status_code == 200
        assert [d["name"] for d in response.json()] == ["Scheduled"]

    def test_other_users_store(
        self, client: TestClient, other_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        response = client.post(
            "/discounts",
            json={
                "name": "Sneaky",
                "store_id": store_id,
                "type": "PERCENTAGE",
                "value": 5,
                **promotion_dates,
            },
            headers=other_headers,
        )
        assert response.status_code == 403


class TestSales:
    """Tests for /sales."""

    def _create(self, client: TestClient, headers: dict, store_id: str, dates: dict) -> dict:
        response = client.post(
            "/sales",
            json={
                "name": "Summer",
                "status": "SCHEDULED",
                "store_id": store_id,
                "discount_type": "PERCENTAGE",
                "discount_value": 25,
                **dates,
            },
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    def test_fixed_sale_limit(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        response = client.post(
            "/sales",
            json={
                "name": "Huge",
                "store_id": store_id,
                "discount_type": "FIXED",
                "discount_value": 10_001,
                **promotion_dates,
            },
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_activate_pulls_start_to_now(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        sale = self._create(client, auth_headers, store_id, promotion_dates)

        response = client.patch(
            f"/sales/{sale['id']}", json={"status": "ACTIVE"}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ACTIVE"
        start = datetime.fromisoformat(data["start_date"])
        assert start <= datetime.now(timezone.utc)
        assert data["end_date"].startswith("2099-02-01")

    def test_delete(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        sale = self._create(client, auth_headers, store_id, promotion_dates)

        response = client.delete(f"/sales/{sale['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert client.get(f"/sales/{sale['id']}").json()["error_code"] == "SALE_NOT_FOUND"


class TestCollections:
    """Tests for /collections."""

    def test_create_and_append_images(
        self, client: TestClient, auth_headers: dict, store_id: str, promotion_dates: dict
    ) -> None:
        created = client.post(
            "/collections",
            json={
                "name": "Editors' picks",
                "store_id": store_id,
                "images": [{"url": "https://cdn/1.png", "key": "1.png"}],
                **promotion_dates,
            },
            headers=auth_headers,
        ).json()

        response = client.patch(
            f"/collections/{created['id']}",
            json={"images": [{"url": "https://cdn/2.png", "key": "2.png"}]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert {i["key"] for i in response.json()["images"]} == {"1.png", "2.png"}

    def test_end_before_start(
        self, client: TestClient, auth_headers: dict, store_id: str
    ) -> None:
        response = client.post(
            "/collections",
            json={
                "name": "Backwards",
                "store_id": store_id,
                "start_date": "2099-02-01T00:00:00+00:00",
                "end_date": "2099-01-01T00:00:00+00:00",
            },
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "end_date"


class TestStatusPreview:
    """Tests for POST /promotions/status-preview."""

    def test_scheduled_in_past(self, client: TestClient) -> None:
        now = datetime.now(timezone.utc)
        response = client.post(
            "/promotions/status-preview",
            json={
                "kind": "DISCOUNT",
                "status": "SCHEDULED",
                "start_date": _iso(now - timedelta(days=3)),
                "end_date": _iso(now - timedelta(days=1)),
            },
        )

        assert response.status_code == 200
        data = response.json()
        start = datetime.fromisoformat(data["start_date"])
        end = datetime.fromisoformat(data["end_date"])
        assert end - start == timedelta(days=29)
        assert data["start_date_bounds"]["earliest_inclusive"] is False
        assert data["start_date_bounds"]["latest"] is None

    def test_inactive_unchanged(self, client: TestClient, promotion_dates: dict) -> None:
        response = client.post(
            "/promotions/status-preview",
            json={"kind": "SALE", "status": "INACTIVE", **promotion_dates},
        )

        data = response.json()
        assert data["start_date"].startswith("2099-01-01")
        assert data["start_date_bounds"]["latest"].startswith("2100-01-01")
