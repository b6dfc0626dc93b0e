"""Integration tests for the REST API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from record_store.adapters.inbound import create_app
from record_store.application import DatabaseManager

USERS = {
    "name": "users",
    "fields": {"id": "string", "age": "integer", "active": "boolean"},
    "identity_field": "id",
}


@pytest.fixture
def client(manager: DatabaseManager) -> TestClient:
    return TestClient(create_app(manager))


@pytest.fixture
def shop_client(client: TestClient) -> TestClient:
    assert client.post("/databases", json={"name": "shop"}).status_code == 201
    assert client.post("/databases/shop/collections", json=USERS).status_code == 201
    return client


@pytest.mark.integration
class TestRestAPI:
    """End-to-end requests against a file-backed manager."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_listings(self, shop_client: TestClient) -> None:
        assert shop_client.get("/databases").json() == {"names": ["shop"]}
        assert shop_client.get("/databases/shop/collections").json() == {"names": ["users"]}

    def test_write_read_update(self, shop_client: TestClient) -> None:
        base = "/databases/shop/collections/users/records"

        response = shop_client.post(base, json={"values": ["u1", "30", "true"]})
        assert response.status_code == 201
        assert response.json() == {"identity": "u1"}

        assert shop_client.get(f"{base}/u1").json() == {"values": ["u1", "30", "true"]}

        response = shop_client.put(f"{base}/u1", json={"values": ["u1", "31", "false"]})
        assert response.status_code == 200
        assert response.json() == {"values": ["u1", "31", "false"]}

        assert shop_client.get(base).json() == {"records": [["u1", "31", "false"]]}

    def test_read_missing_is_404(self, shop_client: TestClient) -> None:
        response = shop_client.get("/databases/shop/collections/users/records/missing")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "NotFoundError"
        assert body["reason"] == "record"
        assert "missing" in body["detail"]

    def test_rejected_record(self, shop_client: TestClient) -> None:
        response = shop_client.post(
            "/databases/shop/collections/users/records",
            json={"values": ["u2", "abc", "true"]},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "DataError"
        assert body["reason"] == "type mismatch"
        assert body["field"] == "age"

    def test_overlong_integer_is_422(self, shop_client: TestClient) -> None:
        response = shop_client.post(
            "/databases/shop/collections/users/records",
            json={"values": ["u2", "9" * 5000, "true"]},
        )

        assert response.status_code == 422
        assert response.json()["reason"] == "type mismatch"
        assert response.json()["field"] == "age"

    def test_duplicate_database_is_409(self, shop_client: TestClient) -> None:
        response = shop_client.post("/databases", json={"name": "shop"})
        assert response.status_code == 409
        assert response.json()["reason"] == "database exists"

    def test_unknown_database_is_404(self, client: TestClient) -> None:
        response = client.get("/databases/nope/collections")
        assert response.status_code == 404
        assert response.json()["reason"] == "database"

    def test_bad_schema_is_422(self, shop_client: TestClient) -> None:
        response = shop_client.post(
            "/databases/shop/collections",
            json={"name": "bad", "fields": {"id": "string"}, "identity_field": "id"},
        )
        assert response.status_code == 422
        assert response.json()["reason"] == "too few fields"

    def test_stats(self, shop_client: TestClient) -> None:
        shop_client.post(
            "/databases/shop/collections/users/records",
            json={"values": ["u1", "30", "true"]},
        )

        body = shop_client.get("/stats").json()

        assert body["databases"] == 1
        assert body["records"] == 1
        assert body["per_database"] == {"shop": {"users": 1}}
