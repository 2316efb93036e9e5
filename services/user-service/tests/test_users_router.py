"""
Tests for HTTP endpoints.

Covers:
- /api/v1/users list, get, save
- Health, root and metrics endpoints
- Global exception handler
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from app.dependencies import get_user_repository
from app.main import app
from app.repositories.user_repository import IUserRepository


class TestUsersEndpoints:
    """Test user endpoints backed by the SQLite session."""

    def test_list_empty(self, client):
        response = client.get("/api/v1/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_user(self, client):
        response = client.post(
            "/api/v1/users", json={"name": "Alice", "email": "alice@example.com"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] is not None
        assert data["name"] == "Alice"
        assert data["email"] == "alice@example.com"

    def test_create_then_get(self, client):
        created = client.post("/api/v1/users", json={"name": "Bob"}).json()

        response = client.get(f"/api/v1/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_save_with_id(self, client):
        response = client.post("/api/v1/users", json={"id": 1, "name": "Alice"})
        assert response.status_code == 201

        fetched = client.get("/api/v1/users/1").json()
        assert fetched == {"id": 1, "name": "Alice", "email": None}

    def test_update_existing(self, client):
        created = client.post("/api/v1/users", json={"name": "Alice"}).json()
        client.post("/api/v1/users", json={"id": created["id"], "name": "Alicia"})

        users = client.get("/api/v1/users").json()
        assert users == [{"id": created["id"], "name": "Alicia", "email": None}]

    def test_list_users(self, client):
        for name in ("Alice", "Bob", "Carol"):
            client.post("/api/v1/users", json={"name": name})

        response = client.get("/api/v1/users")

        assert response.status_code == 200
        assert {user["name"] for user in response.json()} == {"Alice", "Bob", "Carol"}

    def test_get_missing_user(self, client):
        response = client.get("/api/v1/users/999")

        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}

    @pytest.mark.parametrize("user_id", [2**31, 2**63, 2**64])
    def test_get_out_of_range_id(self, client, user_id):
        response = client.get(f"/api/v1/users/{user_id}")

        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}

    def test_explicit_id_then_generated_id(self, client):
        client.post("/api/v1/users", json={"id": 1, "name": "Alice"})
        response = client.post("/api/v1/users", json={"name": "Bob"})

        assert response.status_code == 201
        assert response.json()["id"] == 2

    def test_get_invalid_id(self, client):
        response = client.get("/api/v1/users/not-a-number")
        assert response.status_code == 422

    def test_create_missing_name(self, client):
        response = client.post("/api/v1/users", json={"email": "x@example.com"})
        assert response.status_code == 422

    def test_request_id_echoed(self, client):
        response = client.get("/api/v1/users", headers={"X-Request-ID": "req-test"})
        assert response.headers["X-Request-ID"] == "req-test"

    def test_request_id_generated(self, client):
        response = client.get("/api/v1/users")
        assert response.headers["X-Request-ID"].startswith("req-")


class TestServiceEndpoints:
    """Test health, root and metrics endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "user-service"

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    def test_metrics(self, client):
        client.get("/api/v1/users")
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "user_http_requests_total" in response.text


class TestErrorHandling:
    """Repository failures become a 500 at the HTTP edge."""

    @pytest.fixture
    def failing_client(self):
        repository = MagicMock(spec=IUserRepository)
        repository.find_all.side_effect = ConnectionError("storage unavailable")
        app.dependency_overrides[get_user_repository] = lambda: repository
        try:
            yield TestClient(app, raise_server_exceptions=False)
        finally:
            app.dependency_overrides.clear()

    def test_repository_failure_returns_500(self, failing_client):
        response = failing_client.get("/api/v1/users")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "internal_server_error"

    def test_500_carries_generated_request_id(self, failing_client):
        body = failing_client.get("/api/v1/users").json()

        assert body["request_id"] is not None
        assert body["request_id"].startswith("req-")

    def test_500_carries_supplied_request_id(self, failing_client):
        response = failing_client.get("/api/v1/users", headers={"X-Request-ID": "req-abc"})
        assert response.json()["request_id"] == "req-abc"

    def test_500_is_counted_in_metrics(self, failing_client):
        labels = {"method": "GET", "endpoint": "/api/v1/users", "status": "500"}
        before = REGISTRY.get_sample_value("user_http_requests_total", labels) or 0.0

        failing_client.get("/api/v1/users")

        after = REGISTRY.get_sample_value("user_http_requests_total", labels)
        assert after == before + 1
