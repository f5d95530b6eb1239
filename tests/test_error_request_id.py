"""Tests for request_id in error responses."""

import pytest
from fastapi.testclient import TestClient

from src.rbac.main import create_app


@pytest.fixture
def client() -> TestClient:
    """Test client fixture."""
    app = create_app()
    return TestClient(app)


def test_http_exception_includes_request_id(client: TestClient) -> None:
    response = client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert "detail" in data
    assert isinstance(data["request_id"], str)


def test_service_failure_includes_request_id(client: TestClient) -> None:
    """A route refused by the engine renders its errors alongside the request_id."""
    response = client.get("/api/v1/tenants")

    assert response.status_code == 401
    data = response.json()
    assert data["errors"] == [{"code": "UNAUTHORIZED", "message": "Authentication required"}]
    assert data["request_id"]


def test_validation_error_includes_request_id(client: TestClient) -> None:
    response = client.post(
        "/api/v1/tenants",
        json={"name": "   "},
        headers={"X-User-Id": "not-a-uuid", "X-User-Email": "a@x.com"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["errors"][0]["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["value"] == "name"
    assert data["request_id"]


def test_incoming_request_id_is_echoed(client: TestClient) -> None:
    request_id = "0f3e7f4c2b1a4d5e9c8b7a6f5e4d3c2b"

    response = client.get("/api/v1/nonexistent-endpoint", headers={"X-Request-ID": request_id})

    assert response.json()["request_id"] == request_id
    assert response.headers["X-Request-ID"] == request_id


def test_different_requests_have_different_ids(client: TestClient) -> None:
    data1 = client.get("/api/v1/endpoint1").json()
    data2 = client.get("/api/v1/endpoint2").json()

    assert data1["request_id"] != data2["request_id"]
