# tests/test_main.py

"""
Integration tests for the application-level endpoints.

- Root welcome message (`/`).
- Service status endpoints (`/api/health`, `/api/cicd-working`).
- Prometheus exposition (`/metrics`).
- Error envelope for unknown routes and malformed bodies.
"""

import pytest
from datetime import datetime
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_read_root(client: AsyncClient):
    print("\n--- Running test_read_root ---")
    response = await client.get("/")
    print(f"Response status code: {response.status_code}")
    print(f"Response JSON: {response.json()}")

    assert response.status_code == 200
    assert response.json() == {
        "message": "Welcome to Bike Inventory API. Visit /docs for interactive API documentation."
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, service",
    [
        ("/api/health", "bike-inventory-api"),
        ("/api/cicd-working", "Congratulations! CI/CD Working!!"),
    ],
)
async def test_service_status(client: AsyncClient, path: str, service: str):
    """
    Both status endpoints report OK with a timestamp; the deployment check
    carries its congratulation message in `service`.
    """
    response = await client.get(path)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["service"] == service
    assert datetime.fromisoformat(body["timestamp"])


@pytest.mark.asyncio
async def test_metrics_exposes_request_counters(client: AsyncClient):
    await client.get("/api/health")

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in response.text
    assert 'path="/api/health"' in response.text


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "code": 404, "message": "Not Found"}


@pytest.mark.asyncio
async def test_malformed_json_body_is_rejected(authorized_client: AsyncClient):
    response = await authorized_client.post(
        "/api/payments",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Malformed JSON body"


@pytest.mark.asyncio
async def test_json_array_body_is_rejected(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/payments", json=[{"amount": "10.00"}])
    assert response.status_code == 400
    assert response.json()["message"] == "Request body must be a JSON object"
