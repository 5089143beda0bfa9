from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import create_student


def test_health_returns_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    # Tests run without REDIS_URL
    assert data["checks"]["redis"] == "not_configured"


def test_health_reports_store_counts(client: TestClient) -> None:
    create_student(client)
    counts = client.get("/health").json()["counts"]
    assert counts == {"students": 1, "institutions": 0, "credentials": 0, "shares": 0}


def test_ready_returns_200(client: TestClient) -> None:
    resp = client.get("/ready")
    assert resp.status_code == 200
