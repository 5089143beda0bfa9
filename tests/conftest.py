from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import credregistry` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from credregistry.core.config import SETTINGS  # noqa: E402
from credregistry.main import app  # noqa: E402
from credregistry.services.registry import registry  # noqa: E402

START = 1_700_000_000  # 2023-11-14T22:13:20Z


class FakeClock:
    """Controllable epoch-seconds clock for engine tests."""

    def __init__(self, start: int = START) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class RecordingSink:
    """NotificationSink stand-in that keeps (recipient_id, message) pairs."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send(self, recipient_id: str, message: str) -> None:
        self.sent.append((recipient_id, message))


@pytest.fixture(autouse=True)
def reset_registry_state() -> None:
    """Clear the process-wide stores and notification log between tests."""
    registry.students._by_id.clear()
    registry.institutions._by_id.clear()
    registry.credentials._by_id.clear()
    registry.shares._by_id.clear()
    if hasattr(registry.notifier, "_log"):
        registry.notifier._log.clear()  # type: ignore[union-attr]


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {SETTINGS.api_token}"}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------


def create_student(client: TestClient, name: str = "Ada", email: str = "ada@example.com") -> dict:
    resp = client.post("/v1/students", json={"name": name, "email": email})
    assert resp.status_code == 201
    return resp.json()


def create_institution(
    client: TestClient, name: str = "Uni One", address: str = "1 College Rd"
) -> dict:
    resp = client.post("/v1/institutions", json={"name": name, "address": address})
    assert resp.status_code == 201
    return resp.json()


def issue_credential(
    client: TestClient,
    headers: dict[str, str],
    student_id: str,
    institution_id: str,
    course: str = "CS",
    degree: str = "BSc",
    graduation_year: int | None = 2024,
) -> dict:
    resp = client.post(
        "/v1/credentials",
        json={
            "student_id": student_id,
            "institution_id": institution_id,
            "course": course,
            "degree": degree,
            "graduation_year": graduation_year,
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
