from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import create_institution, create_student, issue_credential


def test_notifications_require_token(client: TestClient) -> None:
    resp = client.get("/v1/notifications/anyone")
    assert resp.status_code == 401


def test_unknown_recipient_has_empty_outbox(client: TestClient, auth_headers) -> None:
    resp = client.get("/v1/notifications/nobody", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == []


def test_notifications_follow_lifecycle(client: TestClient, auth_headers) -> None:
    s = create_student(client)
    i = create_institution(client)
    c = issue_credential(client, auth_headers, s["id"], i["id"])

    # Issue does not notify
    assert client.get(f"/v1/notifications/{s['id']}", headers=auth_headers).json() == []

    client.patch(f"/v1/credentials/{c['id']}/renew", headers=auth_headers)
    client.patch(
        f"/v1/credentials/{c['id']}/revoke", json={"reason": "fraud"}, headers=auth_headers
    )

    notes = client.get(f"/v1/notifications/{s['id']}", headers=auth_headers).json()
    assert [n["recipient_id"] for n in notes] == [s["id"], s["id"]]
    assert notes[0]["message"].startswith("Your credential has been renewed.")
    assert notes[1]["message"] == "Your credential has been revoked: fraud"
