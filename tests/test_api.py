"""
End-to-end tests through the HTTP API
"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.db import get_db
from app.utils.security import rate_limit_check, rate_limiter
from main import app

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

@pytest.fixture
def client(db_session, session_factory, catalog):
    """Test client bound to the test database, with a fresh rate limiter"""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
    rate_limiter.clear()

def event_payload(**overrides):
    payload = {
        "title": "Tech Seminar",
        "description": "Quarterly seminar",
        "date": (date.today() + timedelta(days=5)).isoformat(),
        "time": "14:00",
        "form_fields": {
            "participant_name": {"required": True},
            "email": {"required": True},
            "company_name": {"required": False},
        },
    }
    payload.update(overrides)
    return payload

def create_event(client, **overrides):
    response = client.post("/admin/events", json=event_payload(**overrides))
    assert response.status_code == 201
    return response.json()["data"]

def book(client, event_id, **values):
    return client.post(f"/guest/events/{event_id}/book", json=values)

def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

def test_create_and_list_events(client):
    created = create_event(client)

    assert created["capacity"] == 5
    assert created["available_count"] == 5
    assert created["is_full"] is False

    listed = client.get("/events").json()["data"]
    assert [e["id"] for e in listed] == [created["id"]]

def test_past_events_hidden_from_public_listing(client):
    create_event(client, title="Yesterday", date=(date.today() - timedelta(days=1)).isoformat())

    assert client.get("/events").json()["data"] == []
    assert len(client.get("/admin/events").json()["data"]) == 1

def test_event_form_lists_fields_in_catalog_order(client):
    created = create_event(client)

    detail = client.get(f"/events/{created['id']}").json()["data"]

    assert [f["key"] for f in detail["form_fields"]] == ["participant_name", "company_name", "email"]
    assert [f["required"] for f in detail["form_fields"]] == [True, False, True]

def test_booking_confirmation_and_cancellation_flow(client):
    event_id = create_event(client)["id"]

    response = book(client, event_id, participant_name="Jane Doe", email="jane@example.com")
    assert response.status_code == 201
    code = response.json()["data"]["reservation_code"]

    confirmation = client.get(f"/guest/confirmation/{code}").json()["data"]
    assert confirmation["title"] == "Tech Seminar"
    assert confirmation["data"] == {"participant_name": "Jane Doe", "email": "jane@example.com"}
    assert client.get(f"/events/{event_id}").json()["data"]["reserved_count"] == 1

    cancelled = client.post("/guest/cancel", json={"reservation_code": code})
    assert cancelled.status_code == 200
    assert client.get(f"/events/{event_id}").json()["data"]["reserved_count"] == 0

    again = client.post("/guest/cancel", json={"reservation_code": code})
    assert again.status_code == 404
    assert again.json()["error_code"] == "reservation_not_found"
    assert client.get(f"/guest/confirmation/{code}").status_code == 404

def test_booking_missing_fields(client):
    event_id = create_event(client)["id"]

    response = book(client, event_id, participant_name="   ")

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["details"] == {"missing_fields": ["participant_name", "email"]}

def test_booking_full_event(client):
    event_id = create_event(client, capacity=1)["id"]
    assert book(client, event_id, participant_name="Jane", email="jane@example.com").status_code == 201

    response = book(client, event_id, participant_name="John", email="john@example.com")

    assert response.status_code == 409
    assert response.json()["error_code"] == "event_full"
    summary = client.get(f"/events/{event_id}").json()["data"]
    assert summary["is_full"] is True
    assert summary["available_count"] == 0

def test_booking_unknown_event(client):
    response = book(client, 999, participant_name="Jane")
    assert response.status_code == 404
    assert response.json()["error_code"] == "event_not_found"

def test_unknown_event_form(client):
    assert client.get("/events/999").status_code == 404

def test_lookup_by_email(client):
    event_id = create_event(client)["id"]
    book(client, event_id, participant_name="Jane", email="jane@example.com")
    book(client, event_id, participant_name="John", email="john@example.com")

    response = client.post("/guest/lookup", json={"value": "jane@example.com"})

    found = response.json()["data"]
    assert [r["data"]["participant_name"] for r in found] == ["Jane"]

def test_admin_registrants_and_export(client):
    event_id = create_event(client)["id"]
    book(client, event_id, participant_name="Jane", email="jane@example.com")

    detail = client.get(f"/admin/events/{event_id}").json()["data"]
    assert [r["data"]["participant_name"] for r in detail["registrants"]] == ["Jane"]

    export = client.get(f"/admin/events/{event_id}/export/registrants.xlsx")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert export.content[:2] == b"PK"

def test_admin_update_event(client):
    event_id = create_event(client)["id"]

    response = client.put(f"/admin/events/{event_id}", json={"capacity": 12, "title": "Renamed"})

    assert response.status_code == 200
    assert response.json()["data"]["capacity"] == 12
    assert response.json()["data"]["title"] == "Renamed"
    assert client.put("/admin/events/999", json={"capacity": 3}).status_code == 404

def test_admin_delete_event(client):
    event_id = create_event(client)["id"]
    code = book(client, event_id, participant_name="Jane", email="jane@example.com").json()["data"]["reservation_code"]

    response = client.delete(f"/admin/events/{event_id}")

    assert response.status_code == 200
    assert response.json()["data"]["cancelled_reservations"] == 1
    assert client.get(f"/events/{event_id}").status_code == 404
    assert client.post("/guest/cancel", json={"reservation_code": code}).status_code == 404

def test_event_with_unknown_form_fields_rejected(client):
    response = client.post("/admin/events", json=event_payload(form_fields={
        "participant_name": {"required": True},
        "favourite_colour": {"required": True},
    }))

    assert response.status_code == 422
    assert response.json()["error_code"] == "unknown_form_fields"
    assert response.json()["details"] == {"unknown_fields": ["favourite_colour"]}
    assert client.get("/admin/events").json()["data"] == []

def test_update_with_null_title_rejected(client):
    event_id = create_event(client)["id"]

    response = client.put(f"/admin/events/{event_id}", json={"title": None})

    assert response.status_code == 422
    assert client.get(f"/events/{event_id}").json()["data"]["title"] == "Tech Seminar"

def test_invalid_event_payload(client):
    response = client.post("/admin/events", json=event_payload(capacity=0))
    assert response.status_code == 422

def test_form_field_catalog(client):
    fields = client.get("/admin/form-fields").json()["data"]
    assert len(fields) == 12

    response = client.post("/admin/form-fields", json={
        "field_key": "t_shirt_size",
        "label": "T-shirt size",
        "field_type": "select",
        "field_options": ["S", "M", "L"],
    })
    assert response.status_code == 201
    assert response.json()["data"]["options"] == ["S", "M", "L"]

    conflict = client.post("/admin/form-fields", json={"field_key": "email", "label": "Email"})
    assert conflict.status_code == 409

def test_event_qr_code(client):
    event_id = create_event(client)["id"]

    response = client.get(f"/events/{event_id}/qr.png")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(PNG_SIGNATURE)
    assert client.get("/events/999/qr.png").status_code == 404

def test_booking_rate_limited(client, monkeypatch):
    monkeypatch.setattr("app.utils.security.settings.RATE_LIMIT_PER_MINUTE", 2)
    event_id = create_event(client, capacity=10)["id"]

    statuses = [
        book(client, event_id, participant_name=f"Guest {n}", email=f"g{n}@example.com").status_code
        for n in range(3)
    ]

    assert statuses == [201, 201, 429]

def test_rate_limiter_forgets_idle_clients(client):
    rate_limiter["203.0.113.7"] = [0.0]
    rate_limiter["203.0.113.8"] = []

    assert rate_limit_check("198.51.100.1")

    assert "203.0.113.7" not in rate_limiter
    assert "203.0.113.8" not in rate_limiter
    assert len(rate_limiter["198.51.100.1"]) == 1
