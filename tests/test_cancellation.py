"""
Tests for cancellation, confirmation and contact lookup
"""

import pytest

from app.core.exceptions import ReservationNotFoundError
from app.models import ReservationStatus
from app.schemas.event import EventUpdate
from app.services.cancellation_service import CancellationService
from app.services.event_service import EventService
from app.services.locks import EventLockRegistry
from app.services.repositories import ReservationRepo

@pytest.fixture
def booked(db_session, catalog, make_event, booking_service):
    """An event with one reservation made through the workflow"""
    event = make_event(form_fields={
        "participant_name": {"required": True},
        "email": {"required": True},
    })
    reservation = booking_service.submit(db_session, event.id, {
        "participant_name": "Jane Doe",
        "email": "jane@example.com",
    })
    return event, reservation

def test_cancel_active_reservation(db_session, booked):
    event, reservation = booked

    cancelled = CancellationService.cancel(db_session, reservation.reservation_code)

    assert cancelled.status == ReservationStatus.CANCELLED.value
    assert cancelled.cancelled_at is not None
    assert ReservationRepo.count_active(db_session, event.id) == 0

def test_cancel_twice_reports_not_found(db_session, booked):
    """A second cancel is indistinguishable from an unknown code"""
    _, reservation = booked
    CancellationService.cancel(db_session, reservation.reservation_code)

    with pytest.raises(ReservationNotFoundError) as second:
        CancellationService.cancel(db_session, reservation.reservation_code)
    with pytest.raises(ReservationNotFoundError) as unknown:
        CancellationService.cancel(db_session, "NOSUCH00")

    assert str(second.value) == str(unknown.value)

def test_cancel_accepts_lowercase_code(db_session, booked):
    _, reservation = booked

    cancelled = CancellationService.cancel(db_session, f" {reservation.reservation_code.lower()} ")

    assert cancelled.id == reservation.id

def test_cancelled_reservation_is_kept(db_session, booked):
    """Cancellation never deletes the row or its data"""
    _, reservation = booked
    CancellationService.cancel(db_session, reservation.reservation_code)

    stored = ReservationRepo.find_by_code(db_session, reservation.reservation_code)

    assert stored is not None
    assert stored.data["participant_name"] == "Jane Doe"

def test_get_confirmation(db_session, booked):
    event, reservation = booked

    found, found_event = CancellationService.get_confirmation(db_session, reservation.reservation_code)

    assert found.id == reservation.id
    assert found_event.id == event.id

def test_get_confirmation_of_cancelled_reservation(db_session, booked):
    _, reservation = booked
    CancellationService.cancel(db_session, reservation.reservation_code)

    with pytest.raises(ReservationNotFoundError):
        CancellationService.get_confirmation(db_session, reservation.reservation_code)

def test_find_by_contact_matches_exact_active_values(db_session, catalog, make_event, make_reservation):
    event = make_event(form_fields={"email": {"required": True}})
    first = make_reservation(event, {"email": "jane@example.com"})
    second = make_reservation(event, {"email": "jane@example.com", "participant_name": "Jane"})
    make_reservation(event, {"email": "jane@example.com.au"})
    make_reservation(event, {"contact_info": "jane@example.com"})
    make_reservation(event, {"email": "jane@example.com"}, status=ReservationStatus.CANCELLED)

    found = CancellationService.find_by_contact(db_session, "email", " jane@example.com ")

    assert [r.id for r in found] == [first.id, second.id]

def test_find_by_contact_escapes_wildcards(db_session, catalog, make_event, make_reservation):
    event = make_event(form_fields={"contact_info": {"required": True}})
    make_reservation(event, {"contact_info": "100% sure"})
    make_reservation(event, {"contact_info": "100 sure"})

    found = CancellationService.find_by_contact(db_session, "contact_info", "100% sure")

    assert [r.data["contact_info"] for r in found] == ["100% sure"]

def test_find_by_contact_skips_malformed_data(db_session, catalog, make_event, make_reservation):
    event = make_event(form_fields={"email": {"required": True}})
    broken = make_reservation(event, {"email": "jane@example.com"})
    broken.reservation_data = '{"email": "jane@example.com"'
    db_session.commit()

    assert CancellationService.find_by_contact(db_session, "email", "jane@example.com") == []

def test_find_by_contact_blank_value(db_session):
    assert CancellationService.find_by_contact(db_session, "email", "   ") == []

def test_schema_change_does_not_rewrite_reservations(db_session, booked):
    """Stored reservation data survives later edits to the event's form"""
    event, reservation = booked

    EventService(EventLockRegistry()).update_event(
        db_session, event.id, EventUpdate(form_fields={"phone": {"required": True}})
    )

    stored = ReservationRepo.find_by_code(db_session, reservation.reservation_code)
    assert stored.data == {"participant_name": "Jane Doe", "email": "jane@example.com"}
