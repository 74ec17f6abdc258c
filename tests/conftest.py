"""
Shared fixtures: a throwaway SQLite database and event factories
"""

import json
from datetime import date, time, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.db import Base
from app.models import Event, Reservation, ReservationStatus
from app.services.booking_service import BookingService
from app.services.field_catalog import FieldCatalog
from app.services.locks import EventLockRegistry

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_event_booking.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def catalog(db_session):
    """Default field catalog"""
    FieldCatalog.seed_default_fields(db_session)
    return FieldCatalog.list_fields(db_session)

@pytest.fixture
def make_event(db_session):
    """Factory inserting an event with a JSON form schema"""
    def _make(
        title="Sample Event",
        capacity=5,
        form_fields=None,
        participation_options=None,
        days_ahead=7,
        **extra
    ):
        if isinstance(form_fields, dict):
            form_fields = json.dumps(form_fields)
        if isinstance(participation_options, list):
            participation_options = json.dumps(participation_options)
        event = Event(
            title=title,
            date=date.today() + timedelta(days=days_ahead),
            time=time(14, 0),
            capacity=capacity,
            form_fields=form_fields,
            participation_options=participation_options,
            **extra
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _make

@pytest.fixture
def make_reservation(db_session):
    """Factory inserting a reservation row directly"""
    counter = {"n": 0}

    def _make(event, data=None, status=ReservationStatus.ACTIVE, code=None):
        counter["n"] += 1
        reservation = Reservation(
            event_id=event.id,
            reservation_data=json.dumps(data or {}),
            reservation_code=code or f"TEST{counter['n']:04d}",
            status=status.value,
        )
        db_session.add(reservation)
        db_session.commit()
        db_session.refresh(reservation)
        return reservation
    return _make

@pytest.fixture
def booking_service():
    return BookingService(Settings(), locks=EventLockRegistry())

@pytest.fixture
def session_factory(db_session):
    """Session factory for tests that need one session per thread"""
    return TestingSessionLocal
