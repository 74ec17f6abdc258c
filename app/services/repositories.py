"""
Repository layer over the SQLAlchemy session.

Every method translates ``SQLAlchemyError`` into ``StoreError`` so callers
see a single persistence failure type. Writes are flushed but not committed;
the calling service owns the transaction.
"""

from __future__ import annotations

import functools
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import CodeCollisionError, StoreError
from app.models import Event, FieldDefinition, Reservation, ReservationStatus
from app.utils.serialization import dump_document

logger = logging.getLogger(__name__)


def store_call(method):
    """Wrap a repository method so storage failures surface as StoreError"""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except (StoreError, CodeCollisionError):
            raise
        except SQLAlchemyError as exc:
            logger.error(f"Storage failure in {method.__qualname__}: {exc}")
            raise StoreError(f"Storage failure: {exc.__class__.__name__}") from exc

    return wrapper


# -------- Field catalog repository --------

class FieldRepo:
    @staticmethod
    @store_call
    def list_ordered(db: Session) -> List[FieldDefinition]:
        return db.query(FieldDefinition).order_by(FieldDefinition.sort_order, FieldDefinition.id).all()

    @staticmethod
    @store_call
    def get_by_key(db: Session, field_key: str) -> Optional[FieldDefinition]:
        return db.query(FieldDefinition).filter(FieldDefinition.field_key == field_key).first()

    @staticmethod
    @store_call
    def count(db: Session) -> int:
        return db.query(func.count(FieldDefinition.id)).scalar() or 0

    @staticmethod
    @store_call
    def add(db: Session, definition: FieldDefinition) -> FieldDefinition:
        db.add(definition)
        db.flush()
        return definition


# -------- Event repository --------

class EventRepo:
    @staticmethod
    @store_call
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.get(Event, event_id)

    @staticmethod
    @store_call
    def get_for_update(db: Session, event_id: int) -> Optional[Event]:
        """Load the event row locked for the rest of the transaction (no-op on SQLite)"""
        return db.execute(
            select(Event)
            .where(Event.id == event_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    @staticmethod
    @store_call
    def list_with_counts(db: Session, upcoming_from: Optional[date] = None, newest_first: bool = False) -> List[Tuple[Event, int]]:
        """Events paired with their current active reservation count"""
        active_counts = (
            select(Reservation.event_id, func.count(Reservation.id).label("active_count"))
            .where(Reservation.status == ReservationStatus.ACTIVE.value)
            .group_by(Reservation.event_id)
            .subquery()
        )
        stmt = select(Event, func.coalesce(active_counts.c.active_count, 0)).outerjoin(
            active_counts, active_counts.c.event_id == Event.id
        )
        if upcoming_from is not None:
            stmt = stmt.where(Event.date >= upcoming_from)
        if newest_first:
            stmt = stmt.order_by(Event.date.desc(), Event.time.desc())
        else:
            stmt = stmt.order_by(Event.date, Event.time)
        return [(event, int(count)) for event, count in db.execute(stmt).all()]

    @staticmethod
    @store_call
    def create(db: Session, **values: Any) -> Event:
        event = Event(**values)
        db.add(event)
        db.flush()
        return event

    @staticmethod
    @store_call
    def update(db: Session, event: Event, **values: Any) -> Event:
        for name, value in values.items():
            setattr(event, name, value)
        event.updated_at = datetime.utcnow()
        db.flush()
        return event

    @staticmethod
    @store_call
    def delete(db: Session, event: Event) -> None:
        db.delete(event)
        db.flush()


# -------- Reservation repository --------

class ReservationRepo:
    @staticmethod
    @store_call
    def create(db: Session, event_id: int, data: Dict[str, Any], code: str) -> Reservation:
        """Insert an active reservation.

        A duplicate code raises ``CodeCollisionError``; the session must be
        rolled back before it is reused.
        """
        reservation = Reservation(
            event_id=event_id,
            reservation_data=dump_document(data),
            reservation_code=code,
            status=ReservationStatus.ACTIVE.value,
        )
        db.add(reservation)
        try:
            db.flush()
        except IntegrityError as exc:
            raise CodeCollisionError(code) from exc
        return reservation

    @staticmethod
    @store_call
    def count_active(db: Session, event_id: int) -> int:
        return db.query(func.count(Reservation.id)).filter(
            Reservation.event_id == event_id,
            Reservation.status == ReservationStatus.ACTIVE.value,
        ).scalar() or 0

    @staticmethod
    @store_call
    def find_by_code(db: Session, code: str) -> Optional[Reservation]:
        return db.query(Reservation).filter(Reservation.reservation_code == code).first()

    @staticmethod
    @store_call
    def find_active_by_code(db: Session, code: str) -> Optional[Reservation]:
        return db.query(Reservation).filter(
            Reservation.reservation_code == code,
            Reservation.status == ReservationStatus.ACTIVE.value,
        ).first()

    @staticmethod
    @store_call
    def find_active_by_data_field(db: Session, field_key: str, value: str) -> List[Reservation]:
        """Active reservations whose stored data has ``field_key == value``.

        The text column is narrowed with a substring match on the value as it
        appears in the serialized document, then matched exactly after parsing.
        """
        needle = dump_document(value)[1:-1]
        candidates = db.query(Reservation).filter(
            Reservation.status == ReservationStatus.ACTIVE.value,
            Reservation.reservation_data.contains(needle, autoescape=True),
        ).order_by(Reservation.created_at, Reservation.id).all()
        return [r for r in candidates if r.data.get(field_key) == value]

    @staticmethod
    @store_call
    def list_active_for_event(db: Session, event_id: int) -> List[Reservation]:
        return db.query(Reservation).filter(
            Reservation.event_id == event_id,
            Reservation.status == ReservationStatus.ACTIVE.value,
        ).order_by(Reservation.created_at, Reservation.id).all()

    @staticmethod
    @store_call
    def set_status(db: Session, reservation_id: int, status: ReservationStatus) -> int:
        """Move an active reservation to ``status``; returns the number of rows changed.

        Only active rows match, so the transition is one-way and a repeated
        call changes nothing.
        """
        values: Dict[str, Any] = {"status": status.value}
        if status is ReservationStatus.CANCELLED:
            values["cancelled_at"] = datetime.utcnow()
        result = db.execute(
            update(Reservation)
            .where(
                Reservation.id == reservation_id,
                Reservation.status == ReservationStatus.ACTIVE.value,
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    @staticmethod
    @store_call
    def cancel_active_for_event(db: Session, event_id: int) -> int:
        result = db.execute(
            update(Reservation)
            .where(
                Reservation.event_id == event_id,
                Reservation.status == ReservationStatus.ACTIVE.value,
            )
            .values(status=ReservationStatus.CANCELLED.value, cancelled_at=datetime.utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
