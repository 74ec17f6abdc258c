"""
Administrator operations on events
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import EventNotFoundError, PartialDeletionError, StoreError, UnknownFormFieldError
from app.models import Event, Reservation
from app.schemas.event import EventCreate, EventUpdate
from app.services.field_catalog import FieldCatalog
from app.services.form_schema import ActiveField, dump_form_schema, fields_for_event
from app.services.locks import EventLockRegistry, event_locks
from app.services.repositories import EventRepo, ReservationRepo
from app.utils.serialization import dump_document

logger = logging.getLogger(__name__)


@dataclass
class EventRegistrants:
    event: Event
    fields: List[ActiveField]
    reservations: List[Reservation]


def _check_form_fields(db: Session, form_fields: Optional[Dict[str, Any]]) -> None:
    """Reject schema keys that have no catalog definition"""
    if not form_fields:
        return
    known = {field.field_key for field in FieldCatalog.list_fields(db)}
    unknown = [key for key in form_fields if key not in known]
    if unknown:
        raise UnknownFormFieldError(unknown)


def _column_values(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Map request fields onto event columns, serializing the JSON documents"""
    values = dict(payload)
    if "participation_options" in values:
        options = values["participation_options"]
        values["participation_options"] = dump_document(options) if options else None
    if "form_fields" in values:
        values["form_fields"] = dump_form_schema(values["form_fields"] or {})
    return values


class EventService:
    """Event lifecycle for administrators"""

    def __init__(self, locks: EventLockRegistry = event_locks):
        self.locks = locks

    def create_event(self, db: Session, event_data: EventCreate) -> Event:
        _check_form_fields(db, event_data.form_fields)
        try:
            event = EventRepo.create(db, **_column_values(event_data.model_dump()))
            db.commit()
        except StoreError:
            db.rollback()
            raise
        db.refresh(event)
        logger.info(f"Event {event.id} '{event.title}' created (capacity {event.capacity})")
        return event

    def update_event(self, db: Session, event_id: int, event_data: EventUpdate) -> Event:
        """Overwrite the supplied fields in place"""
        event = EventRepo.get_by_id(db, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        _check_form_fields(db, event_data.form_fields)
        try:
            EventRepo.update(db, event, **_column_values(event_data.model_dump(exclude_unset=True)))
            db.commit()
        except StoreError:
            db.rollback()
            raise
        db.refresh(event)
        logger.info(f"Event {event_id} updated")
        return event

    def delete_event(self, db: Session, event_id: int) -> int:
        """Cancel every active reservation, then remove the event.

        Returns the number of reservations cancelled. If the event row
        cannot be removed after the cancellations were committed,
        PartialDeletionError is raised; calling again is safe because
        there is nothing left to cancel.
        """
        if EventRepo.get_by_id(db, event_id) is None:
            raise EventNotFoundError(event_id)

        with self.locks.hold(event_id):
            try:
                cancelled = ReservationRepo.cancel_active_for_event(db, event_id)
                db.commit()
            except StoreError:
                db.rollback()
                raise
            logger.info(f"Cancelled {cancelled} reservations of event {event_id}")

            try:
                event = EventRepo.get_by_id(db, event_id)
                if event is not None:
                    EventRepo.delete(db, event)
                db.commit()
            except StoreError as exc:
                db.rollback()
                logger.error(f"Event {event_id} not removed after cancelling {cancelled} reservations")
                raise PartialDeletionError(event_id, cancelled) from exc

        self.locks.discard(event_id)
        logger.info(f"Event {event_id} deleted")
        return cancelled

    @staticmethod
    def get_registrants(db: Session, event_id: int) -> EventRegistrants:
        event = EventRepo.get_by_id(db, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return EventRegistrants(
            event=event,
            fields=fields_for_event(db, event),
            reservations=ReservationRepo.list_active_for_event(db, event_id),
        )
