"""
Booking workflow: capacity check, schema validation, code issue, persistence
"""

import logging
import secrets
import string
from typing import Any, Callable, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import (
    BookingValidationError,
    CodeCollisionError,
    EventFullError,
    EventNotFoundError,
    StoreError,
)
from app.models import Event, Reservation
from app.services.capacity import availability, is_full
from app.services.form_schema import FormSchema, parse_form_schema, required_keys
from app.services.locks import EventLockRegistry, event_locks
from app.services.repositories import EventRepo, ReservationRepo

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
PARTICIPATION_KEY = "participation_method"


def clean_value(value: Any) -> str:
    """Submitted value as trimmed text; anything non-scalar counts as blank"""
    if value is None or isinstance(value, (list, dict)):
        return ""
    return str(value).strip()


class BookingService:
    """Turns a raw form submission into an active reservation"""

    def __init__(
        self,
        config: Settings,
        locks: EventLockRegistry = event_locks,
        code_generator: Optional[Callable[[], str]] = None,
    ):
        self.config = config
        self.locks = locks
        self.code_generator = code_generator or self.generate_code

    def generate_code(self) -> str:
        return "".join(secrets.choice(CODE_ALPHABET) for _ in range(self.config.RESERVATION_CODE_LENGTH))

    def submit(
        self,
        db: Session,
        event_id: int,
        raw_payload: Mapping[str, Any],
        participation_method: Optional[str] = None,
    ) -> Reservation:
        """Book a slot on an event and return the stored reservation.

        Raises EventNotFoundError, EventFullError or BookingValidationError,
        checked in that order, and StoreError when persistence fails. The
        availability check and the insert run under a per-event lock, so
        two submissions for the last slot cannot both succeed.
        """
        if EventRepo.get_by_id(db, event_id) is None:
            raise EventNotFoundError(event_id)

        if participation_method is None:
            participation_method = raw_payload.get(PARTICIPATION_KEY)

        with self.locks.hold(event_id):
            try:
                reservation = self._submit_locked(db, event_id, raw_payload, participation_method)
            except Exception:
                db.rollback()
                raise

        logger.info(f"Reservation {reservation.reservation_code} created for event {event_id}")
        return reservation

    def _submit_locked(
        self,
        db: Session,
        event_id: int,
        raw_payload: Mapping[str, Any],
        participation_method: Optional[str],
    ) -> Reservation:
        attempts = self.config.RESERVATION_CODE_ATTEMPTS
        for attempt in range(1, attempts + 1):
            event = EventRepo.get_for_update(db, event_id)
            if event is None:
                raise EventNotFoundError(event_id)

            active_count = ReservationRepo.count_active(db, event_id)
            if is_full(availability(event.capacity, active_count)):
                logger.info(f"Event {event_id} is full ({active_count}/{event.capacity})")
                raise EventFullError(event_id)

            schema = parse_form_schema(event.form_fields)
            self.validate(schema, raw_payload)
            data = self.assemble_data(event, schema, raw_payload, participation_method)

            code = self.code_generator()
            try:
                reservation = ReservationRepo.create(db, event.id, data, code)
            except CodeCollisionError:
                db.rollback()
                logger.warning(f"Reservation code collision on attempt {attempt}/{attempts}")
                continue

            db.commit()
            db.refresh(reservation)
            return reservation

        raise StoreError(f"Could not allocate a unique reservation code after {attempts} attempts")

    @staticmethod
    def validate(schema: FormSchema, raw_payload: Mapping[str, Any]) -> None:
        missing: List[str] = [key for key in required_keys(schema) if not clean_value(raw_payload.get(key))]
        if missing:
            raise BookingValidationError(missing)

    @staticmethod
    def assemble_data(
        event: Event,
        schema: FormSchema,
        raw_payload: Mapping[str, Any],
        participation_method: Optional[str],
    ) -> Dict[str, str]:
        data: Dict[str, str] = {}
        for key in schema:
            value = clean_value(raw_payload.get(key))
            if value:
                data[key] = value

        method = clean_value(participation_method)
        if method and event.parsed_participation_options:
            data[PARTICIPATION_KEY] = method
        return data
