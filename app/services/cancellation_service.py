"""
Reservation lookup and self-service cancellation
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import ReservationNotFoundError, StoreError
from app.models import Event, Reservation, ReservationStatus
from app.services.repositories import EventRepo, ReservationRepo

logger = logging.getLogger(__name__)


class CancellationService:
    """Operations keyed by reservation code or by a submitted contact value"""

    @staticmethod
    def cancel(db: Session, code: str) -> Reservation:
        """Cancel the active reservation holding ``code``.

        Unknown and already-cancelled codes both raise
        ReservationNotFoundError.
        """
        code = code.strip().upper()
        try:
            reservation = ReservationRepo.find_active_by_code(db, code)
            if reservation is None:
                raise ReservationNotFoundError()
            if ReservationRepo.set_status(db, reservation.id, ReservationStatus.CANCELLED) == 0:
                raise ReservationNotFoundError()
            db.commit()
        except (ReservationNotFoundError, StoreError):
            db.rollback()
            raise

        db.refresh(reservation)
        logger.info(f"Reservation {code} cancelled")
        return reservation

    @staticmethod
    def get_confirmation(db: Session, code: str) -> Tuple[Reservation, Event]:
        """Active reservation and its event, for the confirmation page"""
        reservation = ReservationRepo.find_active_by_code(db, code.strip().upper())
        if reservation is None:
            raise ReservationNotFoundError()
        event = EventRepo.get_by_id(db, reservation.event_id)
        if event is None:
            raise ReservationNotFoundError()
        return reservation, event

    @staticmethod
    def find_by_contact(db: Session, field_key: str, value: str) -> List[Reservation]:
        """Active reservations whose submitted ``field_key`` equals ``value``"""
        value = value.strip()
        if not value:
            return []
        return ReservationRepo.find_active_by_data_field(db, field_key, value)
