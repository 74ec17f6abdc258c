"""
Capacity accounting derived from active reservations
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models import Event
from app.services.repositories import EventRepo, ReservationRepo


def availability(capacity: int, active_count: int) -> int:
    """Remaining slots; negative values mean the event is over-booked"""
    return capacity - active_count


def is_full(available: int) -> bool:
    return available <= 0


def display_available(available: int) -> int:
    return max(0, available)


@dataclass
class EventAvailability:
    event: Event
    reserved_count: int

    @property
    def available(self) -> int:
        return availability(self.event.capacity, self.reserved_count)

    @property
    def is_full(self) -> bool:
        return is_full(self.available)


class CapacityService:
    """Counts are recomputed on every call and never cached on the event"""

    @staticmethod
    def for_event(db: Session, event: Event) -> EventAvailability:
        return EventAvailability(event=event, reserved_count=ReservationRepo.count_active(db, event.id))

    @staticmethod
    def list_events(db: Session, upcoming_from: Optional[date] = None, newest_first: bool = False) -> List[EventAvailability]:
        return [
            EventAvailability(event=event, reserved_count=count)
            for event, count in EventRepo.list_with_counts(db, upcoming_from=upcoming_from, newest_first=newest_first)
        ]
