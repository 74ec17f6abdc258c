"""
Database models package
"""

from .event import Event
from .field_definition import FieldDefinition, FIELD_TYPES
from .reservation import Reservation, ReservationStatus

__all__ = ["Event", "FieldDefinition", "FIELD_TYPES", "Reservation", "ReservationStatus"]
