"""
Reservation-related Pydantic schemas
"""

import datetime as dt
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from app.schemas.event import VenueInfo

class BookingSubmission(BaseModel):
    """Booking form submission.

    Field values arrive as top-level keys named after the event's form
    fields, so the model accepts extra keys and hands them to the booking
    workflow unvalidated.
    """
    participation_method: Optional[str] = None

    class Config:
        extra = "allow"

    def field_values(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

class BookingResult(BaseModel):
    reservation_code: str
    event_id: int

class CancelRequest(BaseModel):
    """Cancellation request"""
    reservation_code: str = Field(min_length=1, max_length=32)

class ContactLookupRequest(BaseModel):
    """Find active reservations by a submitted contact value"""
    field_key: str = Field(default="email", min_length=1, max_length=100)
    value: str = Field(min_length=1)

class ReservationResponse(BaseModel):
    reservation_code: str
    event_id: int
    status: str
    data: Dict[str, Any]
    created_at: Optional[dt.datetime] = None
    cancelled_at: Optional[dt.datetime] = None

class ConfirmationResponse(ReservationResponse):
    """Reservation plus the event details shown on the confirmation page"""
    title: str
    date: dt.date
    time: dt.time
    formatted_date: str
    formatted_time: str
    event_type: str
    venue: VenueInfo
