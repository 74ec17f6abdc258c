"""
Builders turning models into response schemas
"""

from typing import List

from app.core.config import Settings
from app.models import Event, Reservation
from app.schemas.event import (
    ActiveFieldResponse,
    EventDetail,
    EventRegistrantsResponse,
    EventSummary,
    RegistrantResponse,
    VenueInfo,
)
from app.schemas.reservation import ConfirmationResponse, ReservationResponse
from app.services.capacity import EventAvailability, display_available
from app.services.form_schema import ActiveField

def venue_info(event: Event) -> VenueInfo:
    return VenueInfo(
        venue_type=event.venue_type or "physical",
        venue_name=event.venue_name,
        venue_address=event.venue_address,
        online_meeting_url=event.online_meeting_url,
        online_meeting_id=event.online_meeting_id,
        online_meeting_password=event.online_meeting_password,
    )

def event_summary(item: EventAvailability, config: Settings) -> EventSummary:
    event = item.event
    return EventSummary(
        id=event.id,
        title=event.title,
        description=event.description or "",
        date=event.date,
        time=event.time,
        formatted_date=event.date.strftime(config.DATE_DISPLAY_FORMAT),
        formatted_time=event.time.strftime("%H:%M"),
        capacity=event.capacity,
        event_type=event.event_type,
        participation_options=event.parsed_participation_options,
        reserved_count=item.reserved_count,
        available_count=display_available(item.available),
        is_full=item.is_full,
        venue=venue_info(event),
    )

def active_fields(fields: List[ActiveField]) -> List[ActiveFieldResponse]:
    return [ActiveFieldResponse(**field.to_dict()) for field in fields]

def event_detail(item: EventAvailability, fields: List[ActiveField], config: Settings) -> EventDetail:
    return EventDetail(
        **event_summary(item, config).model_dump(),
        form_fields=active_fields(fields),
    )

def event_registrants(
    item: EventAvailability,
    fields: List[ActiveField],
    reservations: List[Reservation],
    config: Settings,
) -> EventRegistrantsResponse:
    return EventRegistrantsResponse(
        **event_detail(item, fields, config).model_dump(),
        registrants=[
            RegistrantResponse(code=r.reservation_code, created_at=r.created_at, data=r.data)
            for r in reservations
        ],
    )

def reservation_response(reservation: Reservation) -> ReservationResponse:
    return ReservationResponse(
        reservation_code=reservation.reservation_code,
        event_id=reservation.event_id,
        status=reservation.status,
        data=reservation.data,
        created_at=reservation.created_at,
        cancelled_at=reservation.cancelled_at,
    )

def confirmation(reservation: Reservation, event: Event, config: Settings) -> ConfirmationResponse:
    return ConfirmationResponse(
        **reservation_response(reservation).model_dump(),
        title=event.title,
        date=event.date,
        time=event.time,
        formatted_date=event.date.strftime(config.DATE_DISPLAY_FORMAT),
        formatted_time=event.time.strftime("%H:%M"),
        event_type=event.event_type,
        venue=venue_info(event),
    )
