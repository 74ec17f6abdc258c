"""
Guest-facing API routes - booking, confirmation and cancellation
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings, settings
from app.core.db import get_db
from app.schemas.reservation import BookingResult, BookingSubmission, CancelRequest, ContactLookupRequest
from app.services.booking_service import BookingService
from app.services.cancellation_service import CancellationService
from app.utils import presenters
from app.utils.responses import success_response
from app.utils.security import enforce_rate_limit

router = APIRouter()

booking_service = BookingService(settings)

@router.post("/events/{event_id}/book", dependencies=[Depends(enforce_rate_limit)])
async def book_event(
    event_id: int,
    submission: BookingSubmission,
    db: Session = Depends(get_db)
):
    """Submit the booking form for an event"""
    reservation = booking_service.submit(
        db,
        event_id,
        submission.field_values(),
        participation_method=submission.participation_method,
    )

    return success_response(
        message="Your reservation is confirmed",
        data=BookingResult(reservation_code=reservation.reservation_code, event_id=event_id),
        status_code=201
    )

@router.get("/confirmation/{code}")
async def get_confirmation(
    code: str,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Reservation details for the confirmation page"""
    reservation, event = CancellationService.get_confirmation(db, code)

    return success_response(
        message="Reservation found",
        data=presenters.confirmation(reservation, event, config)
    )

@router.post("/cancel", dependencies=[Depends(enforce_rate_limit)])
async def cancel_reservation(
    cancel_data: CancelRequest,
    db: Session = Depends(get_db)
):
    """Cancel a reservation by its code"""
    reservation = CancellationService.cancel(db, cancel_data.reservation_code)

    return success_response(
        message="Your reservation has been cancelled",
        data={"reservation_code": reservation.reservation_code}
    )

@router.post("/lookup", dependencies=[Depends(enforce_rate_limit)])
async def lookup_reservations(
    lookup_data: ContactLookupRequest,
    db: Session = Depends(get_db)
):
    """Find active reservations by a submitted contact value"""
    reservations = CancellationService.find_by_contact(db, lookup_data.field_key, lookup_data.value)

    return success_response(
        message=f"{len(reservations)} active reservation(s) found",
        data=[presenters.reservation_response(r) for r in reservations]
    )
