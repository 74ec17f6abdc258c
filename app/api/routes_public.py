"""
Public API routes - event browsing
"""

from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.exceptions import EventNotFoundError
from app.services.capacity import CapacityService
from app.services.form_schema import fields_for_event
from app.services.qr_service import QRService
from app.services.repositories import EventRepo
from app.utils import presenters
from app.utils.responses import success_response

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/events")
async def list_upcoming_events(
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Upcoming events with remaining capacity"""
    events = CapacityService.list_events(db, upcoming_from=date.today())

    return success_response(
        message="Events retrieved successfully",
        data=[presenters.event_summary(item, config) for item in events]
    )

@router.get("/events/{event_id}")
async def get_event_form(
    event_id: int,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Event details and the booking form fields"""
    event = EventRepo.get_by_id(db, event_id)
    if not event:
        raise EventNotFoundError(event_id)

    item = CapacityService.for_event(db, event)

    return success_response(
        message="Event retrieved successfully",
        data=presenters.event_detail(item, fields_for_event(db, event), config)
    )

@router.get("/events/{event_id}/qr.png")
async def get_qr_code(
    event_id: int,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Get QR code image linking to the event's booking page"""
    if not EventRepo.get_by_id(db, event_id):
        raise EventNotFoundError(event_id)

    qr_bytes = QRService(config).generate_event_qr(event_id)

    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_event_{event_id}.png"}
    )
