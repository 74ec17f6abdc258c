"""
Admin API routes - event management and registrants
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.schemas.event import EventCreate, EventUpdate
from app.schemas.form_field import FieldDefinitionCreate, FieldDefinitionResponse
from app.services.capacity import CapacityService
from app.services.event_service import EventService
from app.services.excel_service import ExcelService
from app.services.field_catalog import FieldCatalog
from app.utils import presenters
from app.utils.responses import success_response

router = APIRouter()

event_service = EventService()

@router.get("/events")
async def list_events(
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """All events, newest first, with reservation counts"""
    events = CapacityService.list_events(db, newest_first=True)

    return success_response(
        message="Events retrieved successfully",
        data=[presenters.event_summary(item, config) for item in events]
    )

@router.post("/events")
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Create a new event"""
    event = event_service.create_event(db, event_data)
    item = CapacityService.for_event(db, event)

    return success_response(
        message="Event created successfully",
        data=presenters.event_summary(item, config),
        status_code=201
    )

@router.get("/events/{event_id}")
async def get_event_registrants(
    event_id: int,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Event details with its active registrants"""
    registrants = EventService.get_registrants(db, event_id)
    item = CapacityService.for_event(db, registrants.event)

    return success_response(
        message="Event details retrieved",
        data=presenters.event_registrants(item, registrants.fields, registrants.reservations, config)
    )

@router.put("/events/{event_id}")
async def update_event(
    event_id: int,
    event_data: EventUpdate,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Edit an event in place"""
    event = event_service.update_event(db, event_id, event_data)
    item = CapacityService.for_event(db, event)

    return success_response(
        message="Event updated successfully",
        data=presenters.event_summary(item, config)
    )

@router.delete("/events/{event_id}")
async def delete_event(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Cancel the event's reservations and remove the event"""
    cancelled = event_service.delete_event(db, event_id)

    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id, "cancelled_reservations": cancelled}
    )

@router.get("/events/{event_id}/export/registrants.xlsx")
async def export_registrants(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Download active registrants as an Excel workbook"""
    registrants = EventService.get_registrants(db, event_id)
    excel_content = ExcelService.export_registrants(registrants)

    return Response(
        content=excel_content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=registrants_event_{event_id}.xlsx"}
    )

@router.get("/form-fields")
async def list_form_fields(db: Session = Depends(get_db)):
    """Field catalog in display order"""
    fields = FieldCatalog.list_fields(db)

    return success_response(
        message="Form fields retrieved successfully",
        data=[FieldDefinitionResponse.model_validate(field) for field in fields]
    )

@router.post("/form-fields")
async def add_form_field(
    field_data: FieldDefinitionCreate,
    db: Session = Depends(get_db)
):
    """Add a field to the catalog"""
    field = FieldCatalog.add_field(db, **field_data.model_dump())

    return success_response(
        message="Form field added successfully",
        data=FieldDefinitionResponse.model_validate(field),
        status_code=201
    )
