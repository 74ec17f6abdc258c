"""
Demo events for a fresh database
"""

import logging
from datetime import date, time, timedelta

from sqlalchemy.orm import Session

from app.schemas.event import EventCreate
from app.services.event_service import EventService
from app.services.repositories import EventRepo

logger = logging.getLogger(__name__)

def sample_events(today: date):
    return [
        EventCreate(
            title="Digital Transformation Basics",
            description="An introductory seminar on digital transformation.",
            date=today + timedelta(days=14),
            time=time(14, 0),
            event_type="business",
            form_fields={
                "participant_name": {"required": True},
                "company_name": {"required": True},
                "position": {"required": True},
                "contact_info": {"required": True},
            },
            venue_type="online",
            online_meeting_url="https://meet.example.com/dx-basics",
        ),
        EventCreate(
            title="AI in Business",
            description="How to put AI to work in everyday business.",
            date=today + timedelta(days=21),
            time=time(10, 0),
            event_type="business",
            form_fields={
                "participant_name": {"required": True},
                "company_name": {"required": True},
                "position": {"required": True},
                "email": {"required": True},
            },
            venue_name="Conference Room A",
            venue_address="1 Market Street",
        ),
        EventCreate(
            title="Barbecue Meetup",
            description="Grilled meat, burgers and roast beef with friends.",
            date=today + timedelta(days=7),
            time=time(11, 45),
            event_type="personal",
            participation_options=["BBQ buffet $58", "Grilled burger $18", "Roast beef $25"],
            form_fields={
                "participant_name": {"required": True},
                "contact_info": {"required": True},
                "age": {"required": False},
                "dietary_restrictions": {"required": False},
            },
            venue_name="Riverside Park",
        ),
    ]

def seed_sample_events(db: Session, service: EventService, today: date = None) -> int:
    """Create the demo events when no event exists yet"""
    if EventRepo.list_with_counts(db):
        return 0
    events = sample_events(today or date.today())
    for event_data in events:
        service.create_event(db, event_data)
    logger.info(f"Seeded {len(events)} sample events")
    return len(events)
