"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Date, Time, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.utils.serialization import parse_or_default

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    capacity = Column(Integer, nullable=False, default=5)
    event_type = Column(String(50), nullable=False, default="business")
    participation_options = Column(Text, nullable=True)  # JSON list of strings
    form_fields = Column(Text, nullable=True)  # JSON {field_key: {"required": bool}}

    # Venue
    venue_type = Column(String(20), nullable=False, default="physical")  # physical, online
    venue_name = Column(String(255), nullable=True)
    venue_address = Column(String(500), nullable=True)
    online_meeting_url = Column(String(500), nullable=True)
    online_meeting_id = Column(String(100), nullable=True)
    online_meeting_password = Column(String(100), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Reservations outlive their event, so there is no FK and no cascade
    reservations = relationship(
        "Reservation",
        primaryjoin="Event.id == foreign(Reservation.event_id)",
        viewonly=True,
        order_by="Reservation.created_at",
    )

    @property
    def parsed_participation_options(self):
        return parse_or_default(self.participation_options, [])

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, capacity={self.capacity})>"
