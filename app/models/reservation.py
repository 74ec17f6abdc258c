"""
Reservation model
"""

import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime

from app.core.db import Base
from app.utils.serialization import parse_or_default

class ReservationStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"

class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, nullable=False, index=True)
    reservation_data = Column(Text, nullable=False, default="{}")
    reservation_code = Column(String(32), unique=True, nullable=False, index=True)
    status = Column(String(16), nullable=False, default=ReservationStatus.ACTIVE.value, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    cancelled_at = Column(DateTime, nullable=True)

    @property
    def data(self):
        return parse_or_default(self.reservation_data, {})

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE.value

    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, event={self.event_id}, code={self.reservation_code}, status={self.status})>"
