"""
Form field catalog model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime

from app.core.db import Base
from app.utils.serialization import parse_or_default

FIELD_TYPES = ("text", "email", "tel", "number", "select", "textarea")

class FieldDefinition(Base):
    __tablename__ = "form_field_definitions"

    id = Column(Integer, primary_key=True, index=True)
    field_key = Column(String(100), unique=True, nullable=False, index=True)
    label = Column(String(255), nullable=False)
    field_type = Column(String(20), nullable=False, default="text")
    field_options = Column(Text, nullable=True)  # JSON list, select only
    placeholder = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def options(self):
        if self.field_type != "select":
            return None
        return parse_or_default(self.field_options, [])

    def __repr__(self) -> str:
        return f"<FieldDefinition(key={self.field_key}, type={self.field_type}, order={self.sort_order})>"
