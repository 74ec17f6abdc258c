"""
Event-related Pydantic schemas
"""

import datetime as dt
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.core.config import settings

VenueType = Literal["physical", "online"]

def _split_options(value: Any) -> Any:
    """Accept a newline-separated string or a list; drop blank entries"""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.splitlines()
    if isinstance(value, list):
        return [str(option).strip() for option in value if str(option).strip()]
    return value

class FormFieldSetting(BaseModel):
    """Per-event setting for one catalog field"""
    required: bool = False

class EventCreate(BaseModel):
    """Schema for creating an event"""
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    date: dt.date
    time: dt.time
    capacity: int = Field(default_factory=lambda: settings.DEFAULT_EVENT_CAPACITY, ge=1)
    event_type: str = Field(default="business", min_length=1, max_length=50)
    participation_options: Optional[List[str]] = None
    form_fields: Dict[str, FormFieldSetting] = Field(default_factory=dict)
    venue_type: VenueType = "physical"
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    online_meeting_url: Optional[str] = None
    online_meeting_id: Optional[str] = None
    online_meeting_password: Optional[str] = None

    @field_validator("participation_options", mode="before")
    @classmethod
    def split_participation_options(cls, value):
        return _split_options(value)

class EventUpdate(BaseModel):
    """Schema for editing an event; omitted fields stay unchanged"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    event_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    participation_options: Optional[List[str]] = None
    form_fields: Optional[Dict[str, FormFieldSetting]] = None
    venue_type: Optional[VenueType] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    online_meeting_url: Optional[str] = None
    online_meeting_id: Optional[str] = None
    online_meeting_password: Optional[str] = None

    @field_validator("participation_options", mode="before")
    @classmethod
    def split_participation_options(cls, value):
        return _split_options(value)

    @field_validator("title", "date", "time", "capacity", "event_type", "venue_type", mode="before")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

class VenueInfo(BaseModel):
    venue_type: str
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    online_meeting_url: Optional[str] = None
    online_meeting_id: Optional[str] = None
    online_meeting_password: Optional[str] = None

class EventSummary(BaseModel):
    """Event with freshly computed availability"""
    id: int
    title: str
    description: str
    date: dt.date
    time: dt.time
    formatted_date: str
    formatted_time: str
    capacity: int
    event_type: str
    participation_options: List[str]
    reserved_count: int
    available_count: int
    is_full: bool
    venue: VenueInfo

class ActiveFieldResponse(BaseModel):
    """A form field as rendered for one event"""
    key: str
    label: str
    type: str
    options: Optional[List[str]] = None
    placeholder: Optional[str] = None
    description: Optional[str] = None
    sort_order: int
    required: bool

class EventDetail(EventSummary):
    """Event with the form fields a visitor fills in"""
    form_fields: List[ActiveFieldResponse]

class RegistrantResponse(BaseModel):
    code: str
    created_at: Optional[dt.datetime] = None
    data: Dict[str, Any]

class EventRegistrantsResponse(EventDetail):
    registrants: List[RegistrantResponse]
