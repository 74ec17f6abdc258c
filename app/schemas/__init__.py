"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .form_field import *
from .reservation import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "FormFieldSetting",
    "EventCreate",
    "EventUpdate",
    "VenueInfo",
    "EventSummary",
    "ActiveFieldResponse",
    "EventDetail",
    "RegistrantResponse",
    "EventRegistrantsResponse",
    "FieldDefinitionCreate",
    "FieldDefinitionResponse",
    "BookingSubmission",
    "BookingResult",
    "CancelRequest",
    "ContactLookupRequest",
    "ReservationResponse",
    "ConfirmationResponse",
]
