"""
Domain exceptions raised by the booking services
"""

from typing import List, Optional


class BookingSystemError(Exception):
    """Base class for errors the API layer knows how to render"""

    status_code = 400
    error_code = "booking_error"

    def __init__(self, message: str, details: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class EventNotFoundError(BookingSystemError):
    status_code = 404
    error_code = "event_not_found"

    def __init__(self, event_id: int):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class EventFullError(BookingSystemError):
    status_code = 409
    error_code = "event_full"

    def __init__(self, event_id: int):
        super().__init__("Sorry, this event has reached its capacity.")
        self.event_id = event_id


class BookingValidationError(BookingSystemError):
    """Required fields were missing or blank; carries every missing key"""

    status_code = 422
    error_code = "validation_error"

    def __init__(self, missing_fields: List[str]):
        super().__init__(
            "Required fields are missing: " + ", ".join(missing_fields),
            details={"missing_fields": list(missing_fields)},
        )
        self.missing_fields = list(missing_fields)


class CodeCollisionError(BookingSystemError):
    """A generated reservation code already exists; regenerate and retry"""

    status_code = 500
    error_code = "code_collision"

    def __init__(self, code: str):
        super().__init__(f"Reservation code {code} already in use")
        self.code = code


class ReservationNotFoundError(BookingSystemError):
    """No active reservation matches the code.

    Unknown codes and already-cancelled codes are reported the same way so
    callers cannot probe which codes were ever issued.
    """

    status_code = 404
    error_code = "reservation_not_found"

    def __init__(self):
        super().__init__("No active reservation found for this code")


class PartialDeletionError(BookingSystemError):
    status_code = 500
    error_code = "partial_failure"

    def __init__(self, event_id: int, cancelled_count: int):
        super().__init__(
            f"Reservations for event {event_id} were cancelled but the event could not be removed; retry the deletion",
            details={"event_id": event_id, "cancelled_count": cancelled_count},
        )
        self.event_id = event_id
        self.cancelled_count = cancelled_count


class FieldCatalogError(BookingSystemError):
    """Invalid field catalog configuration"""

    status_code = 500
    error_code = "field_catalog_error"


class FieldKeyConflictError(BookingSystemError):
    status_code = 409
    error_code = "field_key_conflict"

    def __init__(self, key: str):
        super().__init__(f"Form field '{key}' already exists")
        self.key = key


class StoreError(BookingSystemError):
    status_code = 500
    error_code = "store_error"


class UnknownFormFieldError(BookingSystemError):
    """An event form schema names keys the field catalog does not define"""

    status_code = 422
    error_code = "unknown_form_fields"

    def __init__(self, unknown_fields: List[str]):
        super().__init__(
            "Unknown form fields: " + ", ".join(unknown_fields),
            details={"unknown_fields": list(unknown_fields)},
        )
        self.unknown_fields = list(unknown_fields)
