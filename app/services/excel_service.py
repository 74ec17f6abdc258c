"""
Excel export of event registrants
"""

import io
from typing import Dict, List

import pandas as pd

from app.services.booking_service import PARTICIPATION_KEY
from app.services.event_service import EventRegistrants

class ExcelService:
    """Service for handling Excel operations"""

    SHEET_NAME = "Registrants"
    PARTICIPATION_COLUMN = "Participation Method"

    @staticmethod
    def columns(registrants: EventRegistrants) -> List[str]:
        columns = ["Reservation Code", "Registered At"] + [f.definition.label for f in registrants.fields]
        if registrants.event.parsed_participation_options or any(
            PARTICIPATION_KEY in r.data for r in registrants.reservations
        ):
            columns.append(ExcelService.PARTICIPATION_COLUMN)
        return columns

    @staticmethod
    def registrant_rows(registrants: EventRegistrants) -> List[Dict[str, str]]:
        """One row per active reservation, one column per active form field.

        Data keys the event no longer asks for are left out; fields the
        registrant skipped are blank.
        """
        with_participation = ExcelService.PARTICIPATION_COLUMN in ExcelService.columns(registrants)

        rows = []
        for reservation in registrants.reservations:
            data = reservation.data
            row = {
                "Reservation Code": reservation.reservation_code,
                "Registered At": reservation.created_at.strftime("%Y-%m-%d %H:%M") if reservation.created_at else "",
            }
            for field in registrants.fields:
                row[field.definition.label] = data.get(field.key, "")
            if with_participation:
                row[ExcelService.PARTICIPATION_COLUMN] = data.get(PARTICIPATION_KEY, "")
            rows.append(row)
        return rows

    @staticmethod
    def export_registrants(registrants: EventRegistrants) -> bytes:
        """Export active registrants of an event to an .xlsx workbook"""
        df = pd.DataFrame(
            ExcelService.registrant_rows(registrants),
            columns=ExcelService.columns(registrants),
        )

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=ExcelService.SHEET_NAME)

        return buffer.getvalue()
