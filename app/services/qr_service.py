"""
QR code generation service
"""

import io
import qrcode

from app.core.config import Settings

class QRService:
    """Service for generating QR codes pointing at an event's booking page"""

    def __init__(self, config: Settings):
        self.config = config

    def get_booking_url(self, event_id: int) -> str:
        """Get the URL that the QR code will redirect to"""
        return f"{self.config.BASE_URL.rstrip('/')}/events/{event_id}"

    def generate_event_qr(self, event_id: int, format: str = 'PNG') -> bytes:
        """Generate QR code for an event's booking page"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(self.get_booking_url(event_id))
        qr.make(fit=True)

        # Create QR code image
        img = qr.make_image(fill_color="black", back_color="white")

        # Convert to bytes
        buffer = io.BytesIO()
        img.save(buffer, format=format)

        return buffer.getvalue()
