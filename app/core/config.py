"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./event_booking.db")
    SEED_SAMPLE_EVENTS: bool = os.getenv("SEED_SAMPLE_EVENTS", "false").lower() in ("1", "true", "yes")

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Booking
    DEFAULT_EVENT_CAPACITY: int = 5
    RESERVATION_CODE_LENGTH: int = 8
    RESERVATION_CODE_ATTEMPTS: int = 5
    DATE_DISPLAY_FORMAT: str = "%B %d, %Y"

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    class Config:
        env_file = ".env"

settings = Settings()

def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings"""
    return settings
