"""Pydantic models for health signal readings"""
from pydantic import BaseModel, Field
from datetime import datetime, timezone


class HealthReading(BaseModel):
    """Synthetic or device-sourced health signal feeding passive drift"""

    steps: int = Field(ge=0)
    heart_rate: int = Field(gt=0, le=250)  # bpm
    sleep_hours: float = Field(ge=0, le=24)
    focus_minutes: int = Field(ge=0, le=1440)
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
