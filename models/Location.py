from datetime import date, time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class SlotState(str, Enum):
    CLOSED = "closed"
    SCHEDULED_AHEAD = "scheduled_ahead"
    PAST = "past"


class Location(BaseModel):
    """Admin input for a single trading appearance."""
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    date: date
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    what3words: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = True

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, value, info):
        start = info.data.get("start_time")
        # zero-padded HH:MM compares correctly as text
        if start is not None and value <= start:
            raise ValueError("End time must be after start time")
        return value

    def as_row(self) -> dict:
        row = self.model_dump()
        row["start_time"] = time.fromisoformat(self.start_time)
        row["end_time"] = time.fromisoformat(self.end_time)
        row["description"] = self.description or None
        row["what3words"] = self.what3words or None
        return row


class LocationSlot(BaseModel):
    """A resolved trading slot as served to the public site."""
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    date: date
    start_time: str
    end_time: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    what3words: Optional[str] = None
    is_active: bool = True
    display_date: str
    display_time: str


class SeedRequest(BaseModel):
    start: Optional[date] = None
    days: Optional[int] = Field(default=None, ge=1, le=366)
