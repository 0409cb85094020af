from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from helper import business_today

GuestCount = Literal["30-50", "50-75", "75-100", "100-150", "150-200", "200+"]


class EventType(str, Enum):
    WEDDING = "wedding"
    CORPORATE = "corporate"
    PARTY = "party"
    OTHER = "other"


class BookingStatus(str, Enum):
    NEW = "new"
    REPLIED = "replied"
    BOOKED = "booked"
    DECLINED = "declined"


class EventBooking(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    event_type: EventType
    event_date: date
    location: str = Field(min_length=1, max_length=200)
    guest_count: GuestCount
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("event_date")
    @classmethod
    def event_date_in_future(cls, value):
        if value <= business_today():
            raise ValueError("Event date must be in the future")
        return value


class EventBookingResponse(BaseModel):
    id: int
    name: str
    email: str
    event_type: EventType
    event_date: date
    location: str
    guest_count: str
    notes: Optional[str] = None
    status: BookingStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
