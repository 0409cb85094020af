from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExceptionType(str, Enum):
    NOT_TRADING = "not-trading"
    PRIVATE_EVENT = "private-event"


class ScheduleException(BaseModel):
    id: Optional[int] = None
    date: date
    type: ExceptionType
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
