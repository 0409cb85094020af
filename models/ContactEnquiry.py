from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class EnquiryType(str, Enum):
    GENERAL = "general"
    PRIVATE_HIRE = "private-hire"
    EVENT = "event"
    FEEDBACK = "feedback"


class EnquiryStatus(str, Enum):
    NEW = "new"
    READ = "read"
    ARCHIVED = "archived"


class ContactEnquiry(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    enquiry_type: EnquiryType
    message: str = Field(min_length=10, max_length=2000)


class ContactEnquiryResponse(BaseModel):
    id: int
    name: str
    email: str
    enquiry_type: EnquiryType
    message: str
    status: EnquiryStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContactStatusUpdate(BaseModel):
    status: EnquiryStatus
