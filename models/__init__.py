from .Base import Base
from .BlogPost import BlogPost, ContentBlock, ImageBlock, ParagraphBlock
from .BlogPostDB import BlogPostDB
from .ContactEnquiry import ContactEnquiry, ContactEnquiryResponse, ContactStatusUpdate, EnquiryStatus, EnquiryType
from .ContactEnquiryDB import ContactEnquiryDB
from .EventBooking import BookingStatus, BookingStatusUpdate, EventBooking, EventBookingResponse, EventType
from .EventBookingDB import EventBookingDB
from .Location import Location, LocationSlot, SeedRequest, SlotState
from .LocationDB import LocationDB
from .MenuItem import MenuItem
from .ScheduleException import ExceptionType, ScheduleException
from .ScheduleExceptionDB import ScheduleExceptionDB
from .User import Token, User
from .UserDB import UserDB
