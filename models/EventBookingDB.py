from sqlalchemy import Column, Date, DateTime, Integer, String, Text

from models.Base import Base, utcnow

class EventBookingDB(Base):
    __tablename__ = "event_bookings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    event_type = Column(String(20), nullable=False)
    event_date = Column(Date, nullable=False)
    location = Column(String(200), nullable=False)
    guest_count = Column(String(10), nullable=False)
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="new", index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
