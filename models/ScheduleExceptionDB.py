from sqlalchemy import Column, Date, DateTime, Integer, String, Text

from models.Base import Base, utcnow

class ScheduleExceptionDB(Base):
    __tablename__ = "schedule_exceptions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    type = Column(String(20), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
