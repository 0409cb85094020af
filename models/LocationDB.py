from sqlalchemy import Boolean, Column, Date, DateTime, Float, Index, Integer, String, Text, Time, text

from models.Base import Base, utcnow

# at most one active location per date, inactive drafts may share it
ACTIVE_DATE_INDEX = "uq_locations_active_date"

class LocationDB(Base):
    __tablename__ = "locations"
    __table_args__ = (
        Index(
            ACTIVE_DATE_INDEX,
            "date",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    # civil date and wall-clock times at the pitch, never combined into a timestamp
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    what3words = Column(String(100))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
