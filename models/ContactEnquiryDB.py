from sqlalchemy import Column, DateTime, Integer, String, Text

from models.Base import Base, utcnow

class ContactEnquiryDB(Base):
    __tablename__ = "contact_enquiries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    enquiry_type = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="new", index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
