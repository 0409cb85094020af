from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from models.Base import Base, utcnow

class BlogPostDB(Base):
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    title = Column(String(200), nullable=False)
    excerpt = Column(String(500), nullable=False)
    content = Column(JSON, nullable=False)
    featured_image_url = Column(Text)
    reading_time = Column(Integer, nullable=False, default=5)
    tags = Column(JSON, nullable=False, default=list)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True))
    seo_title = Column(String(70))
    seo_description = Column(String(160))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
