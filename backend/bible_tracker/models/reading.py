import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from bible_tracker.core.database import Base


class BibleReading(Base):
    """One logged act of reading, owned by a single user."""
    __tablename__ = "bible_readings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    bible_book = Column(String, nullable=False)
    # Free text, e.g. "1-3, 5"
    chapters = Column(String, nullable=False)
    verses = Column(String, nullable=True)
    date_read = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", backref="readings")
