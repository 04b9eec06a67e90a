from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class Interview(Base):
    """Interview scheduled against an application by a recruiter."""

    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    scheduled_at = Column(DateTime, nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # minutes
    location = Column(String, nullable=True)  # can be a meeting URL
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="scheduled", index=True)  # scheduled | completed | cancelled

    # Relationships
    application = relationship("Application", back_populates="interviews")
