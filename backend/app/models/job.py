from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Job(Base):
    """Job posting owned by the recruiter who created it."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    salary = Column(String, nullable=True)
    requirements = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="open", index=True)  # open | paused | closed
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    applications = relationship("Application", back_populates="job")
