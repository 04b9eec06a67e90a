from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Candidate(Base):
    """Candidate profile and current hiring-funnel stage."""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    resume_url = Column(String, nullable=True)  # Resolved by the upload collaborator
    education = Column(String, nullable=True)
    experience = Column(String, nullable=True)

    # Ordered list of skill names, e.g. ["Python", "React"]
    skills = Column(JSON, default=list)

    # applied | screening | interview | offer | hired | rejected
    stage = Column(String, nullable=False, default="applied", index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="candidate_profile")
    applications = relationship("Application", back_populates="candidate")
