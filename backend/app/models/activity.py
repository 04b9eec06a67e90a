from sqlalchemy import Column, DateTime, Integer, JSON, String

from app.db.base import Base, utcnow


class Activity(Base):
    """
    Append-only audit trail entry.

    Powers the recent-activity feed and the admin activity log. ``user_id`` is
    the acting user and has no foreign key: entries
    outlive the accounts that produced them.
    """

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    type = Column(String, nullable=False, index=True)  # "job_created", "candidate_stage_changed", ...

    # camelCase payload, shape depends on ``type``
    details = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
