import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Text, TIMESTAMP, Index

from core.constants import JobStatus
from .base import Base, JSONList


def _utcnow():
    return datetime.now(timezone.utc)


class Job(Base):
    __tablename__ = 'job'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Core Identity
    title = Column(Text, nullable=False)
    description = Column(Text)
    status = Column(Text, nullable=False, default=JobStatus.DRAFT.value)  # DRAFT|PENDING|PUBLISHED|CLOSED|ARCHIVED

    # === Matchable Fields ===
    service_category = Column(Text, nullable=False)
    required_skills = Column(JSONList, nullable=False, default=list)  # ordered, duplicates allowed
    experience_level = Column(Text)
    engagement_type = Column(Text)
    duration = Column(Text)

    created_by_telegram_id = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    published_at = Column(TIMESTAMP(timezone=True))

    __table_args__ = (
        Index('idx_job_status', 'status'),
    )

    def __repr__(self):
        return f"<Job {self.id} {self.title!r} {self.status}>"
