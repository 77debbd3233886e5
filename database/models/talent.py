import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Text, TIMESTAMP, Index

from core.constants import TalentStatus, AvailabilityStatus
from .base import Base, JSONList


def _utcnow():
    return datetime.now(timezone.utc)


class Talent(Base):
    """
    A talent profile submitted through the bot.

    service_category holds either a single category string or a list of
    categories; the scorer accepts both shapes.
    """
    __tablename__ = 'talent'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    telegram_id = Column(Text, unique=True)

    name = Column(Text, nullable=False)
    bio = Column(Text)
    role_specialization = Column(Text)
    status = Column(Text, nullable=False, default=TalentStatus.PENDING.value)  # PENDING|APPROVED|REJECTED|HIRED|INACTIVE

    # === Matchable Fields ===
    service_category = Column(JSONList, nullable=False)
    skills = Column(JSONList, nullable=False, default=list)
    experience_level = Column(Text)
    availability = Column(Text, default=AvailabilityStatus.AVAILABLE.value)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    approved_at = Column(TIMESTAMP(timezone=True))

    __table_args__ = (
        Index('idx_talent_status', 'status'),
    )

    def __repr__(self):
        return f"<Talent {self.id} {self.name!r} {self.status}>"
