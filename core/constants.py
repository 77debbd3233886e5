"""Shared enums and fixed values for the matching and notification core."""
from enum import Enum


class JobStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"  # Awaiting approval
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"
    ARCHIVED = "ARCHIVED"


class TalentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    HIRED = "HIRED"
    INACTIVE = "INACTIVE"


class ExperienceLevel(str, Enum):
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    ARCHITECT = "ARCHITECT"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"
    UNAVAILABLE = "UNAVAILABLE"


class EngagementType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    FREELANCE = "FREELANCE"
    PROJECT_BASED = "PROJECT_BASED"


# Ordinal scale used for adjacency credit
EXPERIENCE_ORDER = [
    ExperienceLevel.JUNIOR.value,
    ExperienceLevel.MID.value,
    ExperienceLevel.SENIOR.value,
    ExperienceLevel.LEAD.value,
    ExperienceLevel.ARCHITECT.value,
]

# Fields whose change must invalidate cached match results
TALENT_MATCHABLE_FIELDS = frozenset({
    'status', 'skills', 'service_category', 'experience_level', 'availability',
})
JOB_MATCHABLE_FIELDS = frozenset({
    'status', 'required_skills', 'service_category', 'experience_level', 'engagement_type',
})
