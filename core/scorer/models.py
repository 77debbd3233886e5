#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring inputs and results.

JobProfile / TalentProfile are the read-only projections the calculator
works on; MatchResult is what the query service returns and caches.
"""

from typing import List, Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict


Category = Union[str, List[str], None]


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value]
    return [str(value)]


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, 'value', value)


@dataclass
class JobProfile:
    """Matchable projection of a Job record."""
    id: str
    service_category: Category = None
    required_skills: List[str] = field(default_factory=list)
    experience_level: Optional[str] = None
    engagement_type: Optional[str] = None
    status: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_record(cls, job: Any) -> 'JobProfile':
        return cls(
            id=str(job.id),
            service_category=job.service_category,
            required_skills=_as_list(job.required_skills),
            experience_level=_enum_value(job.experience_level),
            engagement_type=_enum_value(job.engagement_type),
            status=_enum_value(job.status),
            title=job.title,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JobProfile':
        return cls(
            id=str(data['id']),
            service_category=data.get('service_category'),
            required_skills=_as_list(data.get('required_skills')),
            experience_level=_enum_value(data.get('experience_level')),
            engagement_type=_enum_value(data.get('engagement_type')),
            status=_enum_value(data.get('status')),
            title=data.get('title'),
        )


@dataclass
class TalentProfile:
    """Matchable projection of a Talent record."""
    id: str
    service_category: Category = None
    skills: List[str] = field(default_factory=list)
    experience_level: Optional[str] = None
    availability: Optional[str] = None
    status: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_record(cls, talent: Any) -> 'TalentProfile':
        return cls(
            id=str(talent.id),
            service_category=talent.service_category,
            skills=_as_list(talent.skills),
            experience_level=_enum_value(talent.experience_level),
            availability=_enum_value(talent.availability),
            status=_enum_value(talent.status),
            name=talent.name,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TalentProfile':
        return cls(
            id=str(data['id']),
            service_category=data.get('service_category'),
            skills=_as_list(data.get('skills')),
            experience_level=_enum_value(data.get('experience_level')),
            availability=_enum_value(data.get('availability')),
            status=_enum_value(data.get('status')),
            name=data.get('name'),
        )


@dataclass
class MatchBreakdown:
    """Per-dimension sub-scores; their sum is the total score."""
    service_category: float = 0.0
    skill_overlap: float = 0.0
    experience_level: float = 0.0
    availability: float = 0.0

    @property
    def total(self) -> float:
        return self.service_category + self.skill_overlap + self.experience_level + self.availability

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class ScoreResult:
    total: float
    breakdown: MatchBreakdown


@dataclass
class MatchResult:
    """A scored candidate as returned to callers (talent- or job-shaped)."""
    subject_id: str
    subject_type: str  # 'talent' | 'job'
    score: float
    breakdown: MatchBreakdown
    subject_name: Optional[str] = None
    subject_status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'subject_id': self.subject_id,
            'subject_type': self.subject_type,
            'subject_name': self.subject_name,
            'subject_status': self.subject_status,
            'score': self.score,
            'breakdown': self.breakdown.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchResult':
        return cls(
            subject_id=data['subject_id'],
            subject_type=data['subject_type'],
            score=float(data['score']),
            breakdown=MatchBreakdown(**data['breakdown']),
            subject_name=data.get('subject_name'),
            subject_status=data.get('subject_status'),
        )
