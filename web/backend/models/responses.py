#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union, Dict, Any


class MatchBreakdownResponse(BaseModel):
    """Per-dimension sub-scores; they sum to the match score."""
    service_category: float = Field(ge=0, le=30)
    skill_overlap: float = Field(ge=0, le=40)
    experience_level: float = Field(ge=0, le=20)
    availability: float = Field(ge=0, le=10)


class MatchResultResponse(BaseModel):
    """A scored talent (for a job query) or job (for a talent query)."""
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "subject_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "subject_type": "talent",
                "subject_name": "Ada Lovelace",
                "subject_status": "APPROVED",
                "score": 90.0,
                "breakdown": {
                    "service_category": 30.0,
                    "skill_overlap": 40.0,
                    "experience_level": 10.0,
                    "availability": 10.0
                }
            }
        }
    )

    subject_id: str
    subject_type: str
    subject_name: Optional[str] = None
    subject_status: Optional[str] = None
    score: float = Field(ge=0, le=100)
    breakdown: MatchBreakdownResponse


class TalentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    telegram_id: Optional[str] = None
    name: str
    bio: Optional[str] = None
    role_specialization: Optional[str] = None
    status: str
    service_category: Union[str, List[str]]
    skills: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    availability: Optional[str] = None
    approved_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    status: str
    service_category: str
    required_skills: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    engagement_type: Optional[str] = None
    duration: Optional[str] = None
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublishJobResponse(BaseModel):
    success: bool
    job: JobResponse
    notifications_enqueued: int = Field(ge=0)


class QueueStatusResponse(BaseModel):
    status: str
    queues: Optional[Dict[str, Dict[str, int]]] = None
    completed: Optional[int] = None
    failed: Optional[int] = None
    error: Optional[str] = None


class CacheStatsResponse(BaseModel):
    available: bool
    used_memory_human: Optional[str] = None
    match_cache_keys: Optional[int] = None
    ttl_seconds: Optional[int] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    details: Dict[str, Any] = Field(default_factory=dict)
