#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Union

from core.constants import ExperienceLevel, AvailabilityStatus, EngagementType


class TalentUpdate(BaseModel):
    """Partial update of a talent profile. Status changes go through /approve."""
    name: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = None
    role_specialization: Optional[str] = None
    service_category: Optional[Union[str, List[str]]] = Field(
        None,
        description="A single category or a list of categories"
    )
    skills: Optional[List[str]] = None
    experience_level: Optional[ExperienceLevel] = None
    availability: Optional[AvailabilityStatus] = None


class JobUpdate(BaseModel):
    """Partial update of a job. Status changes go through /publish."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    service_category: Optional[str] = None
    required_skills: Optional[List[str]] = None
    experience_level: Optional[ExperienceLevel] = None
    engagement_type: Optional[EngagementType] = None
    duration: Optional[str] = None
