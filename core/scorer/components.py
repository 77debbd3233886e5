#!/usr/bin/env python3
"""
Component Scores - One function per match dimension.

Each function returns points already scaled to its weight, so the total
score is the plain sum of the four components.
"""

from typing import List, Optional, Set

from core.constants import AvailabilityStatus, EXPERIENCE_ORDER
from core.scorer.models import Category

WEIGHT_SERVICE_CATEGORY = 30.0
WEIGHT_SKILL_OVERLAP = 40.0
WEIGHT_EXPERIENCE_LEVEL = 20.0
WEIGHT_AVAILABILITY = 10.0


def _category_set(category: Category) -> Set[str]:
    if category is None:
        return set()
    if isinstance(category, (list, tuple, set)):
        return {str(c) for c in category if c}
    return {str(category)} if category else set()


def _normalize_skill(skill: str) -> str:
    return skill.strip().lower()


def service_category_score(job_category: Category, talent_category: Category) -> float:
    """Full weight when the categories are equal or, for lists, intersect."""
    if _category_set(job_category) & _category_set(talent_category):
        return WEIGHT_SERVICE_CATEGORY
    return 0.0


def skill_overlap_score(required_skills: List[str], talent_skills: List[str]) -> float:
    """
    40 * matched / required, capped at 40.

    Comparison is case-insensitive and ignores surrounding whitespace. Every
    entry of required_skills counts, duplicates included.
    """
    if not required_skills:
        return 0.0

    talent_set = {_normalize_skill(s) for s in talent_skills}
    matched = sum(1 for skill in required_skills if _normalize_skill(skill) in talent_set)

    return min(WEIGHT_SKILL_OVERLAP, WEIGHT_SKILL_OVERLAP * matched / len(required_skills))


def experience_level_score(job_level: Optional[str], talent_level: Optional[str]) -> float:
    """Full weight on exact match, half weight one step away, else 0."""
    if job_level not in EXPERIENCE_ORDER or talent_level not in EXPERIENCE_ORDER:
        return 0.0

    distance = abs(EXPERIENCE_ORDER.index(job_level) - EXPERIENCE_ORDER.index(talent_level))
    if distance == 0:
        return WEIGHT_EXPERIENCE_LEVEL
    if distance == 1:
        return WEIGHT_EXPERIENCE_LEVEL / 2
    return 0.0


def availability_score(talent_availability: Optional[str]) -> float:
    # Jobs carry no availability requirement; only the talent side is checked.
    if talent_availability == AvailabilityStatus.AVAILABLE.value:
        return WEIGHT_AVAILABILITY
    return 0.0
