#!/usr/bin/env python3
"""
Scoring Service - Deterministic rule-based match scoring.

Scores a (Job, Talent) pair on four weighted dimensions:
- service category (30)
- skill overlap (40)
- experience level (20)
- availability (10)

The calculator is pure: no I/O, no hidden state, same inputs give the same
total and breakdown. Ranking helpers apply the hard score cutoff and the
result ordering used by the query service.
"""

from typing import List, Iterable
import logging

from core.scorer.models import JobProfile, TalentProfile, MatchBreakdown, ScoreResult, MatchResult
from core.scorer import components

logger = logging.getLogger(__name__)

# Results below this score are never returned to callers
MATCH_SCORE_CUTOFF = 50.0


class ScoreCalculator:
    """Calculates the match score between one job and one talent."""

    def score(self, job: JobProfile, talent: TalentProfile) -> ScoreResult:
        breakdown = MatchBreakdown(
            service_category=components.service_category_score(
                job.service_category, talent.service_category
            ),
            skill_overlap=components.skill_overlap_score(job.required_skills, talent.skills),
            experience_level=components.experience_level_score(
                job.experience_level, talent.experience_level
            ),
            availability=components.availability_score(talent.availability),
        )
        total = min(100.0, max(0.0, breakdown.total))
        return ScoreResult(total=total, breakdown=breakdown)

    def rank_talents_for_job(
        self,
        job: JobProfile,
        talents: Iterable[TalentProfile]
    ) -> List[MatchResult]:
        """Score every talent against the job; keep those at or above the cutoff."""
        results = []
        for talent in talents:
            scored = self.score(job, talent)
            results.append(MatchResult(
                subject_id=talent.id,
                subject_type='talent',
                score=scored.total,
                breakdown=scored.breakdown,
                subject_name=talent.name,
                subject_status=talent.status,
            ))
        return self._filter_and_sort(results)

    def rank_jobs_for_talent(
        self,
        talent: TalentProfile,
        jobs: Iterable[JobProfile]
    ) -> List[MatchResult]:
        """Score every job against the talent; keep those at or above the cutoff."""
        results = []
        for job in jobs:
            scored = self.score(job, talent)
            results.append(MatchResult(
                subject_id=job.id,
                subject_type='job',
                score=scored.total,
                breakdown=scored.breakdown,
                subject_name=job.title,
                subject_status=job.status,
            ))
        return self._filter_and_sort(results)

    @staticmethod
    def _filter_and_sort(results: List[MatchResult]) -> List[MatchResult]:
        kept = [r for r in results if r.score >= MATCH_SCORE_CUTOFF]
        # Score descending, ties by ascending subject id
        kept.sort(key=lambda r: (-r.score, r.subject_id))
        logger.debug(f"Kept {len(kept)}/{len(results)} candidates at or above {MATCH_SCORE_CUTOFF}")
        return kept


def calculate_match_score(job: JobProfile, talent: TalentProfile) -> ScoreResult:
    """Module-level convenience wrapper around ScoreCalculator.score."""
    return ScoreCalculator().score(job, talent)
