#!/usr/bin/env python3
"""
Match Query Service - cache-aside orchestration of match scoring.

For a job (or talent) query:
1. The subject must exist, otherwise RecordNotFoundError (cache untouched).
2. A cache hit is returned unchanged.
3. On a miss, or when the cache is unavailable, every candidate of the
   opposite kind is scored, results below the cutoff are dropped, the rest
   sorted by score (ties by ascending id), cached, and returned.

Recomputation is not isolated from concurrent writes: two concurrent misses
for the same key both recompute and the last cache write wins.
"""

import logging
from typing import List, Optional, Any

from core.cache.match_cache import MatchCacheService, job_key, talent_key
from core.exceptions import RecordNotFoundError
from core.scorer import ScoreCalculator, JobProfile, TalentProfile, MatchResult
from database.record_store import RecordStore

logger = logging.getLogger(__name__)


class MatchQueryService:
    """Answers match queries for jobs and talents."""

    def __init__(
        self,
        store: RecordStore,
        cache: MatchCacheService,
        calculator: Optional[ScoreCalculator] = None
    ):
        self.store = store
        self.cache = cache
        self.calculator = calculator or ScoreCalculator()

    def matches_for_job(self, job_id: Any) -> List[MatchResult]:
        """Talents matching the job, best first."""
        job = self.store.get_job(job_id)
        if job is None:
            raise RecordNotFoundError('job', str(job_id))

        key = job_key(job.id)
        cached = self.cache.get(key)
        if cached.is_hit:
            return cached.value

        logger.info(f"Computing talent matches for job {job.id} (cache {cached.status.value})")
        profile = JobProfile.from_record(job)
        candidates = [TalentProfile.from_record(t) for t in self.store.list_talents()]
        results = self.calculator.rank_talents_for_job(profile, candidates)

        self.cache.put(key, results)
        return results

    def matches_for_talent(self, talent_id: Any) -> List[MatchResult]:
        """Jobs matching the talent, best first."""
        talent = self.store.get_talent(talent_id)
        if talent is None:
            raise RecordNotFoundError('talent', str(talent_id))

        key = talent_key(talent.id)
        cached = self.cache.get(key)
        if cached.is_hit:
            return cached.value

        logger.info(f"Computing job matches for talent {talent.id} (cache {cached.status.value})")
        profile = TalentProfile.from_record(talent)
        candidates = [JobProfile.from_record(j) for j in self.store.list_jobs()]
        results = self.calculator.rank_jobs_for_talent(profile, candidates)

        self.cache.put(key, results)
        return results
