#!/usr/bin/env python3
"""
Matching endpoints - ranked talents for a job and ranked jobs for a talent.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from core.cache import MatchCacheService
from core.matching import MatchQueryService
from ..dependencies import get_match_query_service, get_match_cache
from ..models.responses import MatchResultResponse, CacheStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching", tags=["matching"])


@router.get("/jobs/{job_id}/talents", response_model=List[MatchResultResponse])
def get_talents_for_job(
    job_id: str,
    service: MatchQueryService = Depends(get_match_query_service)
):
    """
    Talents matching a job, best first.

    Only talents scoring at least 50 are returned. 404 if the job does not exist.
    """
    results = service.matches_for_job(job_id)
    return [result.to_dict() for result in results]


@router.get("/talents/{talent_id}/jobs", response_model=List[MatchResultResponse])
def get_jobs_for_talent(
    talent_id: str,
    service: MatchQueryService = Depends(get_match_query_service)
):
    """
    Jobs matching a talent, best first.

    Only jobs scoring at least 50 are returned. 404 if the talent does not exist.
    """
    results = service.matches_for_talent(talent_id)
    return [result.to_dict() for result in results]


@router.get("/cache/stats", response_model=CacheStatsResponse)
def get_cache_stats(cache: MatchCacheService = Depends(get_match_cache)):
    return cache.get_cache_stats()
