#!/usr/bin/env python3
"""
Scoring Module - Deterministic Job/Talent match scoring.

Public API:
- ScoreCalculator: scores one pair and ranks candidate sets
- calculate_match_score: functional wrapper
- MATCH_SCORE_CUTOFF: minimum score returned to callers

Module layout:
- models.py: JobProfile, TalentProfile, MatchBreakdown, ScoreResult, MatchResult
- components.py: one weighted function per match dimension
- service.py: ScoreCalculator orchestrator and ranking helpers
"""

from core.scorer.models import (
    JobProfile,
    TalentProfile,
    MatchBreakdown,
    ScoreResult,
    MatchResult,
)
from core.scorer.service import ScoreCalculator, calculate_match_score, MATCH_SCORE_CUTOFF

__all__ = [
    'ScoreCalculator',
    'calculate_match_score',
    'MATCH_SCORE_CUTOFF',
    'JobProfile',
    'TalentProfile',
    'MatchBreakdown',
    'ScoreResult',
    'MatchResult',
]
