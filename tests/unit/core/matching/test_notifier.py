"""Tests for MatchNotifier."""
from unittest.mock import MagicMock

from core.matching import MatchNotifier
from core.scorer import MatchResult, MatchBreakdown


def result(subject_id, score, status):
    return MatchResult(
        subject_id=subject_id,
        subject_type="talent",
        score=score,
        breakdown=MatchBreakdown(30.0, score - 30.0, 0.0, 0.0),
        subject_status=status,
    )


def test_enqueues_only_approved_talents():
    query_service = MagicMock()
    query_service.matches_for_job.return_value = [
        result("t-1", 90.0, "APPROVED"),
        result("t-2", 70.0, "PENDING"),
        result("t-3", 60.0, "APPROVED"),
    ]
    queue_client = MagicMock()

    count = MatchNotifier(query_service, queue_client).notify_for_job("job-1")

    assert count == 2
    queue_client.enqueue_notify_talent.assert_any_call("t-1", "job-1", 90.0)
    queue_client.enqueue_notify_talent.assert_any_call("t-3", "job-1", 60.0)
    assert queue_client.enqueue_notify_talent.call_count == 2


def test_no_matches_enqueues_nothing():
    query_service = MagicMock()
    query_service.matches_for_job.return_value = []
    queue_client = MagicMock()

    assert MatchNotifier(query_service, queue_client).notify_for_job("job-1") == 0
    queue_client.enqueue_notify_talent.assert_not_called()
