"""
Match notifier - fans out notify-talent jobs when a job is published.
"""

import logging
from typing import Any

from core.constants import TalentStatus
from core.matching.service import MatchQueryService

logger = logging.getLogger(__name__)


class MatchNotifier:
    """Enqueues a notify-talent job for every approved talent matching a job."""

    def __init__(self, query_service: MatchQueryService, queue_client):
        self.query_service = query_service
        self.queue_client = queue_client

    def notify_for_job(self, job_id: Any) -> int:
        """Returns the number of notifications enqueued."""
        results = self.query_service.matches_for_job(job_id)

        enqueued = 0
        for result in results:
            if result.subject_status != TalentStatus.APPROVED.value:
                continue
            self.queue_client.enqueue_notify_talent(result.subject_id, job_id, result.score)
            enqueued += 1

        logger.info(f"Enqueued {enqueued} match notifications for job {job_id} ({len(results)} matches)")
        return enqueued
