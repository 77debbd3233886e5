#!/usr/bin/env python3
"""
Job service - publishing and job updates.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.cache import MatchCacheService
from core.constants import JobStatus, JOB_MATCHABLE_FIELDS
from core.matching import MatchNotifier
from database.models import Job
from database.record_store import RecordStore
from ..exceptions import (
    JobNotFoundException,
    InvalidStatusTransitionException,
    InvalidUpdateException
)

logger = logging.getLogger(__name__)


@dataclass
class PublishOutcome:
    job: Job
    notifications_enqueued: int = 0


class JobService:
    """Service for job mutations."""

    def __init__(
        self,
        store: RecordStore,
        cache: MatchCacheService,
        queue_client,
        notifier: Optional[MatchNotifier] = None
    ):
        self.store = store
        self.cache = cache
        self.queue_client = queue_client
        self.notifier = notifier

    def get_job(self, job_id: Any) -> Job:
        job = self.store.get_job(job_id)
        if job is None:
            raise JobNotFoundException(f"Job with ID {job_id} not found")
        return job

    def publish(self, job_id: Any) -> PublishOutcome:
        """
        Publish a pending job.

        After the status change is committed the job's cached matches are
        dropped, the job is queued for the jobs channel, and every approved
        matching talent gets a notify-talent job.
        """
        job = self.get_job(job_id)
        if job.status != JobStatus.PENDING.value:
            raise InvalidStatusTransitionException(
                f"Job must be in {JobStatus.PENDING.value} status to publish (current: {job.status})"
            )

        self.store.jobs.update_fields(job, {'status': JobStatus.PUBLISHED.value})
        self.store.jobs.commit()
        logger.info(f"Published job {job.id}")

        self.cache.invalidate('job', job.id)
        self.queue_client.enqueue_publish_job(job.id)

        enqueued = 0
        if self.notifier is not None:
            enqueued = self.notifier.notify_for_job(job.id)
        return PublishOutcome(job=job, notifications_enqueued=enqueued)

    def update(self, job_id: Any, fields: Dict[str, Any]) -> Job:
        job = self.get_job(job_id)

        try:
            changed = self.store.jobs.update_fields(job, fields)
        except ValueError as e:
            self.store.jobs.rollback()
            raise InvalidUpdateException(str(e))

        if not changed:
            return job

        self.store.jobs.commit()
        logger.info(f"Updated job {job.id}: {', '.join(changed)}")

        if JOB_MATCHABLE_FIELDS.intersection(changed):
            self.cache.invalidate('job', job.id)
        return job
