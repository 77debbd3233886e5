#!/usr/bin/env python3
"""
Job queues for publish and notify work.

Three named RQ queues share one set of default job options:

    publish-talent  {talentId}
    publish-job     {jobId}
    notify-talent   {talentId, jobId, matchScore}

    attempts:  3 (first run + 2 retries)
    backoff:   exponential, 2000 ms base -> 2 s, 4 s
    retention: last 100 completed / 500 failed jobs

Job lifecycle: waiting -> active -> completed, or
active -> waiting (retry) -> active -> ... -> failed once attempts run out.

When the async queue is disabled, or Redis cannot be reached at startup,
QueueClient runs tasks inline through RetryScheduler, which applies the
same attempt count and backoff delays. Inline jobs run on a small thread
pool, so enqueue returns before the first attempt like it does with RQ.
"""

import logging
import math
import time
import uuid
from collections import deque
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional

from redis import Redis
from rq import Queue, Retry, Callback
from rq.registry import FinishedJobRegistry, FailedJobRegistry

from core.config_loader import QueueConfig
from notification.tasks import publish_talent_task, publish_job_task, notify_talent_task

logger = logging.getLogger(__name__)

PUBLISH_TALENT_QUEUE = 'publish-talent'
PUBLISH_JOB_QUEUE = 'publish-job'
NOTIFY_TALENT_QUEUE = 'notify-talent'

QUEUE_NAMES = (PUBLISH_TALENT_QUEUE, PUBLISH_JOB_QUEUE, NOTIFY_TALENT_QUEUE)

QUEUE_TASKS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    PUBLISH_TALENT_QUEUE: publish_talent_task,
    PUBLISH_JOB_QUEUE: publish_job_task,
    NOTIFY_TALENT_QUEUE: notify_talent_task,
}

# Finished jobs must expire for the registry to be ordered by age
COMPLETED_RESULT_TTL = 86400
FAILED_RESULT_TTL = 7 * 86400


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt limit and exponential backoff curve."""
    attempts: int = 3
    base_delay_ms: int = 2000

    def delay_before_attempt(self, attempt: int) -> float:
        """Seconds to wait before the given attempt (attempt 1 runs immediately)."""
        if attempt <= 1:
            return 0.0
        return (self.base_delay_ms / 1000.0) * (2 ** (attempt - 2))

    def intervals(self) -> List[int]:
        """Per-retry delays in whole seconds, as RQ expects them."""
        return [
            max(1, math.ceil(self.delay_before_attempt(attempt)))
            for attempt in range(2, self.attempts + 1)
        ]

    def to_rq_retry(self) -> Optional[Retry]:
        if self.attempts <= 1:
            return None
        return Retry(max=self.attempts - 1, interval=self.intervals())


@dataclass(frozen=True)
class QueueOptions:
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    keep_completed: int = 100
    keep_failed: int = 500
    job_timeout: str = '5m'
    inline_workers: int = 4

    @classmethod
    def from_config(cls, config: QueueConfig) -> 'QueueOptions':
        return cls(
            retry=RetryPolicy(
                attempts=config.retry.attempts,
                base_delay_ms=config.retry.backoff_base_ms
            ),
            keep_completed=config.retention.keep_completed,
            keep_failed=config.retention.keep_failed,
            job_timeout=config.job_timeout,
            inline_workers=config.inline_workers,
        )


def trim_registry(registry, keep: int) -> int:
    """Delete the oldest jobs so at most `keep` remain. Returns the number removed."""
    job_ids = registry.get_job_ids()
    excess = len(job_ids) - keep
    if excess <= 0:
        return 0
    for job_id in job_ids[:excess]:
        registry.remove(job_id, delete_job=True)
    return excess


# RQ callbacks - must be at module level.
# RQ adds the job to its Finished/Failed registry after the callback runs,
# so each trim leaves room for it.
def on_job_success(job, connection, result, *args, **kwargs):
    keep = job.meta.get('keep_completed', 100)
    registry = FinishedJobRegistry(job.origin, connection=connection)
    removed = trim_registry(registry, max(keep - 1, 0))
    if removed:
        logger.debug(f"Trimmed {removed} completed jobs from {job.origin}")


def on_job_failure(job, connection, exc_type, exc_value, traceback):
    logger.warning(f"Job {job.id} on {job.origin} failed ({job.retries_left or 0} retries left): {exc_value}")
    if job.retries_left:
        # Retried jobs go back to the scheduled registry, not the failed one
        return
    keep = job.meta.get('keep_failed', 500)
    registry = FailedJobRegistry(job.origin, connection=connection)
    trim_registry(registry, max(keep - 1, 0))


@dataclass
class InlineJobRecord:
    """Outcome of a job executed without the queue engine."""
    id: str
    queue: str
    payload: Dict[str, Any]
    status: str = 'waiting'  # waiting|active|completed|failed
    attempts: int = 0
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class RetryScheduler:
    """
    Runs a task in-process with the queue's retry policy.

    A task that returns counts as completed; one that raises is retried after
    the policy's backoff delay until the attempts are used up, then recorded
    as failed. Terminal failures are kept for inspection, never raised.
    """

    def __init__(
        self,
        options: QueueOptions,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.options = options
        self._sleep = sleep
        self.completed: Deque[InlineJobRecord] = deque(maxlen=options.keep_completed)
        self.failed: Deque[InlineJobRecord] = deque(maxlen=options.keep_failed)

    def create(self, queue_name: str, payload: Dict[str, Any]) -> InlineJobRecord:
        return InlineJobRecord(id=str(uuid.uuid4()), queue=queue_name, payload=payload)

    def run(self, queue_name: str, task: Callable[[Dict[str, Any]], Any], payload: Dict[str, Any]) -> InlineJobRecord:
        return self.execute(self.create(queue_name, payload), task)

    def execute(self, record: InlineJobRecord, task: Callable[[Dict[str, Any]], Any]) -> InlineJobRecord:
        """Attempt a created record until it completes or runs out of attempts."""
        queue_name, payload = record.queue, record.payload
        policy = self.options.retry

        for attempt in range(1, policy.attempts + 1):
            delay = policy.delay_before_attempt(attempt)
            if delay:
                logger.info(f"Retrying {queue_name} job {record.id} in {delay:.1f}s (attempt {attempt}/{policy.attempts})")
                self._sleep(delay)

            record.status = 'active'
            record.attempts = attempt
            try:
                record.result = task(payload)
            except Exception as e:
                record.error = str(e)
                record.status = 'waiting'
                logger.warning(f"{queue_name} job {record.id} attempt {attempt} failed: {e}")
                continue

            record.status = 'completed'
            self.completed.append(record)
            return record

        record.status = 'failed'
        self.failed.append(record)
        logger.error(f"{queue_name} job {record.id} failed after {policy.attempts} attempts: {record.error}")
        return record


class QueueClient:
    """
    Producer side of the three job queues.

    Holds the process-wide Redis connection and the RQ queues, and applies
    the default job options to every enqueue.
    """

    def __init__(
        self,
        redis_conn: Optional[Redis],
        options: Optional[QueueOptions] = None,
        use_async_queue: bool = True,
        scheduler: Optional[RetryScheduler] = None,
        executor: Optional[Executor] = None
    ):
        self.options = options or QueueOptions()
        self.redis_conn = None
        self.queues: Dict[str, Queue] = {}
        self.async_mode = False
        self.scheduler = scheduler or RetryScheduler(self.options)
        self._executor = executor

        if not use_async_queue:
            # Explicitly disabled via config - force sync mode
            logger.info("Async queue disabled via config. Running jobs inline.")
        elif redis_conn is None:
            logger.warning("No Redis connection for queues. Running jobs inline.")
        else:
            try:
                redis_conn.ping()
                self.redis_conn = redis_conn
                self.queues = {
                    name: Queue(name, connection=redis_conn)
                    for name in QUEUE_NAMES
                }
                self.async_mode = True
                logger.info(f"Queue client connected to Redis ({', '.join(QUEUE_NAMES)})")
            except Exception as e:
                logger.error(f"Redis connection failed: {e}. Running jobs inline.")

    @classmethod
    def from_config(cls, config: QueueConfig, redis_url: str) -> 'QueueClient':
        redis_conn = None
        if config.use_async_queue:
            redis_conn = Redis.from_url(redis_url)
        return cls(
            redis_conn,
            options=QueueOptions.from_config(config),
            use_async_queue=config.use_async_queue
        )

    def enqueue(self, queue_name: str, payload: Dict[str, Any]) -> str:
        """Submit a job to a named queue. Returns the job id."""
        if queue_name not in QUEUE_TASKS:
            raise ValueError(f"Unknown queue: {queue_name}. Available: {', '.join(QUEUE_NAMES)}")

        task = QUEUE_TASKS[queue_name]

        if not self.async_mode:
            record = self.scheduler.create(queue_name, payload)
            self._inline_executor().submit(self.scheduler.execute, record, task)
            logger.info(f"Running {queue_name} job {record.id} inline")
            return record.id

        job = self.queues[queue_name].enqueue(
            task,
            payload,
            job_timeout=self.options.job_timeout,
            result_ttl=COMPLETED_RESULT_TTL,
            failure_ttl=FAILED_RESULT_TTL,
            retry=self.options.retry.to_rq_retry(),
            on_success=Callback(on_job_success),
            on_failure=Callback(on_job_failure),
            meta={
                'keep_completed': self.options.keep_completed,
                'keep_failed': self.options.keep_failed,
            }
        )
        logger.info(f"Queued {queue_name} job {job.id}")
        return job.id

    def _inline_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.options.inline_workers,
                thread_name_prefix='inline-queue'
            )
        return self._executor

    def shutdown(self, wait: bool = True) -> None:
        """Stop the inline pool, by default after its queued jobs finish."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def enqueue_publish_talent(self, talent_id: str) -> str:
        return self.enqueue(PUBLISH_TALENT_QUEUE, {'talentId': str(talent_id)})

    def enqueue_publish_job(self, job_id: str) -> str:
        return self.enqueue(PUBLISH_JOB_QUEUE, {'jobId': str(job_id)})

    def enqueue_notify_talent(self, talent_id: str, job_id: str, match_score: float) -> str:
        return self.enqueue(NOTIFY_TALENT_QUEUE, {
            'talentId': str(talent_id),
            'jobId': str(job_id),
            'matchScore': float(match_score),
        })

    def get_queue_status(self) -> Dict[str, Any]:
        """Get per-queue counts for inspection."""
        if not self.async_mode:
            return {
                'status': 'inline',
                'completed': len(self.scheduler.completed),
                'failed': len(self.scheduler.failed),
            }

        try:
            queues = {}
            for name, queue in self.queues.items():
                queues[name] = {
                    'waiting': len(queue),
                    'scheduled': queue.scheduled_job_registry.count,
                    'active': queue.started_job_registry.count,
                    'completed': queue.finished_job_registry.count,
                    'failed': queue.failed_job_registry.count,
                }
            return {'status': 'active', 'queues': queues}
        except Exception as e:
            return {'status': 'error', 'error': str(e)}
