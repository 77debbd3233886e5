#!/usr/bin/env python3
"""
Queue task functions - must be at module level for RQ.

Each task fetches the referenced record, formats a message and hands it to
the messaging channel. Any failure (record missing, formatting error,
delivery failure) is raised so the queue engine retries the job; a missing
record gets no special treatment. A rate-limited notification is not a
failure: the task returns a skipped outcome and the job completes.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, ContextManager, Dict, Optional

from core.config_loader import AppConfig, load_config
from core.cache.match_cache import build_redis_client
from database.record_store import RecordStore
from notification.channels import MessagingChannel, build_channel
from notification.message_builder import NotificationMessageBuilder
from notification.rate_limiter import NotificationRateLimiter

logger = logging.getLogger(__name__)


class TaskProcessingError(Exception):
    """Raised by a task when the job must be retried."""
    pass


@dataclass
class TaskContext:
    """Collaborators shared by the tasks of one worker process."""
    config: AppConfig
    channel: MessagingChannel
    rate_limiter: NotificationRateLimiter
    uow: Callable[[], ContextManager[RecordStore]]

    @classmethod
    def build(cls, config: AppConfig) -> 'TaskContext':
        from database.database import build_session_factory
        from database.uow import record_uow

        # Same database the web app writes to
        session_factory = build_session_factory(config.database.url)
        redis_conn = build_redis_client(
            config.redis.url,
            config.redis.password,
            socket_timeout=5,
            connect_timeout=5
        )
        return cls(
            config=config,
            channel=build_channel(config.telegram),
            rate_limiter=NotificationRateLimiter(
                redis_conn,
                max_per_window=config.rate_limit.max_notifications,
                window_seconds=config.rate_limit.window_seconds
            ),
            uow=functools.partial(record_uow, session_factory),
        )


# Global instance for the worker process
_task_context: Optional[TaskContext] = None


def get_task_context() -> TaskContext:
    """Get the task context, building it from config on first use."""
    global _task_context
    if _task_context is None:
        _task_context = TaskContext.build(load_config())
    return _task_context


def set_task_context(context: Optional[TaskContext]) -> None:
    """Install (or reset with None) the task context."""
    global _task_context
    _task_context = context


def publish_talent_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Post an approved talent to the talents channel."""
    ctx = get_task_context()
    talent_id = payload['talentId']

    try:
        logger.info(f"Publishing talent {talent_id} to Telegram channel")

        with ctx.uow() as store:
            talent = store.get_talent(talent_id)
            if talent is None:
                raise TaskProcessingError(f"Talent {talent_id} not found")
            message = NotificationMessageBuilder.build_talent_post(talent)

        channel_id = ctx.config.telegram.talents_channel_id
        message_id = ctx.channel.send(channel_id, message)
        if not message_id:
            raise TaskProcessingError(f"Failed to publish talent {talent_id} to Telegram channel")

        logger.info(f"Published talent {talent_id} to talents channel ({channel_id}). Message ID: {message_id}")
        return {'success': True, 'talentId': talent_id, 'messageId': message_id}

    except Exception:
        logger.error(f"Failed to publish talent {talent_id}", exc_info=True)
        raise


def publish_job_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Post a published job to the jobs channel."""
    ctx = get_task_context()
    job_id = payload['jobId']

    try:
        logger.info(f"Publishing job {job_id} to Telegram channel")

        with ctx.uow() as store:
            job = store.get_job(job_id)
            if job is None:
                raise TaskProcessingError(f"Job {job_id} not found")
            message = NotificationMessageBuilder.build_job_post(job)

        channel_id = ctx.config.telegram.jobs_channel_id
        message_id = ctx.channel.send(channel_id, message)
        if not message_id:
            raise TaskProcessingError(f"Failed to publish job {job_id} to Telegram channel")

        logger.info(f"Published job {job_id} to jobs channel ({channel_id}). Message ID: {message_id}")
        return {'success': True, 'jobId': job_id, 'messageId': message_id}

    except Exception:
        logger.error(f"Failed to publish job {job_id}", exc_info=True)
        raise


def notify_talent_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Send a talent a direct message about a matching job, subject to rate limiting."""
    ctx = get_task_context()
    talent_id = payload['talentId']
    job_id = payload['jobId']
    match_score = float(payload['matchScore'])

    logger.info(f"Notifying talent {talent_id} about job {job_id} (match score: {match_score})")

    try:
        decision = ctx.rate_limiter.try_acquire(talent_id)
    except Exception:
        logger.error(f"Rate limiter unavailable for talent {talent_id}", exc_info=True)
        raise

    if not decision.allowed:
        logger.warning(f"Skipping notification for talent {talent_id} about job {job_id}: rate limit exceeded")
        return {
            'success': False,
            'talentId': talent_id,
            'jobId': job_id,
            'reason': 'rate_limit_exceeded',
            'skipped': True,
        }

    try:
        with ctx.uow() as store:
            talent = store.get_talent(talent_id)
            job = store.get_job(job_id)
            if talent is None or job is None:
                raise TaskProcessingError(f"Talent {talent_id} or Job {job_id} not found")
            destination = talent.telegram_id
            if not destination:
                raise TaskProcessingError(f"Talent {talent_id} has no Telegram id")
            message = NotificationMessageBuilder.build_match_notification(talent, job, match_score)

        message_id = ctx.channel.send(destination, message)
        if not message_id:
            raise TaskProcessingError(f"Failed to deliver match notification to talent {talent_id}")

    except Exception:
        # Undelivered attempts do not consume the talent's quota
        try:
            ctx.rate_limiter.release(talent_id)
        except Exception as release_error:
            logger.error(f"Failed to release rate limit slot for talent {talent_id}: {release_error}")
        logger.error(f"Failed to notify talent {talent_id} about job {job_id}", exc_info=True)
        raise

    logger.info(f"Notified talent {talent_id} about job {job_id}")
    return {'success': True, 'talentId': talent_id, 'jobId': job_id, 'matchScore': match_score}
