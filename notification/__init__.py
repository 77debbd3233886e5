"""
Notification Module

Job queues, workers and outbound messaging for publish and match events.

Usage:
    from notification import QueueClient

    queue_client = QueueClient.from_config(config.queues, config.redis.url)
    queue_client.enqueue_publish_job(job_id)
    queue_client.enqueue_notify_talent(talent_id, job_id, match_score=82.5)
"""

from notification.channels import (
    MessagingChannel,
    TelegramChannel,
    LogChannel,
    build_channel,
)

from notification.rate_limiter import (
    NotificationRateLimiter,
    RateLimitDecision,
)

from notification.tasks import (
    TaskContext,
    TaskProcessingError,
    publish_talent_task,
    publish_job_task,
    notify_talent_task,
)

from notification.queues import (
    QueueClient,
    QueueOptions,
    RetryPolicy,
    RetryScheduler,
    QUEUE_NAMES,
    PUBLISH_TALENT_QUEUE,
    PUBLISH_JOB_QUEUE,
    NOTIFY_TALENT_QUEUE,
)

__all__ = [
    # Channels
    'MessagingChannel',
    'TelegramChannel',
    'LogChannel',
    'build_channel',
    # Rate limiting
    'NotificationRateLimiter',
    'RateLimitDecision',
    # Tasks
    'TaskContext',
    'TaskProcessingError',
    'publish_talent_task',
    'publish_job_task',
    'notify_talent_task',
    # Queues
    'QueueClient',
    'QueueOptions',
    'RetryPolicy',
    'RetryScheduler',
    'QUEUE_NAMES',
    'PUBLISH_TALENT_QUEUE',
    'PUBLISH_JOB_QUEUE',
    'NOTIFY_TALENT_QUEUE',
]
