#!/usr/bin/env python3
"""
Integration Test: queues, cache and rate limiter against a real Redis.

Skipped unless REDIS_URL is set.

Usage:
    REDIS_URL=redis://localhost:6379/15 \
    uv run python -m pytest tests/integration/test_queue_redis.py -v
"""

import contextlib
import os
import unittest
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from redis import Redis
from rq import SimpleWorker
from rq.job import Job

from core.cache import MatchCacheService, build_redis_client
from core.config_loader import AppConfig
from core.scorer import MatchResult, MatchBreakdown
from notification.queues import QueueClient, PUBLISH_JOB_QUEUE
from notification.rate_limiter import NotificationRateLimiter
from notification.tasks import TaskContext, set_task_context

REDIS_URL = os.environ.get('REDIS_URL')

# Prevent tests from using production Redis - use db=1 for tests if using same host
if REDIS_URL and REDIS_URL.endswith('/0'):
    REDIS_URL = REDIS_URL[:-2] + '/1'

pytestmark = [
    pytest.mark.redis,
    pytest.mark.skipif(not REDIS_URL, reason="REDIS_URL not set"),
]


class TestRateLimiterRedis(unittest.TestCase):

    def setUp(self):
        self.redis = build_redis_client(REDIS_URL, socket_timeout=2, connect_timeout=2)
        self.redis.flushdb()
        self.limiter = NotificationRateLimiter(self.redis)

    def tearDown(self):
        self.redis.flushdb()

    def test_eleventh_notification_denied(self):
        decisions = [self.limiter.try_acquire("t-1") for _ in range(11)]

        self.assertTrue(decisions[9].allowed)
        self.assertFalse(decisions[10].allowed)
        self.assertEqual(self.redis.get("rate_limit:notify_talent:t-1"), "10")
        ttl = self.redis.ttl("rate_limit:notify_talent:t-1")
        self.assertTrue(0 < ttl <= 3600)


class TestMatchCacheRedis(unittest.TestCase):

    def setUp(self):
        self.cache = MatchCacheService.from_url(REDIS_URL)
        self.cache.clear_all()

    def tearDown(self):
        self.cache.clear_all()

    def test_round_trip_and_invalidate(self):
        results = [MatchResult("t-1", "talent", 100.0, MatchBreakdown(30.0, 40.0, 20.0, 10.0), "Ada", "APPROVED")]

        self.assertTrue(self.cache.put("matches:job:j-1", results))
        self.assertEqual(self.cache.get("matches:job:j-1").value, results)

        self.assertTrue(self.cache.invalidate("job", "j-1"))
        self.assertFalse(self.cache.get("matches:job:j-1").is_hit)

    def test_talent_invalidation_drops_job_lists(self):
        results = [MatchResult("t-1", "talent", 100.0, MatchBreakdown(30.0, 40.0, 20.0, 10.0), "Ada", "APPROVED")]
        self.cache.put("matches:job:j-1", results)

        self.assertTrue(self.cache.invalidate("talent", "t-1"))

        self.assertFalse(self.cache.get("matches:job:j-1").is_hit)
        self.assertEqual(self.cache._redis.exists("matches:refs:talent:t-1"), 0)


class TestQueueRedis(unittest.TestCase):

    def setUp(self):
        self.redis = Redis.from_url(REDIS_URL)
        self.redis.flushdb()
        self.client = QueueClient(self.redis)

        self.channel = Mock()
        store = Mock()
        store.get_job.return_value = SimpleNamespace(
            id="j-1", title="Frontend", description=None, service_category="WEB",
            required_skills=["React"], experience_level="SENIOR",
            engagement_type="CONTRACT", duration=None,
        )

        @contextlib.contextmanager
        def uow():
            yield store

        set_task_context(TaskContext(
            config=AppConfig(), channel=self.channel, rate_limiter=Mock(), uow=uow
        ))

    def tearDown(self):
        set_task_context(None)
        self.redis.flushdb()

    def _work(self):
        worker = SimpleWorker([self.client.queues[PUBLISH_JOB_QUEUE]], connection=self.redis)
        worker.work(burst=True)

    def test_completed_job(self):
        self.channel.send.return_value = "42"

        job_id = self.client.enqueue_publish_job("j-1")
        self._work()

        job = Job.fetch(job_id, connection=self.redis)
        self.assertTrue(job.is_finished)
        self.assertEqual(job.return_value()['messageId'], "42")

    def test_failed_attempt_is_scheduled_for_retry(self):
        self.channel.send.return_value = None

        job_id = self.client.enqueue_publish_job("j-1")
        self._work()

        job = Job.fetch(job_id, connection=self.redis)
        self.assertEqual(job.retries_left, 1)
        queue = self.client.queues[PUBLISH_JOB_QUEUE]
        self.assertIn(job_id, queue.scheduled_job_registry.get_job_ids())


if __name__ == '__main__':
    unittest.main()
