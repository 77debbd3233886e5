#!/usr/bin/env python3
"""
Tests for the per-talent notification rate limiter.

Usage:
    uv run python -m pytest tests/unit/notification/test_rate_limiter.py -v
"""

import unittest

from notification.rate_limiter import NotificationRateLimiter, RATE_LIMIT_MAX, RATE_LIMIT_WINDOW_SECONDS


class CounterPipeline:
    """Buffers commands until execute(), like a MULTI/EXEC pipeline."""

    def __init__(self, redis):
        self.redis = redis
        self.commands = []

    def incr(self, key):
        self.commands.append(lambda: self.redis.incr(key))

    def expire(self, key, seconds, nx=False):
        self.commands.append(lambda: self.redis.expire(key, seconds, nx=nx))

    def execute(self):
        self.redis.transactions += 1
        return [command() for command in self.commands]


class CounterRedis:
    """Minimal INCR/DECR/EXPIRE/GET double that tracks TTLs."""

    def __init__(self):
        self.values = {}
        self.ttls = {}
        self.transactions = 0
        self.expire_calls = []

    def pipeline(self, transaction=True):
        assert transaction
        return CounterPipeline(self)

    def incr(self, key):
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    def decr(self, key):
        self.values[key] = self.values.get(key, 0) - 1
        return self.values[key]

    def expire(self, key, seconds, nx=False):
        self.expire_calls.append((key, seconds, nx))
        if nx and key in self.ttls:
            return False
        self.ttls[key] = seconds
        return True

    def get(self, key):
        value = self.values.get(key)
        return None if value is None else str(value)


class TestNotificationRateLimiter(unittest.TestCase):

    def setUp(self):
        self.redis = CounterRedis()
        self.limiter = NotificationRateLimiter(self.redis)
        self.key = "rate_limit:notify_talent:t-1"

    def test_defaults(self):
        self.assertEqual(self.limiter.max_per_window, RATE_LIMIT_MAX)
        self.assertEqual(self.limiter.window_seconds, RATE_LIMIT_WINDOW_SECONDS)
        self.assertEqual(self.limiter.key_for("t-1"), self.key)

    def test_first_increment_sets_window_ttl(self):
        decision = self.limiter.try_acquire("t-1")

        self.assertTrue(decision.allowed)
        self.assertEqual(decision.count, 1)
        self.assertEqual(self.redis.ttls, {self.key: 3600})

    def test_ttl_set_only_once(self):
        for _ in range(3):
            self.limiter.try_acquire("t-1")

        # NX keeps the window anchored at the first increment
        self.assertEqual(self.redis.ttls, {self.key: 3600})
        self.assertTrue(all(nx for _, _, nx in self.redis.expire_calls))

    def test_increment_and_ttl_share_one_transaction(self):
        self.limiter.try_acquire("t-1")
        self.limiter.try_acquire("t-1")

        self.assertEqual(self.redis.transactions, 2)
        self.assertEqual(self.redis.expire_calls, [(self.key, 3600, True), (self.key, 3600, True)])

    def test_counter_left_without_ttl_gets_one(self):
        # e.g. written by a process that died between two round trips
        self.redis.values[self.key] = 10

        decision = self.limiter.try_acquire("t-1")

        self.assertFalse(decision.allowed)
        self.assertEqual(self.redis.ttls, {self.key: 3600})

    def test_tenth_allowed_eleventh_denied(self):
        decisions = [self.limiter.try_acquire("t-1") for _ in range(11)]

        self.assertTrue(all(d.allowed for d in decisions[:10]))
        self.assertFalse(decisions[10].allowed)
        self.assertEqual(decisions[10].count, 10)
        # Rejected attempt is decremented back out
        self.assertEqual(self.limiter.current_count("t-1"), 10)

    def test_counters_are_per_talent(self):
        for _ in range(10):
            self.limiter.try_acquire("t-1")

        self.assertTrue(self.limiter.try_acquire("t-2").allowed)

    def test_release_gives_slot_back(self):
        self.limiter.try_acquire("t-1")
        self.limiter.try_acquire("t-1")

        self.limiter.release("t-1")

        self.assertEqual(self.limiter.current_count("t-1"), 1)

    def test_current_count_without_key(self):
        self.assertEqual(self.limiter.current_count("nobody"), 0)

    def test_custom_limit(self):
        limiter = NotificationRateLimiter(self.redis, max_per_window=2, window_seconds=60)

        results = [limiter.try_acquire("t-9").allowed for _ in range(3)]

        self.assertEqual(results, [True, True, False])
        self.assertEqual(self.redis.ttls, {"rate_limit:notify_talent:t-9": 60})


if __name__ == '__main__':
    unittest.main()
