#!/usr/bin/env python3
"""
Per-talent fixed-window rate limiter for match notifications.

Counters live in the shared Redis so every worker sees the same window:

    rate_limit:notify_talent:{talentId}  -> integer, TTL set on first increment

INCR and EXPIRE NX go out in one MULTI/EXEC, so a counter never exists
without its TTL. EXPIRE NX needs Redis 7.0 or newer. No application lock
is taken.
"""

import logging
from dataclasses import dataclass
from typing import Any

from redis import Redis

logger = logging.getLogger(__name__)

RATE_LIMIT_MAX = 10  # notifications per talent per window
RATE_LIMIT_WINDOW_SECONDS = 3600


@dataclass
class RateLimitDecision:
    allowed: bool
    count: int


class NotificationRateLimiter:
    """
    Fixed-window counter guarding notify-talent deliveries.

    An accepted attempt stays counted. A rejected attempt is decremented back
    out, so the counter only ever reflects accepted notifications.
    """

    KEY_PREFIX = "rate_limit:notify_talent:"

    def __init__(
        self,
        redis_conn: Redis,
        max_per_window: int = RATE_LIMIT_MAX,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS
    ):
        self._redis = redis_conn
        self.max_per_window = max_per_window
        self.window_seconds = window_seconds

    def key_for(self, talent_id: Any) -> str:
        return f"{self.KEY_PREFIX}{talent_id}"

    def try_acquire(self, talent_id: Any) -> RateLimitDecision:
        key = self.key_for(talent_id)
        pipe = self._redis.pipeline(transaction=True)
        pipe.incr(key)
        # NX: only the increment that opens the window sets the TTL
        pipe.expire(key, self.window_seconds, nx=True)
        count, _ = pipe.execute()
        count = int(count)

        if count > self.max_per_window:
            self._redis.decr(key)
            logger.warning(
                f"Rate limit exceeded for talent {talent_id}: "
                f"{count}/{self.max_per_window} in window"
            )
            return RateLimitDecision(allowed=False, count=count - 1)

        return RateLimitDecision(allowed=True, count=count)

    def release(self, talent_id: Any) -> None:
        """Give back a slot taken by an attempt that was never delivered."""
        self._redis.decr(self.key_for(talent_id))

    def current_count(self, talent_id: Any) -> int:
        value = self._redis.get(self.key_for(talent_id))
        return int(value) if value else 0
