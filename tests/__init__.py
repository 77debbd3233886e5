#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests (unit + Redis if available)
    uv run python -m pytest tests/ -v

    # Run only unit tests (no Redis required)
    uv run python -m pytest tests/ -v -m "not redis"

Redis Setup:
    Integration tests talk to a real Redis and are skipped unless
    REDIS_URL is set:

    docker run -d -p 6379:6379 redis:7
    export REDIS_URL="redis://localhost:6379/15"
"""

import os
from typing import Optional

TEST_REDIS_URL = os.environ.get("REDIS_URL")


def is_redis_available() -> bool:
    """Check if the test Redis is reachable."""
    if not TEST_REDIS_URL:
        return False

    try:
        from redis import Redis
        return bool(Redis.from_url(TEST_REDIS_URL, socket_connect_timeout=1).ping())
    except Exception:
        return False


# Global flag to cache Redis availability check
_redis_available: Optional[bool] = None


def check_redis_available() -> bool:
    """Cached check for Redis availability."""
    global _redis_available
    if _redis_available is None:
        _redis_available = is_redis_available()
    return _redis_available
