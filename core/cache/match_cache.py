"""Match Cache Service - Redis cache-aside store for computed match results."""
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from urllib.parse import urlparse

from redis import Redis
from redis.exceptions import RedisError

from core.scorer.models import MatchResult

logger = logging.getLogger(__name__)

MATCH_CACHE_TTL_SECONDS = 300
KEY_PREFIX = "matches"
REFS_PREFIX = f"{KEY_PREFIX}:refs"
VALID_KINDS = ('job', 'talent')


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


class CacheStatus(Enum):
    HIT = "hit"
    MISS = "miss"
    UNAVAILABLE = "unavailable"


@dataclass
class CacheResult:
    """
    Outcome of a cache read.

    UNAVAILABLE means the store could not be reached; callers treat it
    exactly like MISS and recompute.
    """
    status: CacheStatus
    value: List[MatchResult] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def hit(cls, value: List[MatchResult]) -> 'CacheResult':
        return cls(status=CacheStatus.HIT, value=value)

    @classmethod
    def miss(cls) -> 'CacheResult':
        return cls(status=CacheStatus.MISS)

    @classmethod
    def unavailable(cls, error: str) -> 'CacheResult':
        return cls(status=CacheStatus.UNAVAILABLE, error=error)

    @property
    def is_hit(self) -> bool:
        return self.status is CacheStatus.HIT


def job_key(job_id: Any) -> str:
    return f"{KEY_PREFIX}:job:{job_id}"


def talent_key(talent_id: Any) -> str:
    return f"{KEY_PREFIX}:talent:{talent_id}"


def refs_key(kind: str, subject_id: Any) -> str:
    """Set of cached list keys whose results include this subject."""
    return f"{REFS_PREFIX}:{kind}:{subject_id}"


def build_redis_client(
    redis_url: str,
    password: Optional[str] = None,
    socket_timeout: float = 0.5,
    connect_timeout: float = 0.5
) -> Redis:
    """Create the shared Redis client used by the cache and the rate limiter."""
    return Redis.from_url(
        redis_url,
        password=password,
        decode_responses=True,
        socket_connect_timeout=connect_timeout,
        socket_timeout=socket_timeout
    )


class MatchCacheService:
    """
    Cache-aside store for match results.

    Entries are keyed by `matches:job:{id}` / `matches:talent:{id}` and hold
    the ordered result list. The cache is strictly derived: it is filled by
    the query service and emptied by invalidate(); the record store stays the
    only authority. Every Redis failure is reported, never raised.
    """

    def __init__(
        self,
        redis_client: Redis,
        ttl_seconds: int = MATCH_CACHE_TTL_SECONDS,
        enabled: bool = True
    ):
        self._redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled

    @classmethod
    def from_url(
        cls,
        redis_url: str,
        password: Optional[str] = None,
        ttl_seconds: int = MATCH_CACHE_TTL_SECONDS,
        socket_timeout: float = 0.5,
        connect_timeout: float = 0.5
    ) -> 'MatchCacheService':
        client = build_redis_client(redis_url, password, socket_timeout, connect_timeout)
        logger.info(f"Match cache using Redis at {_sanitize_url(redis_url)}")
        return cls(client, ttl_seconds=ttl_seconds)

    @property
    def is_available(self) -> bool:
        """Check if cache is reachable."""
        if not self.enabled:
            return False
        try:
            return bool(self._redis.ping())
        except (RedisError, OSError):
            return False

    def get(self, key: str) -> CacheResult:
        """Read a cached result list."""
        if not self.enabled:
            return CacheResult.miss()

        try:
            data = self._redis.get(key)
        except (RedisError, OSError) as e:
            logger.warning(f"Match cache unavailable on read of {key}: {e}")
            return CacheResult.unavailable(str(e))

        if data is None:
            logger.debug(f"Cache miss for {key}")
            return CacheResult.miss()

        try:
            cache_entry = json.loads(data)
            results = [MatchResult.from_dict(item) for item in cache_entry["data"]]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            return CacheResult.miss()

        logger.debug(f"Cache hit for {key} ({len(results)} results)")
        return CacheResult.hit(results)

    def put(
        self,
        key: str,
        value: List[MatchResult],
        ttl_seconds: Optional[int] = None
    ) -> bool:
        """
        Cache a result list with TTL. Returns False if the write was dropped.

        Each listed subject gets the key added to its refs set, so that
        invalidating that subject also drops this list. A ttl of 0 or less
        caches nothing.
        """
        if not self.enabled:
            return False

        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            logger.debug(f"Not caching {key}: ttl {ttl}s")
            return False

        cache_entry = {
            "data": [result.to_dict() for result in value],
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "ttl_seconds": ttl
        }
        # Refs sets must outlive every list they point at
        refs_ttl = max(ttl, self.ttl_seconds)

        try:
            pipe = self._redis.pipeline(transaction=True)
            pipe.setex(key, ttl, json.dumps(cache_entry))
            for result in value:
                ref = refs_key(result.subject_type, result.subject_id)
                pipe.sadd(ref, key)
                pipe.expire(ref, refs_ttl)
            pipe.execute()
        except (RedisError, OSError) as e:
            logger.warning(f"Match cache write dropped for {key}: {e}")
            return False

        logger.debug(f"Cached {len(value)} results under {key} (TTL: {ttl}s)")
        return True

    def invalidate(self, kind: str, subject_id: Any) -> bool:
        """
        Drop every cached list that involves a job or talent.

        Deletes the subject's own list plus each list of the other kind that
        contains it (tracked in `matches:refs:{kind}:{id}`). Must be called
        by every mutation of a matchable field (status, skills, category,
        experience, availability). Returns False if Redis could not be
        reached; the entries then expire with their TTL.
        """
        if kind not in VALID_KINDS:
            raise ValueError(f"Unknown cache kind: {kind}. Expected one of {', '.join(VALID_KINDS)}")

        key = job_key(subject_id) if kind == 'job' else talent_key(subject_id)
        ref = refs_key(kind, subject_id)
        if not self.enabled:
            return False

        try:
            referencing = sorted(self._redis.smembers(ref) or ())
            self._redis.delete(key, ref, *referencing)
        except (RedisError, OSError) as e:
            logger.warning(f"Match cache invalidation failed for {key}: {e}")
            return False

        logger.debug(f"Invalidated {key} and {len(referencing)} lists containing it")
        return True

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        if not self.is_available:
            return {"available": False}

        try:
            info = self._redis.info()
            key_count = 0
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{KEY_PREFIX}:*", count=1000)
                key_count += sum(1 for k in keys if not str(k).startswith(REFS_PREFIX))
                if cursor == 0:
                    break
            return {
                "available": True,
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "match_cache_keys": key_count,
                "ttl_seconds": self.ttl_seconds,
            }
        except (RedisError, OSError) as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "error": str(e)}

    def clear_all(self) -> int:
        """Clear all cached match results. Returns the number of keys deleted."""
        if not self.is_available:
            return 0

        deleted = 0
        try:
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{KEY_PREFIX}:*", count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break
        except (RedisError, OSError) as e:
            logger.warning(f"Error clearing match cache: {e}")

        logger.info(f"Cleared {deleted} match cache entries")
        return deleted
