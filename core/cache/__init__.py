"""Cache Module - Caching services."""
from core.cache.match_cache import (
    MatchCacheService,
    CacheResult,
    CacheStatus,
    build_redis_client,
    job_key,
    talent_key,
    refs_key,
    MATCH_CACHE_TTL_SECONDS
)

__all__ = [
    'MatchCacheService',
    'CacheResult',
    'CacheStatus',
    'build_redis_client',
    'job_key',
    'talent_key',
    'refs_key',
    'MATCH_CACHE_TTL_SECONDS'
]
