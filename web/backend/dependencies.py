#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.cache import MatchCacheService
from core.matching import MatchQueryService, MatchNotifier
from database.record_store import RecordStore
from notification.queues import QueueClient
from .config import get_config
from .services import TalentService, JobService

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, database_url: str):
        self.engine = create_engine(
            database_url,
            pool_pre_ping=True,  # Verify connections before using
            pool_size=10,
            max_overflow=20
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


@lru_cache()
def get_db_manager() -> DatabaseManager:
    return DatabaseManager(get_config().database.url)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    yield from get_db_manager().get_session()


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


@lru_cache()
def get_match_cache() -> MatchCacheService:
    """Process-wide match cache; one Redis client shared by all requests."""
    config = get_config()
    cache = MatchCacheService.from_url(
        config.redis.url,
        password=config.redis.password,
        ttl_seconds=config.cache.ttl_seconds,
        socket_timeout=config.cache.socket_timeout_seconds,
        connect_timeout=config.cache.connect_timeout_seconds
    )
    cache.enabled = config.cache.enabled
    return cache


@lru_cache()
def get_queue_client() -> QueueClient:
    config = get_config()
    return QueueClient.from_config(config.queues, config.redis.url)


def get_match_query_service(
    store: RecordStore = Depends(get_record_store),
    cache: MatchCacheService = Depends(get_match_cache)
) -> MatchQueryService:
    return MatchQueryService(store, cache)


def get_talent_service(
    store: RecordStore = Depends(get_record_store),
    cache: MatchCacheService = Depends(get_match_cache),
    queue_client: QueueClient = Depends(get_queue_client)
) -> TalentService:
    return TalentService(store, cache, queue_client)


def get_job_service(
    store: RecordStore = Depends(get_record_store),
    cache: MatchCacheService = Depends(get_match_cache),
    queue_client: QueueClient = Depends(get_queue_client)
) -> JobService:
    notifier = None
    if get_config().matching.notify_on_publish:
        notifier = MatchNotifier(MatchQueryService(store, cache), queue_client)
    return JobService(store, cache, queue_client, notifier=notifier)
