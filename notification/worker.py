#!/usr/bin/env python3
"""
RQ Worker for the publish and notify queues.

Consumes publish-talent, publish-job and notify-talent. The scheduler is
enabled so retried jobs come back after their backoff delay.

Usage:
    python -m notification.worker
    python -m notification.worker --burst
    python -m notification.worker --queues notify-talent --verbose
"""

import sys
import argparse
import logging
from typing import List, Optional

from redis import Redis
from rq import Worker
from tenacity import retry, stop_after_attempt, wait_fixed, before_sleep_log

from core.config_loader import load_config
from core.cache.match_cache import _sanitize_url
from notification.queues import QUEUE_NAMES
from notification.tasks import TaskContext, set_task_context

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@retry(
    stop=stop_after_attempt(5),
    wait=wait_fixed(2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True
)
def _connect(redis_url: str) -> Redis:
    redis_conn = Redis.from_url(redis_url)
    redis_conn.ping()
    return redis_conn


def start_worker(burst: bool = False, queues: Optional[List[str]] = None, config_path: str = "config.yaml"):
    """Start the RQ worker."""
    config = load_config(config_path)

    if queues is None:
        queues = list(config.queues.queues)

    unknown = [q for q in queues if q not in QUEUE_NAMES]
    if unknown:
        raise ValueError(f"Unknown queues: {', '.join(unknown)}")

    logger.info("Starting RQ Worker")
    logger.info(f"Redis URL: {_sanitize_url(config.redis.url)}")
    logger.info(f"Queues: {', '.join(queues)}")
    logger.info(f"Burst mode: {burst}")

    try:
        redis_conn = _connect(config.redis.url)
        logger.info("✓ Connected to Redis")

        set_task_context(TaskContext.build(config))

        worker = Worker(queues, connection=redis_conn)

        if burst:
            logger.info("Running in burst mode...")
            worker.work(burst=True, with_scheduler=True)
        else:
            logger.info("Worker started. Press Ctrl+C to stop.")
            worker.work(with_scheduler=True)

    except KeyboardInterrupt:
        logger.info("Worker stopped")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='TalentMatch queue worker')
    parser.add_argument('--burst', action='store_true', help='Process all and exit')
    parser.add_argument('--queues', nargs='+', default=None, help='Defaults to queues.queues in config.yaml')
    parser.add_argument('--config', default='config.yaml')
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    start_worker(burst=args.burst, queues=args.queues, config_path=args.config)


if __name__ == '__main__':
    main()
