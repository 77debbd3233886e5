#!/usr/bin/env python3
"""
Talent service - approval and profile updates.

Every change to a matchable field drops the talent's cached match list
after the change is committed.
"""

import logging
from typing import Any, Dict

from core.cache import MatchCacheService
from core.constants import TalentStatus, TALENT_MATCHABLE_FIELDS
from database.models import Talent
from database.record_store import RecordStore
from ..exceptions import (
    TalentNotFoundException,
    InvalidStatusTransitionException,
    InvalidUpdateException
)

logger = logging.getLogger(__name__)

APPROVABLE_STATUSES = (TalentStatus.PENDING.value, TalentStatus.REJECTED.value)


class TalentService:
    """Service for talent mutations."""

    def __init__(self, store: RecordStore, cache: MatchCacheService, queue_client):
        self.store = store
        self.cache = cache
        self.queue_client = queue_client

    def get_talent(self, talent_id: Any) -> Talent:
        talent = self.store.get_talent(talent_id)
        if talent is None:
            raise TalentNotFoundException(f"Talent with ID {talent_id} not found")
        return talent

    def approve(self, talent_id: Any) -> Talent:
        """
        Approve a pending (or previously rejected) talent.

        The talent is posted to the talents channel through the
        publish-talent queue.
        """
        talent = self.get_talent(talent_id)
        if talent.status not in APPROVABLE_STATUSES:
            raise InvalidStatusTransitionException(
                f"Talent {talent.id} cannot be approved from status {talent.status}"
            )

        self.store.talents.update_fields(talent, {'status': TalentStatus.APPROVED.value})
        self.store.talents.commit()
        logger.info(f"Approved talent {talent.id}")

        self.cache.invalidate('talent', talent.id)
        self.queue_client.enqueue_publish_talent(talent.id)
        return talent

    def update(self, talent_id: Any, fields: Dict[str, Any]) -> Talent:
        talent = self.get_talent(talent_id)

        try:
            changed = self.store.talents.update_fields(talent, fields)
        except ValueError as e:
            self.store.talents.rollback()
            raise InvalidUpdateException(str(e))

        if not changed:
            return talent

        self.store.talents.commit()
        logger.info(f"Updated talent {talent.id}: {', '.join(changed)}")

        if TALENT_MATCHABLE_FIELDS.intersection(changed):
            self.cache.invalidate('talent', talent.id)
        return talent
