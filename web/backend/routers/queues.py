#!/usr/bin/env python3
"""
Queue endpoints - inspect the publish and notify queues.
"""

from fastapi import APIRouter, Depends

from notification.queues import QueueClient
from ..dependencies import get_queue_client
from ..models.responses import QueueStatusResponse

router = APIRouter(prefix="/queues", tags=["queues"])


@router.get("/status", response_model=QueueStatusResponse)
def get_queue_status(queue_client: QueueClient = Depends(get_queue_client)):
    """Waiting, scheduled, active, completed and failed counts per queue."""
    return queue_client.get_queue_status()
