#!/usr/bin/env python3
"""
Talent endpoints - approval and profile updates.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_talent_service
from ..services import TalentService
from ..models.requests import TalentUpdate
from ..models.responses import TalentResponse

router = APIRouter(prefix="/talents", tags=["talents"])


@router.post("/{talent_id}/approve", response_model=TalentResponse)
def approve_talent(
    talent_id: str,
    service: TalentService = Depends(get_talent_service)
):
    """Approve a talent and queue it for the talents channel."""
    return service.approve(talent_id)


@router.patch("/{talent_id}", response_model=TalentResponse)
def update_talent(
    talent_id: str,
    body: TalentUpdate,
    service: TalentService = Depends(get_talent_service)
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True, mode='json')
    return service.update(talent_id, fields)
