#!/usr/bin/env python3
"""
Job endpoints - publishing and job updates.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_job_service
from ..services import JobService
from ..models.requests import JobUpdate
from ..models.responses import JobResponse, PublishJobResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/{job_id}/publish", response_model=PublishJobResponse)
def publish_job(
    job_id: str,
    service: JobService = Depends(get_job_service)
):
    """
    Publish a pending job.

    Queues the job for the jobs channel and a notification for every
    approved talent that matches it.
    """
    outcome = service.publish(job_id)
    return PublishJobResponse(
        success=True,
        job=JobResponse.model_validate(outcome.job),
        notifications_enqueued=outcome.notifications_enqueued
    )


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    body: JobUpdate,
    service: JobService = Depends(get_job_service)
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True, mode='json')
    return service.update(job_id, fields)
