"""Business logic services."""

from .talent_service import TalentService
from .job_service import JobService, PublishOutcome
