import logging
from typing import List, Optional, Any, Dict
from datetime import datetime, timezone

from sqlalchemy import select

from core.constants import JobStatus
from database.models import Job
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class JobRepository(BaseRepository):
    def get_by_id(self, job_id: Any) -> Optional[Job]:
        stmt = select(Job).where(Job.id == str(job_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> List[Job]:
        stmt = select(Job).order_by(Job.id)
        return list(self.db.execute(stmt).scalars().all())

    def list_by_status(self, status: JobStatus) -> List[Job]:
        stmt = select(Job).where(Job.status == status.value).order_by(Job.id)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, job_data: Dict[str, Any]) -> Job:
        job = Job(**job_data)
        self.db.add(job)
        self.db.flush()  # Generate ID
        return job

    def update_fields(self, job: Job, fields: Dict[str, Any]) -> List[str]:
        """Apply field updates and return the names of fields whose value changed."""
        changed = []
        for name, value in fields.items():
            if not hasattr(Job, name) or name == 'id':
                raise ValueError(f"Unknown job field: {name}")
            if getattr(job, name) != value:
                setattr(job, name, value)
                changed.append(name)

        if 'status' in changed and job.status == JobStatus.PUBLISHED.value:
            job.published_at = datetime.now(timezone.utc)

        if changed:
            self.db.flush()
            logger.debug(f"Updated job {job.id}: {', '.join(changed)}")
        return changed
