from typing import List, Optional, Any

from sqlalchemy.orm import Session

from database.models import Job, Talent
from database.repositories import JobRepository, TalentRepository


class RecordStore:
    """
    Read access to Jobs and Talents for the matching core.

    Bundles the two repositories over one session so callers that need
    both (the query service, the workers) hold a single collaborator.
    """

    def __init__(self, db: Session):
        self.db = db
        self.jobs = JobRepository(db)
        self.talents = TalentRepository(db)

    def get_job(self, job_id: Any) -> Optional[Job]:
        return self.jobs.get_by_id(job_id)

    def get_talent(self, talent_id: Any) -> Optional[Talent]:
        return self.talents.get_by_id(talent_id)

    def list_jobs(self) -> List[Job]:
        return self.jobs.list_all()

    def list_talents(self) -> List[Talent]:
        return self.talents.list_all()
