import logging
from typing import List, Optional, Any, Dict
from datetime import datetime, timezone

from sqlalchemy import select

from core.constants import TalentStatus
from database.models import Talent
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TalentRepository(BaseRepository):
    def get_by_id(self, talent_id: Any) -> Optional[Talent]:
        stmt = select(Talent).where(Talent.id == str(talent_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> List[Talent]:
        stmt = select(Talent).order_by(Talent.id)
        return list(self.db.execute(stmt).scalars().all())

    def list_by_status(self, status: TalentStatus) -> List[Talent]:
        stmt = select(Talent).where(Talent.status == status.value).order_by(Talent.id)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, talent_data: Dict[str, Any]) -> Talent:
        talent = Talent(**talent_data)
        self.db.add(talent)
        self.db.flush()  # Generate ID
        return talent

    def update_fields(self, talent: Talent, fields: Dict[str, Any]) -> List[str]:
        """Apply field updates and return the names of fields whose value changed."""
        changed = []
        for name, value in fields.items():
            if not hasattr(Talent, name) or name == 'id':
                raise ValueError(f"Unknown talent field: {name}")
            if getattr(talent, name) != value:
                setattr(talent, name, value)
                changed.append(name)

        if 'status' in changed and talent.status == TalentStatus.APPROVED.value:
            talent.approved_at = datetime.now(timezone.utc)

        if changed:
            self.db.flush()
            logger.debug(f"Updated talent {talent.id}: {', '.join(changed)}")
        return changed
