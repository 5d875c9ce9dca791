"""Repository for Volunteer database operations."""

import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from waaranders.models.volunteer import Volunteer
from waaranders.database.models import VolunteerDB
from waaranders.engine.ordering import collation_key

logger = logging.getLogger(__name__)


class VolunteerRepository:
    """Repository for Volunteer database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, volunteer_id: str) -> Optional[Volunteer]:
        """Get volunteer by ID."""
        volunteer_db = self.db.query(VolunteerDB).filter(VolunteerDB.id == volunteer_id).first()
        return volunteer_db.to_pydantic() if volunteer_db else None

    def get_by_email(self, email: str) -> Optional[Volunteer]:
        """Get volunteer by email."""
        volunteer_db = self.db.query(VolunteerDB).filter(VolunteerDB.email == email).first()
        return volunteer_db.to_pydantic() if volunteer_db else None

    def list_all(self) -> List[Volunteer]:
        """All volunteers ordered by last name, then first name (missing names last)."""
        volunteers_db = self.db.query(VolunteerDB).order_by(
            VolunteerDB.last_name.is_(None),
            VolunteerDB.last_name,
            VolunteerDB.first_name.is_(None),
            VolunteerDB.first_name,
        ).all()
        return [v.to_pydantic() for v in volunteers_db]

    def list_active(self) -> List[Volunteer]:
        """Active volunteers ordered by display name (missing names last)."""
        volunteers_db = self.db.query(VolunteerDB).filter(VolunteerDB.active.is_(True)).all()
        volunteers = [v.to_pydantic() for v in volunteers_db]
        return sorted(volunteers, key=lambda v: (not v.display_name, collation_key(v.display_name)))

    def names_by_id(self) -> Dict[str, str]:
        """Lookup from volunteer id to display name, used to label todo assignees."""
        return {v.id: v.display_name for v in self.list_all()}

    def create(self, volunteer: Volunteer) -> Volunteer:
        """Create a new volunteer profile."""
        try:
            volunteer_db = VolunteerDB.from_pydantic(volunteer)
            self.db.add(volunteer_db)
            self.db.commit()
            self.db.refresh(volunteer_db)
            logger.debug(f"Created volunteer {volunteer.id}: {volunteer.email}")
            return volunteer_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create volunteer {volunteer.id}: {type(e).__name__}: {str(e)}")
            raise

    def update(self, volunteer: Volunteer) -> Volunteer:
        """Update an existing volunteer profile."""
        volunteer_db = self.db.query(VolunteerDB).filter(VolunteerDB.id == volunteer.id).first()
        if not volunteer_db:
            raise ValueError(f"Volunteer {volunteer.id} not found")

        volunteer_db.email = volunteer.email
        volunteer_db.first_name = volunteer.first_name
        volunteer_db.last_name = volunteer.last_name
        volunteer_db.name = volunteer.name
        volunteer_db.phone = volunteer.phone
        volunteer_db.address = volunteer.address
        volunteer_db.active = volunteer.active
        volunteer_db.profile_completed = volunteer.profile_completed
        volunteer_db.updated_at = volunteer.updated_at

        try:
            self.db.commit()
            self.db.refresh(volunteer_db)
            logger.debug(f"Updated volunteer {volunteer.id}")
            return volunteer_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update volunteer {volunteer.id}: {type(e).__name__}: {str(e)}")
            raise
