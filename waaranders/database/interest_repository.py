"""Repository for interests and the interests volunteers picked."""

import logging
import uuid
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from waaranders.models.interest import Interest
from waaranders.database.models import InterestDB, VolunteerInterestDB
from waaranders.engine.ordering import collation_key

logger = logging.getLogger(__name__)


class InterestRepository:
    """Repository for Interest database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _sorted(self, interests_db: List[InterestDB]) -> List[Interest]:
        return sorted((i.to_pydantic() for i in interests_db), key=lambda i: collation_key(i.title))

    def list_all(self) -> List[Interest]:
        """All interests by title."""
        return self._sorted(self.db.query(InterestDB).all())

    def get_by_title(self, title: str) -> Optional[Interest]:
        interest_db = self.db.query(InterestDB).filter(InterestDB.title == title).first()
        return interest_db.to_pydantic() if interest_db else None

    def create(self, title: str) -> Interest:
        """Create a new interest."""
        try:
            interest_db = InterestDB(id=str(uuid.uuid4()), title=title)
            self.db.add(interest_db)
            self.db.commit()
            self.db.refresh(interest_db)
            logger.debug(f"Created interest {interest_db.id}: {title[:50]}")
            return interest_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create interest '{title[:50]}': {type(e).__name__}: {str(e)}")
            raise

    def for_volunteer(self, volunteer_id: str) -> List[Interest]:
        """Interests the volunteer picked, by title."""
        interests_db = (
            self.db.query(InterestDB)
            .join(VolunteerInterestDB, VolunteerInterestDB.interest_id == InterestDB.id)
            .filter(VolunteerInterestDB.volunteer_id == volunteer_id)
            .all()
        )
        return self._sorted(interests_db)

    def set_for_volunteer(self, volunteer_id: str, interest_ids: Iterable[str]) -> List[Interest]:
        """Replace the volunteer's picked interests.

        Raises:
            ValueError: If one of the ids is not a known interest
        """
        wanted = set(interest_ids)
        known = {
            interest_id
            for (interest_id,) in self.db.query(InterestDB.id).filter(InterestDB.id.in_(list(wanted))).all()
        }
        unknown = wanted - known
        if unknown:
            raise ValueError(f"Unknown interests: {', '.join(sorted(unknown))}")

        try:
            self.db.query(VolunteerInterestDB).filter(
                VolunteerInterestDB.volunteer_id == volunteer_id,
            ).delete(synchronize_session=False)
            for interest_id in sorted(wanted):
                self.db.add(VolunteerInterestDB(volunteer_id=volunteer_id, interest_id=interest_id))
            self.db.commit()
            logger.debug(f"Set {len(wanted)} interests for volunteer {volunteer_id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to set interests for volunteer {volunteer_id}: {type(e).__name__}: {str(e)}")
            raise
        return self.for_volunteer(volunteer_id)
