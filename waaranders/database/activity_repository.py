"""Repository for Activity and participation database operations."""

import logging
from datetime import date
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from waaranders.models.activity import Activity, Participant
from waaranders.database.models import ActivityDB, ParticipationDB, VolunteerDB

logger = logging.getLogger(__name__)


class ActivityRepository:
    """Repository for Activity database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, activity: Activity) -> Activity:
        """Create a new activity."""
        try:
            activity_db = ActivityDB.from_pydantic(activity)
            self.db.add(activity_db)
            self.db.commit()
            self.db.refresh(activity_db)
            logger.debug(f"Created activity {activity.id}: {activity.title[:50]}")
            return activity_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create activity {activity.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, activity_id: str) -> Optional[Activity]:
        """Get activity by ID."""
        activity_db = self.db.query(ActivityDB).filter(ActivityDB.id == activity_id).first()
        return activity_db.to_pydantic() if activity_db else None

    def list_upcoming(self, from_date: date) -> List[Activity]:
        """Activities on or after `from_date`, earliest first."""
        activities_db = self.db.query(ActivityDB).filter(
            ActivityDB.occurs_on >= from_date,
        ).order_by(ActivityDB.occurs_on).all()
        return [a.to_pydantic() for a in activities_db]

    def update(self, activity: Activity) -> Activity:
        """Update an existing activity."""
        activity_db = self.db.query(ActivityDB).filter(ActivityDB.id == activity.id).first()
        if not activity_db:
            raise ValueError(f"Activity {activity.id} not found")

        activity_db.title = activity.title
        activity_db.description = activity.description
        activity_db.occurs_on = activity.occurs_on
        activity_db.volunteers_needed = activity.volunteers_needed
        activity_db.target_group = activity.target_group
        activity_db.customer_id = activity.customer_id
        activity_db.updated_at = activity.updated_at

        try:
            self.db.commit()
            self.db.refresh(activity_db)
            logger.debug(f"Updated activity {activity.id}: {activity.title[:50]}")
            return activity_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update activity {activity.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, activity_id: str) -> bool:
        """Permanently delete an activity and its sign-ups."""
        activity_db = self.db.query(ActivityDB).filter(ActivityDB.id == activity_id).first()
        if not activity_db:
            return False

        try:
            self.db.query(ParticipationDB).filter(
                ParticipationDB.activity_id == activity_id,
            ).delete(synchronize_session=False)
            self.db.delete(activity_db)
            self.db.commit()
            logger.debug(f"Deleted activity {activity_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete activity {activity_id}: {type(e).__name__}: {str(e)}")
            raise

    def participants_by_activity(self, activity_ids: List[str]) -> Dict[str, List[Participant]]:
        """Sign-ups (with volunteer names) grouped per activity id."""
        if not activity_ids:
            return {}
        rows = (
            self.db.query(ParticipationDB.activity_id, ParticipationDB.volunteer_id, VolunteerDB)
            .outerjoin(VolunteerDB, VolunteerDB.id == ParticipationDB.volunteer_id)
            .filter(ParticipationDB.activity_id.in_(activity_ids))
            .order_by(ParticipationDB.created_at)
            .all()
        )
        result: Dict[str, List[Participant]] = {}
        for activity_id, volunteer_id, volunteer_db in rows:
            # Same label as Volunteer.display_name; None when nothing is filled in
            name = volunteer_db.to_pydantic().display_name if volunteer_db else None
            result.setdefault(activity_id, []).append(
                Participant(activity_id=activity_id, volunteer_id=volunteer_id, name=name or None)
            )
        return result

    def sign_up(self, activity_id: str, volunteer_id: str) -> bool:
        """Sign a volunteer up. Returns False if they were already signed up."""
        existing = self.db.query(ParticipationDB).filter(
            ParticipationDB.activity_id == activity_id,
            ParticipationDB.volunteer_id == volunteer_id,
        ).first()
        if existing:
            return False

        try:
            self.db.add(ParticipationDB(activity_id=activity_id, volunteer_id=volunteer_id))
            self.db.commit()
            logger.debug(f"Volunteer {volunteer_id} signed up for activity {activity_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to sign up volunteer {volunteer_id} for activity {activity_id}: {type(e).__name__}: {str(e)}")
            raise

    def withdraw(self, activity_id: str, volunteer_id: str) -> bool:
        """Remove a sign-up. Returns False if there was none."""
        try:
            affected = self.db.query(ParticipationDB).filter(
                ParticipationDB.activity_id == activity_id,
                ParticipationDB.volunteer_id == volunteer_id,
            ).delete(synchronize_session=False)
            self.db.commit()
            logger.debug(f"Volunteer {volunteer_id} withdrew from activity {activity_id}")
            return affected > 0
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to withdraw volunteer {volunteer_id} from activity {activity_id}: {type(e).__name__}: {str(e)}")
            raise
