"""Repository for role assignments.

Every volunteer holds a single base role (volunteer, doenker or admin).
Access checks are plain existence checks against the assignment table.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from waaranders.models.role import Role, RoleCode, ROLE_TITLES
from waaranders.database.models import RoleDB, VolunteerRoleDB, enum_to_value

logger = logging.getLogger(__name__)


class RoleRepository:
    """Repository for Role and VolunteerRole database operations."""

    def __init__(self, db: Session):
        self.db = db

    def ensure_defaults(self) -> None:
        """Seed the base roles if they are missing (idempotent)."""
        existing = {code for (code,) in self.db.query(RoleDB.code).all()}
        missing = [code for code in RoleCode if code.value not in existing]
        if not missing:
            return
        try:
            for code in missing:
                self.db.add(RoleDB(code=code.value, title=ROLE_TITLES[code]))
            self.db.commit()
            logger.info(f"Seeded roles: {', '.join(code.value for code in missing)}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to seed roles: {type(e).__name__}: {str(e)}")
            raise

    def list_roles(self) -> List[Role]:
        """The seeded base roles, in RoleCode order."""
        order = [code.value for code in RoleCode]
        roles = [role_db.to_pydantic() for role_db in self.db.query(RoleDB).all()]
        return sorted(roles, key=lambda role: order.index(role.code))

    def _role_ids_by_code(self) -> Dict[str, str]:
        return {role.code: role.id for role in self.db.query(RoleDB).all()}

    def get_role_code(self, volunteer_id: str) -> Optional[str]:
        """Return the volunteer's base role code, or None if no role is assigned."""
        row = (
            self.db.query(RoleDB.code)
            .join(VolunteerRoleDB, VolunteerRoleDB.role_id == RoleDB.id)
            .filter(VolunteerRoleDB.volunteer_id == volunteer_id)
            .first()
        )
        return row[0] if row else None

    def has_any_role(self, volunteer_id: str, codes: Iterable[RoleCode]) -> bool:
        """Whether the volunteer holds at least one of the given roles."""
        values = [enum_to_value(code) for code in codes]
        row = (
            self.db.query(VolunteerRoleDB.volunteer_id)
            .join(RoleDB, VolunteerRoleDB.role_id == RoleDB.id)
            .filter(VolunteerRoleDB.volunteer_id == volunteer_id, RoleDB.code.in_(values))
            .first()
        )
        return row is not None

    def is_admin(self, volunteer_id: str) -> bool:
        return self.has_any_role(volunteer_id, [RoleCode.ADMIN])

    def is_doenker_or_admin(self, volunteer_id: str) -> bool:
        return self.has_any_role(volunteer_id, [RoleCode.DOENKER, RoleCode.ADMIN])

    def roles_by_volunteer(self) -> Dict[str, str]:
        """Map volunteer id to role code for every assignment."""
        rows = (
            self.db.query(VolunteerRoleDB.volunteer_id, RoleDB.code)
            .join(RoleDB, VolunteerRoleDB.role_id == RoleDB.id)
            .all()
        )
        return {volunteer_id: code for volunteer_id, code in rows}

    def admin_count(self) -> int:
        return (
            self.db.query(VolunteerRoleDB)
            .join(RoleDB, VolunteerRoleDB.role_id == RoleDB.id)
            .filter(RoleDB.code == RoleCode.ADMIN.value)
            .count()
        )

    def set_role(self, volunteer_id: str, code: RoleCode, granted_by: Optional[str] = None) -> str:
        """Replace the volunteer's base role with `code`.

        Raises:
            ValueError: If the role has not been seeded
        """
        role_ids = self._role_ids_by_code()
        code_value = enum_to_value(code)
        target_role_id = role_ids.get(code_value)
        if not target_role_id:
            raise ValueError(f"Role {code_value} is missing; seed the roles table first")

        try:
            self.db.query(VolunteerRoleDB).filter(
                VolunteerRoleDB.volunteer_id == volunteer_id,
                VolunteerRoleDB.role_id.in_(list(role_ids.values())),
            ).delete(synchronize_session=False)
            self.db.add(VolunteerRoleDB(
                volunteer_id=volunteer_id,
                role_id=target_role_id,
                granted_by=granted_by,
                granted_at=datetime.utcnow(),
            ))
            self.db.commit()
            logger.debug(f"Set role of volunteer {volunteer_id} to {code_value}")
            return code_value
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to set role for volunteer {volunteer_id}: {type(e).__name__}: {str(e)}")
            raise
