"""Role data model for Waaranders."""

from enum import Enum
from pydantic import BaseModel, Field


class RoleCode(str, Enum):
    """Base roles. A volunteer holds exactly one of these."""
    VOLUNTEER = "volunteer"
    DOENKER = "doenker"
    ADMIN = "admin"


ROLE_TITLES = {
    RoleCode.VOLUNTEER: "Vrijwilliger",
    RoleCode.DOENKER: "Doenker",
    RoleCode.ADMIN: "Admin",
}


class Role(BaseModel):
    """Role row."""

    id: str
    code: RoleCode
    title: str = Field(..., description="Human readable role title")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
