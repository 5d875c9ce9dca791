"""Volunteer data model for Waaranders."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Volunteer(BaseModel):
    """Volunteer (vrijwilliger) profile.

    The id is the user id issued by the hosted auth service, so a token's
    subject maps directly onto a profile row.
    """

    id: str = Field(..., description="Unique volunteer identifier (auth user id)")
    email: str = Field(..., description="Volunteer email address")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    name: Optional[str] = Field(None, description="Display name")
    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = Field(None, description="Postal address")
    active: bool = Field(True, description="Whether the volunteer is active")
    profile_completed: bool = Field(False, description="Whether the profile has been filled in")
    created_at: datetime = Field(..., description="Profile creation timestamp")
    updated_at: datetime = Field(..., description="Profile last update timestamp")

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts)
