"""Activity data model for Waaranders."""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class Activity(BaseModel):
    """Calendar activity volunteers can sign up for."""

    id: str = Field(..., description="Unique activity identifier (UUID v4)")
    title: str = Field(..., description="Activity title")
    description: Optional[str] = Field(None, description="Free-form explanation")
    occurs_on: date = Field(..., description="Day the activity takes place")
    volunteers_needed: int = Field(1, ge=0, description="Number of volunteers needed")
    target_group: Optional[str] = Field(None, description="Target group code (DG1..DG8)")
    customer_id: Optional[str] = Field(None, description="Customer the activity is organised for")
    created_at: datetime = Field(..., description="Activity creation timestamp")
    updated_at: datetime = Field(..., description="Activity last update timestamp")


class Participant(BaseModel):
    """A volunteer signed up for an activity."""

    activity_id: str
    volunteer_id: str
    name: Optional[str] = None
