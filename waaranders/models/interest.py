"""Interest data model for Waaranders."""

from pydantic import BaseModel, Field


class Interest(BaseModel):
    """Something a volunteer likes to help with (picked on the profile)."""

    id: str = Field(..., description="Unique interest identifier (UUID v4)")
    title: str = Field(..., description="Interest title shown on the profile")
