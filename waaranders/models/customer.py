"""Customer (klant) data model for Waaranders."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Customer(BaseModel):
    """Customer the volunteers organise activities for."""

    id: str = Field(..., description="Unique customer identifier (UUID v4)")
    name: str = Field(..., description="Customer name")
    contact_name: Optional[str] = Field(None, description="Contact person")
    contact_phone: Optional[str] = Field(None, description="Contact person phone number")
    address: Optional[str] = Field(None, description="Address")
    target_group: Optional[str] = Field(None, description="Target group code (DG1..DG8)")
    active: bool = Field(True, description="False once archived")
    archived_at: Optional[datetime] = Field(None, description="Archive timestamp")
    created_at: datetime = Field(..., description="Customer creation timestamp")
    updated_at: datetime = Field(..., description="Customer last update timestamp")
