"""Todo data model for Waaranders."""

from datetime import date, datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class TodoPriority(str, Enum):
    """Todo priority enumeration."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class TodoStatus(str, Enum):
    """Todo status enumeration."""
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class Todo(BaseModel):
    """Canonical Todo model."""

    id: str = Field(..., description="Unique todo identifier (UUID v4)")
    text: str = Field(..., description="What needs to be done")
    assignee_id: str = Field(..., description="Volunteer responsible for the todo")
    due_date: Optional[date] = Field(None, description="Target date (date-only, null means no deadline)")
    priority: TodoPriority = Field(TodoPriority.NORMAL, description="Todo priority")
    status: TodoStatus = Field(TodoStatus.PLANNED, description="Todo status")
    created_at: datetime = Field(..., description="Todo creation timestamp")
    updated_at: datetime = Field(..., description="Todo last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True

    def is_overdue(self, today: date) -> bool:
        """A todo is overdue when its due date has passed and it is not done."""
        if self.due_date is None:
            return False
        if self.status == TodoStatus.DONE.value:
            return False
        return self.due_date < today
