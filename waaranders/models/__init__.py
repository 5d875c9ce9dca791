"""Data models for Waaranders."""

from waaranders.models.todo import Todo, TodoPriority, TodoStatus
from waaranders.models.volunteer import Volunteer
from waaranders.models.role import Role, RoleCode
from waaranders.models.customer import Customer
from waaranders.models.activity import Activity, Participant
from waaranders.models.interest import Interest

__all__ = [
    "Todo",
    "TodoPriority",
    "TodoStatus",
    "Volunteer",
    "Role",
    "RoleCode",
    "Customer",
    "Activity",
    "Participant",
    "Interest",
]
