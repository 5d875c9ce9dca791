"""Request/response models for the Waaranders API."""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from waaranders.engine.ordering import OrderableItem, SecondaryMode
from waaranders.models.activity import Activity
from waaranders.models.constants import (
    DEFAULT_TODO_PRIORITY,
    DEFAULT_TODO_STATUS,
    DEFAULT_VOLUNTEERS_NEEDED,
)
from waaranders.models.customer import Customer
from waaranders.models.interest import Interest
from waaranders.models.role import Role, RoleCode
from waaranders.models.todo import Todo, TodoPriority, TodoStatus
from waaranders.models.volunteer import Volunteer


# Profile

class ProfileCreateRequest(BaseModel):
    """Request model for creating the caller's own volunteer profile."""
    email: Optional[str] = Field(None, description="Defaults to the token's email claim")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    """Request model for updating the caller's own profile."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ProfileResponse(BaseModel):
    volunteer: Volunteer
    role: Optional[str] = None


# Interests

class InterestCreateRequest(BaseModel):
    title: str


class InterestResponse(BaseModel):
    interest: Interest


class ProfileInterestsRequest(BaseModel):
    """Replace the caller's picked interests."""
    interest_ids: List[str] = Field(default_factory=list)


class ProfileInterestsResponse(BaseModel):
    interests: List[Interest] = Field(..., description="All interests, by title")
    selected_ids: List[str] = Field(default_factory=list, description="Interests the caller picked")


# Volunteers (admin)

class VolunteerUpdateRequest(ProfileUpdateRequest):
    """Request model for editing a volunteer from the admin screens."""
    active: Optional[bool] = None


class VolunteerResponse(BaseModel):
    volunteer: Volunteer
    role: Optional[str] = None
    interests: List[str] = Field(default_factory=list, description="Titles of the picked interests")


class VolunteerListResponse(BaseModel):
    volunteers: List[Volunteer]
    count: int


# Roles

class RoleUpdateRequest(BaseModel):
    role: RoleCode

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class RoleAssignment(BaseModel):
    volunteer_id: str
    name: str
    role: Optional[str] = None


class RoleListResponse(BaseModel):
    volunteers: List[RoleAssignment]
    roles: List[Role] = Field(default_factory=list, description="Roles that can be assigned")
    admin_count: int


# Customers

class CustomerCreateRequest(BaseModel):
    name: str
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    target_group: Optional[str] = None
    active: bool = True


class CustomerUpdateRequest(BaseModel):
    name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    target_group: Optional[str] = None
    active: Optional[bool] = None


class CustomerResponse(BaseModel):
    customer: Customer


class CustomerListResponse(BaseModel):
    customers: List[Customer]
    count: int


# Activities

class ActivityCreateRequest(BaseModel):
    title: str
    description: Optional[str] = None
    occurs_on: date
    volunteers_needed: int = Field(DEFAULT_VOLUNTEERS_NEEDED, ge=0)
    target_group: Optional[str] = None
    customer_id: Optional[str] = None


class ActivityUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    occurs_on: Optional[date] = None
    volunteers_needed: Optional[int] = Field(None, ge=0)
    target_group: Optional[str] = None
    customer_id: Optional[str] = None


class ActivityResponse(BaseModel):
    activity: Activity


class ActivityView(BaseModel):
    """Activity as shown on the calendar."""
    id: str
    title: str
    description: Optional[str] = None
    occurs_on: date
    day_label: str
    target_group: Optional[str] = None
    customer_id: Optional[str] = None
    volunteers_needed: int
    signed_up_count: int = 0
    still_needed: int = 0
    participant_names: List[str] = Field(default_factory=list)
    signed_up: bool = Field(False, description="Whether the caller is signed up")


class ActivityMonth(BaseModel):
    month_key: str
    title: str
    items: List[ActivityView]


class ActivityCalendarResponse(BaseModel):
    months: List[ActivityMonth]
    count: int


class SignupResponse(BaseModel):
    activity_id: str
    signed_up: bool


# Todos

class TodoCreateRequest(BaseModel):
    text: str
    assignee_id: str
    due_date: Optional[date] = None
    priority: TodoPriority = DEFAULT_TODO_PRIORITY
    status: TodoStatus = DEFAULT_TODO_STATUS


class TodoUpdateRequest(BaseModel):
    """Partial update; send due_date: null to clear the date."""
    text: Optional[str] = None
    assignee_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[TodoPriority] = None
    status: Optional[TodoStatus] = None


class TodoStatusRequest(BaseModel):
    status: TodoStatus


class TodoResponse(BaseModel):
    todo: Todo


class TodoView(OrderableItem):
    """Todo as shown in a list. primary_date is the todo's due date."""
    assignee_id: str
    assignee_name: str = Field(..., description="Assignee display name or a placeholder")
    date_label: str = Field("", description="DD/MM, empty without due date")
    overdue: bool = False


class TodoListResponse(BaseModel):
    todos: List[TodoView]
    count: int
    sort: SecondaryMode
