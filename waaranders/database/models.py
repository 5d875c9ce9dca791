"""SQLAlchemy database models for Waaranders."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint

from typing import Union, TypeVar, Type
from waaranders.database.database import Base
from waaranders.models.todo import TodoPriority, TodoStatus
from waaranders.models.role import RoleCode

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


def _new_id() -> str:
    return str(uuid.uuid4())


class VolunteerDB(Base):
    """Database model for Volunteer."""

    __tablename__ = "volunteers"

    # Primary key (auth user id)
    id = Column(String, primary_key=True)

    # Profile
    email = Column(String, nullable=False, unique=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    name = Column(String, nullable=True, index=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    profile_completed = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from waaranders.models.volunteer import Volunteer
        return Volunteer(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            name=self.name,
            phone=self.phone,
            address=self.address,
            active=self.active,
            profile_completed=self.profile_completed,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, volunteer):
        """Create database model from Pydantic model."""
        return cls(
            id=volunteer.id,
            email=volunteer.email,
            first_name=volunteer.first_name,
            last_name=volunteer.last_name,
            name=volunteer.name,
            phone=volunteer.phone,
            address=volunteer.address,
            active=volunteer.active,
            profile_completed=volunteer.profile_completed,
            created_at=volunteer.created_at,
            updated_at=volunteer.updated_at,
        )


class RoleDB(Base):
    """Database model for Role."""

    __tablename__ = "roles"

    id = Column(String, primary_key=True, default=_new_id)
    code = Column(String, nullable=False, unique=True)
    title = Column(String, nullable=False)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from waaranders.models.role import Role
        return Role(
            id=self.id,
            code=value_to_enum(self.code, RoleCode, RoleCode.VOLUNTEER),
            title=self.title,
        )


class VolunteerRoleDB(Base):
    """Role assignment (join table between volunteers and roles)."""

    __tablename__ = "volunteer_roles"

    volunteer_id = Column(String, ForeignKey("volunteers.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(String, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)

    # Who granted the role (null for seeded/bootstrap assignments)
    granted_by = Column(String, ForeignKey("volunteers.id", ondelete="SET NULL"), nullable=True)
    granted_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class InterestDB(Base):
    """Database model for Interest."""

    __tablename__ = "interests"

    id = Column(String, primary_key=True, default=_new_id)
    title = Column(String, nullable=False, unique=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from waaranders.models.interest import Interest
        return Interest(id=self.id, title=self.title)


class VolunteerInterestDB(Base):
    """Interest picked by a volunteer (join table)."""

    __tablename__ = "volunteer_interests"

    volunteer_id = Column(String, ForeignKey("volunteers.id", ondelete="CASCADE"), primary_key=True)
    interest_id = Column(String, ForeignKey("interests.id", ondelete="CASCADE"), primary_key=True)


class CustomerDB(Base):
    """Database model for Customer."""

    __tablename__ = "customers"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False, index=True)
    contact_name = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    target_group = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True, index=True)
    archived_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from waaranders.models.customer import Customer
        return Customer(
            id=self.id,
            name=self.name,
            contact_name=self.contact_name,
            contact_phone=self.contact_phone,
            address=self.address,
            target_group=self.target_group,
            active=self.active,
            archived_at=self.archived_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, customer):
        """Create database model from Pydantic model."""
        return cls(
            id=customer.id,
            name=customer.name,
            contact_name=customer.contact_name,
            contact_phone=customer.contact_phone,
            address=customer.address,
            target_group=customer.target_group,
            active=customer.active,
            archived_at=customer.archived_at,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )


class ActivityDB(Base):
    """Database model for Activity."""

    __tablename__ = "activities"

    id = Column(String, primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    occurs_on = Column(Date, nullable=False, index=True)
    volunteers_needed = Column(Integer, nullable=False, default=1)
    target_group = Column(String, nullable=True)
    customer_id = Column(String, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from waaranders.models.activity import Activity
        return Activity(
            id=self.id,
            title=self.title,
            description=self.description,
            occurs_on=self.occurs_on,
            volunteers_needed=self.volunteers_needed,
            target_group=self.target_group,
            customer_id=self.customer_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, activity):
        """Create database model from Pydantic model."""
        return cls(
            id=activity.id,
            title=activity.title,
            description=activity.description,
            occurs_on=activity.occurs_on,
            volunteers_needed=activity.volunteers_needed,
            target_group=activity.target_group,
            customer_id=activity.customer_id,
            created_at=activity.created_at,
            updated_at=activity.updated_at,
        )


class ParticipationDB(Base):
    """A volunteer signed up for an activity."""

    __tablename__ = "participations"
    __table_args__ = (
        UniqueConstraint("activity_id", "volunteer_id", name="uq_participation_activity_volunteer"),
    )

    id = Column(String, primary_key=True, default=_new_id)
    activity_id = Column(String, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True)
    volunteer_id = Column(String, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class TodoDB(Base):
    """Database model for Todo."""

    __tablename__ = "todos"

    id = Column(String, primary_key=True, default=_new_id)
    text = Column(String, nullable=False)
    assignee_id = Column(String, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False, index=True)
    due_date = Column(Date, nullable=True, index=True)
    priority = Column(String, nullable=False, default=TodoPriority.NORMAL.value)
    status = Column(String, nullable=False, default=TodoStatus.PLANNED.value, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from waaranders.models.todo import Todo
        return Todo(
            id=self.id,
            text=self.text,
            assignee_id=self.assignee_id,
            due_date=self.due_date,
            priority=value_to_enum(self.priority, TodoPriority, TodoPriority.NORMAL),
            status=value_to_enum(self.status, TodoStatus, TodoStatus.PLANNED),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, todo):
        """Create database model from Pydantic model."""
        # Pydantic with use_enum_values=True returns strings
        return cls(
            id=todo.id,
            text=todo.text,
            assignee_id=todo.assignee_id,
            due_date=todo.due_date,
            priority=enum_to_value(todo.priority),
            status=enum_to_value(todo.status),
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )
