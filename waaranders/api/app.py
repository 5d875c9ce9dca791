"""FastAPI web application for Waaranders."""

import logging
import uuid
from datetime import date, datetime
from operator import attrgetter
from typing import Dict, List, Optional
from fastapi import FastAPI, HTTPException, Depends, Query, status
from sqlalchemy.orm import Session

from waaranders import __version__
from waaranders.api.schemas import (
    ActivityCalendarResponse,
    ActivityCreateRequest,
    ActivityMonth,
    ActivityResponse,
    ActivityUpdateRequest,
    ActivityView,
    CustomerCreateRequest,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdateRequest,
    InterestCreateRequest,
    InterestResponse,
    ProfileCreateRequest,
    ProfileInterestsRequest,
    ProfileInterestsResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RoleAssignment,
    RoleListResponse,
    RoleUpdateRequest,
    SignupResponse,
    TodoCreateRequest,
    TodoListResponse,
    TodoResponse,
    TodoStatusRequest,
    TodoUpdateRequest,
    TodoView,
    VolunteerListResponse,
    VolunteerResponse,
    VolunteerUpdateRequest,
)
from waaranders.auth.dependencies import (
    get_current_volunteer,
    get_token_claims,
    require_admin,
    require_doenker_or_admin,
)
from waaranders.database.activity_repository import ActivityRepository
from waaranders.database.customer_repository import CustomerRepository
from waaranders.database.database import get_db
from waaranders.database.interest_repository import InterestRepository
from waaranders.database.repository import TodoRepository
from waaranders.database.role_repository import RoleRepository
from waaranders.database.volunteer_repository import VolunteerRepository
from waaranders.engine.grouping import format_day_label, format_short_date, group_by_month
from waaranders.engine.ordering import SecondaryMode, order_items
from waaranders.models.activity import Activity
from waaranders.models.constants import (
    DEFAULT_TARGET_GROUP,
    TARGET_GROUPS,
    UNKNOWN_ASSIGNEE_LABEL,
    UNKNOWN_NAME_LABEL,
)
from waaranders.models.customer import Customer
from waaranders.models.role import RoleCode
from waaranders.models.todo import Todo
from waaranders.models.volunteer import Volunteer

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Waaranders API",
    description="Volunteer profiles, activity calendar and management screens for Waaranders",
    version=__version__,
)


def get_today() -> date:
    """Current local date (dependency so tests can pin it)."""
    return date.today()


def _clean(value: Optional[str]) -> Optional[str]:
    """Trim text input; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _is_profile_complete(volunteer: Volunteer) -> bool:
    return bool(volunteer.first_name and volunteer.last_name and volunteer.phone)


def _validate_target_group(target_group: Optional[str]) -> None:
    if target_group is not None and target_group not in TARGET_GROUPS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown target group '{target_group}'",
        )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@app.post("/profile", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def create_profile(
    request: ProfileCreateRequest,
    claims: Dict = Depends(get_token_claims),
    db: Session = Depends(get_db),
):
    """Create the caller's volunteer profile.

    The very first profile becomes admin so a fresh installation can be managed.
    """
    volunteers = VolunteerRepository(db)
    roles = RoleRepository(db)
    user_id = claims["sub"]

    if volunteers.get(user_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Profile already exists")

    email = _clean(request.email) or claims.get("email")
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required")
    if volunteers.get_by_email(email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

    now = datetime.utcnow()
    volunteer = Volunteer(
        id=user_id,
        email=email,
        first_name=_clean(request.first_name),
        last_name=_clean(request.last_name),
        name=_clean(request.name),
        phone=_clean(request.phone),
        address=_clean(request.address),
        created_at=now,
        updated_at=now,
    )
    volunteer.profile_completed = _is_profile_complete(volunteer)
    created = volunteers.create(volunteer)

    role = RoleCode.ADMIN if roles.admin_count() == 0 else RoleCode.VOLUNTEER
    role_code = roles.set_role(created.id, role)
    logger.info(f"Created profile for {created.id} with role {role_code}")
    return ProfileResponse(volunteer=created, role=role_code)


@app.get("/profile", response_model=ProfileResponse)
def get_profile(
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """Get the caller's profile and base role."""
    return ProfileResponse(volunteer=current, role=RoleRepository(db).get_role_code(current.id))


@app.put("/profile", response_model=ProfileResponse)
def update_profile(
    request: ProfileUpdateRequest,
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """Update the caller's profile; fields left out are unchanged."""
    changes = {k: _clean(v) for k, v in request.model_dump(exclude_unset=True).items()}
    updated = current.model_copy(update={**changes, "updated_at": datetime.utcnow()})
    updated.profile_completed = _is_profile_complete(updated)
    saved = VolunteerRepository(db).update(updated)
    return ProfileResponse(volunteer=saved, role=RoleRepository(db).get_role_code(saved.id))


@app.get("/profile/interests", response_model=ProfileInterestsResponse)
def get_profile_interests(
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """All interests, with the ones the caller picked."""
    repo = InterestRepository(db)
    return ProfileInterestsResponse(
        interests=repo.list_all(),
        selected_ids=[i.id for i in repo.for_volunteer(current.id)],
    )


@app.put("/profile/interests", response_model=ProfileInterestsResponse)
def set_profile_interests(
    request: ProfileInterestsRequest,
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """Replace the caller's picked interests."""
    repo = InterestRepository(db)
    try:
        picked = repo.set_for_volunteer(current.id, request.interest_ids)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProfileInterestsResponse(interests=repo.list_all(), selected_ids=[i.id for i in picked])


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------

def _activity_calendar(
    activities: List[Activity],
    repo: ActivityRepository,
    volunteer_id: str,
) -> ActivityCalendarResponse:
    """Build month-grouped activity views with sign-up information."""
    participants = repo.participants_by_activity([a.id for a in activities])

    views = []
    for activity in activities:
        rows = participants.get(activity.id, [])
        views.append(ActivityView(
            id=activity.id,
            title=activity.title,
            description=activity.description,
            occurs_on=activity.occurs_on,
            day_label=format_day_label(activity.occurs_on),
            target_group=activity.target_group,
            customer_id=activity.customer_id,
            volunteers_needed=activity.volunteers_needed,
            signed_up_count=len(rows),
            still_needed=max(0, activity.volunteers_needed - len(rows)),
            participant_names=[row.name or UNKNOWN_NAME_LABEL for row in rows],
            signed_up=any(row.volunteer_id == volunteer_id for row in rows),
        ))

    groups = group_by_month(views, key=attrgetter("occurs_on"))
    return ActivityCalendarResponse(
        months=[ActivityMonth(month_key=g.month_key, title=g.title, items=g.items) for g in groups],
        count=len(views),
    )


@app.get("/activities", response_model=ActivityCalendarResponse)
def list_activities(
    current: Volunteer = Depends(get_current_volunteer),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Upcoming activities grouped by month."""
    repo = ActivityRepository(db)
    return _activity_calendar(repo.list_upcoming(today), repo, current.id)


@app.post("/activities/{activity_id}/signup", response_model=SignupResponse)
def sign_up_for_activity(
    activity_id: str,
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """Sign the caller up for an activity (idempotent)."""
    repo = ActivityRepository(db)
    if not repo.get(activity_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Activity {activity_id} not found")
    repo.sign_up(activity_id, current.id)
    return SignupResponse(activity_id=activity_id, signed_up=True)


@app.delete("/activities/{activity_id}/signup", response_model=SignupResponse)
def withdraw_from_activity(
    activity_id: str,
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """Remove the caller's sign-up."""
    repo = ActivityRepository(db)
    if not repo.get(activity_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Activity {activity_id} not found")
    repo.withdraw(activity_id, current.id)
    return SignupResponse(activity_id=activity_id, signed_up=False)


@app.get("/admin/activities", response_model=ActivityCalendarResponse)
def admin_list_activities(
    current: Volunteer = Depends(require_doenker_or_admin),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Upcoming activities grouped by month (management view)."""
    repo = ActivityRepository(db)
    return _activity_calendar(repo.list_upcoming(today), repo, current.id)


def _validate_customer(db: Session, customer_id: Optional[str]) -> None:
    if customer_id and not CustomerRepository(db).get(customer_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Customer {customer_id} not found",
        )


@app.post("/admin/activities", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
def create_activity(
    request: ActivityCreateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Create an activity."""
    title = _clean(request.title)
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    target_group = request.target_group or DEFAULT_TARGET_GROUP
    _validate_target_group(target_group)
    _validate_customer(db, request.customer_id)

    now = datetime.utcnow()
    activity = Activity(
        id=str(uuid.uuid4()),
        title=title,
        description=_clean(request.description),
        occurs_on=request.occurs_on,
        volunteers_needed=request.volunteers_needed,
        target_group=target_group,
        customer_id=request.customer_id,
        created_at=now,
        updated_at=now,
    )
    return ActivityResponse(activity=ActivityRepository(db).create(activity))


@app.put("/admin/activities/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: str,
    request: ActivityUpdateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Update an activity; fields left out are unchanged."""
    repo = ActivityRepository(db)
    existing = repo.get(activity_id)
    if not existing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Activity {activity_id} not found")

    changes = request.model_dump(exclude_unset=True)
    if "title" in changes:
        changes["title"] = _clean(changes["title"])
        if not changes["title"]:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    if "occurs_on" in changes and changes["occurs_on"] is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Date is required")
    if "volunteers_needed" in changes and changes["volunteers_needed"] is None:
        del changes["volunteers_needed"]
    if "description" in changes:
        changes["description"] = _clean(changes["description"])
    _validate_target_group(changes.get("target_group"))
    _validate_customer(db, changes.get("customer_id"))

    updated = existing.model_copy(update={**changes, "updated_at": datetime.utcnow()})
    return ActivityResponse(activity=repo.update(updated))


@app.delete("/admin/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_activity(
    activity_id: str,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Delete an activity and its sign-ups."""
    if not ActivityRepository(db).delete(activity_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Activity {activity_id} not found")


# ---------------------------------------------------------------------------
# Todos
# ---------------------------------------------------------------------------

def _todo_views(
    todos: List[Todo],
    names: Dict[str, str],
    sort: SecondaryMode,
    today: date,
) -> List[TodoView]:
    """Label todos with assignee names and put them in display order."""
    views = [
        TodoView(
            id=todo.id,
            text=todo.text,
            primary_date=todo.due_date,
            priority=todo.priority,
            status=todo.status,
            assignee_label=names.get(todo.assignee_id) or None,
            assignee_id=todo.assignee_id,
            assignee_name=names.get(todo.assignee_id) or UNKNOWN_ASSIGNEE_LABEL,
            date_label=format_short_date(todo.due_date),
            overdue=todo.is_overdue(today),
        )
        for todo in todos
    ]
    return order_items(views, sort)


@app.get("/todos", response_model=TodoListResponse)
def list_my_todos(
    current: Volunteer = Depends(get_current_volunteer),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """The caller's open todos, by date then priority."""
    todos = TodoRepository(db).get_open_for_assignee(current.id)
    names = {current.id: current.display_name}
    views = _todo_views(todos, names, SecondaryMode.BY_PRIORITY, today)
    return TodoListResponse(todos=views, count=len(views), sort=SecondaryMode.BY_PRIORITY)


@app.put("/todos/{todo_id}/status", response_model=TodoResponse)
def set_my_todo_status(
    todo_id: str,
    request: TodoStatusRequest,
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
):
    """Change the status of one of the caller's own todos."""
    repo = TodoRepository(db)
    todo = repo.get(todo_id)
    if not todo or todo.assignee_id != current.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Todo {todo_id} not found")
    return TodoResponse(todo=repo.set_status(todo_id, request.status))


@app.get("/admin/todos", response_model=TodoListResponse)
def admin_list_todos(
    sort: SecondaryMode = Query(SecondaryMode.BY_PRIORITY, description="Order within one day"),
    assignee_id: Optional[str] = Query(None, description="Only todos of this volunteer"),
    show_done: bool = Query(False, description="Include finished todos"),
    current: Volunteer = Depends(require_doenker_or_admin),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """All todos in display order, optionally filtered by assignee."""
    todos = TodoRepository(db).get_all(include_done=show_done)
    if assignee_id:
        todos = [t for t in todos if t.assignee_id == assignee_id]
    names = VolunteerRepository(db).names_by_id()
    views = _todo_views(todos, names, sort, today)
    return TodoListResponse(todos=views, count=len(views), sort=sort)


def _require_assignee(db: Session, assignee_id: str) -> None:
    if not VolunteerRepository(db).get(assignee_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Volunteer {assignee_id} not found",
        )


@app.post("/admin/todos", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(
    request: TodoCreateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Create a todo for a volunteer."""
    text = _clean(request.text)
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
    _require_assignee(db, request.assignee_id)

    now = datetime.utcnow()
    todo = Todo(
        id=str(uuid.uuid4()),
        text=text,
        assignee_id=request.assignee_id,
        due_date=request.due_date,
        priority=request.priority,
        status=request.status,
        created_at=now,
        updated_at=now,
    )
    return TodoResponse(todo=TodoRepository(db).create(todo))


@app.get("/admin/todos/{todo_id}", response_model=TodoResponse)
def get_todo(
    todo_id: str,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Get one todo."""
    todo = TodoRepository(db).get(todo_id)
    if not todo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Todo {todo_id} not found")
    return TodoResponse(todo=todo)


@app.put("/admin/todos/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: str,
    request: TodoUpdateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Update a todo; fields left out are unchanged, due_date null clears it."""
    repo = TodoRepository(db)
    existing = repo.get(todo_id)
    if not existing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Todo {todo_id} not found")

    changes = request.model_dump(exclude_unset=True)
    for field in ("text", "assignee_id", "priority", "status"):
        if field in changes and changes[field] is None:
            del changes[field]
    if "text" in changes:
        changes["text"] = _clean(changes["text"])
        if not changes["text"]:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
    if "assignee_id" in changes:
        _require_assignee(db, changes["assignee_id"])

    updated = existing.model_copy(update={**changes, "updated_at": datetime.utcnow()})
    return TodoResponse(todo=repo.update(updated))


@app.put("/admin/todos/{todo_id}/status", response_model=TodoResponse)
def set_todo_status(
    todo_id: str,
    request: TodoStatusRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Mark a todo done, or send it back to planned."""
    try:
        todo = TodoRepository(db).set_status(todo_id, request.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TodoResponse(todo=todo)


@app.delete("/admin/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(
    todo_id: str,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Delete a todo."""
    if not TodoRepository(db).delete(todo_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Todo {todo_id} not found")


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------

@app.get("/admin/customers", response_model=CustomerListResponse)
def list_customers(
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Active customers by name."""
    customers = CustomerRepository(db).list_active()
    return CustomerListResponse(customers=customers, count=len(customers))


@app.post("/admin/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    request: CustomerCreateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Create a customer."""
    name = _clean(request.name)
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is required")
    _validate_target_group(request.target_group)

    now = datetime.utcnow()
    customer = Customer(
        id=str(uuid.uuid4()),
        name=name,
        contact_name=_clean(request.contact_name),
        contact_phone=_clean(request.contact_phone),
        address=_clean(request.address),
        target_group=request.target_group,
        active=request.active,
        created_at=now,
        updated_at=now,
    )
    return CustomerResponse(customer=CustomerRepository(db).create(customer))


@app.get("/admin/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Get one customer (archived ones included)."""
    customer = CustomerRepository(db).get(customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer {customer_id} not found")
    return CustomerResponse(customer=customer)


@app.put("/admin/customers/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    request: CustomerUpdateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Update a customer; fields left out are unchanged."""
    repo = CustomerRepository(db)
    existing = repo.get(customer_id)
    if not existing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer {customer_id} not found")

    changes = request.model_dump(exclude_unset=True)
    if "name" in changes:
        changes["name"] = _clean(changes["name"])
        if not changes["name"]:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is required")
    if "active" in changes and changes["active"] is None:
        del changes["active"]
    for field in ("contact_name", "contact_phone", "address"):
        if field in changes:
            changes[field] = _clean(changes[field])
    _validate_target_group(changes.get("target_group"))

    updated = existing.model_copy(update={**changes, "updated_at": datetime.utcnow()})
    return CustomerResponse(customer=repo.update(updated))


@app.post("/admin/customers/{customer_id}/archive", response_model=CustomerResponse)
def archive_customer(
    customer_id: str,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Archive a customer; it disappears from the active list."""
    repo = CustomerRepository(db)
    if not repo.archive(customer_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer {customer_id} not found")
    return CustomerResponse(customer=repo.get(customer_id))


# ---------------------------------------------------------------------------
# Volunteers
# ---------------------------------------------------------------------------

@app.get("/admin/volunteers", response_model=VolunteerListResponse)
def list_volunteers(
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """All volunteers by last name, first name."""
    volunteers = VolunteerRepository(db).list_all()
    return VolunteerListResponse(volunteers=volunteers, count=len(volunteers))


def _volunteer_detail(db: Session, volunteer: Volunteer) -> VolunteerResponse:
    return VolunteerResponse(
        volunteer=volunteer,
        role=RoleRepository(db).get_role_code(volunteer.id),
        interests=[i.title for i in InterestRepository(db).for_volunteer(volunteer.id)],
    )


@app.get("/admin/volunteers/{volunteer_id}", response_model=VolunteerResponse)
def get_volunteer(
    volunteer_id: str,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """A volunteer with their role and picked interests."""
    volunteer = VolunteerRepository(db).get(volunteer_id)
    if not volunteer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Volunteer {volunteer_id} not found")
    return _volunteer_detail(db, volunteer)


@app.put("/admin/volunteers/{volunteer_id}", response_model=VolunteerResponse)
def update_volunteer(
    volunteer_id: str,
    request: VolunteerUpdateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Edit a volunteer's details."""
    repo = VolunteerRepository(db)
    existing = repo.get(volunteer_id)
    if not existing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Volunteer {volunteer_id} not found")

    changes = request.model_dump(exclude_unset=True)
    active = changes.pop("active", None)
    changes = {k: _clean(v) for k, v in changes.items()}
    if active is not None:
        changes["active"] = active

    updated = existing.model_copy(update={**changes, "updated_at": datetime.utcnow()})
    updated.profile_completed = _is_profile_complete(updated)
    return _volunteer_detail(db, repo.update(updated))


# ---------------------------------------------------------------------------
# Interests
# ---------------------------------------------------------------------------

@app.post("/admin/interests", response_model=InterestResponse, status_code=status.HTTP_201_CREATED)
def create_interest(
    request: InterestCreateRequest,
    current: Volunteer = Depends(require_doenker_or_admin),
    db: Session = Depends(get_db),
):
    """Add an interest volunteers can pick on their profile."""
    title = _clean(request.title)
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    repo = InterestRepository(db)
    if repo.get_by_title(title):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Interest '{title}' already exists")
    return InterestResponse(interest=repo.create(title))


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------

@app.get("/admin/roles", response_model=RoleListResponse)
def list_roles(
    current: Volunteer = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Active volunteers with their current base role."""
    roles = RoleRepository(db)
    role_by_volunteer = roles.roles_by_volunteer()
    assignments = [
        RoleAssignment(
            volunteer_id=v.id,
            name=v.display_name or UNKNOWN_NAME_LABEL,
            role=role_by_volunteer.get(v.id),
        )
        for v in VolunteerRepository(db).list_active()
    ]
    return RoleListResponse(
        volunteers=assignments,
        roles=roles.list_roles(),
        admin_count=roles.admin_count(),
    )


@app.put("/admin/roles/{volunteer_id}", response_model=RoleAssignment)
def set_volunteer_role(
    volunteer_id: str,
    request: RoleUpdateRequest,
    current: Volunteer = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Give a volunteer a new base role.

    An admin cannot step down while they are the only admin left.
    """
    target = VolunteerRepository(db).get(volunteer_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Volunteer {volunteer_id} not found")

    roles = RoleRepository(db)
    new_role = RoleCode(request.role)
    if volunteer_id == current.id and new_role != RoleCode.ADMIN and roles.admin_count() <= 1:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot remove the last admin",
        )

    role_code = roles.set_role(volunteer_id, new_role, granted_by=current.id)
    logger.info(f"{current.id} set role of {volunteer_id} to {role_code}")
    return RoleAssignment(
        volunteer_id=target.id,
        name=target.display_name or UNKNOWN_NAME_LABEL,
        role=role_code,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
