"""Pytest fixtures and configuration for Waaranders tests."""

import pytest
from datetime import date, datetime
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from waaranders.database.database import Base
from waaranders.database import models  # noqa: F401  (registers tables)
from waaranders.database.models import VolunteerDB
from waaranders.database.repository import TodoRepository
from waaranders.database.role_repository import RoleRepository
from waaranders.models.role import RoleCode
from waaranders.models.todo import Todo, TodoPriority, TodoStatus
from waaranders.models.volunteer import Volunteer


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Fixed "today" for endpoints that look at the current date
TODAY = date(2025, 3, 1)


def _volunteer_row(volunteer_id: str, email: str, first_name: str, last_name: str) -> VolunteerDB:
    now = datetime.utcnow()
    return VolunteerDB(
        id=volunteer_id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        name=f"{first_name} {last_name}",
        phone="0470 00 00 00",
        active=True,
        profile_completed=True,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def test_volunteer_id():
    """Volunteer ID of the admin the tests act as."""
    return "volunteer-admin-1"


@pytest.fixture
def other_volunteer_id():
    """Volunteer ID of a plain volunteer."""
    return "volunteer-plain-2"


@pytest.fixture
def doenker_id():
    """Volunteer ID of a doenker."""
    return "volunteer-doenker-3"


@pytest.fixture(scope="function")
def db_session(test_volunteer_id, other_volunteer_id, doenker_id):
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test,
    seeded with the base roles and three volunteers (admin, volunteer, doenker).
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    session.add(_volunteer_row(test_volunteer_id, "admin@example.com", "Anna", "Admin"))
    session.add(_volunteer_row(other_volunteer_id, "vera@example.com", "Vera", "Vrijwilliger"))
    session.add(_volunteer_row(doenker_id, "dirk@example.com", "Dirk", "Doenker"))
    session.commit()

    roles = RoleRepository(session)
    roles.ensure_defaults()
    roles.set_role(test_volunteer_id, RoleCode.ADMIN)
    roles.set_role(other_volunteer_id, RoleCode.VOLUNTEER)
    roles.set_role(doenker_id, RoleCode.DOENKER)

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def todo_repository(db_session: Session):
    """Create a TodoRepository instance for testing."""
    return TodoRepository(db_session)


@pytest.fixture
def sample_todo_base(other_volunteer_id):
    """Base todo data; override keys per test."""
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "text": "Test todo",
        "assignee_id": other_volunteer_id,
        "due_date": None,
        "priority": TodoPriority.NORMAL,
        "status": TodoStatus.PLANNED,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_todo(sample_todo_base):
    """Create a sample Todo object for testing."""
    return Todo(**sample_todo_base)


def _load_volunteer(db_session: Session, volunteer_id: str) -> Volunteer:
    return db_session.query(VolunteerDB).filter(VolunteerDB.id == volunteer_id).first().to_pydantic()


@pytest.fixture
def test_volunteer(db_session, test_volunteer_id):
    """The admin volunteer as a pydantic object."""
    return _load_volunteer(db_session, test_volunteer_id)


@pytest.fixture
def other_volunteer(db_session, other_volunteer_id):
    """The plain volunteer as a pydantic object."""
    return _load_volunteer(db_session, other_volunteer_id)


@pytest.fixture
def doenker(db_session, doenker_id):
    """The doenker as a pydantic object."""
    return _load_volunteer(db_session, doenker_id)


def _app_for(db_session: Session):
    """App with the database and today overridden; auth runs for real."""
    from waaranders.api.app import app, get_today
    from waaranders.database.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return app


def _client_as(db_session: Session, volunteer_id=None):
    """TestClient that sends a bearer token for `volunteer_id` on every request."""
    from waaranders.auth.jwt import create_access_token

    app = _app_for(db_session)
    client = TestClient(app)
    if volunteer_id is not None:
        client.headers.update({"Authorization": f"Bearer {create_access_token(volunteer_id)}"})
    return app, client


@pytest.fixture
def test_client(db_session: Session, test_volunteer_id):
    """Client acting as the admin volunteer."""
    app, client = _client_as(db_session, test_volunteer_id)
    with client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def volunteer_client(db_session: Session, other_volunteer_id):
    """Client acting as a plain volunteer."""
    app, client = _client_as(db_session, other_volunteer_id)
    with client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def doenker_client(db_session: Session, doenker_id):
    """Client acting as a doenker."""
    app, client = _client_as(db_session, doenker_id)
    with client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db_session: Session):
    """Client without a token; tests pass their own Authorization header."""
    app, client = _client_as(db_session)
    with client:
        yield client
    app.dependency_overrides.clear()
