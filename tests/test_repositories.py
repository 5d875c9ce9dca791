"""Tests for the repository layer."""

import pytest
from datetime import date, datetime
import uuid

from waaranders.database.activity_repository import ActivityRepository
from waaranders.database.customer_repository import CustomerRepository
from waaranders.database.interest_repository import InterestRepository
from waaranders.database.role_repository import RoleRepository
from waaranders.database.volunteer_repository import VolunteerRepository
from waaranders.models.activity import Activity
from waaranders.models.customer import Customer
from waaranders.models.role import RoleCode
from waaranders.models.todo import Todo, TodoPriority, TodoStatus


def _activity(title, occurs_on, **overrides):
    now = datetime.utcnow()
    data = {
        "id": str(uuid.uuid4()),
        "title": title,
        "occurs_on": occurs_on,
        "volunteers_needed": 2,
        "target_group": "DG1",
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return Activity(**data)


def _customer(name, **overrides):
    now = datetime.utcnow()
    data = {"id": str(uuid.uuid4()), "name": name, "created_at": now, "updated_at": now}
    data.update(overrides)
    return Customer(**data)


class TestTodoRepository:
    """Test TodoRepository CRUD operations."""

    def test_create_and_get(self, todo_repository, sample_todo):
        created = todo_repository.create(sample_todo)
        fetched = todo_repository.get(created.id)

        assert fetched is not None
        assert fetched.text == "Test todo"
        assert fetched.priority == TodoPriority.NORMAL.value
        assert fetched.status == TodoStatus.PLANNED.value

    def test_get_nonexistent(self, todo_repository):
        assert todo_repository.get("nonexistent-id") is None

    def test_get_all_can_hide_done(self, todo_repository, sample_todo_base):
        todo_repository.create(Todo(**{**sample_todo_base, "id": str(uuid.uuid4()), "status": TodoStatus.DONE}))
        todo_repository.create(Todo(**{**sample_todo_base, "id": str(uuid.uuid4()), "status": TodoStatus.IN_PROGRESS}))

        assert len(todo_repository.get_all()) == 2
        assert [t.status for t in todo_repository.get_all(include_done=False)] == ["in_progress"]

    def test_open_for_assignee(self, todo_repository, sample_todo_base, test_volunteer_id, other_volunteer_id):
        todo_repository.create(Todo(**{**sample_todo_base, "id": str(uuid.uuid4()), "text": "mine"}))
        todo_repository.create(Todo(**{**sample_todo_base, "id": str(uuid.uuid4()), "text": "done", "status": TodoStatus.DONE}))
        todo_repository.create(Todo(**{**sample_todo_base, "id": str(uuid.uuid4()), "text": "theirs", "assignee_id": test_volunteer_id}))

        open_todos = todo_repository.get_open_for_assignee(other_volunteer_id)
        assert [t.text for t in open_todos] == ["mine"]

    def test_update(self, todo_repository, sample_todo):
        created = todo_repository.create(sample_todo)
        changed = created.model_copy(update={
            "text": "Updated",
            "due_date": date(2025, 4, 1),
            "priority": TodoPriority.HIGH,
        })

        updated = todo_repository.update(changed)
        assert updated.text == "Updated"
        assert updated.due_date == date(2025, 4, 1)
        assert updated.priority == "high"

    def test_update_nonexistent_raises(self, todo_repository, sample_todo):
        with pytest.raises(ValueError):
            todo_repository.update(sample_todo)

    def test_set_status(self, todo_repository, sample_todo):
        created = todo_repository.create(sample_todo)
        assert todo_repository.set_status(created.id, TodoStatus.DONE).status == "done"

    def test_delete(self, todo_repository, sample_todo):
        created = todo_repository.create(sample_todo)
        assert todo_repository.delete(created.id) is True
        assert todo_repository.get(created.id) is None
        assert todo_repository.delete(created.id) is False

    def test_is_overdue(self, sample_todo_base):
        today = date(2025, 3, 1)
        past = Todo(**{**sample_todo_base, "due_date": date(2025, 2, 28)})
        past_done = Todo(**{**sample_todo_base, "due_date": date(2025, 2, 28), "status": TodoStatus.DONE})
        due_today = Todo(**{**sample_todo_base, "due_date": today})
        no_date = Todo(**sample_todo_base)

        assert past.is_overdue(today) is True
        assert past_done.is_overdue(today) is False
        assert due_today.is_overdue(today) is False
        assert no_date.is_overdue(today) is False


class TestVolunteerRepository:
    """Test VolunteerRepository."""

    def test_list_all_by_last_name(self, db_session):
        names = [v.last_name for v in VolunteerRepository(db_session).list_all()]
        assert names == ["Admin", "Doenker", "Vrijwilliger"]

    def test_names_by_id(self, db_session, other_volunteer_id):
        names = VolunteerRepository(db_session).names_by_id()
        assert names[other_volunteer_id] == "Vera Vrijwilliger"

    def test_update(self, db_session, other_volunteer):
        repo = VolunteerRepository(db_session)
        updated = repo.update(other_volunteer.model_copy(update={"phone": "123", "active": False}))
        assert updated.phone == "123"
        assert other_volunteer.id not in [v.id for v in repo.list_active()]

    def test_display_name_falls_back_to_first_and_last(self, other_volunteer):
        unnamed = other_volunteer.model_copy(update={"name": None})
        assert unnamed.display_name == "Vera Vrijwilliger"

    def test_list_active_by_display_name(self, db_session, other_volunteer):
        repo = VolunteerRepository(db_session)
        repo.update(other_volunteer.model_copy(update={"name": None, "first_name": "Ann", "last_name": "Peeters"}))

        names = [v.display_name for v in repo.list_active()]
        assert names == ["Ann Peeters", "Anna Admin", "Dirk Doenker"]


class TestRoleRepository:
    """Test role assignment and checks."""

    def test_role_checks(self, db_session, test_volunteer_id, other_volunteer_id, doenker_id):
        roles = RoleRepository(db_session)

        assert roles.is_admin(test_volunteer_id) is True
        assert roles.is_doenker_or_admin(test_volunteer_id) is True
        assert roles.is_doenker_or_admin(doenker_id) is True
        assert roles.is_admin(doenker_id) is False
        assert roles.is_doenker_or_admin(other_volunteer_id) is False

    def test_set_role_replaces_previous_role(self, db_session, other_volunteer_id, test_volunteer_id):
        roles = RoleRepository(db_session)

        roles.set_role(other_volunteer_id, RoleCode.DOENKER, granted_by=test_volunteer_id)

        assert roles.get_role_code(other_volunteer_id) == "doenker"
        assert roles.roles_by_volunteer()[other_volunteer_id] == "doenker"
        assert list(roles.roles_by_volunteer().values()).count("doenker") == 2

    def test_admin_count(self, db_session, other_volunteer_id):
        roles = RoleRepository(db_session)
        assert roles.admin_count() == 1
        roles.set_role(other_volunteer_id, RoleCode.ADMIN)
        assert roles.admin_count() == 2

    def test_ensure_defaults_is_idempotent(self, db_session):
        roles = RoleRepository(db_session)
        roles.ensure_defaults()
        assert roles.admin_count() == 1

    def test_unknown_volunteer_has_no_role(self, db_session):
        assert RoleRepository(db_session).get_role_code("nobody") is None

    def test_list_roles(self, db_session):
        roles = RoleRepository(db_session).list_roles()
        assert [r.code for r in roles] == ["volunteer", "doenker", "admin"]
        assert [r.title for r in roles] == ["Vrijwilliger", "Doenker", "Admin"]


class TestCustomerRepository:
    """Test CustomerRepository."""

    def test_list_active_by_name_and_archive(self, db_session):
        repo = CustomerRepository(db_session)
        zorg = repo.create(_customer("Zorgcentrum"))
        repo.create(_customer("Buurthuis"))

        assert [c.name for c in repo.list_active()] == ["Buurthuis", "Zorgcentrum"]

        assert repo.archive(zorg.id) is True
        archived = repo.get(zorg.id)
        assert archived.active is False
        assert archived.archived_at is not None
        assert [c.name for c in repo.list_active()] == ["Buurthuis"]

    def test_archive_nonexistent(self, db_session):
        assert CustomerRepository(db_session).archive("nope") is False

    def test_update(self, db_session):
        repo = CustomerRepository(db_session)
        created = repo.create(_customer("Buurthuis"))
        updated = repo.update(created.model_copy(update={"contact_name": "Jan", "target_group": "DG3"}))
        assert updated.contact_name == "Jan"
        assert updated.target_group == "DG3"


class TestActivityRepository:
    """Test ActivityRepository and sign-ups."""

    def test_list_upcoming(self, db_session):
        repo = ActivityRepository(db_session)
        repo.create(_activity("Later", date(2025, 4, 1)))
        repo.create(_activity("Past", date(2025, 2, 1)))
        repo.create(_activity("Today", date(2025, 3, 1)))

        upcoming = repo.list_upcoming(date(2025, 3, 1))
        assert [a.title for a in upcoming] == ["Today", "Later"]

    def test_sign_up_and_withdraw(self, db_session, other_volunteer_id, doenker_id):
        repo = ActivityRepository(db_session)
        activity = repo.create(_activity("Wandeling", date(2025, 4, 1)))

        assert repo.sign_up(activity.id, other_volunteer_id) is True
        assert repo.sign_up(activity.id, other_volunteer_id) is False
        assert repo.sign_up(activity.id, doenker_id) is True

        participants = repo.participants_by_activity([activity.id])[activity.id]
        assert sorted(p.name for p in participants) == ["Dirk Doenker", "Vera Vrijwilliger"]

        assert repo.withdraw(activity.id, other_volunteer_id) is True
        assert repo.withdraw(activity.id, other_volunteer_id) is False
        assert len(repo.participants_by_activity([activity.id])[activity.id]) == 1

    def test_participant_name_falls_back_to_first_and_last(self, db_session, other_volunteer):
        VolunteerRepository(db_session).update(
            other_volunteer.model_copy(update={"name": None, "first_name": "Ann", "last_name": "Peeters"})
        )
        repo = ActivityRepository(db_session)
        activity = repo.create(_activity("Wandeling", date(2025, 4, 1)))
        repo.sign_up(activity.id, other_volunteer.id)

        participant = repo.participants_by_activity([activity.id])[activity.id][0]
        assert participant.name == "Ann Peeters"
        assert participant.name == VolunteerRepository(db_session).names_by_id()[other_volunteer.id]

    def test_participants_for_no_activities(self, db_session):
        assert ActivityRepository(db_session).participants_by_activity([]) == {}

    def test_delete_removes_sign_ups(self, db_session, other_volunteer_id):
        repo = ActivityRepository(db_session)
        activity = repo.create(_activity("Markt", date(2025, 4, 1)))
        repo.sign_up(activity.id, other_volunteer_id)

        assert repo.delete(activity.id) is True
        assert repo.get(activity.id) is None
        assert repo.participants_by_activity([activity.id]) == {}

    def test_update(self, db_session):
        repo = ActivityRepository(db_session)
        activity = repo.create(_activity("Markt", date(2025, 4, 1)))
        updated = repo.update(activity.model_copy(update={"occurs_on": date(2025, 5, 2), "volunteers_needed": 5}))
        assert updated.occurs_on == date(2025, 5, 2)
        assert updated.volunteers_needed == 5


class TestInterestRepository:
    """Test interests and the interests volunteers pick."""

    def test_list_all_by_title(self, db_session):
        repo = InterestRepository(db_session)
        repo.create("Koken")
        repo.create("ééntje drinken")
        repo.create("Begeleiding")

        assert [i.title for i in repo.list_all()] == ["Begeleiding", "ééntje drinken", "Koken"]

    def test_set_for_volunteer_replaces_selection(self, db_session, other_volunteer_id, doenker_id):
        repo = InterestRepository(db_session)
        koken = repo.create("Koken")
        vervoer = repo.create("Vervoer")
        tuin = repo.create("Tuin")

        repo.set_for_volunteer(other_volunteer_id, [vervoer.id, koken.id])
        repo.set_for_volunteer(doenker_id, [tuin.id])
        assert [i.title for i in repo.for_volunteer(other_volunteer_id)] == ["Koken", "Vervoer"]

        picked = repo.set_for_volunteer(other_volunteer_id, [tuin.id])
        assert [i.title for i in picked] == ["Tuin"]
        assert [i.title for i in repo.for_volunteer(doenker_id)] == ["Tuin"]

        assert repo.set_for_volunteer(other_volunteer_id, []) == []

    def test_unknown_interest_is_rejected(self, db_session, other_volunteer_id):
        repo = InterestRepository(db_session)
        koken = repo.create("Koken")
        repo.set_for_volunteer(other_volunteer_id, [koken.id])

        with pytest.raises(ValueError):
            repo.set_for_volunteer(other_volunteer_id, [koken.id, "missing"])
        assert [i.title for i in repo.for_volunteer(other_volunteer_id)] == ["Koken"]

    def test_get_by_title(self, db_session):
        repo = InterestRepository(db_session)
        created = repo.create("Koken")
        assert repo.get_by_title("Koken").id == created.id
        assert repo.get_by_title("Zingen") is None
