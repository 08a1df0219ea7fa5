# tests/test_session.py

import pytest

from helpers import SignalSpy
from services.auth import AuthService
from services.errors import NotAuthenticatedError, TaskboardError, ValidationError
from services.session import Session, create_session


def test_login_is_case_insensitive_on_email() -> None:
    auth = AuthService("demo@example.com", "password")
    spy = SignalSpy(auth.user_changed)

    assert auth.login("wrong@example.com", "password") is False
    assert auth.login("Demo@Example.com ", "nope") is False
    assert auth.login("DEMO@example.com", "password") is True

    assert auth.is_authenticated
    assert auth.user.name == "John Doe"
    assert auth.user.status == "online"
    assert len(spy) == 1


def test_register_validates_confirmation_fields() -> None:
    auth = AuthService("demo@example.com", "password")
    form = {
        "name": "Ada",
        "email": "ada@example.com",
        "email_confirm": "ada@example.org",
        "password": "secret",
        "password_confirm": "secret",
    }
    with pytest.raises(ValidationError, match="Emails do not match"):
        auth.register(form)
    assert auth.user is None

    form["email_confirm"] = "ada@example.com"
    assert auth.register(form) is True
    assert auth.user.email == "ada@example.com"


def test_presence_and_profile_updates() -> None:
    auth = AuthService("demo@example.com", "password")
    auth.login("demo@example.com", "password")

    auth.update_user_status("break")
    assert auth.user.status == "break"
    with pytest.raises(ValidationError):
        auth.update_user_status("asleep")

    auth.update_profile(name="  Jane  ", role="Lead")
    assert (auth.user.name, auth.user.role) == ("Jane", "Lead")

    auth.logout()
    assert auth.user is None


def test_task_operations_require_a_user(settings) -> None:
    s = Session(settings)
    with pytest.raises(NotAuthenticatedError):
        s.add_task({"title": "x"})
    with pytest.raises(NotAuthenticatedError):
        s.complete_task("1")
    assert len(s.tasks) == 0


def test_add_task_validates_before_touching_the_store(session) -> None:
    spy = SignalSpy(session.tasks.tasks_changed)
    with pytest.raises(ValidationError) as exc:
        session.add_task({"title": "  ", "category": "Design", "priority": "High"})
    assert exc.value.fields == ["title", "due_date"]
    assert len(session.tasks) == 0
    assert len(spy) == 0


def test_add_task_defaults_assignee_to_current_user(session) -> None:
    task = session.add_task(
        {"title": "Plan", "category": "Design", "priority": "Low", "due_date": "30/04/2025"}
    )
    assert task.assigned_to == "1"
    assert task.due_date == "2025-04-30"


def test_edit_task_revalidates_the_whole_form(seeded_session) -> None:
    with pytest.raises(ValidationError):
        seeded_session.edit_task("1", {"title": "Website Redesign", "category": "", "priority": "High",
                                       "due_date": "2025-05-01"})
    assert seeded_session.tasks.get_task("1").category == "Design"

    edited = seeded_session.edit_task(
        "1",
        {"title": "Website Refresh", "category": "Design", "priority": "High",
         "due_date": "2025-05-02", "status": "Completed"},
    )
    assert edited.title == "Website Refresh"
    assert edited.completed_at == "2025-04-22"


def test_seeding_follows_settings(settings) -> None:
    assert len(create_session(settings).tasks) == 0
    settings.seed_demo_data = True
    seeded = create_session(settings)
    assert [t.id for t in seeded.tasks.tasks] == ["1", "2", "3"]
    assert seeded.notifications.unread_count == 3


def test_form_submit_after_logout_raises_a_taskboard_error(session) -> None:
    # the task dialog shows any TaskboardError from its submit callback
    session.auth.logout()
    draft = {"title": "Plan", "category": "Design", "priority": "Low", "due_date": "2025-04-30"}
    with pytest.raises(TaskboardError, match="Log in to manage tasks."):
        session.add_task(draft)
    with pytest.raises(TaskboardError):
        session.edit_task("1", draft)
