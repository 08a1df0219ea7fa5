# tests/test_task_store.py

import pytest

from helpers import SignalSpy, make_task
from models.task import Subtask
from services.errors import ValidationError
from services.query import query_tasks
from store.task_store import TaskStore


@pytest.fixture()
def store(today) -> TaskStore:
    return TaskStore(clock=lambda: today)


def _draft(**kw):
    data = {
        "title": "Write report",
        "description": "Quarterly numbers",
        "category": "Marketing",
        "priority": "High",
        "due_date": "2025-04-30",
        "assigned_to": "1",
    }
    data.update(kw)
    return data


def test_add_then_unfiltered_query_returns_the_task(store: TaskStore, today) -> None:
    task = store.add_task(_draft(subtasks=[{"title": "Collect data", "completed": False}]))

    result = query_tasks(store.tasks, today=today)
    assert result == [task]
    assert task.id
    assert task.created_at == "2025-04-22"
    assert task.status == "Active"
    assert task.subtasks[0] == Subtask(id=task.subtasks[0].id, title="Collect data", completed=False)
    assert (task.title, task.category, task.priority) == ("Write report", "Marketing", "High")


def test_add_ignores_caller_supplied_id_and_creation_date(store: TaskStore) -> None:
    a = store.add_task(_draft(id="x", created_at="1999-01-01"))
    b = store.add_task(_draft(id="x"))
    assert a.id != "x" and b.id != "x"
    assert a.id != b.id
    assert a.created_at == "2025-04-22"


def test_complete_twice_equals_once(store: TaskStore) -> None:
    task = store.add_task(_draft())
    spy = SignalSpy(store.tasks_changed)

    once = store.complete_task(task.id)
    snapshot = store.tasks
    twice = store.complete_task(task.id)

    assert once == twice
    assert store.tasks is snapshot
    assert once.status == "Completed"
    assert once.completed_at == "2025-04-22"
    assert len(spy) == 1


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.update_task("missing", {"title": "x"}),
        lambda s: s.update_task("missing", {"title": "x", "assignee": "u2"}),
        lambda s: s.delete_task("missing"),
        lambda s: s.complete_task("missing"),
    ],
)
def test_unknown_id_mutations_are_noops(store: TaskStore, call) -> None:
    store.load([make_task("1", "kept")])
    before = store.tasks
    spy = SignalSpy(store.tasks_changed)

    assert call(store) in (None, False)
    assert store.tasks == before
    assert len(spy) == 0


def test_update_merges_fields_but_never_the_id(store: TaskStore) -> None:
    store.load([make_task("1", "old", priority="Low")])
    updated = store.update_task("1", {"id": "2", "title": "new", "priority": "High"})

    assert updated.id == "1"
    assert (updated.title, updated.priority) == ("new", "High")
    assert updated.updated_at is not None
    assert store.get_task("2") is None


def test_update_with_unknown_field_raises(store: TaskStore) -> None:
    store.load([make_task("1")])
    with pytest.raises(ValidationError) as exc:
        store.update_task("1", {"colour": "red"})
    assert exc.value.fields == ["colour"]


def test_update_without_changes_does_not_emit(store: TaskStore) -> None:
    store.load([make_task("1", "same")])
    spy = SignalSpy(store.tasks_changed)
    assert store.update_task("1", {"title": "same"}).title == "same"
    assert len(spy) == 0


def test_status_changes_track_completion_date(store: TaskStore) -> None:
    store.load([make_task("1")])
    done = store.update_task("1", {"status": "Completed"})
    assert done.completed_at == "2025-04-22"
    reopened = store.update_task("1", {"status": "Active"})
    assert reopened.completed_at is None


def test_each_effective_mutation_emits_once(store: TaskStore) -> None:
    spy = SignalSpy(store.tasks_changed)
    task = store.add_task(_draft())
    store.update_task(task.id, {"title": "renamed"})
    store.complete_task(task.id)
    assert store.delete_task(task.id) is True
    assert len(spy) == 4
    assert len(store) == 0


def test_old_snapshots_are_not_mutated(store: TaskStore) -> None:
    store.load([make_task("1", "a")])
    snapshot = store.tasks
    store.update_task("1", {"title": "b"})
    store.delete_task("1")
    assert snapshot[0].title == "a"


def test_load_rejects_duplicate_ids(store: TaskStore) -> None:
    with pytest.raises(ValueError):
        store.load([make_task("1"), make_task("1")])
