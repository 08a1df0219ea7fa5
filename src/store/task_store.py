# src/store/task_store.py
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from models.task import STATUS_ACTIVE, STATUS_COMPLETED, Subtask, Task, new_id
from services.errors import ValidationError

logger = logging.getLogger(__name__)

_TASK_FIELDS = set(Task.__dataclass_fields__)


class TaskStore(QObject):
    """
    In-memory task collection.

    The collection is an immutable tuple snapshot; every effective mutation
    swaps in a new tuple and emits ``tasks_changed`` once. Readers holding an
    older snapshot are never affected. Mutations that reference an unknown id
    are silent no-ops so a stale view cannot fail against a concurrent delete.

    Required-field validation belongs to the caller.
    """

    tasks_changed = Signal()

    def __init__(self, clock: Callable[[], date] = date.today, parent=None):
        super().__init__(parent)
        self._clock = clock
        self._tasks: Tuple[Task, ...] = ()

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def load(self, tasks: Iterable[Task]) -> None:
        """Replace the whole collection (seed data, tests)."""
        seen = set()
        loaded = []
        for t in tasks:
            if t.id in seen:
                raise ValueError(f"duplicate task id {t.id!r}")
            seen.add(t.id)
            loaded.append(t)
        self._commit(tuple(loaded))
        logger.info("TaskStore loaded %d tasks", len(loaded))

    def add_task(self, draft: dict) -> Task:
        data = {k: v for k, v in dict(draft).items() if k in _TASK_FIELDS}
        data.pop("id", None)
        data.pop("created_at", None)
        data["subtasks"] = [
            s if isinstance(s, Subtask) else Subtask(**s) for s in data.get("subtasks") or []
        ]
        data.setdefault("status", STATUS_ACTIVE)

        task_id = new_id()
        while self.get_task(task_id) is not None:
            task_id = new_id()
        task = Task(id=task_id, created_at=self._clock().isoformat(), **data)
        if task.status == STATUS_COMPLETED and not task.completed_at:
            task.completed_at = task.created_at

        self._commit(self._tasks + (task,))
        logger.info("Task added id=%s title=%r", task.id, task.title)
        return task

    def update_task(self, task_id: str, partial: dict) -> Optional[Task]:
        changes = dict(partial)
        changes.pop("id", None)
        current = self.get_task(task_id)
        if current is None:
            logger.debug("update_task: no task id=%s, ignored", task_id)
            return None

        unknown = sorted(set(changes) - _TASK_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown task fields: {', '.join(unknown)}", unknown)

        if "subtasks" in changes:
            changes["subtasks"] = [
                s if isinstance(s, Subtask) else Subtask(**s) for s in changes["subtasks"] or []
            ]
        if changes.get("status") == STATUS_COMPLETED and not current.is_completed:
            changes.setdefault("completed_at", self._clock().isoformat())
        elif changes.get("status") == STATUS_ACTIVE:
            changes.setdefault("completed_at", None)

        updated = replace(current, **changes)
        if updated == current:
            return current
        updated.updated_at = datetime.now().replace(microsecond=0).isoformat()
        self._swap(updated)
        logger.info("Task updated id=%s fields=%s", task_id, sorted(changes))
        return updated

    def delete_task(self, task_id: str) -> bool:
        remaining = tuple(t for t in self._tasks if t.id != task_id)
        if len(remaining) == len(self._tasks):
            logger.debug("delete_task: no task id=%s, ignored", task_id)
            return False
        self._commit(remaining)
        logger.info("Task deleted id=%s", task_id)
        return True

    def complete_task(self, task_id: str) -> Optional[Task]:
        current = self.get_task(task_id)
        if current is None:
            logger.debug("complete_task: no task id=%s, ignored", task_id)
            return None
        if current.is_completed:
            return current
        updated = replace(
            current,
            status=STATUS_COMPLETED,
            completed_at=self._clock().isoformat(),
            updated_at=datetime.now().replace(microsecond=0).isoformat(),
        )
        self._swap(updated)
        logger.info("Task completed id=%s", task_id)
        return updated

    # ---- internals ----

    def _swap(self, task: Task) -> None:
        self._commit(tuple(task if t.id == task.id else t for t in self._tasks))

    def _commit(self, tasks: Tuple[Task, ...]) -> None:
        self._tasks = tasks
        self.tasks_changed.emit()
