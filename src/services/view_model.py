import logging
from dataclasses import replace
from typing import List, Tuple

from PySide6.QtCore import QObject, Signal

from models.criteria import DateRange, FilterCriteria, SortDirection, SortKey
from models.task import Task
from services.query import query_tasks
from services.selection import SelectionModel

logger = logging.getLogger(__name__)


class TaskListViewModel(QObject):
    """
    Binds the task store and the filter criteria to the visible task list.

    Any store mutation or criteria change recomputes the whole view before
    the call returns. ``view_changed`` fires only when the result differs by
    value from the previous one. The selection scope follows the view, so
    selected tasks that are filtered out or deleted get dropped.
    """

    view_changed = Signal(list)
    criteria_changed = Signal(object)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.selection = SelectionModel(self)
        self._criteria = FilterCriteria()
        self._visible: Tuple[Task, ...] = ()
        session.tasks.tasks_changed.connect(self.refresh)
        self.refresh()

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def visible_tasks(self) -> Tuple[Task, ...]:
        return self._visible

    def refresh(self) -> None:
        result = tuple(query_tasks(self.session.tasks.tasks, self._criteria, self.session.clock()))
        self.selection.set_scope(t.id for t in result)
        if result == self._visible:
            return
        self._visible = result
        logger.debug("view recomputed: %d of %d tasks", len(result), len(self.session.tasks))
        self.view_changed.emit(list(result))

    # ---- criteria ----

    def update_criteria(self, **changes) -> None:
        criteria = replace(self._criteria, **changes)
        if criteria == self._criteria:
            return
        self._criteria = criteria
        self.criteria_changed.emit(criteria)
        self.refresh()

    def set_search(self, text: str) -> None:
        self.update_criteria(search=text or "")

    def set_category(self, category: str) -> None:
        self.update_criteria(category=category or "")

    def set_priority(self, priority: str) -> None:
        self.update_criteria(priority=priority or "")

    def set_status(self, status: str) -> None:
        self.update_criteria(status=status or "")

    def set_date_range(self, date_range) -> None:
        self.update_criteria(date_range=DateRange(date_range))

    def set_sort_key(self, key) -> None:
        self.update_criteria(sort_key=SortKey(key))

    def set_sort_direction(self, direction) -> None:
        self.update_criteria(sort_direction=SortDirection(direction))

    def toggle_sort_direction(self) -> SortDirection:
        self.set_sort_direction(self._criteria.sort_direction.toggled())
        return self._criteria.sort_direction

    def clear_filters(self) -> None:
        # sort order is kept, only the filters reset
        self.update_criteria(
            search="", category="", priority="", status="", date_range=DateRange.ALL
        )

    # ---- selection / batch actions ----

    def complete_selected(self) -> int:
        ids = [t.id for t in self._visible if self.selection.is_selected(t.id)]
        done = 0
        for task_id in ids:
            before = self.session.tasks.get_task(task_id)
            after = self.session.complete_task(task_id)
            if before is not None and after is not None and not before.is_completed:
                done += 1
        self.selection.cancel()
        logger.info("Batch complete: %d of %d selected", done, len(ids))
        return done

    def delete_selected(self) -> int:
        ids = [t.id for t in self._visible if self.selection.is_selected(t.id)]
        removed = sum(1 for task_id in ids if self.session.delete_task(task_id))
        self.selection.cancel()
        logger.info("Batch delete: %d of %d selected", removed, len(ids))
        return removed

    def categories(self) -> List[str]:
        """Categories present in the store, in first-seen order."""
        return list(dict.fromkeys(t.category for t in self.session.tasks.tasks if t.category))
