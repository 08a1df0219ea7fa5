import logging
from enum import Enum
from typing import FrozenSet, Iterable

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE_EMPTY = "active_empty"
    ACTIVE_NON_EMPTY = "active_non_empty"


class SelectionModel(QObject):
    """
    Selection mode plus the set of selected task ids.

    Only ids inside the current scope (the visible tasks) can be selected.
    When the scope shrinks, ids that left it are pruned. ``cancel`` turns the
    mode off and clears the set before a single ``selection_changed``.
    """

    selection_changed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._active = False
        self._selected: FrozenSet[str] = frozenset()
        self._scope: FrozenSet[str] = frozenset()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return self._selected

    @property
    def count(self) -> int:
        return len(self._selected)

    @property
    def state(self) -> SelectionState:
        if not self._active:
            return SelectionState.INACTIVE
        if self._selected:
            return SelectionState.ACTIVE_NON_EMPTY
        return SelectionState.ACTIVE_EMPTY

    def is_selected(self, task_id: str) -> bool:
        return task_id in self._selected

    def enter(self) -> None:
        if self._active:
            return
        self._active = True
        self._selected = frozenset()
        self.selection_changed.emit()

    def toggle(self, task_id: str, selected: bool) -> bool:
        if not self._active:
            logger.debug("toggle ignored, selection mode is off id=%s", task_id)
            return False
        if selected and task_id not in self._scope:
            logger.debug("toggle ignored, id=%s is not visible", task_id)
            return False
        if selected:
            new = self._selected | {task_id}
        else:
            new = self._selected - {task_id}
        if new == self._selected:
            return False
        self._selected = new
        self.selection_changed.emit()
        return True

    def cancel(self) -> None:
        if not self._active and not self._selected:
            return
        self._active = False
        self._selected = frozenset()
        self.selection_changed.emit()

    def set_scope(self, visible_ids: Iterable[str]) -> None:
        self._scope = frozenset(visible_ids)
        pruned = self._selected & self._scope
        if pruned != self._selected:
            logger.debug("pruned %d ids out of view", len(self._selected) - len(pruned))
            self._selected = pruned
            self.selection_changed.emit()
