# tests/test_selection.py

from helpers import SignalSpy
from services.selection import SelectionModel, SelectionState


def _model(scope=("a", "b", "c")) -> SelectionModel:
    m = SelectionModel()
    m.set_scope(scope)
    return m


def test_state_machine() -> None:
    m = _model()
    assert m.state is SelectionState.INACTIVE

    m.enter()
    assert m.state is SelectionState.ACTIVE_EMPTY

    m.toggle("a", True)
    assert m.state is SelectionState.ACTIVE_NON_EMPTY

    m.toggle("a", False)
    assert m.state is SelectionState.ACTIVE_EMPTY

    m.toggle("b", True)
    m.cancel()
    assert m.state is SelectionState.INACTIVE


def test_toggle_is_ignored_while_inactive() -> None:
    m = _model()
    assert m.toggle("a", True) is False
    assert m.selected_ids == frozenset()


def test_only_visible_ids_can_be_selected() -> None:
    m = _model(scope=("a",))
    m.enter()
    assert m.toggle("z", True) is False
    assert m.toggle("a", True) is True
    assert m.selected_ids == {"a"}


def test_cancel_clears_mode_and_set_in_one_notification() -> None:
    m = _model()
    m.enter()
    m.toggle("a", True)
    m.toggle("b", True)

    seen = []
    m.selection_changed.connect(lambda: seen.append((m.active, m.count)))
    m.cancel()

    assert seen == [(False, 0)]


def test_cancel_when_inactive_does_nothing() -> None:
    m = _model()
    spy = SignalSpy(m.selection_changed)
    m.cancel()
    assert len(spy) == 0


def test_shrinking_scope_prunes_selection() -> None:
    m = _model()
    m.enter()
    m.toggle("a", True)
    m.toggle("b", True)
    spy = SignalSpy(m.selection_changed)

    m.set_scope(["b", "c"])
    assert m.selected_ids == {"b"}
    assert len(spy) == 1

    m.set_scope(["b"])
    assert len(spy) == 1
