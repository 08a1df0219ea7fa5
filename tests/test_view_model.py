# tests/test_view_model.py

import pytest

from helpers import SignalSpy, make_task
from models.criteria import DateRange, SortDirection, SortKey
from services.view_model import TaskListViewModel


@pytest.fixture()
def vm(session) -> TaskListViewModel:
    session.tasks.load(
        [
            make_task("1", "Website Redesign", category="Design", priority="High", due_date="2025-05-01"),
            make_task("2", "Database Migration", priority="Medium", due_date="2025-05-10"),
            make_task("3", "Prototype Testing", category="Research", priority="Low",
                      status="Completed", due_date="2025-04-20"),
        ]
    )
    return TaskListViewModel(session)


def _ids(vm):
    return [t.id for t in vm.visible_tasks]


def test_initial_view_is_sorted_by_due_date(vm) -> None:
    assert _ids(vm) == ["3", "1", "2"]


def test_criteria_change_recomputes_before_returning(vm) -> None:
    spy = SignalSpy(vm.view_changed)
    vm.set_search("web")
    assert _ids(vm) == ["1"]
    assert len(spy) == 1
    assert [t.id for t in spy.calls[0][0]] == ["1"]


def test_store_mutation_recomputes_view(vm, session) -> None:
    vm.set_status("Active")
    session.complete_task("1")
    assert _ids(vm) == ["2"]


def test_no_emit_when_the_view_is_unchanged(vm, session) -> None:
    spy = SignalSpy(vm.view_changed)
    vm.set_category("Design")
    assert len(spy) == 1

    # filtered-out task changes, visible list stays equal by value
    session.update_task("2", {"title": "Database Move"})
    vm.set_sort_direction("asc")
    session.complete_task("missing")
    assert len(spy) == 1


def test_sort_controls(vm) -> None:
    vm.set_sort_key(SortKey.PRIORITY)
    assert _ids(vm) == ["3", "2", "1"]
    assert vm.toggle_sort_direction() is SortDirection.DESC
    assert _ids(vm) == ["1", "2", "3"]


def test_clear_filters_keeps_sort(vm) -> None:
    vm.set_sort_key("title")
    vm.set_priority("High")
    vm.set_date_range("month")
    assert vm.criteria.is_filtered

    vm.clear_filters()
    assert not vm.criteria.is_filtered
    assert vm.criteria.date_range is DateRange.ALL
    assert vm.criteria.sort_key is SortKey.TITLE
    assert _ids(vm) == ["2", "3", "1"]


def test_filtering_out_a_selected_task_prunes_it(vm) -> None:
    vm.selection.enter()
    vm.selection.toggle("1", True)
    vm.selection.toggle("2", True)

    vm.set_category("Design")
    assert vm.selection.selected_ids == {"1"}

    vm.clear_filters()
    assert vm.selection.selected_ids == {"1"}


def test_deleting_a_selected_task_prunes_it(vm, session) -> None:
    vm.selection.enter()
    vm.selection.toggle("2", True)
    session.delete_task("2")
    assert vm.selection.count == 0
    assert vm.selection.active


def test_complete_selected_then_cancels(vm, session) -> None:
    vm.selection.enter()
    vm.selection.toggle("1", True)
    vm.selection.toggle("3", True)  # already completed

    assert vm.complete_selected() == 1
    assert session.tasks.get_task("1").status == "Completed"
    assert not vm.selection.active
    assert vm.selection.count == 0


def test_delete_selected_then_cancels(vm, session) -> None:
    vm.selection.enter()
    vm.selection.toggle("1", True)
    vm.selection.toggle("2", True)

    assert vm.delete_selected() == 2
    assert [t.id for t in session.tasks.tasks] == ["3"]
    assert _ids(vm) == ["3"]
    assert not vm.selection.active


def test_categories_in_first_seen_order(vm) -> None:
    assert vm.categories() == ["Design", "Development", "Research"]


def test_criteria_changed_reports_whether_filters_are_active(vm) -> None:
    spy = SignalSpy(vm.criteria_changed)
    vm.set_sort_key("title")
    vm.set_priority("High")
    vm.clear_filters()
    assert [c.is_filtered for (c,) in spy.calls] == [False, True, False]
