# tests/test_models.py

from models.criteria import DateRange, FilterCriteria, SortDirection, SortKey
from models.task import Subtask, Task
from store.seed import demo_tasks


def test_task_dict_round_trip() -> None:
    task = demo_tasks()[0]
    assert Task.from_dict(task.to_dict()) == task


def test_from_dict_reads_json_subtasks_and_ignores_unknown_keys() -> None:
    task = Task.from_dict(
        {
            "id": "9",
            "title": "Imported",
            "subtasks": '[{"id": "9-1", "title": "step", "completed": true}]',
            "colour": "red",
        }
    )
    assert task.subtasks == [Subtask(id="9-1", title="step", completed=True)]
    assert Task.from_dict({"id": "9", "subtasks": "{broken"}).subtasks == []


def test_criteria_accepts_raw_strings() -> None:
    c = FilterCriteria(date_range="week", sort_key="priority", sort_direction="desc")
    assert c.date_range is DateRange.WEEK
    assert c.sort_key is SortKey.PRIORITY
    assert c.sort_direction is SortDirection.DESC
    assert c.sort_direction.toggled() is SortDirection.ASC
    assert FilterCriteria(date_range="fortnight").date_range is DateRange.ALL
    assert FilterCriteria(sort_direction="sideways").sort_direction is SortDirection.ASC
