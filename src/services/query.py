"""Task query pipeline: filter then sort.

``query_tasks`` is a pure function of (tasks, criteria, today). It keeps no
state between calls, so callers recompute it from scratch on every change.
"""
from datetime import date
from typing import Callable, Iterable, List, Optional

from models.criteria import DateRange, FilterCriteria, SortDirection, SortKey
from models.task import PRIORITY_WEIGHTS, Task
from services.dates import month_start, parse_date_string, week_start


def priority_weight(priority: str) -> int:
    return PRIORITY_WEIGHTS.get(priority, 0)


def matches_search(task: Task, term: str) -> bool:
    q = (term or "").lower()
    if not q:
        return True
    return q in (task.title or "").lower() or q in (task.description or "").lower()


def matches_date_range(task: Task, date_range: DateRange, today: date) -> bool:
    if date_range is DateRange.ALL:
        return True
    due = parse_date_string(task.due_date)
    if due is None:
        # a task without a usable due date never falls inside a range
        return False
    if date_range is DateRange.TODAY:
        return due == today
    if date_range is DateRange.WEEK:
        return week_start(today) <= due <= today
    if date_range is DateRange.MONTH:
        return month_start(today) <= due <= today
    return True


def matches(task: Task, criteria: FilterCriteria, today: date) -> bool:
    if not matches_search(task, criteria.search):
        return False
    if criteria.category and task.category != criteria.category:
        return False
    if criteria.priority and task.priority != criteria.priority:
        return False
    if criteria.status and task.status != criteria.status:
        return False
    return matches_date_range(task, criteria.date_range, today)


def _date_key(value):
    d = parse_date_string(value)
    # missing dates go after real ones when ascending
    return (d is None, d or date.max)


SORT_KEYS = {
    SortKey.DUE_DATE: lambda t: _date_key(t.due_date),
    SortKey.PRIORITY: lambda t: priority_weight(t.priority),
    SortKey.TITLE: lambda t: (t.title or "").lower(),
    SortKey.CREATED: lambda t: _date_key(t.created_at),
}


def sort_key_func(key) -> Callable[[Task], object]:
    return SORT_KEYS[SortKey(key)]


def sort_tasks(tasks: Iterable[Task], key=SortKey.DUE_DATE, direction=SortDirection.ASC) -> List[Task]:
    # sorted() is stable for reverse=True too, so ties keep input order both ways
    return sorted(
        tasks,
        key=sort_key_func(key),
        reverse=SortDirection(direction) is SortDirection.DESC,
    )


def query_tasks(
    tasks: Iterable[Task],
    criteria: Optional[FilterCriteria] = None,
    today: Optional[date] = None,
) -> List[Task]:
    criteria = criteria or FilterCriteria()
    today = today or date.today()
    result = [t for t in tasks if matches(t, criteria, today)]
    return sort_tasks(result, criteria.sort_key, criteria.sort_direction)
