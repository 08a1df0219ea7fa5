# src/services/analytics.py
"""Chart data for the analytics view, computed with pandas."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from models.task import PRIORITIES, STATUSES, STATUS_COMPLETED, Task
from services.dates import is_overdue

COLUMNS = ["id", "title", "category", "priority", "status", "due_date", "created_at", "completed_at"]


@dataclass(frozen=True)
class TaskSummary:
    total: int
    completed: int
    pending: int
    overdue: int

    @property
    def completion_rate(self) -> float:
        return self.completed / self.total if self.total else 0.0


def tasks_frame(tasks: Iterable[Task]) -> pd.DataFrame:
    rows = [{c: getattr(t, c) for c in COLUMNS} for t in tasks]
    df = pd.DataFrame(rows, columns=COLUMNS)
    for col in ("due_date", "created_at", "completed_at"):
        df[col] = pd.to_datetime(df[col], errors="coerce", format="mixed").dt.normalize()
    return df


def _counts(df: pd.DataFrame, column: str, labels: List[str]) -> Dict[str, int]:
    counts = df[column].value_counts()
    return {label: int(counts.get(label, 0)) for label in labels}


def status_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    return _counts(tasks_frame(tasks), "status", STATUSES)


def priority_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    return _counts(tasks_frame(tasks), "priority", PRIORITIES)


def category_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    df = tasks_frame(tasks)
    if df.empty:
        return {}
    # first-seen order, like the legend in the list view
    sizes = df.groupby("category", sort=False).size()
    return {str(k): int(v) for k, v in sizes.items()}


def completion_timeline(
    tasks: Iterable[Task], today: Optional[date] = None, days: int = 7
) -> List[Tuple[date, int]]:
    """Completed tasks per day for the last ``days`` days, oldest first.

    Tasks without a completion date are counted on their creation day.
    """
    today = today or date.today()
    df = tasks_frame(tasks)
    done = df[df["status"] == STATUS_COMPLETED]
    when = done["completed_at"].fillna(done["created_at"]).dropna()
    per_day = when.dt.date.value_counts()
    out = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        out.append((day, int(per_day.get(day, 0))))
    return out


def summary(tasks: Iterable[Task], today: Optional[date] = None) -> TaskSummary:
    tasks = list(tasks)
    today = today or date.today()
    completed = sum(1 for t in tasks if t.status == STATUS_COMPLETED)
    overdue = sum(1 for t in tasks if is_overdue(t.due_date, t.status, today))
    return TaskSummary(
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        overdue=overdue,
    )
