# src/services/export.py
import csv
import json
import logging
from typing import Iterable, List
from pathlib import Path

import pandas as pd

from models.task import Subtask, Task

logger = logging.getLogger(__name__)

HEADER = [
    "id", "title", "description", "category", "priority", "status",
    "due_date", "assigned_to", "created_at", "completed_at", "notes", "subtasks",
]


def _task_row(t: Task) -> dict:
    row = t.to_dict()
    row["subtasks"] = json.dumps(row["subtasks"])
    for key in ("description", "due_date", "completed_at", "notes"):
        row[key] = row[key] or ""
    return {k: row[k] for k in HEADER}


def export_tasks_to_csv(tasks: Iterable[Task], filepath) -> int:
    path = Path(filepath)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=HEADER)
        writer.writeheader()
        for t in tasks:
            writer.writerow(_task_row(t))
            count += 1
    logger.info("Exported %d tasks to %s", count, path)
    return count


def export_tasks_to_excel(tasks: Iterable[Task], filepath) -> int:
    # use pandas for ease
    rows = [_task_row(t) for t in tasks]
    df = pd.DataFrame(rows, columns=HEADER)
    df.to_excel(filepath, index=False)
    logger.info("Exported %d tasks to %s", len(rows), filepath)
    return len(rows)


def import_task_drafts_from_csv(filepath) -> List[dict]:
    """Read task drafts from a CSV written by export_tasks_to_csv.

    Ids and creation dates in the file are ignored: every draft becomes a new
    task when it is added to the store.
    """
    path = Path(filepath)
    drafts = []
    with path.open("r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            subtasks = []
            try:
                raw = json.loads(row.get("subtasks") or "[]")
                subtasks = [Subtask(title=s.get("title", ""), completed=bool(s.get("completed")))
                            for s in raw if isinstance(s, dict)]
            except ValueError:
                logger.warning("Bad subtasks column in %s line %d", path, reader.line_num)
            drafts.append({
                "title": (row.get("title") or "").strip(),
                "description": row.get("description") or "",
                "category": row.get("category") or "",
                "priority": row.get("priority") or "",
                "status": row.get("status") or "Active",
                "due_date": row.get("due_date") or None,
                "assigned_to": row.get("assigned_to") or "",
                "notes": row.get("notes") or None,
                "subtasks": subtasks,
            })
    return drafts
