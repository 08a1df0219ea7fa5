from dataclasses import dataclass, field, asdict
from datetime import date
from typing import List, Optional
import uuid
import json

PRIORITIES = ["High", "Medium", "Low"]
PRIORITY_WEIGHTS = {"High": 3, "Medium": 2, "Low": 1}
STATUS_ACTIVE = "Active"
STATUS_COMPLETED = "Completed"
STATUSES = [STATUS_ACTIVE, STATUS_COMPLETED]
# suggestions only, the category set is open
CATEGORIES = ["Development", "Design", "Marketing", "Research"]


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Subtask:
    id: str = field(default_factory=new_id)
    title: str = ""
    completed: bool = False


@dataclass
class Task:
    id: str = field(default_factory=new_id)
    title: str = ""
    description: str = ""
    category: str = ""
    priority: str = "Medium"     # High|Medium|Low
    status: str = STATUS_ACTIVE  # Active|Completed
    due_date: Optional[str] = None  # "YYYY-MM-DD"
    assigned_to: str = ""
    created_at: str = field(default_factory=lambda: date.today().isoformat())
    subtasks: List[Subtask] = field(default_factory=list)
    notes: Optional[str] = None
    updated_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def to_dict(self):
        return asdict(self)

    @staticmethod
    def from_dict(d):
        d = dict(d)
        subtasks = d.get("subtasks") or []
        if isinstance(subtasks, str):
            try:
                subtasks = json.loads(subtasks) if subtasks.strip() else []
            except ValueError:
                subtasks = []
        d["subtasks"] = [s if isinstance(s, Subtask) else Subtask(**s) for s in subtasks]
        known = Task.__dataclass_fields__.keys()
        return Task(**{k: v for k, v in d.items() if k in known})
