"""Form-layer validation for task drafts and registration data.

The stores accept whatever they are given; these helpers run before a
mutation so that a rejected form never leaves partial state behind.
"""
from typing import Optional

from models.task import PRIORITIES, STATUSES, STATUS_ACTIVE, Subtask
from models.user import USER_STATUSES
from services.dates import parse_date_string
from services.errors import ValidationError

REQUIRED_TASK_FIELDS = ("title", "category", "priority", "due_date")


def validate_task_draft(draft: dict, default_assignee: Optional[str] = None) -> dict:
    """Return a normalized copy of ``draft`` or raise ValidationError."""
    data = dict(draft)
    for key in ("title", "description", "category", "priority", "due_date", "notes"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip()

    missing = [k for k in REQUIRED_TASK_FIELDS if not data.get(k)]
    if missing:
        raise ValidationError("Please fill in all required fields", missing)

    if data["priority"] not in PRIORITIES:
        raise ValidationError(f"Unknown priority '{data['priority']}'", ["priority"])

    due = parse_date_string(data["due_date"])
    if not due:
        raise ValidationError(f"Invalid due date '{data['due_date']}'", ["due_date"])
    data["due_date"] = due.isoformat()

    status = data.get("status") or STATUS_ACTIVE
    if status not in STATUSES:
        raise ValidationError(f"Unknown status '{status}'", ["status"])
    data["status"] = status

    # empty subtasks rows from the form are dropped
    subtasks = []
    for s in data.get("subtasks") or []:
        st = s if isinstance(s, Subtask) else Subtask(**s)
        if st.title.strip():
            subtasks.append(Subtask(id=st.id, title=st.title.strip(), completed=st.completed))
    data["subtasks"] = subtasks

    if not data.get("assigned_to") and default_assignee:
        data["assigned_to"] = default_assignee
    data["description"] = data.get("description") or ""
    data["notes"] = data.get("notes") or None
    return data


def validate_registration(form: dict) -> dict:
    data = {k: (v.strip() if isinstance(v, str) else v) for k, v in form.items()}
    missing = [k for k in ("name", "email", "password") if not data.get(k)]
    if missing:
        raise ValidationError("Please fill in all required fields", missing)
    if data["email"] != data.get("email_confirm", data["email"]):
        raise ValidationError("Emails do not match", ["email_confirm"])
    if form.get("password") != form.get("password_confirm", form.get("password")):
        raise ValidationError("Passwords do not match", ["password_confirm"])
    return data


def validate_user_status(status: str) -> str:
    if status not in USER_STATUSES:
        raise ValidationError(f"Unknown status '{status}'", ["status"])
    return status
