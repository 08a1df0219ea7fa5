from datetime import date, datetime, timedelta
from typing import Optional

from models.task import STATUS_COMPLETED


def parse_date_string(date_str) -> Optional[date]:
    """Parse date string supporting yyyy-MM-dd, dd/MM/yyyy and ISO timestamps"""
    if not date_str:
        return None
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    text = str(date_str).strip()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        pass
    try:
        return datetime.strptime(text, "%d/%m/%Y").date()
    except ValueError:
        pass
    try:
        # timestamps such as updated_at: truncate to the calendar day
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def week_start(today: date) -> date:
    # weeks start on Sunday
    return today - timedelta(days=(today.weekday() + 1) % 7)


def month_start(today: date) -> date:
    return today.replace(day=1)


def format_date(date_str) -> str:
    d = parse_date_string(date_str)
    if not d:
        return date_str or "—"
    return d.strftime("%b %d, %Y").replace(" 0", " ")


def is_overdue(due_date, status: str, today: Optional[date] = None) -> bool:
    if status == STATUS_COMPLETED:
        return False
    d = parse_date_string(due_date)
    if not d:
        return False
    return d < (today or date.today())
