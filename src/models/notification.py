from dataclasses import dataclass, field
from datetime import date

from models.task import new_id


@dataclass
class Notification:
    title: str
    message: str
    id: str = field(default_factory=new_id)
    read: bool = False
    created_at: str = field(default_factory=lambda: date.today().isoformat())
