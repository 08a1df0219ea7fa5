from dataclasses import dataclass, asdict

USER_STATUSES = ["online", "break", "shadow", "offline"]


@dataclass
class User:
    id: str
    name: str
    email: str
    role: str = ""
    status: str = "online"  # online|break|shadow|offline

    def to_dict(self):
        return asdict(self)
