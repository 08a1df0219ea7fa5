from dataclasses import dataclass
from enum import Enum


class SortKey(str, Enum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    TITLE = "title"
    CREATED = "created"

    @classmethod
    def _missing_(cls, value):
        # unknown keys sort by title
        return cls.TITLE


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value):
        return cls.ASC

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class DateRange(str, Enum):
    ALL = ""
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def _missing_(cls, value):
        return cls.ALL


@dataclass(frozen=True)
class FilterCriteria:
    search: str = ""
    category: str = ""
    priority: str = ""
    status: str = ""
    date_range: DateRange = DateRange.ALL
    sort_key: SortKey = SortKey.DUE_DATE
    sort_direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        # accept raw strings coming from combo boxes
        object.__setattr__(self, "date_range", DateRange(self.date_range))
        object.__setattr__(self, "sort_key", SortKey(self.sort_key))
        object.__setattr__(self, "sort_direction", SortDirection(self.sort_direction))

    @property
    def is_filtered(self) -> bool:
        return bool(
            self.search
            or self.category
            or self.priority
            or self.status
            or self.date_range is not DateRange.ALL
        )
