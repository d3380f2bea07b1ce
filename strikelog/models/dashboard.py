"""
Dashboard Models
================
Pydantic models for the admin dashboard's derived state.

Used by:
    - strikelog.dashboard.aggregator to return typed results
    - GET /api/dashboard* as response models
"""
import datetime
from typing import Any, List, Literal, Optional

from strikelog.core.constants import SORT_ASC, SORT_DESC
from .bug_report import CamelModel


class StatusBuckets(CamelModel):
    open: int = 0
    in_progress: int = 0
    closed: int = 0
    critical: int = 0               # Blocker + Critical severity, any status
    total: int = 0


class WeeklyBucket(CamelModel):
    date: datetime.date
    label: str                      # "Oct 18"
    submitted: int = 0
    resolved: int = 0


class SeverityCount(CamelModel):
    name: str
    value: int = 0


class SortState(CamelModel):
    """
    Column sort state of the admin table.

    toggle() on the same key flips the direction; a different key
    starts again from descending.
    """
    key: Optional[str] = None
    direction: Literal["asc", "desc"] = SORT_DESC

    def toggle(self, key: str) -> "SortState":
        if self.key == key and self.direction == SORT_DESC:
            return SortState(key=key, direction=SORT_ASC)
        return SortState(key=key, direction=SORT_DESC)


class DashboardSummary(CamelModel):
    stats: StatusBuckets
    # Records pass through as given (BugRecord or raw mapping)
    active: List[Any] = []
    completed: List[Any] = []
    weekly: List[WeeklyBucket] = []
    severity: List[SeverityCount] = []
    sort: SortState = SortState()
