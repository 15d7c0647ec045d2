"""UrgencyEntry dataclass for ranked category status."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .calculations import calc_due_date, check_status
from .status import Status

DEFAULT_DUE_SOON_DAYS = 30


@dataclass
class UrgencyEntry:
    """How overdue a category's maintenance is, derived on every ranking."""

    category: str
    description: str
    interval_days: int
    days_since: Optional[int] = None
    overdue_days: Optional[int] = None
    last_service_date: Optional[str] = None

    @property
    def status(self) -> Status:
        return check_status(self.overdue_days, DEFAULT_DUE_SOON_DAYS)

    def status_with(self, due_soon_days: int) -> Status:
        """Status using a custom due-soon window."""
        return check_status(self.overdue_days, due_soon_days)

    @property
    def due_date(self) -> Optional[str]:
        due = calc_due_date(self.last_service_date, self.interval_days)
        return due.isoformat() if due else None

    def to_dict(self, due_soon_days: int = DEFAULT_DUE_SOON_DAYS) -> Dict[str, Any]:
        return {
            "category": self.category,
            "description": self.description,
            "daysSince": self.days_since,
            "overdueDays": self.overdue_days,
            "intervalDays": self.interval_days,
            "lastServiceDate": self.last_service_date,
            "status": self.status_with(due_soon_days).name,
        }
