"""Helper functions for urgency calculations."""

from datetime import date, datetime, timezone
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from typing import Optional, Tuple, Union

from .status import Status

SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value: Union[str, date, None]) -> Optional[datetime]:
    """
    Parse a record date into a datetime.

    Accepts ISO dates ('2024-01-01') and datetimes ('2024-01-01T08:30').
    Returns None for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return isoparse(str(value))
    except (ValueError, OverflowError):
        return None


def as_utc(moment: datetime) -> datetime:
    # Naive values are read as UTC, the way date-only strings are stored
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def service_date_key(value: Union[str, date, None]) -> Tuple[int, datetime]:
    """
    Chronological sort key for record dates, compared in UTC.

    Unparseable dates sort before every real date.
    """
    moment = parse_date(value)
    if moment is None:
        return 0, datetime.min.replace(tzinfo=timezone.utc)
    return 1, as_utc(moment)


def calc_days_since(
    last: Union[str, date, None], now: Union[date, datetime]
) -> Optional[int]:
    """Whole days elapsed from the last service to now (floored)."""
    last_moment = parse_date(last)
    now_moment = parse_date(now)
    if last_moment is None or now_moment is None:
        return None
    elapsed = as_utc(now_moment) - as_utc(last_moment)
    return int(elapsed.total_seconds() // SECONDS_PER_DAY)


def calc_overdue_days(
    days_since: Optional[int], interval_days: int
) -> Optional[int]:
    """Days past the recommended interval; negative means time remaining."""
    if days_since is None:
        return None
    return days_since - interval_days


def calc_due_date(
    last: Union[str, date, None], interval_days: Optional[int]
) -> Optional[date]:
    """Calculate next due date: last + interval days."""
    last_moment = parse_date(last)
    if last_moment is None or interval_days is None:
        return None
    return last_moment.date() + relativedelta(days=interval_days)


def check_status(overdue_days: Optional[int], due_soon_days: int) -> Status:
    """Grade urgency from overdue days."""
    if overdue_days is None:
        return Status.UNKNOWN
    if overdue_days >= 0:
        return Status.OVERDUE
    if overdue_days >= -due_soon_days:
        return Status.DUE_SOON
    return Status.OK
