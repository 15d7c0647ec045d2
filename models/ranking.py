"""Urgency ranking across maintenance categories."""

from datetime import date, datetime
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Union

from .calculations import calc_days_since, calc_overdue_days
from .category import CategoryConfig
from .record import MaintenanceRecord
from .urgency_entry import UrgencyEntry

RecordsFor = Callable[[str], Sequence[MaintenanceRecord]]
ConfigFor = Callable[[str], Optional[CategoryConfig]]


def latest_record(
    records: Sequence[MaintenanceRecord],
) -> Optional[MaintenanceRecord]:
    """
    Most recent record from a date-ascending list.

    Takes the last element, so records sharing a date resolve to the one
    stored last.
    """
    if not records:
        return None
    return records[-1]


def urgency_sort_key(entry: UrgencyEntry) -> float:
    """Sort key for descending urgency; entries without history go last."""
    if entry.overdue_days is None:
        return float("-inf")
    return entry.overdue_days


def build_entry(
    category: str,
    config: CategoryConfig,
    records: Sequence[MaintenanceRecord],
    now: Union[date, datetime],
) -> UrgencyEntry:
    """Summarize one category's records against its recommended interval."""
    last = latest_record(records)
    last_date = last.date if last else None
    days_since = calc_days_since(last_date, now)
    return UrgencyEntry(
        category=category,
        description=config.description,
        interval_days=config.interval_days,
        days_since=days_since,
        overdue_days=calc_overdue_days(days_since, config.interval_days),
        last_service_date=last_date,
    )


def rank(
    categories: Iterable[str],
    records_for: RecordsFor,
    config_for: ConfigFor,
    now: Union[date, datetime],
) -> List[UrgencyEntry]:
    """
    Rank categories by how overdue their maintenance is.

    Logic:
    - Categories without a configuration entry are skipped
    - No records: days_since and overdue_days stay None
    - Otherwise days_since is measured from the latest record to now
    - Sorted by overdue_days descending, no-history entries last

    Collaborator errors propagate unchanged.
    """
    entries = []
    for category in categories:
        config = config_for(category)
        if config is None:
            continue
        entries.append(build_entry(category, config, records_for(category), now))

    # sorted() keeps enumeration order for ties, also with reverse=True
    return sorted(entries, key=urgency_sort_key, reverse=True)


def rank_store(
    store, config: Mapping[str, CategoryConfig], now: Union[date, datetime]
) -> List[UrgencyEntry]:
    """Rank every category a record store knows about."""
    return rank(store.list_categories(), store.records_for, config.get, now)
