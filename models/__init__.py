"""
Home maintenance tracking models.

This package provides data models for tracking household maintenance:
- Status: Urgency grades (OVERDUE, DUE_SOON, OK, UNKNOWN)
- CategoryConfig: Recommended service interval per category
- MaintenanceRecord: Logged service events
- UrgencyEntry: Calculated per-category urgency
- rank: Urgency ranking across categories
- FileRecordStore / SqlRecordStore: Record persistence backends
"""

from .status import Status
from .category import CategoryConfig
from .record import MaintenanceRecord
from .urgency_entry import UrgencyEntry
from .calculations import (
    parse_date,
    calc_days_since,
    calc_overdue_days,
    calc_due_date,
    check_status,
)
from .ranking import latest_record, rank, rank_store
from .file_store import FileRecordStore
from .sql_store import SqlRecordStore
from .loader import load_category_config, save_category_config, open_store

__all__ = [
    "Status",
    "CategoryConfig",
    "MaintenanceRecord",
    "UrgencyEntry",
    "parse_date",
    "calc_days_since",
    "calc_overdue_days",
    "calc_due_date",
    "check_status",
    "latest_record",
    "rank",
    "rank_store",
    "FileRecordStore",
    "SqlRecordStore",
    "load_category_config",
    "save_category_config",
    "open_store",
]
