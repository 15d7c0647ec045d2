"""Status enum for maintenance urgency levels."""

from enum import Enum


class Status(Enum):
    """Category urgency grades. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    OK = 3
    UNKNOWN = 4  # No service history to measure from
