"""Domain layer - Pure business entities"""

from .models import (
    ABSENCE_TYPES,
    BalanceReport,
    DayResult,
    EntryType,
    LedgerRow,
    TimeEntry,
    UserConfig,
    WeeklyBucket,
    WeekResult,
    WorkCalculation,
)

__all__ = [
    "ABSENCE_TYPES",
    "BalanceReport",
    "DayResult",
    "EntryType",
    "LedgerRow",
    "TimeEntry",
    "UserConfig",
    "WeeklyBucket",
    "WeekResult",
    "WorkCalculation",
]
