"""
Day Classifier - turns one calendar day into a signed balance delta.

Weekdays carry the daily target (weekly target / 5). Absences credit the
target pro rata (value 1.0 or 0.5), each entry on its own, and work entries
add their net minutes on top: an absence does not exclude work on the same
day. Weekends have no target, only work counts there.
"""

import datetime
from typing import Iterable

from worktime.domain.models import ABSENCE_TYPES, DayResult, EntryType, TimeEntry, UserConfig
from worktime.services.break_rules import calculate_work_details, is_weekend


def daily_target_minutes(config: UserConfig) -> float:
    """Daily target in minutes: weekly target hours spread over five days."""
    return config.daily_target_minutes


def work_minutes(day: datetime.date, entries: Iterable[TimeEntry]) -> float:
    """Sum of net minutes of all work entries, each evaluated as one block."""
    total = 0
    for entry in entries:
        if entry.type != EntryType.WORK:
            continue
        details = calculate_work_details(entry.start_time, entry.end_time, None, None, day=day)
        total += details.net_duration
    return total


def classify_day(day: datetime.date, entries: Iterable[TimeEntry], config: UserConfig) -> DayResult:
    """
    Classify a day and compute its delta.

    Args:
        day: The calendar day
        entries: All entries recorded for that day (may be empty)
        config: User configuration providing the weekly target

    Returns:
        DayResult with delta = (work + credit) - target. An empty weekday
        therefore yields -target, an empty weekend day 0.
    """
    entries = list(entries)
    work = work_minutes(day, entries)

    if is_weekend(day):
        return DayResult(date=day, delta=work, target=0, work=work, credit=0)

    target = daily_target_minutes(config)
    credit = sum(target * entry.value for entry in entries if entry.type in ABSENCE_TYPES)

    return DayResult(
        date=day,
        delta=(work + credit) - target,
        target=target,
        work=work,
        credit=credit,
    )
