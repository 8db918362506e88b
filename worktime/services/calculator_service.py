"""
Calculator helpers for planning a working day.

Given the punches so far, suggest when the second block can start and when
the day can end so that the net time reaches the daily target under the
current break rules.
"""

import datetime
from typing import Optional

from worktime.services.break_rules import MIN_LUNCH_GAP, calculate_work_details
from worktime.services.punch_normalizer import MINUTES_PER_DAY, minutes_to_time, parse_time


def suggest_second_block_start(t2: Optional[str]) -> Optional[str]:
    """Earliest start of the second block that avoids the lunch correction."""
    end_first = parse_time(t2)
    if end_first is None:
        return None
    return minutes_to_time((end_first + MIN_LUNCH_GAP) % MINUTES_PER_DAY)


def find_end_time_for_target(t1: Optional[str], t2: Optional[str], t3: Optional[str],
                             target_minutes: float,
                             day: Optional[datetime.date] = None) -> Optional[str]:
    """
    Find the earliest end time at which the net work reaches the target.

    Searches minute by minute from the start of the second block up to
    midnight, evaluating the four-booking rules for each candidate.

    Args:
        t1: Start of work
        t2: End of the first block
        t3: Start of the second block
        target_minutes: Net minutes to reach (usually the daily target)
        day: Calendar day, enables the 09:30 rule on weekdays

    Returns:
        The end time as HH:MM, or None when the inputs are incomplete or the
        target cannot be reached before midnight
    """
    if None in (parse_time(t1), parse_time(t2)):
        return None
    start_search = parse_time(t3)
    if start_search is None:
        return None

    for candidate in range(start_search, MINUTES_PER_DAY):
        t4 = minutes_to_time(candidate)
        result = calculate_work_details(t1, t2, t3, t4, day=day)
        if result.net_duration >= target_minutes:
            return t4
    return None
