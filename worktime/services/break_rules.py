"""
Break Rule Engine - converts a day's punches into net working minutes.

Up to four punches t1..t4 describe the day:

- four bookings: t1..t4 all present -> blocks [t1, t2] and [t3, t4]
- two bookings: only t1 and t2, or only t1 and t4 (legacy single block)

Any other combination is not a complete work record and yields an all-zero
result. The engine never raises.

Deductions, in evaluation order:

1. midnight wrap: an end before its start adds 24h to the span
2. 09:30 rule: working at 09:30 on a weekday costs 15 minutes
3. two bookings: attendance > 5.5h adds a 30min lunch, > 9h raises the
   break to 45min (60min with the 09:30 rule)
4. four bookings: more than 7h of work with a lunch gap below 30min is
   corrected to 30min, net > 9h raises the break to 45/60min

A rule never lowers a break that is already larger.
"""

import datetime
import logging
from typing import List, Optional, Sequence

from worktime.domain.models import WorkCalculation
from worktime.i18n import tr
from worktime.services.punch_normalizer import MINUTES_PER_DAY, parse_time

logger = logging.getLogger(__name__)

CHECKPOINT_930 = 9 * 60 + 30
DEDUCTION_930 = 15

# Two bookings
LUNCH_THRESHOLD = 330       # 5.5h
LUNCH_DEDUCTION = 30

# Four bookings
LUNCH_CORRECTION_THRESHOLD = 420    # 7h
MIN_LUNCH_GAP = 30

LONG_DAY_THRESHOLD = 540    # 9h
LONG_DAY_PAUSE = 45
LONG_DAY_PAUSE_930 = 60


def is_weekend(day: datetime.date) -> bool:
    """Saturday and Sunday"""
    return day.weekday() > 4


def _unwrap(punches: Sequence[int]) -> List[int]:
    """
    Lay punches out on one timeline across midnight.

    Only applies when the last punch lies before the first one; from the
    first backwards step on every punch is moved to the next day.
    """
    if punches[-1] >= punches[0]:
        return list(punches)
    result = []
    offset = 0
    previous = punches[0]
    for punch in punches:
        if punch < previous and offset == 0:
            offset = MINUTES_PER_DAY
        result.append(punch + offset)
        previous = punch
    return result


def _working_at_930(intervals: Sequence[tuple], day: Optional[datetime.date]) -> bool:
    # Without a date the weekday gate cannot be established
    if day is None or is_weekend(day):
        return False
    return any(start <= CHECKPOINT_930 < end for start, end in intervals)


def calculate_work_details(t1: Optional[str], t2: Optional[str],
                           t3: Optional[str], t4: Optional[str],
                           day: Optional[datetime.date] = None) -> WorkCalculation:
    """
    Apply the break rules to up to four punches.

    Args:
        t1: Start of work
        t2: End of the first block (or end of work for two bookings)
        t3: Start of the second block
        t4: End of work
        day: Calendar day of the punches, enables the weekday-only 09:30 rule

    Returns:
        WorkCalculation with raw, pause and net minutes plus the rule trace.
        Two bookings report the full attendance as raw duration, four
        bookings the sum of both blocks (the lunch gap is not included).
    """
    punches = (t1, t2, t3, t4)
    p1, p2, p3, p4 = (parse_time(t) for t in punches)

    # A punch that is given but unreadable spoils the whole record
    given = sum(1 for t in punches if t is not None and str(t).strip() != "")
    parsed = sum(1 for p in (p1, p2, p3, p4) if p is not None)
    if given != parsed:
        logger.debug(f"Unreadable punches ({t1}, {t2}, {t3}, {t4}), no work calculated")
        return WorkCalculation()

    if None not in (p1, p2, p3, p4):
        return _four_bookings(p1, p2, p3, p4, day)
    if p1 is not None and p3 is None:
        if p2 is not None and p4 is None:
            return _two_bookings(p1, p2, day)
        if p4 is not None and p2 is None:
            return _two_bookings(p1, p4, day)

    logger.debug(f"Incomplete punches ({t1}, {t2}, {t3}, {t4}), no work calculated")
    return WorkCalculation()


def _two_bookings(start: int, end: int, day: Optional[datetime.date]) -> WorkCalculation:
    start, end = _unwrap((start, end))
    attendance = end - start
    rules: List[str] = []

    at_930 = _working_at_930([(start, end)], day)
    pause = 0
    effective_attendance = attendance
    if at_930:
        pause += DEDUCTION_930
        effective_attendance -= DEDUCTION_930
        rules.append(tr("rules.working_at_930"))

    if effective_attendance > LUNCH_THRESHOLD:
        pause += LUNCH_DEDUCTION
        rules.append(tr("rules.lunch_over_5_5h"))

    if effective_attendance > LONG_DAY_THRESHOLD:
        target_pause = LONG_DAY_PAUSE_930 if at_930 else LONG_DAY_PAUSE
        if pause < target_pause:
            pause = target_pause
            rules.append(tr("rules.pause_raised_9h", minutes=target_pause))

    return WorkCalculation(
        raw_duration=attendance,
        pause_duration=pause,
        net_duration=attendance - pause,
        rules_applied=rules,
    )


def _four_bookings(s1: int, e1: int, s2: int, e2: int,
                   day: Optional[datetime.date]) -> WorkCalculation:
    s1, e1, s2, e2 = _unwrap((s1, e1, s2, e2))
    raw_net = (e1 - s1) + (e2 - s2)
    gap = s2 - e1
    span = e2 - s1
    rules: List[str] = []

    effective_pause = gap
    if raw_net > LUNCH_CORRECTION_THRESHOLD and effective_pause < MIN_LUNCH_GAP:
        effective_pause = MIN_LUNCH_GAP
        rules.append(tr("rules.lunch_corrected_7h"))

    at_930 = _working_at_930([(s1, e1), (s2, e2)], day)
    if at_930:
        effective_pause += DEDUCTION_930
        rules.append(tr("rules.working_at_930"))

    net = span - effective_pause
    if net > LONG_DAY_THRESHOLD:
        target_pause = LONG_DAY_PAUSE_930 if at_930 else LONG_DAY_PAUSE
        if effective_pause < target_pause:
            effective_pause = target_pause
            rules.append(tr("rules.net_over_9h", minutes=target_pause))

    pause = round(effective_pause)
    return WorkCalculation(
        raw_duration=raw_net,
        pause_duration=pause,
        net_duration=span - pause,
        rules_applied=rules,
    )
