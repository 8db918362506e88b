"""
Weekly Accumulator - applies the 45h weekly cap.

Days are grouped by ISO week. Up to the cap, weekly work goes to the flex
account (measured against the week's target); everything beyond the cap is
booked as overtime. Overtime is never negative and never reduces the target.
"""

import datetime
from typing import Dict, List, Tuple

from worktime.domain.models import WeeklyBucket, WeekResult

WEEKLY_CAP_MINUTES = 45 * 60


def split_week(work: float, target: float, cap: float = WEEKLY_CAP_MINUTES) -> Tuple[float, float]:
    """
    Split one week's work into flex delta and overtime.

    Args:
        work: All worked and credited minutes of the week
        target: Weekday target minutes of the week
        cap: Weekly cap in minutes

    Returns:
        (flex_delta, overtime)
    """
    if work <= cap:
        return work - target, 0
    return cap - target, work - cap


class WeeklyAccumulator:
    """
    Collects day results into ISO week buckets during a range scan.

    Buckets are created lazily on the first day of a week seen in the scan,
    so weeks cut off by the range edges are closed as partial weeks.
    """

    def __init__(self, cap: float = WEEKLY_CAP_MINUTES):
        self.cap = cap
        self._buckets: Dict[Tuple[int, int], WeeklyBucket] = {}

    def add_day(self, day: datetime.date, work: float, target: float) -> WeeklyBucket:
        """Add a day's worked+credited minutes and its target to its week."""
        iso_year, iso_week, _ = day.isocalendar()
        key = (iso_year, iso_week)
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = WeeklyBucket(iso_year=iso_year, iso_week=iso_week)
            self._buckets[key] = bucket
        bucket.work += work
        bucket.target += target
        return bucket

    def close_week(self, bucket: WeeklyBucket) -> WeekResult:
        """Apply the cap to a single bucket."""
        flex_delta, overtime = split_week(bucket.work, bucket.target, self.cap)
        return WeekResult(
            iso_year=bucket.iso_year,
            iso_week=bucket.iso_week,
            work=bucket.work,
            target=bucket.target,
            flex_delta=flex_delta,
            overtime=overtime,
        )

    def close(self) -> List[WeekResult]:
        """Close all buckets in chronological order and discard them."""
        results = [self.close_week(self._buckets[key]) for key in sorted(self._buckets)]
        self._buckets.clear()
        return results
