"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Entries and configuration arrive from the storage layer, bulk imports and
the JSON wire shape (camelCase). Pydantic validates them once at the edge and
lets the accounting engine work on plain, typed records. Every model accepts
both the camelCase wire names and the snake_case attribute names.
"""

import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class EntryType(str, Enum):
    """Kind of calendar record."""

    WORK = "work"
    VACATION = "vacation"
    SICK = "sick"
    ACCIDENT = "accident"
    HOLIDAY = "holiday"
    SCHOOL = "school"
    SPECIAL = "special"
    TRIP = "trip"
    OTHER = "other"


# Absence types credit the daily target on weekdays
ABSENCE_TYPES = frozenset({
    EntryType.VACATION,
    EntryType.SICK,
    EntryType.ACCIDENT,
    EntryType.HOLIDAY,
    EntryType.SCHOOL,
    EntryType.SPECIAL,
    EntryType.TRIP,
})


class _Record(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class TimeEntry(_Record):
    """
    One calendar record.

    A day may hold several entries: split-day absences (morning vacation,
    afternoon school), multiple work blocks, or work next to an absence.

    The date is kept as the raw ISO string so that a broken record coming
    from a bulk import can be skipped by the aggregation instead of failing
    the whole load.
    """

    id: Optional[int] = None
    date: str = Field(..., description="ISO date YYYY-MM-DD")
    type: EntryType = EntryType.WORK
    value: float = Field(default=1.0, description="Fraction of a day (1.0 or 0.5) for absences")
    start_time: Optional[str] = Field(default=None, description="HH:MM, work only")
    end_time: Optional[str] = Field(default=None, description="HH:MM, work only")
    pause_duration: Optional[int] = Field(default=None, description="Informational, in minutes")
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_iso(cls, value):
        if isinstance(value, datetime.date):
            return value.isoformat()
        return value

    @field_validator("value", mode="before")
    @classmethod
    def _default_value(cls, value):
        # Missing or zero counts as a full day
        return value or 1.0

    @property
    def identity_key(self) -> Tuple[str, str, Optional[str], Optional[str], Optional[str]]:
        """Key used to detect duplicated records."""
        return (self.date, self.type.value, self.start_time, self.end_time, self.notes)


class UserConfig(_Record):
    """
    Per-user accounting settings.

    Values are taken as given: a non-positive weekly target is not rejected,
    the resulting degenerate targets simply flow through the calculations.
    """

    weekly_target_hours: float = Field(default=41, description="Drives the daily target (weekly / 5)")
    yearly_vacation_days: float = Field(default=25, description="Vacation entitlement per year")
    initial_overtime_balance: float = Field(default=0, description="Signed minutes seeding the flex account")
    vacation_carryover: float = Field(default=0, description="Vacation days carried over from last year")

    @property
    def daily_target_minutes(self) -> float:
        return self.weekly_target_hours * 60 / 5


class WorkCalculation(_Record):
    """Result of applying the break rules to a day's punches."""

    raw_duration: int = 0
    pause_duration: int = 0
    net_duration: int = 0
    rules_applied: List[str] = Field(default_factory=list)


class DayResult(_Record):
    """Signed balance contribution of one calendar day."""

    date: datetime.date
    delta: float
    target: float
    work: float = 0
    credit: float = 0


class WeeklyBucket(_Record):
    """Work and target minutes collected for one ISO week during a scan."""

    iso_year: int
    iso_week: int
    work: float = 0
    target: float = 0


class WeekResult(WeeklyBucket):
    """A closed week, split into its flex and overtime portions."""

    flex_delta: float = 0
    overtime: float = 0


class BalanceReport(_Record):
    """All running balances shown on the dashboard."""

    year_flex: float = Field(..., description="Capped flex balance incl. initial offset (minutes)")
    overtime: float = Field(..., description="Weekly work beyond the 45h cap (minutes)")
    month: float = Field(..., description="Uncapped month-to-date balance (minutes)")
    week: float = Field(..., description="Uncapped week-to-date balance (minutes)")
    vacation: float = Field(..., description="Remaining vacation days")


class LedgerRow(_Record):
    """One line of the chronological day-by-day ledger."""

    date: datetime.date
    delta: float
    running: float
    missing: bool = False
    overtime_transfer: float = 0
    entries: List[TimeEntry] = Field(default_factory=list)
