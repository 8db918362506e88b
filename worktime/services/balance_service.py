"""
Balance Service - year, month, week and vacation balances.

Architecture Decision: Pure core, async shell
``aggregate_balances`` and ``build_daily_ledger`` are plain functions of
(config, entries, today). They read nothing from a clock or a store, so two
calls with the same inputs give identical reports and every change to the
entries simply means calling them again. ``BalanceService`` is the thin async
wrapper that loads the inputs from the repositories.

The year balance is computed week by week with the 45h cap. Month and week
balances are a deliberately simpler view: the plain sum of day deltas, no
cap, and an empty "today" is left out so an unfinished day does not show up
as missing.
"""

import datetime
import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional

from worktime.domain.models import BalanceReport, EntryType, LedgerRow, TimeEntry, UserConfig
from worktime.services.break_rules import is_weekend
from worktime.services.day_classifier import classify_day
from worktime.services.punch_normalizer import parse_iso_date
from worktime.services.weekly_accumulator import WEEKLY_CAP_MINUTES, WeeklyAccumulator

logger = logging.getLogger(__name__)


def each_day(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """All days from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += datetime.timedelta(days=1)


def start_of_iso_week(day: datetime.date) -> datetime.date:
    """Monday of the ISO week containing day."""
    return day - datetime.timedelta(days=day.weekday())


def group_by_date(entries: Iterable[TimeEntry]) -> Dict[datetime.date, List[TimeEntry]]:
    """Index entries by calendar day, skipping entries with an unparsable date."""
    by_date: Dict[datetime.date, List[TimeEntry]] = defaultdict(list)
    for entry in entries:
        day = parse_iso_date(entry.date)
        if day is None:
            logger.debug(f"Skipping entry with unparsable date: {entry.date!r}")
            continue
        by_date[day].append(entry)
    return by_date


def _simple_balance(by_date: Dict[datetime.date, List[TimeEntry]], config: UserConfig,
                    start: datetime.date, today: datetime.date) -> float:
    balance = 0
    for day in each_day(start, today):
        day_entries = by_date.get(day, [])
        if day == today and not day_entries:
            continue
        balance += classify_day(day, day_entries, config).delta
    return balance


def vacation_balance(config: UserConfig, by_date: Dict[datetime.date, List[TimeEntry]]) -> float:
    """Entitlement plus carryover minus all booked vacation (in days)."""
    taken = sum(
        entry.value
        for day_entries in by_date.values()
        for entry in day_entries
        if entry.type == EntryType.VACATION
    )
    return (config.yearly_vacation_days + config.vacation_carryover) - taken


def aggregate_balances(config: UserConfig, entries: Iterable[TimeEntry],
                       today: datetime.date) -> BalanceReport:
    """
    Compute all balances as of today.

    Args:
        config: User configuration
        entries: All recorded entries (any order, any year)
        today: The reference day; the scan covers 1 January up to today

    Returns:
        BalanceReport with year flex, overtime, month, week (minutes) and
        remaining vacation (days)
    """
    by_date = group_by_date(entries)

    accumulator = WeeklyAccumulator()
    for day in each_day(datetime.date(today.year, 1, 1), today):
        result = classify_day(day, by_date.get(day, []), config)
        accumulator.add_day(day, result.work + result.credit, result.target)

    weeks = accumulator.close()
    total_flex = sum(week.flex_delta for week in weeks)
    total_overtime = sum(week.overtime for week in weeks)

    return BalanceReport(
        year_flex=total_flex + config.initial_overtime_balance,
        overtime=total_overtime,
        month=_simple_balance(by_date, config, today.replace(day=1), today),
        week=_simple_balance(by_date, config, start_of_iso_week(today), today),
        vacation=vacation_balance(config, by_date),
    )


def build_daily_ledger(config: UserConfig, entries: Iterable[TimeEntry], today: datetime.date,
                       start: Optional[datetime.date] = None) -> List[LedgerRow]:
    """
    Chronological day-by-day ledger with a running flex total.

    The running total starts at the initial balance. Every weekday without
    entries appears as a missing day. At the end of each ISO week (Sunday)
    work above the weekly cap is transferred out of the running total, so
    after a full week the running total matches the capped year balance.

    Args:
        config: User configuration
        entries: All recorded entries
        today: Last day of the ledger
        start: First day; defaults to the earliest entry date

    Returns:
        One row per weekday and per weekend day that has entries or closes
        a week with a transfer
    """
    by_date = group_by_date(entries)
    if start is None:
        if not by_date:
            return []
        start = min(by_date)

    rows: List[LedgerRow] = []
    running = config.initial_overtime_balance
    weekly_work = 0

    for day in each_day(start, today):
        day_entries = by_date.get(day, [])
        result = classify_day(day, day_entries, config)
        weekly_work += result.work + result.credit

        row = None
        if day_entries or not is_weekend(day):
            running += result.delta
            row = LedgerRow(
                date=day,
                delta=result.delta,
                running=running,
                missing=not day_entries,
                entries=day_entries,
            )

        if day.weekday() == 6:
            if weekly_work > WEEKLY_CAP_MINUTES:
                transfer = weekly_work - WEEKLY_CAP_MINUTES
                running -= transfer
                if row is None:
                    row = LedgerRow(date=day, delta=0, running=running)
                row.overtime_transfer = transfer
                row.running = running
            weekly_work = 0

        if row is not None:
            rows.append(row)

    return rows


class BalanceService:
    """
    Loads configuration and entries from storage and computes balances.

    The repositories are injected; see ``create_repositories`` for building
    them from settings.
    """

    def __init__(self, entry_repo, config_repo):
        self.entry_repo = entry_repo
        self.config_repo = config_repo

    async def get_balances(self, today: Optional[datetime.date] = None) -> BalanceReport:
        """Balances as of today (defaults to the current date)."""
        if today is None:
            today = datetime.date.today()
        config = await self.config_repo.get()
        entries = await self.entry_repo.list_all()
        return aggregate_balances(config, entries, today)

    async def get_ledger(self, today: Optional[datetime.date] = None,
                         start: Optional[datetime.date] = None) -> List[LedgerRow]:
        """Day-by-day ledger up to today (defaults to the current date)."""
        if today is None:
            today = datetime.date.today()
        config = await self.config_repo.get()
        entries = await self.entry_repo.list_all()
        return build_daily_ledger(config, entries, today, start=start)
