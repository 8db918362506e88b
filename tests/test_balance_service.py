"""
Tests for the year, month, week and vacation balances and the daily ledger.

All scenarios use a 40h week (480 minutes per weekday). A full working day
07:00-18:00 on a weekday nets 600 minutes (60 minutes break with the 09:30
rule).
"""

import datetime
import pytest

from worktime.domain.models import EntryType, TimeEntry, UserConfig
from worktime.infra.repository import InMemoryConfigRepository, InMemoryTimeEntryRepository
from worktime.services.balance_service import (
    BalanceService,
    aggregate_balances,
    build_daily_ledger,
    start_of_iso_week,
)

D = datetime.date


def long_day(day):
    return TimeEntry(date=day, type=EntryType.WORK, start_time="07:00", end_time="18:00")


def absence(day, entry_type=EntryType.VACATION, value=1.0):
    return TimeEntry(date=day, type=entry_type, value=value)


@pytest.fixture
def january_entries():
    """Holiday, two vacation days, then a full week of long days (Jan 6-10, 2025)."""
    entries = [
        absence(D(2025, 1, 1), EntryType.HOLIDAY),
        absence(D(2025, 1, 2)),
        absence(D(2025, 1, 3)),
    ]
    entries += [long_day(D(2025, 1, day)) for day in range(6, 11)]
    return entries


class TestAggregateBalances:

    def test_year_is_capped_month_and_week_are_not(self, config, january_entries):
        report = aggregate_balances(config, january_entries, D(2025, 1, 10))
        # 3000 minutes worked against 2400: 300 flex up to 45h, 300 overtime
        assert report.year_flex == 300
        assert report.overtime == 300
        assert report.month == 600
        assert report.week == 600
        assert report.vacation == 23

    def test_41h_week_with_48h_worked(self):
        """492 minutes per weekday: 2460 target, 2880 worked -> 240 flex, 180 overtime."""
        config = UserConfig(weekly_target_hours=41)
        entries = [absence(D(2025, 1, day), EntryType.HOLIDAY) for day in (1, 2, 3)]
        # 07:00-17:36 on a weekday nets 576 minutes (60 minutes break)
        entries += [
            TimeEntry(date=D(2025, 1, day), start_time="07:00", end_time="17:36")
            for day in range(6, 11)
        ]

        report = aggregate_balances(config, entries, D(2025, 1, 10))

        assert report.year_flex == 240
        assert report.overtime == 180
        assert report.week == 5 * (576 - 492)

    def test_41h_targets_are_whole_minutes(self):
        config = UserConfig(weekly_target_hours=41)
        report = aggregate_balances(config, [absence(D(2025, 1, d)) for d in range(6, 11)],
                                    D(2025, 1, 10))
        assert report.month == -3 * 492
        assert report.week == 0

    def test_empty_today_only_counts_in_the_year(self, config, january_entries):
        entries = [e for e in january_entries if e.date != "2025-01-10"]
        report = aggregate_balances(config, entries, D(2025, 1, 10))
        assert report.year_flex == 0
        assert report.overtime == 0
        assert report.month == 480
        assert report.week == 480

    def test_initial_balance_offsets_year_flex(self, january_entries):
        config = UserConfig(weekly_target_hours=40, initial_overtime_balance=-1029)
        report = aggregate_balances(config, january_entries, D(2025, 1, 10))
        assert report.year_flex == 300 - 1029
        assert report.month == 600

    def test_week_reaches_into_previous_year(self, config):
        entries = [
            absence(D(2024, 12, 30)),
            absence(D(2024, 12, 31)),
            absence(D(2025, 1, 1), EntryType.HOLIDAY),
        ]
        report = aggregate_balances(config, entries, D(2025, 1, 2))
        assert report.week == 0
        assert report.month == 0
        # The year scan starts on 1 January and includes the empty today
        assert report.year_flex == -480
        # Vacation is not limited to the current year
        assert report.vacation == 23

    def test_adding_vacation_credits_a_full_day(self, config, january_entries):
        before = aggregate_balances(config, january_entries, D(2025, 1, 10))
        after = aggregate_balances(config, january_entries + [absence(D(2025, 1, 8))], D(2025, 1, 10))
        assert after.month - before.month == 480
        assert after.week - before.week == 480
        assert before.vacation - after.vacation == 1

    def test_half_day_vacation_counts_half(self, config):
        report = aggregate_balances(config, [absence(D(2025, 3, 3), value=0.5)], D(2025, 3, 3))
        assert report.vacation == 24.5

    def test_unparsable_dates_are_skipped(self, config, january_entries):
        broken = [
            TimeEntry(date="2025-13-45", type=EntryType.VACATION),
            TimeEntry(date="not a date", type=EntryType.WORK, start_time="08:00", end_time="17:00"),
        ]
        expected = aggregate_balances(config, january_entries, D(2025, 1, 10))
        assert aggregate_balances(config, january_entries + broken, D(2025, 1, 10)) == expected

    def test_same_inputs_give_same_report(self, config, january_entries):
        first = aggregate_balances(config, january_entries, D(2025, 1, 10))
        second = aggregate_balances(config, list(reversed(january_entries)), D(2025, 1, 10))
        assert first == second

    def test_no_entries(self, config):
        # 2025-01-06 is a Monday; Jan 1-3 and Jan 6 are owed
        report = aggregate_balances(config, [], D(2025, 1, 6))
        assert report.year_flex == -4 * 480
        assert report.month == -3 * 480
        assert report.week == 0
        assert report.vacation == 25

    def test_weekend_work_adds_to_the_week(self, config):
        entries = [TimeEntry(date=D(2025, 1, 4), start_time="09:00", end_time="13:00")]
        report = aggregate_balances(config, entries, D(2025, 1, 4))
        # ISO week 2025-W01 starts on Monday 2024-12-30
        assert report.week == -5 * 480 + 240
        assert report.month == -3 * 480 + 240


def test_start_of_iso_week():
    assert start_of_iso_week(D(2025, 1, 2)) == D(2024, 12, 30)
    assert start_of_iso_week(D(2025, 1, 6)) == D(2025, 1, 6)
    assert start_of_iso_week(D(2025, 1, 12)) == D(2025, 1, 6)


class TestDailyLedger:

    def test_overtime_is_transferred_on_sunday(self, config):
        entries = [long_day(D(2025, 1, day)) for day in range(6, 11)]
        entries.append(TimeEntry(date=D(2025, 1, 11), start_time="09:00", end_time="13:00"))

        rows = build_daily_ledger(config, entries, D(2025, 1, 12))

        assert [row.date for row in rows] == [D(2025, 1, day) for day in range(6, 13)]
        assert [row.delta for row in rows[:5]] == [120] * 5
        saturday, sunday = rows[5], rows[6]
        assert saturday.delta == 240
        assert saturday.running == 840
        assert sunday.delta == 0
        assert sunday.overtime_transfer == 540
        assert sunday.running == 300

    def test_missing_weekday_is_marked(self):
        config = UserConfig(weekly_target_hours=40, initial_overtime_balance=-1029)
        entries = [absence(D(2025, 1, 6)), absence(D(2025, 1, 8))]

        rows = build_daily_ledger(config, entries, D(2025, 1, 8))

        assert len(rows) == 3
        assert rows[1].missing
        assert rows[1].delta == -480
        assert rows[1].entries == []
        assert not rows[0].missing
        assert rows[-1].running == -1029 - 480

    def test_quiet_weekend_is_left_out(self, config):
        entries = [absence(D(2025, 1, 3)), absence(D(2025, 1, 6))]
        rows = build_daily_ledger(config, entries, D(2025, 1, 6))
        assert [row.date for row in rows] == [D(2025, 1, 3), D(2025, 1, 6)]

    def test_explicit_start(self, config):
        rows = build_daily_ledger(config, [absence(D(2025, 1, 8))], D(2025, 1, 8), start=D(2025, 1, 6))
        assert [row.missing for row in rows] == [True, True, False]
        assert rows[-1].running == -960

    def test_no_entries_gives_empty_ledger(self, config):
        assert build_daily_ledger(config, [], D(2025, 1, 8)) == []


class TestBalanceService:

    @pytest.mark.asyncio
    async def test_loads_from_repositories(self, config, january_entries):
        service = BalanceService(
            InMemoryTimeEntryRepository(january_entries),
            InMemoryConfigRepository(defaults=config),
        )

        report = await service.get_balances(D(2025, 1, 10))
        assert report.year_flex == 300
        assert report.vacation == 23

        rows = await service.get_ledger(D(2025, 1, 10))
        assert rows[0].date == D(2025, 1, 1)
        assert rows[-1].running == 600

    @pytest.mark.asyncio
    async def test_recomputes_after_entries_change(self, config, january_entries):
        entry_repo = InMemoryTimeEntryRepository(january_entries)
        service = BalanceService(entry_repo, InMemoryConfigRepository(defaults=config))

        before = await service.get_balances(D(2025, 1, 10))
        await entry_repo.create(absence(D(2025, 1, 9)))
        after = await service.get_balances(D(2025, 1, 10))

        assert after.vacation == before.vacation - 1
        assert after.week == before.week + 480
