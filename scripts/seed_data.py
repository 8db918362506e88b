"""
Data Seeder for Worktime.
Populates the database with realistic entries for testing and demo purposes.
"""

import asyncio
import sys
import random
from datetime import date, timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from worktime.domain.models import EntryType, TimeEntry, UserConfig
from worktime.infra.config import get_settings
from worktime.infra.db import get_engine, Base
from worktime.infra.repository import SqlConfigRepository, SqlTimeEntryRepository
from worktime.services.punch_normalizer import parse_signed_duration


async def reset_database():
    """Delete the existing database file to ensure a fresh seed"""
    db_path = get_settings().data_dir / 'worktime.db'
    if db_path.exists():
        print(f"Removing existing database at: {db_path}")
        try:
            db_path.unlink()
            print("Database removed.")
        except PermissionError:
            print("ERROR: Could not remove database. It might be in use.")
            sys.exit(1)
    else:
        print(f"No existing database found at: {db_path}")


async def seed(year: int):
    await reset_database()
    print("Starting data seeding...")

    # Initialize DB (creates tables if needed)
    engine = get_engine()
    async with engine.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    entry_repo = SqlTimeEntryRepository()
    config_repo = SqlConfigRepository()
    await config_repo.save(UserConfig(weekly_target_hours=41, yearly_vacation_days=25,
                                      initial_overtime_balance=parse_signed_duration("-17:09"),
                                      vacation_carryover=2))

    # Pattern: Mon-Fri, split day with lunch break, some vacation and sick days
    # January of the given year
    entries = []
    current = date(year, 1, 1)
    end_date = date(year, 1, 31)
    while current <= end_date:
        day_str = current.isoformat()

        if current.weekday() >= 5:
            current += timedelta(days=1)
            continue

        if current.day == 1:
            entries.append(TimeEntry(date=day_str, type=EntryType.HOLIDAY, notes="🎉 Ganzer Tag"))
        elif current.day in (12, 13):
            entries.append(TimeEntry(date=day_str, type=EntryType.VACATION, notes="🌴 Ganzer Tag"))
        elif current.day == 20:
            entries.append(TimeEntry(date=day_str, type=EntryType.SICK, notes="💊 Ganzer Tag"))
        else:
            start = random.choice(["07:15", "07:30", "07:45", "08:00"])
            end = random.choice(["16:30", "16:45", "17:00", "17:30"])
            entries.append(TimeEntry(date=day_str, type=EntryType.WORK,
                                     start_time=start, end_time=end, pause_duration=30))

        current += timedelta(days=1)

    await entry_repo.create_many(entries)
    print(f"Seeding complete: {len(entries)} entries.")


if __name__ == "__main__":
    seed_year = int(sys.argv[1]) if len(sys.argv) > 1 else date.today().year
    asyncio.run(seed(seed_year))
