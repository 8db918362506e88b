"""
Script to import a time recording export that was saved as CSV.

Usage: python import_rows.py <export.csv> <year> [--dedup]
"""

import asyncio
import csv
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from worktime.infra.config import get_settings
from worktime.infra.db import init_db
from worktime.infra.repository import create_repositories
from worktime.services.import_service import parse_export_rows


async def main():
    if len(sys.argv) < 3:
        print("Usage: python import_rows.py <export.csv> <year> [--dedup]")
        sys.exit(1)

    csv_path = Path(sys.argv[1])
    if not csv_path.exists():
        print(f"Error: File '{csv_path}' not found.")
        sys.exit(1)
    year = int(sys.argv[2])

    with open(csv_path, 'r', encoding='utf-8', newline='') as f:
        rows = list(csv.reader(f, delimiter=';'))

    entries = parse_export_rows(rows, year)
    print(f"Parsed {len(entries)} entries from {csv_path.name}")

    settings = get_settings()
    if settings.storage_backend == "sql":
        await init_db(settings.get_db_url())
    entry_repo, _ = create_repositories(settings.storage_backend, defaults=settings.defaults)
    await entry_repo.create_many(entries)

    if "--dedup" in sys.argv:
        removed = await entry_repo.deduplicate()
        print(f"Removed {removed} duplicates")


if __name__ == "__main__":
    asyncio.run(main())
