#!/usr/bin/env python

"""
Worktime - Main Entry Point

Prints the work-time balances (year flex, overtime, month, week, vacation)
or the day-by-day ledger from the configured store.

Usage:
    python main.py [summary|ledger|dedup] [YYYY-MM-DD] [--output FILE]

The optional date is the reference day ("today") of the calculation.
With --output the rendered report is written to FILE instead of stdout.
"""

import asyncio
import datetime
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from worktime.i18n import set_language
from worktime.infra.config import get_settings
from worktime.infra.db import init_db
from worktime.infra.repository import create_repositories
from worktime.services.balance_service import BalanceService
from worktime.services.report_service import ReportService

COMMANDS = ("summary", "ledger", "dedup")


async def run(command: str, today: datetime.date) -> str:
    settings = get_settings()
    set_language(settings.language)

    if settings.storage_backend == "sql":
        await init_db(settings.get_db_url())
    entry_repo, config_repo = create_repositories(settings.storage_backend, defaults=settings.defaults)

    if command == "dedup":
        removed = await entry_repo.deduplicate()
        return f"{removed} duplicates removed"

    service = BalanceService(entry_repo, config_repo)
    reports = ReportService()
    if command == "ledger":
        return reports.render_ledger(await service.get_ledger(today))

    config = await config_repo.get()
    return reports.render_summary(await service.get_balances(today), config, today)


def main():
    """Main entry point"""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    args = sys.argv[1:]
    output_file = None
    if "--output" in args:
        index = args.index("--output")
        if index + 1 >= len(args):
            print("Error: --output needs a file name")
            return 1
        output_file = Path(args[index + 1])
        del args[index:index + 2]

    command = args[0] if args else "summary"
    if command not in COMMANDS:
        print(__doc__)
        return 1

    try:
        today = datetime.date.fromisoformat(args[1]) if len(args) > 1 else datetime.date.today()
    except ValueError:
        print(f"Error: invalid date '{args[1]}', expected YYYY-MM-DD")
        return 1

    text = asyncio.run(run(command, today))
    if output_file is not None:
        ReportService().save(text, output_file)
        print(f"Report saved to {output_file}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
