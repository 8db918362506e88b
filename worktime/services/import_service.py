"""
Import Service - converts rows of a time recording export into entries.

The export is a sheet with one row per day:

    col 0: date "DD.MM."   col 2: info text   col 3: start (or absence text)
    col 4/5: break start/end                  col 6: end

Reading the workbook file itself is left to the caller; this module works on
rows that have already been decoded into lists of cell values.
"""

import logging
import re
from typing import Any, List, Optional, Sequence

from worktime.domain.models import EntryType, TimeEntry
from worktime.services.punch_normalizer import clean_time, parse_iso_date, parse_time

logger = logging.getLogger(__name__)

DATE_CELL_PATTERN = re.compile(r"^(\d{2})\.(\d{2})\.$")
STARTS_WITH_TIME = re.compile(r"^\d{1,2}:\d{2}")

DEFAULT_PAUSE_MINUTES = 30

# (keywords, entry type, note icon) in the order the export is checked
ABSENCE_KEYWORDS = [
    (("SCHULE", "BERUFSSCHULE"), EntryType.SCHOOL, "📚"),
    (("FERIEN", "URLAUB"), EntryType.VACATION, "🌴"),
    (("KRANK",), EntryType.SICK, "💊"),
    (("UNFALL",), EntryType.ACCIDENT, "🤕"),
    (("FEIERTAG",), EntryType.HOLIDAY, "🎉"),
]

# Day part markers: full day, morning, afternoon
DAY_PARTS = [
    ("GT", "Ganzer Tag", 1.0),
    ("VM", "Vormittag", 0.5),
    ("NM", "Nachmittag", 0.5),
]


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _day_part(text: str):
    for marker, label, value in DAY_PARTS:
        if re.search(rf"\b{marker}\b", text):
            return label, value
    return None, 1.0


def _work_entry(date_str: str, row: Sequence[Any]) -> Optional[TimeEntry]:
    start_col = _cell(row, 3)
    end_col = _cell(row, 6)
    if not (STARTS_WITH_TIME.match(start_col) and end_col):
        return None

    start_time = clean_time(start_col)
    end_time = clean_time(end_col)
    if not (start_time and end_time):
        return None

    pause = DEFAULT_PAUSE_MINUTES
    pause_start = parse_time(clean_time(_cell(row, 4)))
    pause_end = parse_time(clean_time(_cell(row, 5)))
    if pause_start is not None and pause_end is not None:
        pause = pause_end - pause_start

    return TimeEntry(
        date=date_str,
        type=EntryType.WORK,
        start_time=start_time,
        end_time=end_time,
        pause_duration=max(pause, 0),
        notes="",
    )


def _absence_entries(date_str: str, row: Sequence[Any]) -> List[TimeEntry]:
    full_text = f"{_cell(row, 2)} {_cell(row, 3)}".upper()
    label, value = _day_part(full_text)

    entries = []
    for keywords, entry_type, icon in ABSENCE_KEYWORDS:
        if not any(keyword in full_text for keyword in keywords):
            continue
        note = f"{icon} {label}" if label else icon
        entries.append(TimeEntry(
            date=date_str,
            type=entry_type,
            value=value,
            pause_duration=0,
            notes=note,
        ))
    return entries


def parse_export_rows(rows: Sequence[Sequence[Any]], year: int) -> List[TimeEntry]:
    """
    Parse export rows into time entries.

    A row may produce a work entry and absence entries at the same time
    (e.g. work in the morning, "Ferien NM" in the afternoon). Rows without a
    "DD.MM." date in the first column are ignored.

    Args:
        rows: Decoded sheet rows
        year: Calendar year of the export (the sheet only carries day/month)

    Returns:
        Entries in row order
    """
    entries: List[TimeEntry] = []
    for row in rows:
        if not row:
            continue
        match = DATE_CELL_PATTERN.match(_cell(row, 0))
        if not match:
            continue
        day, month = match.groups()
        date_str = f"{year}-{month}-{day}"
        if parse_iso_date(date_str) is None:
            logger.warning(f"Skipping row with impossible date {_cell(row, 0)}{year}")
            continue

        work = _work_entry(date_str, row)
        if work is not None:
            entries.append(work)
        entries.extend(_absence_entries(date_str, row))

    logger.info(f"Parsed {len(entries)} entries from {len(rows)} export rows")
    return entries
