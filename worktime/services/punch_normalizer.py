"""
Punch Normalizer - parsing and formatting of clock times.

Raw punches come from manual edits and bulk imports and are expected to be
occasionally incomplete or malformed. Every parser here degrades to ``None``
(or zero) instead of raising, so callers can treat "not a usable time" as a
plain value.
"""

import datetime
import re
from typing import Optional

# Strict H:MM / HH:MM wall clock time, 00:00 - 23:59
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")

# First H:MM inside a noisy cell such as "7:45/PA"
EMBEDDED_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")

MINUTES_PER_DAY = 24 * 60


def is_valid_time(text: Optional[str]) -> bool:
    """Check whether text is a wall clock time like '9:30' or '09:30'."""
    if not isinstance(text, str):
        return False
    return TIME_PATTERN.match(text.strip()) is not None


def parse_time(text: Optional[str]) -> Optional[int]:
    """
    Convert 'HH:MM' to minutes since midnight.

    Args:
        text: Time string, may be None or empty

    Returns:
        Minutes since midnight, or None when the input is absent or malformed
    """
    if not is_valid_time(text):
        return None
    hours, minutes = TIME_PATTERN.match(text.strip()).groups()
    return int(hours) * 60 + int(minutes)


def clean_time(value) -> Optional[str]:
    """
    Extract the first time from a noisy value and zero-pad it.

    '7:45/PA' -> '07:45', 'GT Feiertag' -> None
    """
    if value is None or value == "":
        return None
    match = EMBEDDED_TIME_PATTERN.search(str(value))
    if not match:
        return None
    hours, minutes = match.groups()
    return f"{hours.zfill(2)}:{minutes}"


def minutes_to_time(minutes: float) -> str:
    """Format signed minutes as [-]HH:MM."""
    sign = "-" if minutes < 0 else ""
    total = abs(minutes)
    hours = int(total // 60)
    mins = int(round(total % 60))
    if mins == 60:
        hours, mins = hours + 1, 0
    return f"{sign}{hours:02d}:{mins:02d}"


def parse_signed_duration(text: Optional[str]) -> int:
    """
    Parse '+HH:MM' / '-HH:MM' into signed minutes.

    Used for entering a starting balance such as '-17:09'. Anything that is
    not two numeric parts yields 0.
    """
    if not text:
        return 0
    raw = text.strip()
    negative = raw.startswith("-")
    parts = raw.lstrip("+-").split(":")
    if len(parts) != 2:
        return 0
    try:
        minutes = int(parts[0]) * 60 + int(parts[1])
    except ValueError:
        return 0
    return -minutes if negative else minutes


def format_balance(minutes: float) -> str:
    """Format a balance for display, e.g. '+ 1h 30m' or '- 0h 15m'."""
    prefix = "+" if minutes >= 0 else "-"
    total = abs(round(minutes))
    return f"{prefix} {total // 60}h {total % 60}m"


def parse_iso_date(text) -> Optional[datetime.date]:
    """Parse a 'YYYY-MM-DD' date, returning None for anything unparsable."""
    if isinstance(text, datetime.date):
        return text
    if not isinstance(text, str):
        return None
    try:
        return datetime.date.fromisoformat(text.strip())
    except ValueError:
        return None
