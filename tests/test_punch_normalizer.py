"""
Tests for parsing and formatting of clock times.
"""

import datetime
import pytest

from worktime.services.punch_normalizer import (
    clean_time,
    format_balance,
    is_valid_time,
    minutes_to_time,
    parse_iso_date,
    parse_signed_duration,
    parse_time,
)


@pytest.mark.parametrize("text, minutes", [
    ("00:00", 0),
    ("09:30", 570),
    ("9:30", 570),
    ("23:59", 23 * 60 + 59),
    (" 08:15 ", 495),
])
def test_parse_time_valid(text, minutes):
    assert parse_time(text) == minutes


@pytest.mark.parametrize("text", [None, "", "24:00", "12:60", "12", "ab:cd", "12:5", "1230"])
def test_parse_time_rejects_malformed_without_raising(text):
    assert parse_time(text) is None
    assert not is_valid_time(text)


def test_clean_time_extracts_and_pads():
    assert clean_time("7:45/PA") == "07:45"
    assert clean_time("16:30/VK") == "16:30"
    assert clean_time("GT Feiertag") is None
    assert clean_time("") is None
    assert clean_time(None) is None


def test_minutes_to_time():
    assert minutes_to_time(90) == "01:30"
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(-1029) == "-17:09"
    assert minutes_to_time(492.0) == "08:12"


def test_parse_signed_duration():
    assert parse_signed_duration("-17:09") == -1029
    assert parse_signed_duration("+01:30") == 90
    assert parse_signed_duration("02:00") == 120
    assert parse_signed_duration("garbage") == 0
    assert parse_signed_duration("1:2:3") == 0
    assert parse_signed_duration(None) == 0


def test_format_balance():
    assert format_balance(90) == "+ 1h 30m"
    assert format_balance(0) == "+ 0h 0m"
    assert format_balance(-15) == "- 0h 15m"
    assert format_balance(-1029) == "- 17h 9m"


def test_parse_iso_date():
    assert parse_iso_date("2025-03-01") == datetime.date(2025, 3, 1)
    assert parse_iso_date(datetime.date(2025, 3, 1)) == datetime.date(2025, 3, 1)
    assert parse_iso_date("2025-13-45") is None
    assert parse_iso_date("01.03.2025") is None
    assert parse_iso_date(None) is None
