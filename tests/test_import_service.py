"""
Tests for parsing rows of a time recording export.
"""

from worktime.domain.models import EntryType
from worktime.services.import_service import parse_export_rows

ROWS = [
    ["Datum", "Tag", "Info", "Kommen", "Pause von", "Pause bis", "Gehen"],
    [],
    ["01.01.", "Mi", "GT Feiertag", "", "", "", ""],
    ["02.01.", "Do", "", "7:45/PA", "12:00", "12:45", "16:45"],
    ["03.01.", "Fr", "", "08:00", "", "", "17:00"],
    ["06.01.", "Mo", "Ferien NM", "08:00", "", "", "12:00"],
    ["07.01.", "Di", "", "GT Krank", "", "", ""],
    ["08.01.", "Mi", "Urlaub VM", "", "", "", ""],
    ["09.01.", "Do", "Berufsschule", "", "", "", ""],
    ["10.01.", "Fr", "", "08:00", "12:30", "12:00", "16:00"],
    ["13.01.", "Mo", "", "", "", "", ""],
]


def by_date(entries):
    result = {}
    for entry in entries:
        result.setdefault(entry.date, []).append(entry)
    return result


def test_rows_without_date_are_ignored():
    entries = parse_export_rows(ROWS, 2025)
    assert all(entry.date.startswith("2025-01-") for entry in entries)
    assert "2025-01-13" not in by_date(entries)


def test_holiday_full_day():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-01"]
    assert entry.type == EntryType.HOLIDAY
    assert entry.value == 1.0
    assert entry.notes == "🎉 Ganzer Tag"


def test_work_with_break_columns():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-02"]
    assert entry.type == EntryType.WORK
    assert entry.start_time == "07:45"
    assert entry.end_time == "16:45"
    assert entry.pause_duration == 45


def test_work_without_break_columns_defaults_to_30():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-03"]
    assert entry.pause_duration == 30


def test_work_and_half_day_absence_on_same_row():
    work, vacation = by_date(parse_export_rows(ROWS, 2025))["2025-01-06"]
    assert work.type == EntryType.WORK
    assert work.end_time == "12:00"
    assert vacation.type == EntryType.VACATION
    assert vacation.value == 0.5
    assert vacation.notes == "🌴 Nachmittag"


def test_absence_in_start_column():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-07"]
    assert entry.type == EntryType.SICK
    assert entry.notes == "💊 Ganzer Tag"


def test_urlaub_is_vacation():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-08"]
    assert entry.type == EntryType.VACATION
    assert entry.value == 0.5
    assert entry.notes == "🌴 Vormittag"


def test_school_without_day_part():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-09"]
    assert entry.type == EntryType.SCHOOL
    assert entry.value == 1.0
    assert entry.notes == "📚"


def test_negative_break_is_floored():
    (entry,) = by_date(parse_export_rows(ROWS, 2025))["2025-01-10"]
    assert entry.pause_duration == 0


def test_impossible_date_is_skipped(caplog):
    rows = [["31.02.", "", "", "08:00", "", "", "17:00"]]
    assert parse_export_rows(rows, 2025) == []
    assert "31.02.2025" in caplog.text


def test_day_part_needs_whole_word():
    """'NM' inside another word does not make a half day."""
    rows = [["14.01.", "Di", "Ferien Anmeldung", "", "", "", ""]]
    (entry,) = parse_export_rows(rows, 2025)
    assert entry.value == 1.0
