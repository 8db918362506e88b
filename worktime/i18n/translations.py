# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the work-time accounting:
break rule traces, ledger notes and the balance summary labels.
"""

TRANSLATIONS = {
    "en": {
        # Break rules
        "rules.working_at_930": "Working at 09:30 detected (+15min break deduction)",
        "rules.lunch_over_5_5h": "Net work > 5.5h (+30min break)",
        "rules.pause_raised_9h": "Net work > 9h (break raised to {minutes}min)",
        "rules.lunch_corrected_7h": "Lunch break < 30min & work > 7h (break set to 30min)",
        "rules.net_over_9h": "Net > 9h (break raised to {minutes}min)",

        # Ledger
        "ledger.missing_day": "No entry (target not met)",
        "ledger.overtime_transfer": "Overtime transfer: -{amount} (>45h)",

        # Entry types
        "entry.work": "Work",
        "entry.vacation": "Vacation",
        "entry.sick": "Sick",
        "entry.accident": "Accident",
        "entry.holiday": "Holiday",
        "entry.school": "School",
        "entry.special": "Special leave",
        "entry.trip": "Business trip",
        "entry.other": "Other",
        "entry.full_day": "Full day",
        "entry.half_day": "Half day",

        # Summary report
        "report.title": "Overview",
        "report.as_of": "As of {date}",
        "report.year_flex": "Year balance (current)",
        "report.month": "Month",
        "report.week": "Week",
        "report.overtime": "Overtime",
        "report.overtime_hint": "Collected through >45h/week",
        "report.vacation": "Remaining vacation",
        "report.days": "days",
        "report.vacation_available": "Of {total} days available",
        "report.vacation_carryover": "(incl. {days} carried over)",
    },

    "de": {
        # Break rules
        "rules.working_at_930": "Arbeit um 09:30 erkannt (+15min Pause/Abzug)",
        "rules.lunch_over_5_5h": "Netto-Arbeit > 5.5h (+30min Pause)",
        "rules.pause_raised_9h": "Netto-Arbeit > 9h (Pause auf {minutes}min erhöht)",
        "rules.lunch_corrected_7h": "Mittagspause < 30min & Arbeit > 7h (Pause auf 30min gesetzt)",
        "rules.net_over_9h": "Netto > 9h (Pause auf {minutes}min erhöht)",

        # Ledger
        "ledger.missing_day": "Kein Eintrag (Soll nicht erfüllt)",
        "ledger.overtime_transfer": "Übertrag Überzeit: -{amount} (>45h)",

        # Entry types
        "entry.work": "Arbeit",
        "entry.vacation": "Ferien",
        "entry.sick": "Krank",
        "entry.accident": "Unfall",
        "entry.holiday": "Feiertag",
        "entry.school": "Schule",
        "entry.special": "Sonderurlaub",
        "entry.trip": "Dienstreise",
        "entry.other": "Sonstiges",
        "entry.full_day": "Ganzer Tag",
        "entry.half_day": "Halber Tag",

        # Summary report
        "report.title": "Übersicht",
        "report.as_of": "Stand {date}",
        "report.year_flex": "Jahressaldo (Aktuell)",
        "report.month": "Monat",
        "report.week": "Woche",
        "report.overtime": "Überzeit",
        "report.overtime_hint": "Gesammelt durch >45h/Woche",
        "report.vacation": "Restzurlaub",
        "report.days": "Tage",
        "report.vacation_available": "Von {total} Tagen verfügbar",
        "report.vacation_carryover": "(inkl. {days} Übertrag)",
    },
}
