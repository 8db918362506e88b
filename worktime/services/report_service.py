"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
The balance overview and the daily ledger are rendered from text templates,
so the layout can be changed without touching the accounting code.
"""

import datetime
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader

from worktime.domain.models import BalanceReport, EntryType, LedgerRow, TimeEntry, UserConfig
from worktime.i18n import tr
from worktime.services.punch_normalizer import format_balance, minutes_to_time
from worktime.utils import get_resource_path


class ReportService:
    """
    Renders balance reports from Jinja2 templates.
    """

    SUMMARY_TEMPLATE = "balance_summary.txt"
    LEDGER_TEMPLATE = "daily_ledger.txt"

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = template_dir

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )

        # Add custom filters
        self.env.filters['format_balance'] = format_balance
        self.env.filters['format_time'] = minutes_to_time
        self.env.filters['format_date'] = self._format_date
        self.env.filters['format_days'] = self._format_days
        self.env.globals['tr'] = tr
        self.env.globals['entry_label'] = self._entry_label

    @staticmethod
    def _format_date(value: datetime.date, fmt: str = "%d.%m.%Y") -> str:
        """Format date object"""
        return value.strftime(fmt)

    @staticmethod
    def _format_days(days: float) -> str:
        """12.0 -> '12', 12.5 -> '12.5'"""
        return f"{days:g}"

    @staticmethod
    def _entry_label(entry: TimeEntry) -> str:
        """Short description of an entry for the ledger"""
        label = tr(f"entry.{entry.type.value}")
        if entry.type == EntryType.WORK:
            return f"{label} {entry.start_time}-{entry.end_time}"
        if entry.value == 0.5:
            return f"{label} ({tr('entry.half_day')})"
        return label

    def render_summary(self, report: BalanceReport, config: UserConfig,
                       today: datetime.date) -> str:
        """
        Render the balance overview.

        Args:
            report: Computed balances
            config: User configuration (vacation entitlement shown in the footer)
            today: Reference day of the report

        Returns:
            The rendered overview
        """
        template = self.env.get_template(self.SUMMARY_TEMPLATE)
        return template.render(report=report, config=config, today=today)

    def render_ledger(self, rows: List[LedgerRow]) -> str:
        """Render the day-by-day ledger"""
        template = self.env.get_template(self.LEDGER_TEMPLATE)
        return template.render(rows=rows)

    def save(self, content: str, output_file: Path) -> Path:
        """Write rendered content to a file, creating parent directories"""
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(content)
        return output_file
