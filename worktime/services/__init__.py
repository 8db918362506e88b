"""Services layer - Work-time accounting"""

from .break_rules import calculate_work_details
from .day_classifier import classify_day
from .weekly_accumulator import WeeklyAccumulator, split_week
from .balance_service import BalanceService, aggregate_balances, build_daily_ledger
from .report_service import ReportService

__all__ = [
    "calculate_work_details",
    "classify_day",
    "WeeklyAccumulator",
    "split_week",
    "BalanceService",
    "aggregate_balances",
    "build_daily_ledger",
    "ReportService",
]
