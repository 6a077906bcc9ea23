"""Period report module.

Example:
    >>> from datetime import date
    >>> from pos_reports import ReportPaths
    >>> from pos_reports.drawer import SettingsStore
    >>> from pos_reports.reports import build_period_report
    >>> from pos_reports.transactions import TransactionStore
    >>>
    >>> paths = ReportPaths.from_root("data")
    >>> transactions = TransactionStore(paths).fetch_all()
    >>> report = build_period_report(
    ...     transactions, SettingsStore(paths), "daily", date(2026, 10, 19)
    ... )
    >>> report.drawer.to_collect
"""

from pos_reports.reports.api import PeriodReport, build_period_report

__all__ = ["PeriodReport", "build_period_report"]
