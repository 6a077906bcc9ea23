"""POS Reports - sales statistics and cash drawer reconciliation for a phone shop POS.

This package turns the POS transaction log into period reports:

- **Filter**: slice transactions into a day/week/month/year window
- **Aggregate**: revenue, tax, staff and payment-method breakdowns,
  e-wallet cash-in/cash-out amounts and fees, discount analytics
- **Reconcile**: expected drawer balance against the day's opening float
- **Chart**: trailing revenue series anchored at today

Module Structure:
    pos_reports.transactions: Record normalization and the transaction store
    pos_reports.periods: Period windows and the period filter
    pos_reports.stats: Single-pass aggregation and fee attribution rules
    pos_reports.drawer: Drawer reconciliation, settings and float history
    pos_reports.charts: Trailing chart series
    pos_reports.reports: One-call period report
    pos_reports.config: ReportPaths configuration

Quick Start:
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
    >>> print(report.drawer.closing_balance, report.drawer.to_collect)
"""

__version__ = "0.1.0"

from pos_reports.config import ReportPaths
from pos_reports.exceptions import ConfigError, PosReportsError, StoreError
from pos_reports.models import LineItem, Transaction
from pos_reports.periods import Period

__all__ = [
    "ConfigError",
    "LineItem",
    "Period",
    "PosReportsError",
    "ReportPaths",
    "StoreError",
    "Transaction",
    "__version__",
]
