"""Example: End-of-Day Cash Drawer Report

This example demonstrates how to close out the day:
1. Load transactions (local cache first, remote database second)
2. Build today's report, which also locks in today's float
3. Print the amount to collect from the drawer

Prerequisites:
- Set POS_FIREBASE_DB_URL (and POS_FIREBASE_AUTH if the database needs it),
  or have data/cache/pos_transactions.json from a previous run
- Set the opening float once with set_current_opening_balance
"""

from datetime import date
from pathlib import Path

from pos_reports import ReportPaths
from pos_reports.drawer import SettingsStore
from pos_reports.formatters import format_currency, format_report_for_console
from pos_reports.reports import build_period_report
from pos_reports.transactions import TransactionStore

paths = ReportPaths.from_root(Path("data"))
paths.ensure_dirs()

settings = SettingsStore(paths)
if settings.get_current_opening_balance() == 0:
    settings.set_current_opening_balance(1000.0)  # MODIFY AS NEEDED

# Cash taken out or added during the day is recorded once, when it happens:
#   pos-reports --data-root data --adjust=-150 --reason "cleaning supplies"
for adjustment in settings.list_adjustments():
    if adjustment.date == date.today().isoformat():
        print(f"Adjustment today: {adjustment.amount:+,.2f} {adjustment.reason}")

transactions = TransactionStore(paths).fetch_all()
print(f"Loaded {len(transactions)} transaction(s)")

report = build_period_report(transactions, settings, "daily", date.today())

print()
print(format_report_for_console(report))

drawer = report.drawer
print()
print(f"Float to leave in drawer: {format_currency(drawer.opening_balance)}")
print(f"Cash to take out:         {format_currency(drawer.to_collect)}")
