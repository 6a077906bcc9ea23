"""CLI for POS period reports.

Loads transactions (cache first, remote database second), builds the
report for the selected period and prints it. Optional CSV exports go
through pandas.

Usage:
    pos-reports --data-root data --period daily --date 2026-10-19
    pos-reports --data-root data --period monthly --staff Ana --export-items items.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import date, datetime

from pos_reports.charts.projector import buckets_to_frame
from pos_reports.config import DEFAULT_DATABASE_AUTH, DEFAULT_DATABASE_URL, ReportPaths
from pos_reports.drawer.settings import SettingsStore
from pos_reports.exceptions import PosReportsError
from pos_reports.formatters.console import format_report_for_console
from pos_reports.periods import ALL_STAFF, Period
from pos_reports.reports.api import build_period_report
from pos_reports.transactions.frame import transactions_to_frame
from pos_reports.transactions.store import TransactionStore

logger = logging.getLogger(__name__)


def _parse_date_arg(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Use YYYY-MM-DD.") from None


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pos-reports",
        description="Print POS sales statistics and the cash drawer summary for a period.",
    )
    p.add_argument(
        "--data-root",
        default="data",
        help="Directory holding the transaction cache and settings (default: data).",
    )
    p.add_argument(
        "--period",
        default=Period.DAILY.value,
        choices=[period.value for period in Period],
        help="Report period (default: daily).",
    )
    p.add_argument(
        "--date",
        type=_parse_date_arg,
        default=None,
        help="Any date inside the period, YYYY-MM-DD (default: today).",
    )
    p.add_argument(
        "--staff",
        default=ALL_STAFF,
        help="Only include sales processed by this staff member (default: all).",
    )
    p.add_argument(
        "--refresh",
        action="store_true",
        help="Fetch from the remote database even when a cache exists.",
    )
    p.add_argument(
        "--database-url",
        default=DEFAULT_DATABASE_URL,
        help="Realtime database base URL (default: $POS_FIREBASE_DB_URL).",
    )
    p.add_argument(
        "--set-float",
        type=float,
        default=None,
        metavar="AMOUNT",
        help="Set the current opening float before building the report.",
    )
    p.add_argument(
        "--adjust",
        type=float,
        default=None,
        metavar="AMOUNT",
        help="Record a signed cash adjustment on --date before building the report.",
    )
    p.add_argument(
        "--reason",
        default="",
        help="Reason recorded with --adjust.",
    )
    p.add_argument("--export-items", default=None, help="Write items sold to this CSV path.")
    p.add_argument("--export-chart", default=None, help="Write the trend series to this CSV path.")
    p.add_argument(
        "--export-transactions",
        default=None,
        help="Write the period's transactions to this CSV path.",
    )
    p.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose/debug logging output.",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point. Returns a process exit code."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    anchor = args.date or date.today()
    paths = ReportPaths.from_root(args.data_root)
    paths.ensure_dirs()
    settings = SettingsStore(paths)
    store = TransactionStore(paths, database_url=args.database_url, auth=DEFAULT_DATABASE_AUTH)

    try:
        if args.set_float is not None:
            settings.set_current_opening_balance(args.set_float)
        if args.adjust is not None:
            settings.add_adjustment(anchor, args.adjust, reason=args.reason)

        transactions = store.fetch_all(refresh=args.refresh)
        report = build_period_report(
            transactions,
            settings,
            args.period,
            anchor,
            staff=args.staff,
        )
    except (PosReportsError, OSError) as e:
        logger.error("Error: %s", e, exc_info=args.verbose)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(format_report_for_console(report))

    try:
        if args.export_items:
            report.stats.items_frame().to_csv(args.export_items, index=False)
            logger.info("Wrote items sold to %s", args.export_items)
        if args.export_chart:
            buckets_to_frame(report.chart).to_csv(args.export_chart, index=False)
            logger.info("Wrote trend series to %s", args.export_chart)
        if args.export_transactions:
            transactions_to_frame(report.transactions).to_csv(
                args.export_transactions, index=False
            )
            logger.info("Wrote period transactions to %s", args.export_transactions)
    except OSError as e:
        logger.error("Export failed: %s", e)
        print(f"[ERROR] Export failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
