"""Public API for period reports.

This module wires the period filter, aggregation, drawer reconciliation,
float lock-in and chart projection into one call over an in-memory
transaction list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from pos_reports.charts.projector import ChartBucket, project
from pos_reports.drawer.floats import lock_in_todays_float
from pos_reports.drawer.reconcile import DrawerSummary, reconcile
from pos_reports.drawer.settings import SettingsStore
from pos_reports.models import Transaction
from pos_reports.periods import (
    ALL_STAFF,
    Period,
    adjustment_range,
    as_date,
    describe_period,
    filter_transactions,
    list_staff,
)
from pos_reports.stats.aggregate import aggregate
from pos_reports.stats.types import StatsResult

logger = logging.getLogger(__name__)


@dataclass
class PeriodReport:
    """Everything the reports view shows for one period.

    Attributes:
        period: Selected period.
        anchor: Selected date.
        staff: Staff filter ("all" or a staff identifier).
        label: Human-readable window label.
        transactions: Transactions in the window, after the staff filter.
        stats: Aggregated statistics of ``transactions``.
        drawer: Cash drawer reconciliation.
        chart: Trailing revenue series anchored at "now".
        staff_options: Staff identifiers available for filtering.
    """

    period: Period
    anchor: date
    staff: str
    label: str
    transactions: list[Transaction]
    stats: StatsResult
    drawer: DrawerSummary
    chart: list[ChartBucket]
    staff_options: list[str] = field(default_factory=list)


def build_period_report(
    transactions: Sequence[Transaction],
    settings: SettingsStore,
    period: Period | str,
    anchor: date | datetime,
    staff: str = ALL_STAFF,
    now: datetime | None = None,
) -> PeriodReport:
    """Build the report for one period.

    Steps:
    1. Lock in today's float if today already has sales.
    2. Filter by period window and staff, then aggregate.
    3. Read the opening float for the anchor date and the period's
       adjustments, then reconcile the drawer.
    4. Project the trailing chart from the full list.

    Args:
        transactions: Full transaction list from the store.
        settings: Settings store (float, history, adjustments).
        period: Reporting period.
        anchor: Any date (or datetime) inside the wanted window.
        staff: Staff identifier, or "all".
        now: Reference instant for "today" and the chart
            (defaults to ``datetime.now()``).

    Returns:
        PeriodReport for the window.
    """
    period = Period.parse(period)
    anchor = as_date(anchor)
    now = now or datetime.now()
    today = now.date()

    lock_in_todays_float(settings, transactions, today=today)

    selected = filter_transactions(transactions, period, anchor, staff)
    stats = aggregate(selected)

    opening_balance = settings.get_opening_balance_for_date(anchor, today=today)
    adj_start, adj_end = adjustment_range(period, anchor)
    adjustments = settings.get_total_adjustments_for_range(adj_start, adj_end)
    drawer = reconcile(stats, opening_balance, adjustments, period)

    chart = project(transactions, period, now=now)

    logger.info(
        "Built %s report for %s: %d transaction(s), sales=%.2f",
        period.value,
        anchor,
        stats.total_transactions,
        stats.total_sales,
    )

    return PeriodReport(
        period=period,
        anchor=anchor,
        staff=staff,
        label=describe_period(period, anchor),
        transactions=selected,
        stats=stats,
        drawer=drawer,
        chart=chart,
        staff_options=list_staff(transactions),
    )
