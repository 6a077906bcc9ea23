"""Trailing revenue series for report charts.

The series is always anchored at "now", independent of the period the user
is browsing: 7 days, 8 weeks, 12 months or 5 years, oldest first. Empty
buckets are kept with a zero value so the series length never changes.

Bucket values use the simple revenue rule (``actualRevenue``, else
``total``) rather than the full resolution in ``pos_reports.stats``; the
chart is a quick trend view.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pandas as pd

from pos_reports.date_labels import (
    format_day_abbrev,
    format_month_abbrev,
    format_month_day,
    format_month_year,
)
from pos_reports.models import Transaction
from pos_reports.periods import Period, monday_of

logger = logging.getLogger(__name__)

BUCKET_COUNTS = {
    Period.DAILY: 7,
    Period.WEEKLY: 8,
    Period.MONTHLY: 12,
    Period.YEARLY: 5,
}


@dataclass(frozen=True)
class ChartBucket:
    """One point of a chart series.

    Attributes:
        label: Short axis label (e.g. "Mon", "W-2", "Oct", "2026").
        full_label: Tooltip label (e.g. "Oct 19", "Week of Oct 13").
        value: Revenue in ``[bucket_start, bucket_end)``.
        bucket_start: Inclusive start of the bucket.
        bucket_end: Exclusive end of the bucket.
    """

    label: str
    full_label: str
    value: float
    bucket_start: datetime
    bucket_end: datetime


def _midnight(d: date) -> datetime:
    return datetime(d.year, d.month, d.day)


def _add_months(year: int, month: int, delta: int) -> date:
    y, m = divmod(year * 12 + (month - 1) + delta, 12)
    return date(y, m + 1, 1)


def _bucket_windows(period: Period, now: datetime) -> list[tuple[str, str, datetime, datetime]]:
    today = now.date()
    windows = []

    if period is Period.DAILY:
        for i in range(6, -1, -1):
            day = today - timedelta(days=i)
            start = _midnight(day)
            windows.append(
                (format_day_abbrev(day), format_month_day(day), start, start + timedelta(days=1))
            )
    elif period is Period.WEEKLY:
        for i in range(7, -1, -1):
            week_start = monday_of(today - timedelta(days=7 * i))
            start = _midnight(week_start)
            label = "Wnow" if i == 0 else f"W-{i}"
            windows.append(
                (label, f"Week of {format_month_day(week_start)}", start, start + timedelta(days=7))
            )
    elif period is Period.MONTHLY:
        for i in range(11, -1, -1):
            first = _add_months(today.year, today.month, -i)
            following = _add_months(first.year, first.month, 1)
            windows.append(
                (
                    format_month_abbrev(first),
                    format_month_year(first),
                    _midnight(first),
                    _midnight(following),
                )
            )
    else:
        for i in range(4, -1, -1):
            year = today.year - i
            windows.append((str(year), str(year), datetime(year, 1, 1), datetime(year + 1, 1, 1)))

    return windows


def project(
    transactions: Iterable[Transaction],
    period: Period | str,
    now: datetime | None = None,
) -> list[ChartBucket]:
    """Build the trailing revenue series for a period.

    Args:
        transactions: Full transaction list (not period-filtered).
        period: Bucket granularity.
        now: Reference instant (defaults to ``datetime.now()``).

    Returns:
        Fixed-length list of ChartBuckets, oldest first.
    """
    period = Period.parse(period)
    now = now or datetime.now()
    dated = [t for t in transactions if t.timestamp is not None]

    buckets = []
    for label, full_label, start, end in _bucket_windows(period, now):
        value = sum(t.nominal_revenue for t in dated if start <= t.timestamp < end)
        buckets.append(
            ChartBucket(
                label=label,
                full_label=full_label,
                value=float(value),
                bucket_start=start,
                bucket_end=end,
            )
        )

    logger.debug("Projected %d %s bucket(s) anchored at %s", len(buckets), period.value, now)
    return buckets


def has_chart_data(buckets: Iterable[ChartBucket]) -> bool:
    """False when every bucket is zero (nothing worth drawing)."""
    return any(b.value != 0 for b in buckets)


def buckets_to_frame(buckets: Iterable[ChartBucket]) -> pd.DataFrame:
    """Convert a chart series to a DataFrame for export.

    Returns:
        DataFrame with columns: label, full_label, bucket_start, bucket_end, value
    """
    columns = ["label", "full_label", "bucket_start", "bucket_end", "value"]
    rows = [
        {
            "label": b.label,
            "full_label": b.full_label,
            "bucket_start": b.bucket_start,
            "bucket_end": b.bucket_end,
            "value": b.value,
        }
        for b in buckets
    ]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)
