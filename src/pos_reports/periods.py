"""Reporting periods and the period filter.

Windows are half-open, inclusive start and exclusive end, on naive local
datetimes:

- daily:   [midnight(anchor), +1 day)
- weekly:  [Monday of anchor's week, +7 days)
- monthly: [first of month, first of next month)
- yearly:  [Jan 1, Jan 1 of next year)

Examples:
    >>> from datetime import date
    >>> period_bounds(Period.WEEKLY, date(2026, 10, 22))
    (datetime.datetime(2026, 10, 19, 0, 0), datetime.datetime(2026, 10, 26, 0, 0))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from enum import Enum

from pos_reports.date_labels import format_month_day, format_month_day_year, format_month_year
from pos_reports.models import UNKNOWN_STAFF, Transaction

logger = logging.getLogger(__name__)

ALL_STAFF = "all"


class Period(str, Enum):
    """Report period selected in the reports view."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: str | Period) -> Period:
        """Return the Period for ``value``.

        Raises:
            ValueError: If value is not one of daily, weekly, monthly, yearly.
        """
        if isinstance(value, Period):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid period '{value}'. Must be one of: {choices}.") from None


def as_date(anchor: date | datetime) -> date:
    """Calendar date of an anchor given as a date or a datetime."""
    if isinstance(anchor, datetime):
        return anchor.date()
    return anchor


def _midnight(d: date) -> datetime:
    return datetime(d.year, d.month, d.day)


def _first_of_next_month(d: date) -> date:
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def _first_of_previous_month(d: date) -> date:
    if d.month == 1:
        return date(d.year - 1, 12, 1)
    return date(d.year, d.month - 1, 1)


def monday_of(d: date) -> date:
    """Return the Monday starting the week that contains ``d``."""
    return d - timedelta(days=d.weekday())


def period_bounds(period: Period | str, anchor: date | datetime) -> tuple[datetime, datetime]:
    """Return the half-open ``[start, end)`` window for a period.

    Args:
        period: Reporting period.
        anchor: Any date or datetime inside the wanted window.

    Returns:
        Tuple of (start, end) naive datetimes.
    """
    period = Period.parse(period)
    day = as_date(anchor)

    if period is Period.DAILY:
        start = _midnight(day)
        return start, start + timedelta(days=1)
    if period is Period.WEEKLY:
        start = _midnight(monday_of(day))
        return start, start + timedelta(days=7)
    if period is Period.MONTHLY:
        first = date(day.year, day.month, 1)
        return _midnight(first), _midnight(_first_of_next_month(first))
    return datetime(day.year, 1, 1), datetime(day.year + 1, 1, 1)


def filter_transactions(
    transactions: Iterable[Transaction],
    period: Period | str,
    anchor: date | datetime,
    staff: str = ALL_STAFF,
) -> list[Transaction]:
    """Slice transactions to a period window and optionally one staff member.

    A transaction is kept iff its timestamp parsed, falls in ``[start, end)``
    and ``staff`` is ``"all"`` or equals ``processed_by``. Transactions
    without a timestamp are dropped silently.

    Args:
        transactions: Normalized transactions (any order).
        period: Reporting period.
        anchor: Reference date for the window.
        staff: Staff identifier, or ``"all"``.

    Returns:
        Matching transactions in input order.
    """
    start, end = period_bounds(period, anchor)
    selected = [
        t
        for t in transactions
        if t.timestamp is not None
        and start <= t.timestamp < end
        and (staff == ALL_STAFF or t.processed_by == staff)
    ]
    logger.debug(
        "Filtered %d transaction(s) for %s window [%s, %s) staff=%s",
        len(selected),
        Period.parse(period).value,
        start,
        end,
        staff,
    )
    return selected


def adjustment_range(period: Period | str, anchor: date | datetime) -> tuple[date, date]:
    """Return the inclusive calendar-date range used to sum cash adjustments."""
    start, end = period_bounds(period, anchor)
    return start.date(), (end - timedelta(days=1)).date()


def shift_anchor(period: Period | str, anchor: date | datetime, forward: bool) -> date:
    """Move the anchor one period forward or back.

    Monthly and yearly navigation snaps to the first day of the target
    month or year.
    """
    period = Period.parse(period)
    day = as_date(anchor)
    step = 1 if forward else -1

    if period is Period.DAILY:
        return day + timedelta(days=step)
    if period is Period.WEEKLY:
        return day + timedelta(days=7 * step)
    if period is Period.MONTHLY:
        first = date(day.year, day.month, 1)
        return _first_of_next_month(first) if forward else _first_of_previous_month(first)
    return date(day.year + step, 1, 1)


def describe_period(period: Period | str, anchor: date | datetime) -> str:
    """Human-readable label for the selected window.

    Examples:
        >>> describe_period("daily", date(2026, 10, 19))
        'Oct 19, 2026'
        >>> describe_period("weekly", date(2026, 10, 22))
        'Week of Oct 19 - Oct 25, 2026'
    """
    period = Period.parse(period)
    day = as_date(anchor)

    if period is Period.DAILY:
        return format_month_day_year(day)
    if period is Period.WEEKLY:
        start = monday_of(day)
        end = start + timedelta(days=6)
        return f"Week of {format_month_day(start)} - {format_month_day_year(end)}"
    if period is Period.MONTHLY:
        return format_month_year(day)
    return str(day.year)


def list_staff(transactions: Iterable[Transaction]) -> list[str]:
    """Sorted distinct staff identifiers, excluding the unknown sentinel."""
    return sorted({t.processed_by for t in transactions if t.processed_by != UNKNOWN_STAFF})


def sort_newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort by timestamp descending; transactions without one go last."""
    return sorted(
        transactions,
        key=lambda t: t.timestamp or datetime.min,
        reverse=True,
    )
