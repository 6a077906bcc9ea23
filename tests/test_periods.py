"""Tests for period windows and the period filter."""

from datetime import date, datetime

import pytest

from pos_reports.models import Transaction
from pos_reports.periods import (
    Period,
    adjustment_range,
    describe_period,
    filter_transactions,
    list_staff,
    period_bounds,
    shift_anchor,
    sort_newest_first,
)


def _txn(ts: datetime | None, staff: str = "Ana", total: float = 100.0) -> Transaction:
    return Transaction(timestamp=ts, processed_by=staff, total=total)


def test_period_bounds_daily() -> None:
    start, end = period_bounds(Period.DAILY, datetime(2026, 10, 19, 15, 30))
    assert start == datetime(2026, 10, 19)
    assert end == datetime(2026, 10, 20)


def test_period_bounds_weekly_starts_monday() -> None:
    """Test that a Sunday anchor belongs to the week starting the Monday before."""
    start, end = period_bounds("weekly", date(2026, 10, 25))  # Sunday
    assert start == datetime(2026, 10, 19)
    assert end == datetime(2026, 10, 26)


def test_period_bounds_monthly_december_rolls_year() -> None:
    start, end = period_bounds(Period.MONTHLY, date(2026, 12, 15))
    assert start == datetime(2026, 12, 1)
    assert end == datetime(2027, 1, 1)


def test_period_bounds_yearly() -> None:
    start, end = period_bounds(Period.YEARLY, date(2026, 6, 1))
    assert start == datetime(2026, 1, 1)
    assert end == datetime(2027, 1, 1)


def test_month_end_boundary_belongs_to_next_month() -> None:
    """Test that a timestamp exactly at the exclusive month end falls in the next month."""
    at_boundary = _txn(datetime(2026, 11, 1, 0, 0, 0))
    at_start = _txn(datetime(2026, 10, 1, 0, 0, 0))

    october = filter_transactions([at_boundary, at_start], Period.MONTHLY, date(2026, 10, 15))
    november = filter_transactions([at_boundary, at_start], Period.MONTHLY, date(2026, 11, 15))

    assert october == [at_start]
    assert november == [at_boundary]


def test_filter_by_staff_and_drop_unparsable() -> None:
    """Test the staff filter and silent exclusion of missing timestamps."""
    ana = _txn(datetime(2026, 10, 19, 9), "Ana")
    ben = _txn(datetime(2026, 10, 19, 10), "Ben")
    undated = _txn(None, "Ana")

    everyone = filter_transactions([ana, ben, undated], "daily", date(2026, 10, 19))
    only_ben = filter_transactions([ana, ben, undated], "daily", date(2026, 10, 19), staff="Ben")

    assert everyone == [ana, ben]
    assert only_ben == [ben]


def test_period_parse_rejects_unknown_value() -> None:
    assert Period.parse(" Weekly ") is Period.WEEKLY
    with pytest.raises(ValueError, match="Invalid period"):
        Period.parse("hourly")


def test_adjustment_range_is_inclusive_calendar_days() -> None:
    """Test adjustment ranges for each period, including a leap February."""
    assert adjustment_range("daily", date(2026, 10, 19)) == (date(2026, 10, 19), date(2026, 10, 19))
    assert adjustment_range("weekly", date(2026, 10, 21)) == (date(2026, 10, 19), date(2026, 10, 25))
    assert adjustment_range("monthly", date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert adjustment_range("yearly", date(2026, 3, 3)) == (date(2026, 1, 1), date(2026, 12, 31))


def test_shift_anchor() -> None:
    """Test date navigation for each period."""
    assert shift_anchor("daily", date(2026, 3, 1), forward=False) == date(2026, 2, 28)
    assert shift_anchor("weekly", date(2026, 10, 19), forward=True) == date(2026, 10, 26)
    assert shift_anchor("monthly", date(2026, 1, 31), forward=False) == date(2025, 12, 1)
    assert shift_anchor("monthly", date(2026, 12, 5), forward=True) == date(2027, 1, 1)
    assert shift_anchor("yearly", date(2026, 7, 4), forward=True) == date(2027, 1, 1)


def test_describe_period() -> None:
    assert describe_period("daily", date(2026, 10, 5)) == "Oct 05, 2026"
    assert describe_period("weekly", date(2026, 10, 22)) == "Week of Oct 19 - Oct 25, 2026"
    assert describe_period("monthly", date(2026, 10, 22)) == "October 2026"
    assert describe_period("yearly", date(2026, 10, 22)) == "2026"


def test_list_staff_excludes_unknown() -> None:
    transactions = [_txn(None, "Ben"), _txn(None, "Ana"), _txn(None, "Unknown"), _txn(None, "Ben")]
    assert list_staff(transactions) == ["Ana", "Ben"]


def test_sort_newest_first_puts_undated_last() -> None:
    old = _txn(datetime(2026, 1, 1))
    new = _txn(datetime(2026, 10, 1))
    undated = _txn(None)

    assert sort_newest_first([old, undated, new]) == [new, old, undated]
