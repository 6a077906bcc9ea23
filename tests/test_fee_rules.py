"""Tests for service fee attribution rules."""

from pos_reports.stats.fees import (
    FEE_RULES,
    attribute_service_fees,
    estimated_from_revenue,
    item_level_fees,
    split_by_direction,
    transaction_fee,
)
from pos_reports.stats.types import FeeSplit, TransactionBreakdown


def test_rule_order() -> None:
    assert FEE_RULES == (item_level_fees, transaction_fee, estimated_from_revenue)


def test_split_by_direction() -> None:
    assert split_by_direction(50.0, True, True) == FeeSplit(cash_in=25.0, cash_out=25.0)
    assert split_by_direction(50.0, True, False) == FeeSplit(cash_in=50.0)
    assert split_by_direction(50.0, False, True) == FeeSplit(cash_out=50.0)
    assert split_by_direction(50.0, False, False) is None


def test_item_level_fees() -> None:
    """Test that per-line fees are reported as-is."""
    b = TransactionBreakdown(item_cash_in_fees=5.0, item_cash_out_fees=8.0, has_cash_in=True)
    assert item_level_fees(b) == FeeSplit(cash_in=5.0, cash_out=8.0)
    assert item_level_fees(TransactionBreakdown(has_cash_in=True)) is None


def test_transaction_fee() -> None:
    """Test the transaction-level fee split by directions present."""
    assert transaction_fee(
        TransactionBreakdown(transaction_service_fee=30.0, has_cash_out=True)
    ) == FeeSplit(cash_out=30.0)
    assert transaction_fee(TransactionBreakdown(transaction_service_fee=30.0)) is None
    assert transaction_fee(TransactionBreakdown(has_cash_in=True)) is None


def test_estimated_from_revenue() -> None:
    """Test the legacy estimate of revenue above merchandise."""
    assert estimated_from_revenue(TransactionBreakdown(has_cash_in=True)) is None
    assert (
        estimated_from_revenue(
            TransactionBreakdown(has_cash_in=True, actual_revenue=100.0, regular_items_revenue=100.0)
        )
        is None
    )
    assert estimated_from_revenue(
        TransactionBreakdown(
            has_cash_in=True,
            has_cash_out=True,
            actual_revenue=130.0,
            regular_items_revenue=100.0,
        )
    ) == FeeSplit(cash_in=15.0, cash_out=15.0)
    # Not a service transaction
    assert estimated_from_revenue(TransactionBreakdown(actual_revenue=40.0)) is None


def test_first_matching_rule_wins() -> None:
    """Test that item-level fees beat the transaction fee."""
    b = TransactionBreakdown(
        item_cash_in_fees=4.0,
        has_cash_in=True,
        has_cash_out=True,
        transaction_service_fee=50.0,
    )
    assert attribute_service_fees(b) == FeeSplit(cash_in=4.0)
    assert attribute_service_fees(b, rules=(transaction_fee,)) == FeeSplit(
        cash_in=25.0, cash_out=25.0
    )


def test_no_rule_matches() -> None:
    assert attribute_service_fees(TransactionBreakdown()) is None
