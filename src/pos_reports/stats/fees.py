"""Service fee attribution rules.

Fees from e-wallet services are split into cash-in and cash-out buckets by
an ordered list of rules. Each rule looks at one transaction's breakdown
and returns a FeeSplit, or None when it has nothing to say. The first rule
that returns a split wins.

Rule order:
1. ``item_level_fees``: per-line fees, the exact source.
2. ``transaction_fee``: the transaction-level ``totalServiceFee``.
3. ``estimated_from_revenue``: ``actualRevenue`` minus merchandise, for
   legacy records that stored no fee at all.

Rules 2 and 3 split the fee in half when one transaction holds both a
cash-in and a cash-out. There is no finer data to split by, so treat the
halves as an approximation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pos_reports.stats.types import FeeSplit, TransactionBreakdown

FeeRule = Callable[[TransactionBreakdown], FeeSplit | None]


def split_by_direction(fee: float, has_cash_in: bool, has_cash_out: bool) -> FeeSplit | None:
    """Attribute a single fee figure to the directions present.

    Examples:
        >>> split_by_direction(50.0, True, True)
        FeeSplit(cash_in=25.0, cash_out=25.0)
        >>> split_by_direction(50.0, False, False) is None
        True
    """
    if has_cash_out and not has_cash_in:
        return FeeSplit(cash_out=fee)
    if has_cash_in and not has_cash_out:
        return FeeSplit(cash_in=fee)
    if has_cash_in and has_cash_out:
        half = fee / 2
        return FeeSplit(cash_in=half, cash_out=half)
    return None


def item_level_fees(b: TransactionBreakdown) -> FeeSplit | None:
    if b.item_cash_in_fees <= 0 and b.item_cash_out_fees <= 0:
        return None
    return FeeSplit(cash_in=b.item_cash_in_fees, cash_out=b.item_cash_out_fees)


def transaction_fee(b: TransactionBreakdown) -> FeeSplit | None:
    if b.transaction_service_fee <= 0:
        return None
    return split_by_direction(b.transaction_service_fee, b.has_cash_in, b.has_cash_out)


def estimated_from_revenue(b: TransactionBreakdown) -> FeeSplit | None:
    """Estimate the fee of a legacy record as revenue above merchandise.

    Works for pure service transactions (no merchandise, fee = revenue) and
    mixed ones (fee = revenue - merchandise).
    """
    if not b.has_service or b.actual_revenue is None:
        return None
    estimated = max(0.0, b.actual_revenue - b.regular_items_revenue)
    if estimated <= 0:
        return None
    return split_by_direction(estimated, b.has_cash_in, b.has_cash_out)


FEE_RULES: tuple[FeeRule, ...] = (item_level_fees, transaction_fee, estimated_from_revenue)


def attribute_service_fees(
    b: TransactionBreakdown, rules: Sequence[FeeRule] = FEE_RULES
) -> FeeSplit | None:
    """Return the split from the first rule that produces one."""
    for rule in rules:
        split = rule(b)
        if split is not None:
            return split
    return None
