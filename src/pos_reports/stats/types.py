"""Shared types for sales aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd


@dataclass(frozen=True)
class FeeSplit:
    """Service fees attributed to the cash-in and cash-out buckets."""

    cash_in: float = 0.0
    cash_out: float = 0.0


@dataclass(frozen=True)
class TransactionBreakdown:
    """Per-transaction intermediates computed before folding into totals.

    Attributes:
        regular_items_revenue: Sum of merchandise line subtotals.
        item_cash_in_amount: Load delivered on cash-in lines.
        item_actual_cash_given: Cash handed out on cash-out lines.
        item_cash_in_fees: Positive service fees on cash-in lines.
        item_cash_out_fees: Positive service fees on cash-out lines.
        has_cash_in: Transaction flag or any cash-in line.
        has_cash_out: Transaction flag or any cash-out line.
        discount_total: Sum of positive line discounts.
        transaction_service_fee: Transaction-level fee, 0 when absent.
        actual_revenue: Stored transaction-level revenue, if any.
    """

    regular_items_revenue: float = 0.0
    item_cash_in_amount: float = 0.0
    item_actual_cash_given: float = 0.0
    item_cash_in_fees: float = 0.0
    item_cash_out_fees: float = 0.0
    has_cash_in: bool = False
    has_cash_out: bool = False
    discount_total: float = 0.0
    transaction_service_fee: float = 0.0
    actual_revenue: float | None = None

    @property
    def has_service(self) -> bool:
        return self.has_cash_in or self.has_cash_out

    @property
    def item_service_fees(self) -> float:
        return self.item_cash_in_fees + self.item_cash_out_fees


@dataclass(frozen=True)
class StatsResult:
    """Aggregated statistics for a list of transactions.

    Revenue fields (``total_sales``, ``sales_by_*``) count recognized income
    only: merchandise plus e-wallet service fees, never service principal.
    The ``*_paid_with_cash`` fields track physical cash movement for the
    drawer and are independent of revenue.

    Map fields keep first-seen key order.
    """

    total_sales: float = 0.0
    total_tax: float = 0.0
    total_transactions: int = 0
    total_items: int = 0
    average_transaction: float = 0.0
    sales_by_user: dict[str, float] = field(default_factory=dict)
    sales_by_payment_method: dict[str, float] = field(default_factory=dict)
    total_cash_out_amount: float = 0.0
    total_actual_cash_given: float = 0.0
    total_service_fees: float = 0.0
    total_cash_in: float = 0.0
    cash_in_service_fees: float = 0.0
    cash_out_service_fees: float = 0.0
    cash_in_paid_with_cash: float = 0.0
    cash_out_paid_with_cash: float = 0.0
    items_sold_by_name: dict[str, int] = field(default_factory=dict)
    items_revenue_by_name: dict[str, float] = field(default_factory=dict)
    total_discounts: float = 0.0
    discounted_transactions: int = 0
    discounts_by_staff: dict[str, float] = field(default_factory=dict)
    average_discount: float = 0.0

    def top_items(self, limit: int = 10) -> list[tuple[str, int, float]]:
        """Best sellers as (name, quantity, revenue), by quantity then name."""
        ranked = sorted(self.items_sold_by_name.items(), key=lambda kv: (-kv[1], kv[0]))
        return [
            (name, qty, self.items_revenue_by_name.get(name, 0.0))
            for name, qty in ranked[:limit]
        ]

    def items_frame(self) -> pd.DataFrame:
        """Items sold as a DataFrame with columns name, quantity, revenue."""
        rows = [
            {"name": name, "quantity": qty, "revenue": revenue}
            for name, qty, revenue in self.top_items(limit=len(self.items_sold_by_name))
        ]
        if not rows:
            return pd.DataFrame(columns=["name", "quantity", "revenue"])
        return pd.DataFrame(rows)
