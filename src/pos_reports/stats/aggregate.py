"""Single-pass aggregation of transactions into report statistics.

For each transaction the fold computes a breakdown (merchandise revenue,
service amounts and fees, discounts), resolves the transaction's revenue
contribution, attributes service fees, and adds everything to running
totals. Order of transactions does not affect any total.

Revenue resolution, first match wins:
1. No service lines: ``actual_revenue``, else ``total``.
2. Stored ``actual_revenue``.
3. Merchandise plus item-level fees, when either is positive.
4. Transaction-level service fee, else 0.

Cash-in and cash-out principals never count as revenue. Physical cash
movement is tracked separately in the ``*_paid_with_cash`` totals for
the drawer reconciliation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pos_reports.models import CASH, UNKNOWN_STAFF, Transaction
from pos_reports.stats.fees import attribute_service_fees
from pos_reports.stats.types import StatsResult, TransactionBreakdown

logger = logging.getLogger(__name__)


def breakdown(t: Transaction) -> TransactionBreakdown:
    """Compute the per-transaction intermediates for one transaction."""
    regular_items_revenue = 0.0
    item_cash_in_amount = 0.0
    item_actual_cash_given = 0.0
    item_cash_in_fees = 0.0
    item_cash_out_fees = 0.0
    discount_total = 0.0
    has_cash_in = t.has_cash_in
    has_cash_out = t.has_cash_out

    for item in t.items:
        if item.discount_amount > 0:
            discount_total += item.discount_amount

        if item.is_cash_out:
            has_cash_out = True
            item_actual_cash_given += item.delivered_amount
            if item.service_fee > 0:
                item_cash_out_fees += item.service_fee
        elif item.is_cash_in:
            has_cash_in = True
            # Load delivered: equals the principal when the fee is charged on
            # top, principal minus fee when it is deducted
            item_cash_in_amount += item.delivered_amount
            if item.service_fee > 0:
                item_cash_in_fees += item.service_fee
        else:
            regular_items_revenue += item.subtotal

    return TransactionBreakdown(
        regular_items_revenue=regular_items_revenue,
        item_cash_in_amount=item_cash_in_amount,
        item_actual_cash_given=item_actual_cash_given,
        item_cash_in_fees=item_cash_in_fees,
        item_cash_out_fees=item_cash_out_fees,
        has_cash_in=has_cash_in,
        has_cash_out=has_cash_out,
        discount_total=discount_total,
        transaction_service_fee=t.total_service_fee or 0.0,
        actual_revenue=t.actual_revenue,
    )


def resolve_revenue(t: Transaction, b: TransactionBreakdown) -> float:
    """Return the transaction's contribution to recognized revenue."""
    if not b.has_service:
        return t.nominal_revenue
    if b.actual_revenue is not None:
        return b.actual_revenue
    if b.item_service_fees > 0 or b.regular_items_revenue > 0:
        return b.regular_items_revenue + b.item_service_fees
    return b.transaction_service_fee


@dataclass
class _Totals:
    total_sales: float = 0.0
    total_tax: float = 0.0
    total_transactions: int = 0
    total_items: int = 0
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

    def add(self, t: Transaction) -> None:
        b = breakdown(t)
        revenue = resolve_revenue(t, b)
        is_cash = t.payment_method == CASH

        for item in t.items:
            if not item.is_service:
                self.items_sold_by_name[item.name] = (
                    self.items_sold_by_name.get(item.name, 0) + item.quantity
                )
                self.items_revenue_by_name[item.name] = (
                    self.items_revenue_by_name.get(item.name, 0.0) + item.subtotal
                )

        # Stored transaction-level figures win over item-level sums
        cash_given = (
            t.total_actual_cash_given
            if t.total_actual_cash_given is not None
            else b.item_actual_cash_given
        )
        self.total_cash_out_amount += t.total_cash_out_amount or 0.0
        self.total_actual_cash_given += cash_given
        self.total_service_fees += (
            b.transaction_service_fee if b.transaction_service_fee > 0 else b.item_service_fees
        )

        if b.has_cash_in:
            cash_in_amount = (
                b.item_cash_in_amount
                if b.item_cash_in_amount > 0
                else (t.total_cash_in_amount or 0.0)
            )
            self.total_cash_in += cash_in_amount
            if is_cash:
                self.cash_in_paid_with_cash += cash_in_amount

        if b.has_cash_out and is_cash:
            self.cash_out_paid_with_cash += cash_given

        split = attribute_service_fees(b)
        if split is not None:
            self.cash_in_service_fees += split.cash_in
            self.cash_out_service_fees += split.cash_out

        if b.discount_total > 0:
            self.total_discounts += b.discount_total
            self.discounted_transactions += 1
            authorizer = t.discount_authorized_by or UNKNOWN_STAFF
            self.discounts_by_staff[authorizer] = (
                self.discounts_by_staff.get(authorizer, 0.0) + b.discount_total
            )

        self.total_sales += revenue
        self.total_tax += t.tax
        self.total_transactions += 1
        self.total_items += len(t.items)
        self.sales_by_user[t.processed_by] = self.sales_by_user.get(t.processed_by, 0.0) + revenue
        self.sales_by_payment_method[t.payment_method] = (
            self.sales_by_payment_method.get(t.payment_method, 0.0) + revenue
        )

    def freeze(self) -> StatsResult:
        count = self.total_transactions
        return StatsResult(
            total_sales=self.total_sales,
            total_tax=self.total_tax,
            total_transactions=count,
            total_items=self.total_items,
            average_transaction=self.total_sales / count if count else 0.0,
            sales_by_user=self.sales_by_user,
            sales_by_payment_method=self.sales_by_payment_method,
            total_cash_out_amount=self.total_cash_out_amount,
            total_actual_cash_given=self.total_actual_cash_given,
            total_service_fees=self.total_service_fees,
            total_cash_in=self.total_cash_in,
            cash_in_service_fees=self.cash_in_service_fees,
            cash_out_service_fees=self.cash_out_service_fees,
            cash_in_paid_with_cash=self.cash_in_paid_with_cash,
            cash_out_paid_with_cash=self.cash_out_paid_with_cash,
            items_sold_by_name=self.items_sold_by_name,
            items_revenue_by_name=self.items_revenue_by_name,
            total_discounts=self.total_discounts,
            discounted_transactions=self.discounted_transactions,
            discounts_by_staff=self.discounts_by_staff,
            average_discount=(
                self.total_discounts / self.discounted_transactions
                if self.discounted_transactions
                else 0.0
            ),
        )


def aggregate(transactions: Iterable[Transaction]) -> StatsResult:
    """Fold transactions into a StatsResult in one pass.

    Timestamps are not consulted; filter by period first with
    ``pos_reports.periods.filter_transactions``.

    Args:
        transactions: Normalized transactions.

    Returns:
        StatsResult. An empty input gives all-zero totals and empty maps.
    """
    totals = _Totals()
    for t in transactions:
        totals.add(t)
    result = totals.freeze()
    logger.debug(
        "Aggregated %d transaction(s): sales=%.2f cash_in=%.2f cash_given=%.2f",
        result.total_transactions,
        result.total_sales,
        result.total_cash_in,
        result.total_actual_cash_given,
    )
    return result
