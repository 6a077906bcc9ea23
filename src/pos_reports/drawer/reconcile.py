"""Cash drawer reconciliation.

Daily:
    closing = opening + cash_sales + cash_in_paid_with_cash
              + cash_out_paid_with_cash - cash_out_given + adjustments
    to_collect = closing - opening

Weekly, monthly and yearly periods have no closing balance. The float is
reset every day, so only the net cash collected over the period is
reported.

For a cash-out paid in cash the shop receives principal plus fee and hands
back the principal. ``cash_out_paid_with_cash - cash_out_given`` cancels
the principal and leaves the fee, which sits in ``cash_sales``. When the
cash-out was paid by e-wallet only ``cash_out_given`` applies, debiting the
drawer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pos_reports.models import CASH
from pos_reports.periods import Period
from pos_reports.stats.types import StatsResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawerSummary:
    """Cash drawer figures for one report period.

    Attributes:
        period: Report period.
        opening_balance: Float for the anchor day (the daily float for
            longer periods; never summed across days).
        total_revenue: Recognized revenue across all payment methods.
        cash_sales: Revenue paid in cash only.
        total_cash_in: All e-wallet loads, any payment method.
        cash_in_paid_with_cash: Loads paid for in cash.
        cash_out_paid_with_cash: Cash-out amounts on cash-paid transactions.
        cash_out_given: Cash handed out for cash-outs.
        adjustments: Signed manual adjustments for the period.
        net_cash_flow: Cash to pull from the drawer over the period.
        closing_balance: Expected drawer content at close; daily only.
    """

    period: Period
    opening_balance: float
    total_revenue: float
    cash_sales: float
    total_cash_in: float
    cash_in_paid_with_cash: float
    cash_out_paid_with_cash: float
    cash_out_given: float
    adjustments: float
    net_cash_flow: float
    closing_balance: float | None = None

    @property
    def is_daily(self) -> bool:
        return self.period is Period.DAILY

    @property
    def to_collect(self) -> float:
        """Amount to take out at end of day; equals closing minus opening."""
        return self.net_cash_flow

    @property
    def total_collected(self) -> float:
        """Net cash collected across the period."""
        return self.net_cash_flow


def cash_out_given(stats: StatsResult) -> float:
    """Cash handed out for cash-outs, falling back to the principal total.

    Records that predate ``totalActualCashGiven`` only stored the principal.
    """
    if stats.total_actual_cash_given > 0:
        return stats.total_actual_cash_given
    return stats.total_cash_out_amount


def reconcile(
    stats: StatsResult,
    opening_balance: float,
    adjustments: float,
    period: Period | str,
) -> DrawerSummary:
    """Combine aggregated stats with the float into a drawer summary.

    Args:
        stats: Aggregation of the period's transactions.
        opening_balance: Float for the anchor day.
        adjustments: Sum of signed manual adjustments for the period.
        period: Report period; only daily periods get a closing balance.

    Returns:
        DrawerSummary. With no transactions, ``to_collect == adjustments``.
    """
    period = Period.parse(period)
    cash_sales = stats.sales_by_payment_method.get(CASH, 0.0)
    given = cash_out_given(stats)

    net = (
        cash_sales
        + stats.cash_in_paid_with_cash
        + stats.cash_out_paid_with_cash
        - given
        + adjustments
    )
    closing = opening_balance + net if period is Period.DAILY else None

    logger.debug(
        "Reconciled %s drawer: opening=%.2f net=%.2f closing=%s",
        period.value,
        opening_balance,
        net,
        f"{closing:.2f}" if closing is not None else "n/a",
    )

    return DrawerSummary(
        period=period,
        opening_balance=opening_balance,
        total_revenue=stats.total_sales,
        cash_sales=cash_sales,
        total_cash_in=stats.total_cash_in,
        cash_in_paid_with_cash=stats.cash_in_paid_with_cash,
        cash_out_paid_with_cash=stats.cash_out_paid_with_cash,
        cash_out_given=given,
        adjustments=adjustments,
        net_cash_flow=net,
        closing_balance=closing,
    )
