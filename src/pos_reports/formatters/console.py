"""Console output formatting utilities."""

from __future__ import annotations

from pos_reports.charts.projector import has_chart_data
from pos_reports.models import CARD, CASH, GCASH, GCASH_MAYA
from pos_reports.periods import ALL_STAFF
from pos_reports.reports.api import PeriodReport

CURRENCY = "PHP"

# Payment method display names
METHOD_NAMES = {
    CASH: "Cash",
    CARD: "Card",
    GCASH: "GCash",
    GCASH_MAYA: "GCash/Maya",
}


def format_currency(value: float) -> str:
    return f"{CURRENCY} {value:,.2f}"


def _format_drawer(report: PeriodReport) -> list[str]:
    drawer = report.drawer
    lines = ["Cash Drawer Summary:", "-" * 60]

    if drawer.is_daily:
        lines.append(f"  Opening balance (float): {format_currency(drawer.opening_balance)}")
    else:
        lines.append(f"  Daily float:             {format_currency(drawer.opening_balance)}")
    lines.append(f"  Cash sales:              {format_currency(drawer.cash_sales)}")
    lines.append(f"  Cash-in paid in cash:    {format_currency(drawer.cash_in_paid_with_cash)}")
    lines.append(f"  Cash-out paid in cash:   {format_currency(drawer.cash_out_paid_with_cash)}")
    lines.append(f"  Cash-out given:         -{format_currency(drawer.cash_out_given)}")
    if drawer.adjustments:
        lines.append(f"  Adjustments:             {format_currency(drawer.adjustments)}")

    if drawer.closing_balance is not None:
        lines.append(f"  Closing balance:         {format_currency(drawer.closing_balance)}")
        lines.append(f"  To collect:              {format_currency(drawer.to_collect)}")
    else:
        lines.append(f"  Total collected:         {format_currency(drawer.total_collected)}")
    return lines


def format_report_for_console(report: PeriodReport, top_items: int = 5) -> str:
    """Build a human-readable text version of a period report.

    Args:
        report: Report from ``build_period_report``.
        top_items: Number of best sellers to list.

    Returns:
        Plain ASCII text for console output.
    """
    stats = report.stats
    lines = []
    title = f"POS Report - {report.period.value.capitalize()} - {report.label}"
    if report.staff != ALL_STAFF:
        title += f" - {report.staff}"
    lines.append(title)
    lines.append("=" * 60)

    if stats.total_transactions == 0:
        lines.append("No transactions in this period.")
        lines.append("")
    else:
        lines.append(f"Total sales:         {format_currency(stats.total_sales)}")
        lines.append(f"Transactions:        {stats.total_transactions}")
        lines.append(f"Average sale:        {format_currency(stats.average_transaction)}")
        lines.append(f"Items sold:          {stats.total_items}")
        lines.append(f"VAT:                 {format_currency(stats.total_tax)}")
        lines.append("")

        lines.append("Sales by payment method:")
        for method, amount in sorted(stats.sales_by_payment_method.items()):
            lines.append(f"  {METHOD_NAMES.get(method, method)}: {format_currency(amount)}")
        lines.append("")

        lines.append("Sales by staff:")
        for user, amount in sorted(stats.sales_by_user.items(), key=lambda kv: -kv[1]):
            lines.append(f"  {user}: {format_currency(amount)}")
        lines.append("")

        if stats.total_cash_in or stats.total_actual_cash_given or stats.total_service_fees:
            lines.append("E-wallet services:")
            lines.append(f"  Cash-in loads:     {format_currency(stats.total_cash_in)}")
            lines.append(f"  Cash-in fees:      {format_currency(stats.cash_in_service_fees)}")
            lines.append(f"  Cash-out given:    {format_currency(stats.total_actual_cash_given)}")
            lines.append(f"  Cash-out fees:     {format_currency(stats.cash_out_service_fees)}")
            lines.append("")

        if stats.discounted_transactions:
            lines.append(
                f"Discounts: {format_currency(stats.total_discounts)} over "
                f"{stats.discounted_transactions} transaction(s), "
                f"avg {format_currency(stats.average_discount)}"
            )
            for staff, amount in sorted(stats.discounts_by_staff.items()):
                lines.append(f"  Authorized by {staff}: {format_currency(amount)}")
            lines.append("")

        best = stats.top_items(top_items)
        if best:
            lines.append("Top items:")
            for name, qty, revenue in best:
                lines.append(f"  {name} x{qty}: {format_currency(revenue)}")
            lines.append("")

    lines.extend(_format_drawer(report))
    lines.append("")

    if has_chart_data(report.chart):
        lines.append("Trend:")
        for bucket in report.chart:
            lines.append(f"  {bucket.full_label}: {format_currency(bucket.value)}")

    return "\n".join(lines)
