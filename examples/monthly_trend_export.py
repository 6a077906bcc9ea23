"""Example: Monthly Statistics and Trend Export

This example demonstrates the individual building blocks instead of the
one-call report: filter a month per staff member, aggregate, and export
the trailing 12-month trend and best sellers to CSV with pandas.
"""

from datetime import date
from pathlib import Path

from pos_reports import ReportPaths
from pos_reports.charts import buckets_to_frame, project
from pos_reports.periods import describe_period, filter_transactions, list_staff
from pos_reports.stats import aggregate
from pos_reports.transactions import TransactionStore, transactions_to_frame

paths = ReportPaths.from_root(Path("data"))
transactions = TransactionStore(paths).fetch_all()

anchor = date.today().replace(day=1)  # MODIFY AS NEEDED
print("=" * 60)
print(f"Monthly statistics: {describe_period('monthly', anchor)}")
print("=" * 60)

for staff in list_staff(transactions):
    stats = aggregate(filter_transactions(transactions, "monthly", anchor, staff=staff))
    print(
        f"{staff:<15} sales={stats.total_sales:>10,.2f} "
        f"transactions={stats.total_transactions:>4} "
        f"fees={stats.total_service_fees:>8,.2f}"
    )

month_stats = aggregate(filter_transactions(transactions, "monthly", anchor))

output_dir = Path("data/exports")
output_dir.mkdir(parents=True, exist_ok=True)

trend_file = output_dir / "monthly_trend.csv"
items_file = output_dir / "items_sold.csv"
transactions_file = output_dir / "transactions.csv"

buckets_to_frame(project(transactions, "monthly")).to_csv(trend_file, index=False)
month_stats.items_frame().to_csv(items_file, index=False)
transactions_to_frame(transactions).to_csv(transactions_file, index=False)

print(f"\nSaved trend to: {trend_file}")
print(f"Saved items sold to: {items_file}")
print(f"Saved transactions to: {transactions_file}")
