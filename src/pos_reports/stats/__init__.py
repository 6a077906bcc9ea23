"""Sales statistics module.

Example:
    >>> from pos_reports.stats import aggregate
    >>> stats = aggregate(transactions)
    >>> stats.total_sales, stats.cash_out_service_fees
"""

from pos_reports.stats.aggregate import aggregate, breakdown, resolve_revenue
from pos_reports.stats.fees import FEE_RULES, attribute_service_fees
from pos_reports.stats.types import FeeSplit, StatsResult, TransactionBreakdown

__all__ = [
    "FEE_RULES",
    "FeeSplit",
    "StatsResult",
    "TransactionBreakdown",
    "aggregate",
    "attribute_service_fees",
    "breakdown",
    "resolve_revenue",
]
