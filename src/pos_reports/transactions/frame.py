"""Tabular views of transactions for export and ad-hoc analysis."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from pos_reports.models import Transaction

TRANSACTION_COLUMNS = [
    "transaction_id",
    "timestamp",
    "processed_by",
    "payment_method",
    "total",
    "tax",
    "actual_revenue",
    "item_count",
    "has_cash_in",
    "has_cash_out",
    "discount_total",
]


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Convert transactions to a DataFrame with one row per transaction.

    Args:
        transactions: Normalized transactions.

    Returns:
        DataFrame with TRANSACTION_COLUMNS. ``timestamp`` is a datetime
        column (NaT for unparsable timestamps); ``has_cash_in`` and
        ``has_cash_out`` also reflect service lines.
    """
    rows = []
    for t in transactions:
        rows.append(
            {
                "transaction_id": t.transaction_id,
                "timestamp": t.timestamp,
                "processed_by": t.processed_by,
                "payment_method": t.payment_method,
                "total": t.total,
                "tax": t.tax,
                "actual_revenue": t.actual_revenue,
                "item_count": len(t.items),
                "has_cash_in": t.has_cash_in or any(i.is_cash_in for i in t.items),
                "has_cash_out": t.has_cash_out or any(i.is_cash_out for i in t.items),
                "discount_total": sum(i.discount_amount for i in t.items if i.discount_amount > 0),
            }
        )

    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)

    df = pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    return df
