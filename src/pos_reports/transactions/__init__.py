"""Transactions domain module.

- ``normalize``: raw JSON records to typed ``Transaction`` models
- ``store``: ``TransactionStore`` (local cache + remote snapshot fetch)
- ``frame``: pandas view for CSV export

Example:
    >>> from pos_reports import ReportPaths
    >>> from pos_reports.transactions import TransactionStore
    >>>
    >>> store = TransactionStore(ReportPaths.from_root("data"))
    >>> transactions = store.fetch_all()
"""

from pos_reports.transactions.frame import transactions_to_frame
from pos_reports.transactions.normalize import (
    normalize_records,
    parse_timestamp,
    transaction_from_record,
)
from pos_reports.transactions.store import TransactionStore

__all__ = [
    "TransactionStore",
    "normalize_records",
    "parse_timestamp",
    "transaction_from_record",
    "transactions_to_frame",
]
