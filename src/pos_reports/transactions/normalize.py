"""Boundary adapter: raw transaction records to typed models.

Records arrive as loosely-typed JSON objects from the local cache or the
remote database. This module applies every default in one place, so the
rest of the package never casts or guards against missing fields.

Rules:
- Numbers accept int, float and numeric strings; anything else is absent.
- Flags are true only for the boolean ``True``.
- Malformed records degrade to defaults and never raise.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pos_reports.models import (
    UNKNOWN_ITEM,
    UNKNOWN_METHOD,
    UNKNOWN_STAFF,
    LineItem,
    Transaction,
)

logger = logging.getLogger(__name__)


def to_float(value: Any) -> float | None:
    """Coerce a JSON value to float, or None when it is not numeric.

    Examples:
        >>> to_float(12)
        12.0
        >>> to_float("7.5")
        7.5
        >>> to_float(True) is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    # NaN/inf never come from checkout; treat them as missing
    return number if math.isfinite(number) else None


def _to_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Accepts dates, datetimes with optional fractional seconds and an
    optional ``Z`` or UTC offset. Aware values are converted to local time
    so they compare against naive period bounds.

    Returns:
        Parsed datetime, or None when the value cannot be parsed.

    Examples:
        >>> parse_timestamp("2025-01-15T10:30:00.000")
        datetime.datetime(2025, 1, 15, 10, 30)
        >>> parse_timestamp("not a date") is None
        True
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def line_item_from_record(record: Mapping[str, Any]) -> LineItem:
    """Build a LineItem from a raw item mapping."""
    quantity = to_float(record.get("quantity"))
    return LineItem(
        name=_to_str(record.get("name"), UNKNOWN_ITEM),
        quantity=int(quantity) if quantity is not None else 1,
        subtotal=to_float(record.get("subtotal")) or 0.0,
        is_cash_in=record.get("isCashIn") is True,
        is_cash_out=record.get("isCashOut") is True,
        cash_out_amount=to_float(record.get("cashOutAmount")) or 0.0,
        actual_cash_given=to_float(record.get("actualCashGiven")),
        service_fee=to_float(record.get("serviceFee")) or 0.0,
        discount_amount=to_float(record.get("discountAmount")) or 0.0,
    )


def transaction_from_record(record: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a raw record mapping.

    Args:
        record: One ``pos_transactions`` entry as decoded from JSON.

    Returns:
        Fully-defaulted Transaction.
    """
    raw_items = record.get("items")
    items: list[LineItem] = []
    if isinstance(raw_items, list):
        for raw_item in raw_items:
            if not isinstance(raw_item, Mapping):
                logger.warning(
                    "Skipping malformed line item in transaction %s: %r",
                    record.get("transactionId", record.get("id")),
                    raw_item,
                )
                continue
            items.append(line_item_from_record(raw_item))

    transaction_id = _optional_str(record.get("transactionId")) or _optional_str(record.get("id"))

    return Transaction(
        transaction_id=transaction_id,
        timestamp=parse_timestamp(record.get("timestamp")),
        processed_by=_to_str(record.get("processedBy"), UNKNOWN_STAFF),
        payment_method=_to_str(record.get("paymentMethod"), UNKNOWN_METHOD),
        total=to_float(record.get("total")) or 0.0,
        tax=to_float(record.get("tax")) or 0.0,
        items=tuple(items),
        actual_revenue=to_float(record.get("actualRevenue")),
        total_cash_in_amount=to_float(record.get("totalCashInAmount")),
        total_cash_out_amount=to_float(record.get("totalCashOutAmount")),
        total_actual_cash_given=to_float(record.get("totalActualCashGiven")),
        total_service_fee=to_float(record.get("totalServiceFee")),
        has_cash_in=record.get("hasCashIn") is True,
        has_cash_out=record.get("hasCashOut") is True,
        discount_authorized_by=_optional_str(record.get("discountAuthorizedBy")),
    )


def normalize_records(records: Iterable[Any]) -> list[Transaction]:
    """Normalize a sequence of raw records, skipping non-mapping entries.

    Args:
        records: Raw records, typically a decoded JSON list.

    Returns:
        List of Transactions in input order.
    """
    transactions: list[Transaction] = []
    skipped = 0
    for record in records:
        if not isinstance(record, Mapping):
            skipped += 1
            continue
        transactions.append(transaction_from_record(record))
    if skipped:
        logger.warning("Skipped %d non-object transaction record(s)", skipped)
    logger.debug("Normalized %d transaction record(s)", len(transactions))
    return transactions
