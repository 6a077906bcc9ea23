"""Typed record model for POS transactions.

Transactions are created upstream by the checkout flow and are read-only
here. Every field is already defaulted by
``pos_reports.transactions.normalize``, so the aggregation code works on
these types without any casting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# Payment methods recorded by the checkout flow
CASH = "cash"
CARD = "card"
GCASH = "gcash"
GCASH_MAYA = "gcash/maya"

# Sentinels for missing string fields
UNKNOWN_STAFF = "Unknown"
UNKNOWN_METHOD = "unknown"
UNKNOWN_ITEM = "Unknown Item"


@dataclass(frozen=True)
class LineItem:
    """One line of a transaction.

    A line is either merchandise or an e-wallet service. Service lines carry
    ``is_cash_in`` or ``is_cash_out``. For both directions the principal is
    stored in ``cash_out_amount``.

    Attributes:
        name: Item name.
        quantity: Units sold (>= 1).
        subtotal: Line amount after discount.
        is_cash_in: E-wallet load service.
        is_cash_out: E-wallet withdrawal service.
        cash_out_amount: Principal of the service.
        actual_cash_given: Amount physically delivered to the customer, if
            recorded. Lower than the principal when the fee is deducted.
        service_fee: Fee charged for the service on this line.
        discount_amount: Discount applied to this line.
    """

    name: str = UNKNOWN_ITEM
    quantity: int = 1
    subtotal: float = 0.0
    is_cash_in: bool = False
    is_cash_out: bool = False
    cash_out_amount: float = 0.0
    actual_cash_given: float | None = None
    service_fee: float = 0.0
    discount_amount: float = 0.0

    @property
    def is_service(self) -> bool:
        return self.is_cash_in or self.is_cash_out

    @property
    def delivered_amount(self) -> float:
        """Cash or load actually handed over, falling back to the principal."""
        if self.actual_cash_given is not None:
            return self.actual_cash_given
        return self.cash_out_amount


@dataclass(frozen=True)
class Transaction:
    """A finalized POS sale.

    Optional ``float | None`` fields are transaction-level figures stored by
    newer checkout versions. ``None`` means the record predates them.
    """

    transaction_id: str | None = None
    timestamp: datetime | None = None
    processed_by: str = UNKNOWN_STAFF
    payment_method: str = UNKNOWN_METHOD
    total: float = 0.0
    tax: float = 0.0
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    actual_revenue: float | None = None
    total_cash_in_amount: float | None = None
    total_cash_out_amount: float | None = None
    total_actual_cash_given: float | None = None
    total_service_fee: float | None = None
    has_cash_in: bool = False
    has_cash_out: bool = False
    discount_authorized_by: str | None = None

    @property
    def nominal_revenue(self) -> float:
        """Simple revenue rule used by trend charts: actualRevenue, else total."""
        if self.actual_revenue is not None:
            return self.actual_revenue
        return self.total
