"""Daily float lock-in.

Once the first sale of the day exists, today's float is written to the
history. Reports for today viewed on a later day then show the float that
actually applied, not whatever the setting was changed to afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from pos_reports.drawer.settings import SettingsStore
from pos_reports.models import Transaction

logger = logging.getLogger(__name__)


def has_transactions_on(transactions: Iterable[Transaction], day: date) -> bool:
    return any(t.timestamp is not None and t.timestamp.date() == day for t in transactions)


def lock_in_todays_float(
    settings: SettingsStore,
    transactions: Iterable[Transaction],
    today: date | None = None,
) -> bool:
    """Save the current float under today's date if business has started.

    Safe to call repeatedly: the history is keyed by date, so repeated
    calls upsert the same entry.

    Args:
        settings: Settings store holding the float and its history.
        transactions: Full (unfiltered) transaction list.
        today: Override for the current date (defaults to ``date.today()``).

    Returns:
        True if a float was saved.
    """
    today = today or date.today()
    if not has_transactions_on(transactions, today):
        return False
    current = settings.lock_in_current_float(today)
    logger.info("Locked in float %.2f for %s", current, today)
    return True
