"""Cash drawer module.

- ``reconcile``: drawer summary from aggregated stats and the float
- ``settings``: ``SettingsStore`` (float, daily float history, adjustments)
- ``floats``: lock-in of today's float once sales exist
"""

from pos_reports.drawer.floats import lock_in_todays_float
from pos_reports.drawer.reconcile import DrawerSummary, cash_out_given, reconcile
from pos_reports.drawer.settings import CashAdjustment, SettingsStore

__all__ = [
    "CashAdjustment",
    "DrawerSummary",
    "SettingsStore",
    "cash_out_given",
    "lock_in_todays_float",
    "reconcile",
]
