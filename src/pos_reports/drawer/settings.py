"""Settings store: opening float, daily float history and cash adjustments.

All state lives in one JSON document (see ``ReportPaths.settings_file``)::

    {
      "cashDrawerOpeningBalance": 1000.0,
      "dailyFloats": {"2026-10-18": 1000.0},
      "cashAdjustments": [
        {"date": "2026-10-18", "amount": -200.0, "reason": "supplies", "recordedBy": "Ana"}
      ]
    }

Every write replaces the whole document. Read-modify-write cycles hold a
per-file lock shared by all stores in the process, so concurrent report
builds neither corrupt the file nor drop each other's updates. Daily
floats are keyed by ISO date, so saving the same day twice overwrites
instead of duplicating.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from pos_reports.config import ReportPaths
from pos_reports.exceptions import ConfigError
from pos_reports.jsonfile import read_json, write_json_atomic
from pos_reports.periods import as_date
from pos_reports.transactions.normalize import to_float

logger = logging.getLogger(__name__)

OPENING_BALANCE_KEY = "cashDrawerOpeningBalance"
DAILY_FLOATS_KEY = "dailyFloats"
ADJUSTMENTS_KEY = "cashAdjustments"

DEFAULT_SETTINGS: dict[str, Any] = {
    OPENING_BALANCE_KEY: 0.0,
    DAILY_FLOATS_KEY: {},
    ADJUSTMENTS_KEY: [],
}

_FILE_LOCKS: dict[Path, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(key)
        if lock is None:
            lock = _FILE_LOCKS[key] = threading.RLock()
        return lock


@dataclass(frozen=True)
class CashAdjustment:
    """A manual cash movement in or out of the drawer.

    Attributes:
        date: ISO date the adjustment applies to.
        amount: Signed amount; positive adds cash, negative removes it.
        reason: Free-text reason.
        recorded_by: Staff who recorded it, if known.
    """

    date: str
    amount: float
    reason: str = ""
    recorded_by: str | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "amount": self.amount,
            "reason": self.reason,
            "recordedBy": self.recorded_by,
        }


class SettingsStore:
    """JSON-file backed settings used by the drawer reconciliation.

    Safe to share between threads; stores pointing at the same file also
    share one lock.

    Example:
        >>> from pos_reports import ReportPaths
        >>> from pos_reports.drawer import SettingsStore
        >>>
        >>> settings = SettingsStore(ReportPaths.from_root("data"))
        >>> settings.set_current_opening_balance(1000.0)
        >>> settings.get_opening_balance_for_date(date(2026, 10, 19))
        1000.0
    """

    def __init__(self, paths: ReportPaths) -> None:
        self.paths = paths
        self._lock = _lock_for(paths.settings_file)

    # --- persistence ---

    def _load(self) -> dict[str, Any]:
        path = self.paths.settings_file
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        with self._lock:
            if not path.exists():
                return settings
            try:
                data = read_json(path)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Could not read settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a JSON object")
        settings.update(data)
        return settings

    def _save(self, settings: dict[str, Any]) -> None:
        with self._lock:
            write_json_atomic(self.paths.settings_file, settings)

    # --- opening float ---

    def get_current_opening_balance(self) -> float:
        """Currently configured float (0.0 when never set)."""
        return to_float(self._load().get(OPENING_BALANCE_KEY)) or 0.0

    def set_current_opening_balance(self, amount: float) -> None:
        with self._lock:
            settings = self._load()
            settings[OPENING_BALANCE_KEY] = float(amount)
            self._save(settings)
        logger.info("Set current opening balance to %.2f", amount)

    def daily_floats(self) -> dict[date, float]:
        """Saved float history keyed by calendar date."""
        history: dict[date, float] = {}
        raw = self._load().get(DAILY_FLOATS_KEY)
        if not isinstance(raw, dict):
            return history
        for key, value in raw.items():
            amount = to_float(value)
            try:
                day = date.fromisoformat(key)
            except (TypeError, ValueError):
                logger.warning("Ignoring daily float with invalid date key %r", key)
                continue
            if amount is not None:
                history[day] = amount
        return history

    def save_daily_float(self, day: date | datetime, amount: float) -> None:
        """Upsert the float for a calendar day (idempotent, last writer wins)."""
        day = as_date(day)
        with self._lock:
            settings = self._load()
            floats = settings.get(DAILY_FLOATS_KEY)
            if not isinstance(floats, dict):
                floats = {}
            floats[day.isoformat()] = float(amount)
            settings[DAILY_FLOATS_KEY] = floats
            self._save(settings)
        logger.debug("Saved daily float %.2f for %s", amount, day)

    def lock_in_current_float(self, day: date | datetime) -> float:
        """Save the current float under ``day`` in one locked step.

        Returns:
            The float that was saved.
        """
        with self._lock:
            current = self.get_current_opening_balance()
            self.save_daily_float(day, current)
        return current

    def get_opening_balance_for_date(
        self, day: date | datetime, today: date | datetime | None = None
    ) -> float:
        """Float that applied on ``day``.

        Past dates use the float saved for that day, falling back to the
        current float when none was saved. Today and future dates always
        use the current float, which may still change during the day.

        Args:
            day: Calendar date (or datetime) of the report.
            today: Override for the current date (defaults to ``date.today()``).
        """
        day = as_date(day)
        today = as_date(today) if today is not None else date.today()
        if day < today:
            saved = self.daily_floats().get(day)
            if saved is not None:
                return saved
        return self.get_current_opening_balance()

    # --- adjustments ---

    def add_adjustment(
        self,
        day: date | datetime,
        amount: float,
        reason: str = "",
        recorded_by: str | None = None,
    ) -> CashAdjustment:
        """Record a signed manual cash adjustment for ``day``."""
        day = as_date(day)
        adjustment = CashAdjustment(
            date=day.isoformat(),
            amount=float(amount),
            reason=reason,
            recorded_by=recorded_by,
        )
        with self._lock:
            settings = self._load()
            adjustments = settings.get(ADJUSTMENTS_KEY)
            if not isinstance(adjustments, list):
                adjustments = []
            adjustments.append(adjustment.to_record())
            settings[ADJUSTMENTS_KEY] = adjustments
            self._save(settings)
        logger.info("Recorded cash adjustment %.2f on %s", amount, day)
        return adjustment

    def list_adjustments(self) -> list[CashAdjustment]:
        adjustments = []
        raw = self._load().get(ADJUSTMENTS_KEY)
        if not isinstance(raw, list):
            return adjustments
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            amount = to_float(entry.get("amount"))
            day = entry.get("date")
            if amount is None or not isinstance(day, str):
                logger.warning("Ignoring malformed cash adjustment %r", entry)
                continue
            adjustments.append(
                CashAdjustment(
                    date=day,
                    amount=amount,
                    reason=str(entry.get("reason") or ""),
                    recorded_by=entry.get("recordedBy"),
                )
            )
        return adjustments

    def get_total_adjustments_for_range(self, start: date, end: date) -> float:
        """Sum adjustments dated within ``[start, end]`` (both inclusive)."""
        total = 0.0
        for adjustment in self.list_adjustments():
            try:
                day = date.fromisoformat(adjustment.date)
            except ValueError:
                logger.warning("Ignoring cash adjustment with invalid date %r", adjustment.date)
                continue
            if start <= day <= end:
                total += adjustment.amount
        return total
