"""Unified configuration for POS Reports.

This module provides the filesystem layout used by the local stores and
the environment-driven defaults for the remote transaction fetch.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# --- Remote database defaults (overridable from the CLI) ---
DEFAULT_DATABASE_URL = os.environ.get("POS_FIREBASE_DB_URL")
DEFAULT_DATABASE_AUTH = os.environ.get("POS_FIREBASE_AUTH")

# --- HTTP resiliency ---
DEFAULT_TIMEOUT = float(os.environ.get("POS_HTTP_TIMEOUT", "30"))
DEFAULT_RETRIES = int(os.environ.get("POS_HTTP_RETRIES", "3"))


@dataclass
class ReportPaths:
    """All filesystem paths used by the local stores.

    Attributes:
        data_root: Root directory for cached transactions and settings.

    Directory Structure:
        data_root/
        ├── cache/
        │   └── pos_transactions.json   # raw records keyed by transaction id
        └── settings/
            └── pos_settings.json       # float, float history, adjustments
    """

    data_root: Path

    @classmethod
    def from_root(cls, data_root: str | Path) -> ReportPaths:
        """Create ReportPaths from a root directory.

        Args:
            data_root: Root directory for local report data.

        Returns:
            ReportPaths instance.

        Examples:
            >>> paths = ReportPaths.from_root("data")
            >>> paths.settings_file
            PosixPath('data/settings/pos_settings.json')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        return cls(data_root=data_root)

    @property
    def cache_dir(self) -> Path:
        return self.data_root / "cache"

    @property
    def settings_dir(self) -> Path:
        return self.data_root / "settings"

    @property
    def transactions_cache(self) -> Path:
        """Local copy of the remote pos_transactions node."""
        return self.cache_dir / "pos_transactions.json"

    @property
    def settings_file(self) -> Path:
        """Opening float, daily float history and cash adjustments."""
        return self.settings_dir / "pos_settings.json"

    def ensure_dirs(self) -> None:
        """Create all directories in the data structure."""
        for path in [self.cache_dir, self.settings_dir]:
            path.mkdir(parents=True, exist_ok=True)
