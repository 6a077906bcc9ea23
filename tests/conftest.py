"""Shared fixtures: a small shop day and a settings store in a temp data root."""

from datetime import datetime

import pytest

from pos_reports.config import ReportPaths
from pos_reports.drawer.settings import SettingsStore
from pos_reports.transactions.normalize import normalize_records


@pytest.fixture
def now() -> datetime:
    """Evening of Monday 2026-10-19."""
    return datetime(2026, 10, 19, 18, 0)


@pytest.fixture
def sample_records() -> list[dict]:
    """Raw records as checkout writes them.

    Oct 19: a cash merchandise sale by Ana and a cash-paid 1000 cash-out
    (fee 20) by Ben. Oct 18: a card sale by Ana.
    """
    return [
        {
            "transactionId": "TXN-1",
            "timestamp": "2026-10-19T09:00:00",
            "processedBy": "Ana",
            "paymentMethod": "cash",
            "total": 100,
            "tax": 10.71,
            "items": [{"name": "Phone Case", "quantity": 1, "subtotal": 100}],
        },
        {
            "transactionId": "TXN-2",
            "timestamp": "2026-10-19T11:00:00",
            "processedBy": "Ben",
            "paymentMethod": "cash",
            "total": 1020,
            "actualRevenue": 20,
            "totalCashOutAmount": 1000,
            "totalActualCashGiven": 1000,
            "hasCashOut": True,
            "items": [
                {
                    "name": "GCash Cash-Out",
                    "quantity": 1,
                    "subtotal": 1020,
                    "isCashOut": True,
                    "cashOutAmount": 1000,
                    "actualCashGiven": 1000,
                    "serviceFee": 20,
                }
            ],
        },
        {
            "transactionId": "TXN-3",
            "timestamp": "2026-10-18T15:00:00",
            "processedBy": "Ana",
            "paymentMethod": "card",
            "total": 300,
            "items": [{"name": "Charger", "quantity": 2, "subtotal": 300}],
        },
    ]


@pytest.fixture
def sample_transactions(sample_records):
    return normalize_records(sample_records)


@pytest.fixture
def paths(tmp_path) -> ReportPaths:
    paths = ReportPaths.from_root(tmp_path / "data")
    paths.ensure_dirs()
    return paths


@pytest.fixture
def settings(paths) -> SettingsStore:
    return SettingsStore(paths)
