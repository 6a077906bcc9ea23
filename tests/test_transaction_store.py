"""Tests for the transaction store (cache and remote fetch).

The remote database is replaced by a fake session so no network is used.
"""

import json
from datetime import datetime

import pytest
import requests

from pos_reports.config import ReportPaths
from pos_reports.exceptions import ConfigError, StoreError
from pos_reports.transactions.store import TransactionStore, make_session

DB_URL = "https://shop-pos.example.com/"


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict | None]] = []

    def get(self, url: str, params=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.response


def _write_cache(paths: ReportPaths, records: dict) -> None:
    paths.transactions_cache.write_text(json.dumps(records))


CACHED = {
    "TXN-9": {
        "transactionId": "TXN-9",
        "timestamp": "2026-10-18T09:00:00",
        "processedBy": "Ana",
        "total": 250,
    }
}


def test_remote_fetch_writes_cache_and_sorts_newest_first(paths: ReportPaths) -> None:
    """Test a remote snapshot keyed by push id."""
    payload = {
        "-Nold": {"transactionId": "TXN-1", "timestamp": "2026-10-17T08:00:00", "total": 100},
        "-Nnew": {"timestamp": "2026-10-19T08:00:00", "total": 300},
    }
    session = FakeSession(FakeResponse(payload))
    store = TransactionStore(paths, database_url=DB_URL, auth="secret", session=session)

    transactions = store.fetch_all()

    assert session.calls == [
        ("https://shop-pos.example.com/pos_transactions.json", {"auth": "secret"})
    ]
    assert [t.transaction_id for t in transactions] == ["-Nnew", "TXN-1"]
    cached = json.loads(paths.transactions_cache.read_text())
    assert set(cached) == {"TXN-1", "-Nnew"}
    assert cached["-Nnew"]["id"] == "-Nnew"


def test_cache_is_used_before_remote(paths: ReportPaths) -> None:
    _write_cache(paths, CACHED)
    session = FakeSession(error=AssertionError("remote should not be called"))
    store = TransactionStore(paths, database_url=DB_URL, session=session)

    transactions = store.fetch_all()

    assert [t.transaction_id for t in transactions] == ["TXN-9"]
    assert transactions[0].timestamp == datetime(2026, 10, 18, 9, 0)
    assert session.calls == []


def test_refresh_bypasses_cache(paths: ReportPaths) -> None:
    _write_cache(paths, CACHED)
    session = FakeSession(FakeResponse([None, {"transactionId": "TXN-2", "total": 5}]))
    store = TransactionStore(paths, database_url=DB_URL, auth=None, session=session)

    transactions = store.fetch_all(refresh=True)

    assert [t.transaction_id for t in transactions] == ["TXN-2"]
    assert session.calls[0][1] is None


def test_remote_failure_falls_back_to_cache(paths: ReportPaths) -> None:
    """Test that a network error with a cache present returns cached data."""
    _write_cache(paths, CACHED)
    session = FakeSession(error=requests.ConnectionError("offline"))
    store = TransactionStore(paths, database_url=DB_URL, session=session)

    transactions = store.fetch_all(refresh=True)

    assert [t.transaction_id for t in transactions] == ["TXN-9"]


def test_remote_failure_without_cache_raises(paths: ReportPaths) -> None:
    session = FakeSession(FakeResponse(None, status_code=503))
    store = TransactionStore(paths, database_url=DB_URL, session=session)

    with pytest.raises(StoreError, match="Could not load transactions"):
        store.fetch_all()


def test_unexpected_payload_without_cache_raises(paths: ReportPaths) -> None:
    store = TransactionStore(paths, database_url=DB_URL, session=FakeSession(FakeResponse("oops")))

    with pytest.raises(StoreError, match="Unexpected pos_transactions payload"):
        store.fetch_all()


def test_empty_remote_node(paths: ReportPaths) -> None:
    store = TransactionStore(paths, database_url=DB_URL, session=FakeSession(FakeResponse(None)))

    assert store.fetch_all() == []


def test_no_database_url(paths: ReportPaths) -> None:
    """Test that a missing URL is fine for cache reads but not for refresh."""
    store = TransactionStore(paths, database_url=None, session=FakeSession())

    assert store.fetch_all() == []
    with pytest.raises(ConfigError, match="No database URL configured"):
        store.fetch_all(refresh=True)


def test_corrupt_cache_reads_as_empty(paths: ReportPaths) -> None:
    paths.transactions_cache.write_text("[not json")

    assert TransactionStore(paths, database_url=None).load_cached() == []


def test_cache_all_skips_records_without_id(paths: ReportPaths) -> None:
    store = TransactionStore(paths, database_url=None)

    store.cache_all([{"transactionId": "TXN-1"}, {"total": 5}, {"id": "-Nabc"}])

    assert set(json.loads(paths.transactions_cache.read_text())) == {"TXN-1", "-Nabc"}


def test_make_session_sets_default_timeout(monkeypatch) -> None:
    """Test that the session wrapper injects the timeout unless given."""
    seen: dict[str, object] = {}

    def fake_request(self, method, url, **kwargs):
        seen.update(kwargs)
        return "ok"

    monkeypatch.setattr(requests.Session, "request", fake_request)
    session = make_session(timeout=7.5, retries=1)

    assert session.request("GET", "https://example.com") == "ok"
    assert seen["timeout"] == 7.5
    adapter = session.get_adapter("https://example.com")
    assert adapter.max_retries.total == 1


def test_array_snapshot_keeps_positional_keys(paths: ReportPaths) -> None:
    """Test that array entries without a transactionId are cached under their index."""
    payload = [None, {"timestamp": "2026-10-19T10:00:00", "total": 5}]
    session = FakeSession(FakeResponse(payload))
    store = TransactionStore(paths, database_url=DB_URL, session=session)

    transactions = store.fetch_all(refresh=True)

    assert [t.transaction_id for t in transactions] == ["1"]
    cached = json.loads(paths.transactions_cache.read_text())
    assert set(cached) == {"1"}

    offline = TransactionStore(
        paths, database_url=DB_URL, session=FakeSession(error=AssertionError("remote should not be called"))
    )
    assert [t.transaction_id for t in offline.fetch_all()] == ["1"]
