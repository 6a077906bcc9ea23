"""Transaction store: local JSON cache plus a remote snapshot fetch.

The remote side is a Firebase Realtime Database read over its REST API
(``GET {database_url}/pos_transactions.json``). The cache mirrors the raw
records keyed by transaction id, so reports still work offline.

Fetch order:
1. Local cache, when non-empty and no refresh was requested.
2. Remote database; the result is written back to the cache.
3. Local cache again if the remote fetch fails.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from pos_reports.config import (
    DEFAULT_DATABASE_AUTH,
    DEFAULT_DATABASE_URL,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    ReportPaths,
)
from pos_reports.exceptions import ConfigError, StoreError
from pos_reports.jsonfile import read_json, write_json_atomic
from pos_reports.models import Transaction
from pos_reports.periods import sort_newest_first
from pos_reports.transactions.normalize import normalize_records

logger = logging.getLogger(__name__)

TRANSACTIONS_NODE = "pos_transactions"


def make_session(
    timeout: float = DEFAULT_TIMEOUT, retries: int = DEFAULT_RETRIES
) -> requests.Session:
    """Session for the database REST reads.

    GET and HEAD are retried with backoff on throttling and 5xx answers,
    and every request gets ``timeout`` unless the caller passes one.
    """
    s = requests.Session()
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=0.8,  # 0.8, 1.6, 3.2, ...
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    orig_request = s.request

    def timed_request(method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return orig_request(method, url, **kwargs)

    s.request = timed_request  # type: ignore[method-assign,assignment]
    return s


def _records_from_payload(payload: Any) -> list[dict[str, Any]]:
    """Flatten a ``pos_transactions`` snapshot into a list of records.

    Firebase returns an object keyed by push id, or an array when keys are
    sequential integers (with nulls for gaps), or null for an empty node.
    """
    if payload is None:
        return []
    if isinstance(payload, Mapping):
        records = []
        for key, value in payload.items():
            if isinstance(value, Mapping):
                record = dict(value)
                record["id"] = str(key)
                records.append(record)
        return records
    if isinstance(payload, list):
        records = []
        for index, value in enumerate(payload):
            if isinstance(value, Mapping):
                record = dict(value)
                record["id"] = str(index)
                records.append(record)
        return records
    raise ValueError(f"Unexpected {TRANSACTIONS_NODE} payload type: {type(payload).__name__}")


class TransactionStore:
    """Read-only source of POS transactions for reporting.

    Example:
        >>> from pos_reports import ReportPaths
        >>> from pos_reports.transactions import TransactionStore
        >>>
        >>> store = TransactionStore(ReportPaths.from_root("data"))
        >>> transactions = store.fetch_all()
    """

    def __init__(
        self,
        paths: ReportPaths,
        database_url: str | None = DEFAULT_DATABASE_URL,
        auth: str | None = DEFAULT_DATABASE_AUTH,
        session: requests.Session | None = None,
    ) -> None:
        self.paths = paths
        self.database_url = database_url.rstrip("/") if database_url else None
        self.auth = auth
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = make_session()
        return self._session

    def fetch_all(self, *, refresh: bool = False) -> list[Transaction]:
        """Return all transactions, newest first.

        Args:
            refresh: Skip the cache-first read and go to the remote database.

        Returns:
            Normalized transactions sorted by timestamp descending.

        Raises:
            ConfigError: If ``refresh`` is requested without a database URL.
            StoreError: If the remote fetch fails and no cache exists.
        """
        if not refresh:
            cached = self.load_cached()
            if cached:
                logger.info("Loaded %d transaction(s) from cache", len(cached))
                return sort_newest_first(normalize_records(cached))

        if self.database_url is None:
            if refresh:
                raise ConfigError(
                    "No database URL configured. Set POS_FIREBASE_DB_URL or pass --database-url."
                )
            logger.info("No database URL configured and cache is empty")
            return []

        try:
            records = self._fetch_remote()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Remote transaction fetch failed: %s", e)
            cached = self.load_cached()
            if cached:
                logger.info("Falling back to %d cached transaction(s)", len(cached))
                return sort_newest_first(normalize_records(cached))
            logger.error("No cached transactions available after remote failure")
            raise StoreError(f"Could not load transactions: {e}") from e

        logger.info("Fetched %d transaction(s) from %s", len(records), self.database_url)
        self.cache_all(records)
        return sort_newest_first(normalize_records(records))

    def _fetch_remote(self) -> list[dict[str, Any]]:
        url = f"{self.database_url}/{TRANSACTIONS_NODE}.json"
        params = {"auth": self.auth} if self.auth else None
        resp = self.session.get(url, params=params)
        resp.raise_for_status()
        return _records_from_payload(resp.json())

    def load_cached(self) -> list[dict[str, Any]]:
        """Return the raw cached records, or an empty list if unavailable."""
        path = self.paths.transactions_cache
        if not path.exists():
            return []
        try:
            data = read_json(path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Error reading transaction cache %s: %s", path, e)
            return []
        if isinstance(data, Mapping):
            return [dict(v) for v in data.values() if isinstance(v, Mapping)]
        logger.warning("Ignoring transaction cache %s with unexpected layout", path)
        return []

    def cache_all(self, records: list[dict[str, Any]]) -> None:
        """Replace the local cache with ``records`` (best-effort).

        Records are keyed by ``transactionId`` (or the remote key ``id``);
        records with neither are not cached.
        """
        batch: dict[str, dict[str, Any]] = {}
        for record in records:
            key = record.get("transactionId") or record.get("id")
            if isinstance(key, str) and key:
                batch[key] = record
        try:
            write_json_atomic(self.paths.transactions_cache, batch)
        except OSError as e:
            logger.warning("Could not write transaction cache: %s", e)
            return
        logger.info("Cached %d POS transaction(s)", len(batch))
