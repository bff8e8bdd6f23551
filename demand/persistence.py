#Purpose: The optional durable-storage side channel for demand signals.
#Two parts:
#HttpDemandStore: the HTTP adapter. Sole responsibility is to talk to the
#  demand-signal REST endpoint and return normalized records.
#DemandSync: the boundary between that channel and the matching hot path.
#  Loads once at startup, saves in the background, logs every failure and
#  never lets one reach a match decision.
#It should not contain scoring or decay rules.

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests
from dotenv import load_dotenv

from .field import DemandField
from .models import DemandSignal

# Read the demand store base URL from environment
# Example in .env:
# DEMAND_STORE_URL=https://demand.example.internal/api
# DEMAND_STORE_TIMEOUT=5
load_dotenv()

logger = logging.getLogger(__name__)

SIGNALS_PATH = "demand_signals"


class DemandStoreError(Exception):
    """Raised when the demand store cannot be reached or rejects a request."""
    pass


class PersistenceChannel(Protocol):
    """
    Anything that can load and save demand signal records.
    """

    def load(self) -> List[Dict[str, Any]]:
        ...

    def save(self, signals: Sequence[DemandSignal]) -> None:
        ...


class HttpDemandStore:
    """
    Demand store adapter over HTTP.

    GET  {base_url}/demand_signals -> [{"zone_id": ..., "intensity": ..., ...}, ...]
    PUT  {base_url}/demand_signals <- same shape (upsert by zone_id)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or os.getenv("DEMAND_STORE_URL") or "").rstrip("/")
        self.timeout = timeout or float(os.getenv("DEMAND_STORE_TIMEOUT", "5"))
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("Demand store URL not set. Please set DEMAND_STORE_URL in the .env file.")

    @property
    def url(self) -> str:
        return f"{self.base_url}/{SIGNALS_PATH}"

    def load(self) -> List[Dict[str, Any]]:
        """
        Fetch every persisted signal record.
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise DemandStoreError(f"Demand store load failed: {exc}") from exc

        # Accept both a bare list and {"signals": [...]}
        if isinstance(data, dict):
            data = data.get("signals", [])
        if not isinstance(data, list):
            raise DemandStoreError("Demand store returned an unexpected payload")

        return [record for record in data if isinstance(record, dict)]

    def save(self, signals: Sequence[DemandSignal]) -> None:
        """
        Upsert the given signals.
        """
        payload = [signal.to_record() for signal in signals]
        try:
            response = self.session.put(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DemandStoreError(f"Demand store save failed: {exc}") from exc


class DemandSync:
    """
    Best-effort bridge between a DemandField and a PersistenceChannel.

    Saves run on a single background worker so the order of snapshots is
    preserved and the caller never waits on I/O.
    """

    def __init__(self, channel: PersistenceChannel, executor: Optional[ThreadPoolExecutor] = None):
        self.channel = channel
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="demand-sync")

    def load_into(self, field: DemandField) -> bool:
        """
        Restore persisted intensities. On any failure the field keeps its
        in-memory defaults and False is returned.
        """
        try:
            records = self.channel.load()
            restored = field.restore(records)
        except Exception as exc:
            logger.warning("Demand signal load failed, keeping defaults: %s", exc)
            return False

        logger.info("Restored %d demand signals from persistence", restored)
        return True

    def schedule_save(self, field: DemandField) -> Optional[Future]:
        """
        Snapshot now, persist later. Returns the pending Future, or None if the
        save could not even be scheduled.
        """
        signals = field.snapshot()
        try:
            return self._executor.submit(self._save, signals)
        except RuntimeError as exc:
            logger.warning("Demand signal save not scheduled: %s", exc)
            return None

    def _save(self, signals: Sequence[DemandSignal]) -> bool:
        try:
            self.channel.save(signals)
        except Exception as exc:
            logger.warning("Demand signal save failed: %s", exc)
            return False
        logger.debug("Saved %d demand signals", len(signals))
        return True

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
