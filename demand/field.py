"""
Purpose: The shared, decaying demand indicator per zone (the "pheromone" field).
What it does:

Owns exactly one DemandSignal per registry zone and provides operations:

- init / reset (seed intensities, restart the decay clock)
- deposit(zone_id, action, extra_delta) -> clamped additive update
- evaporate(now) -> one global multiplicative decay per interval
- intensity_at(point) / intensity_of(zone_id) / signal(zone_id)
- snapshot() / hot_zones(threshold) for dashboards
- restore(records) for state loaded from the persistence channel

Timestamps are stored UTC-aware; naive datetimes from a host clock are
taken as UTC.

Every read and write goes through one lock, so a reader never sees a
half-applied decay and racing evaporate() calls inside one interval
decay the field exactly once.

Rule: No I/O here. Persistence lives in demand/persistence.py.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from routing.geofence import GeoIndex
from zones.models import LatLon
from zones.registry import ZoneRegistry

from .models import DemandAction, DemandSignal, as_utc, utc_now
from .policy import DemandPolicy, default_demand_policy

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class DemandField:
    """
    In-process demand state for every zone.

    One instance per process is the intended deployment; it is injected into
    the MatchSelector rather than reached through module globals, so it can
    be swapped for a store-backed implementation later.
    """

    def __init__(
        self,
        registry: ZoneRegistry,
        *,
        policy: Optional[DemandPolicy] = None,
        geo_index: Optional[GeoIndex] = None,
        clock: Clock = utc_now,
        now: Optional[datetime] = None,
    ):
        self.registry = registry
        self.policy = policy or default_demand_policy()
        self.policy.validate()
        self.geo_index = geo_index or GeoIndex(registry)
        self.clock = clock

        self._lock = threading.RLock()
        self._signals: Dict[str, DemandSignal] = {}
        self._last_decay_at: Optional[datetime] = None

        self.init(now)

    # --- Lifecycle ---

    def init(self, now: Optional[datetime] = None) -> None:
        """
        Seed one signal per zone and restart the global decay clock.
        """
        now = as_utc(now or self.clock())
        with self._lock:
            self._signals = {
                zone.id: DemandSignal(
                    zone_id=zone.id,
                    zone_name=zone.name,
                    city=zone.city.value,
                    lat=zone.lat,
                    lng=zone.lng,
                    intensity=self.policy.initial_intensity_for(zone.id),
                    decay_rate=self.policy.default_decay_rate,
                    last_updated=now,
                )
                for zone in self.registry
            }
            self._last_decay_at = now

    def reset(self, now: Optional[datetime] = None) -> None:
        self.init(now)

    @property
    def last_decay_at(self) -> datetime:
        with self._lock:
            return self._last_decay_at

    # --- Writes ---

    def deposit(
        self,
        zone_id: str,
        action: DemandAction | str,
        extra_delta: float = 0.0,
        *,
        now: Optional[datetime] = None,
    ) -> Optional[float]:
        """
        Add the action's increment (plus extra_delta) to a zone, clamped to bounds.

        Unknown zone ids are ignored. Returns the new intensity, or None when
        nothing was deposited.
        """
        action = DemandAction(action)
        increment = self.policy.increment_for(action)

        with self._lock:
            current = self._signals.get(zone_id)
            if current is None:
                logger.debug("Ignoring %s deposit for unknown zone %s", action.value, zone_id)
                return None

            updated = replace(
                current,
                intensity=self.policy.clamp(current.intensity + increment + extra_delta),
                last_updated=as_utc(now or self.clock()),
            )
            self._signals[zone_id] = updated
            return updated.intensity

    def evaporate(self, now: Optional[datetime] = None) -> bool:
        """
        Decay every zone once if a full interval has elapsed since the last decay.

        Returns True when the decay was applied, False for a no-op (including
        every caller that loses the race for the same interval).
        """
        now = as_utc(now or self.clock())

        with self._lock:
            elapsed = (now - self._last_decay_at).total_seconds()
            if elapsed < self.policy.decay_interval_seconds:
                return False

            for zone_id, current in self._signals.items():
                self._signals[zone_id] = replace(
                    current,
                    intensity=self.policy.clamp(current.intensity * current.decay_rate),
                )
            self._last_decay_at = now

        logger.debug("Evaporated demand field (%.1fs since last decay)", elapsed)
        return True

    def restore(self, records: Iterable[Mapping[str, Any]]) -> int:
        """
        Apply persisted intensities to known zones. Unknown ids are skipped.
        Returns how many zones were restored.

        All or nothing: every record is parsed before any zone changes, and a
        malformed one raises ValueError with the field left untouched.
        """
        with self._lock:
            staged: Dict[str, DemandSignal] = {}
            for record in records:
                current = self._signals.get(record.get("zone_id"))
                if current is None or record.get("intensity") is None:
                    continue
                staged[current.zone_id] = self._restored_signal(current, record)

            self._signals.update(staged)
        return len(staged)

    def _restored_signal(self, current: DemandSignal, record: Mapping[str, Any]) -> DemandSignal:
        try:
            intensity = float(record["intensity"])
            decay_rate = float(record.get("decay_rate") or current.decay_rate)
            last_updated = record.get("last_updated")
            if isinstance(last_updated, str):
                last_updated = datetime.fromisoformat(last_updated)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Malformed demand record for zone {current.zone_id}: {exc}") from exc

        if not 0 < decay_rate < 1:
            decay_rate = current.decay_rate

        # Epoch numbers and other wire types are not trusted as timestamps.
        if not isinstance(last_updated, datetime):
            last_updated = current.last_updated

        return replace(
            current,
            intensity=self.policy.clamp(intensity),
            decay_rate=decay_rate,
            last_updated=as_utc(last_updated),
        )

    # --- Reads ---

    def intensity_at(self, point: LatLon) -> float:
        """
        Intensity of the zone whose center is nearest to `point`, ignoring radius.
        0.0 when the registry has no zones.
        """
        zone = self.geo_index.nearest_zone(point)
        if zone is None:
            return 0.0
        with self._lock:
            signal = self._signals.get(zone.id)
            return signal.intensity if signal else 0.0

    def intensity_of(self, zone_id: str) -> Optional[float]:
        with self._lock:
            signal = self._signals.get(zone_id)
            return signal.intensity if signal else None

    def signal(self, zone_id: str) -> Optional[DemandSignal]:
        with self._lock:
            return self._signals.get(zone_id)

    def snapshot(self) -> List[DemandSignal]:
        """
        Current signal of every zone, in registry order. Read-only.
        """
        with self._lock:
            return list(self._signals.values())

    def hot_zones(self, threshold: Optional[float] = None) -> List[DemandSignal]:
        """
        Zones at or above `threshold`, hottest first.
        """
        if threshold is None:
            threshold = self.policy.hot_zone_threshold
        hot = [signal for signal in self.snapshot() if signal.intensity >= threshold]
        hot.sort(key=lambda signal: signal.intensity, reverse=True)
        return hot
