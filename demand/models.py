"""
Purpose: Domain models for the demand signal ("pheromone") capability.
What it does:
- DemandSignal: per-zone intensity snapshot (0-100) with its decay rate
- DemandAction: events that deposit on a zone (REQUEST, MATCH_SUCCESS, MATCH_FAILED, CANCEL)
- record helpers for the persistence channel
- as_utc: every timestamp the engine stores is UTC-aware

Rule: No locking, no decay logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


def utc_now() -> datetime:
    """
    Default clock for the engine. Hosts and tests inject their own.
    """
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """
    Timezone-aware UTC copy of `moment`. Naive values are taken as UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class DemandAction(str, Enum):
    REQUEST = "REQUEST"
    MATCH_SUCCESS = "MATCH_SUCCESS"
    MATCH_FAILED = "MATCH_FAILED"
    CANCEL = "CANCEL"


@dataclass(frozen=True)
class DemandSignal:
    """
    Demand intensity of one zone at a point in time.

    DemandField keeps exactly one of these per zone and swaps in a new
    instance (dataclasses.replace) on every deposit or evaporation, so a
    reference handed out by snapshot() never changes underneath the caller.
    """
    zone_id: str
    zone_name: str
    city: str
    lat: float
    lng: float
    intensity: float
    decay_rate: float
    last_updated: datetime

    def to_record(self) -> Dict[str, Any]:
        return {
            "zone_id": self.zone_id,
            "zone_name": self.zone_name,
            "city": self.city,
            "lat": self.lat,
            "lng": self.lng,
            "intensity": self.intensity,
            "decay_rate": self.decay_rate,
            "last_updated": self.last_updated.isoformat(),
        }
