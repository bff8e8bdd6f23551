"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the Candidate snapshot the matching engine scores. Candidates are
supplied by the host (a point-in-time list of drivers) and are read-only
inside the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

LatLon = Tuple[float, float]

DEFAULT_RATING = 4.0
DEFAULT_ACCEPTANCE_RATE = 0.85


class DriverStatus(str, Enum):
    """
    Standardizes the state a driver can be in.
    """
    AVAILABLE = "available"
    TRANSIT_TO_PICKUP = "transitToPickup"
    ON_TRIP = "onTrip"
    PAUSED = "paused"
    OFFLINE = "offline"


@dataclass(frozen=True)
class Candidate:
    """
    A purely stateless representation of a driver at a specific point in time.
    Candidates without a location are skipped by matching.
    """
    id: str
    location: Optional[LatLon]
    rating: float = DEFAULT_RATING
    acceptance_rate: float = DEFAULT_ACCEPTANCE_RATE
    status: DriverStatus = DriverStatus.AVAILABLE

    @property
    def has_location(self) -> bool:
        return self.location is not None

    @classmethod
    def new(
        cls,
        driver_id: str,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        rating: Optional[float] = None,
        acceptance_rate: Optional[float] = None,
        status: str | DriverStatus = DriverStatus.AVAILABLE,
    ) -> Candidate:
        if isinstance(status, str):
            status = DriverStatus(status)

        location = (float(lat), float(lng)) if lat is not None and lng is not None else None

        # Providers send null for drivers without history.
        return cls(
            id=driver_id,
            location=location,
            rating=DEFAULT_RATING if rating is None else float(rating),
            acceptance_rate=DEFAULT_ACCEPTANCE_RATE if acceptance_rate is None else float(acceptance_rate),
            status=status,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Candidate:
        """
        Build a candidate from a provider row (CSV/JSON), tolerating blanks.
        """
        def _number(key: str) -> Optional[float]:
            value = record.get(key)
            if value is None or value == "":
                return None
            return float(value)

        return cls.new(
            driver_id=str(record["driver_id"]),
            lat=_number("lat"),
            lng=_number("lng"),
            rating=_number("rating"),
            acceptance_rate=_number("acceptance_rate"),
            status=record.get("status") or DriverStatus.AVAILABLE,
        )
