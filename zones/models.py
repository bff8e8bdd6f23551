"""
Purpose: Domain models for the Zones capability.
What it does:
- Defines the Zone structure (id, name, city, center, radius, type, landmarks)
- Defines enums:
- City = ACARIGUA | ARAURE | BOTH
- ZoneType = COMMERCIAL | TRANSPORT | INDUSTRIAL | RESIDENTIAL | RURAL

Rule: No distance math, no demand state. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

LatLon = Tuple[float, float]


class City(str, Enum):
    ACARIGUA = "ACARIGUA"
    ARAURE = "ARAURE"
    BOTH = "BOTH"


class ZoneType(str, Enum):
    COMMERCIAL = "COMMERCIAL"
    TRANSPORT = "TRANSPORT"
    INDUSTRIAL = "INDUSTRIAL"
    RESIDENTIAL = "RESIDENTIAL"
    RURAL = "RURAL"


@dataclass(frozen=True)
class Zone:
    """
    A static named catchment area used to aggregate local demand.
    Created once at startup from the catalog and never mutated.
    """
    id: str
    name: str
    city: City
    center: LatLon  # (lat, lng)
    radius_km: float
    zone_type: ZoneType
    landmarks: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def lat(self) -> float:
        return self.center[0]

    @property
    def lng(self) -> float:
        return self.center[1]
