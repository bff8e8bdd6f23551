#Purpose: Zone geofencing logic (the GeoIndex).
#Resolves "which zone is this point in" and "which zones are closest".
#Typical responsibilities:
#Given a passenger point -> the zone that absorbs its demand signal
#Nearest-zone queries (unbounded by radius) for demand lookups and dashboards
#Output: Zone objects from the registry, never copies.

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from zones.models import LatLon, Zone
from zones.registry import ZoneRegistry

from .distance import haversine_km


class ZoneResolution(str, Enum):
    """
    How a point is mapped to a zone when several radii overlap.
    FIRST_MATCH: first zone in registry order whose radius contains the point.
    NEAREST_MATCH: closest center among the zones whose radius contains the point.
    """
    FIRST_MATCH = "first_match"
    NEAREST_MATCH = "nearest_match"


def contains(zone: Zone, point: LatLon) -> bool:
    return haversine_km(point, zone.center) <= zone.radius_km


class GeoIndex:
    """
    Point -> zone resolution over an immutable ZoneRegistry.
    Pure functions over static data, no locking needed.
    """

    def __init__(
        self,
        registry: ZoneRegistry,
        *,
        resolution: ZoneResolution = ZoneResolution.FIRST_MATCH,
    ):
        self.registry = registry
        self.resolution = ZoneResolution(resolution)

    def resolve_zone(self, point: LatLon) -> Optional[Zone]:
        """
        Zone that contains `point`, or None when the point is outside every radius.

        With FIRST_MATCH (default) registry order decides overlaps, so e.g. a
        point inside both ACG-CENTRO and ACG-TERMINAL resolves to ACG-CENTRO.
        """
        if self.resolution == ZoneResolution.NEAREST_MATCH:
            best: Optional[Tuple[float, Zone]] = None
            for zone in self.registry:
                distance = haversine_km(point, zone.center)
                if distance > zone.radius_km:
                    continue
                if best is None or distance < best[0]:
                    best = (distance, zone)
            return best[1] if best else None

        for zone in self.registry:
            if contains(zone, point):
                return zone
        return None

    def nearest_zones(self, point: LatLon, k: int = 3) -> List[Zone]:
        """
        The k zones whose centers are closest to `point`, ascending by distance.
        Radius is ignored. Ties keep registry order.
        """
        if k <= 0:
            return []

        ranked = sorted(
            self.registry,
            key=lambda zone: haversine_km(point, zone.center),
        )
        return ranked[:k]

    def nearest_zone(self, point: LatLon) -> Optional[Zone]:
        nearest = self.nearest_zones(point, 1)
        return nearest[0] if nearest else None
