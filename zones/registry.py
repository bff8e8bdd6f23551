"""
Purpose: Immutable catalog of zones, built once at startup.
What it does:
- Indexes zones by id while preserving catalog order (resolution is order-sensitive)
- Provides read-only lookups by id, city and type

Rule: No distance math here (see routing.geofence).
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .catalog import ACARIGUA_ARAURE_ZONES
from .models import City, Zone, ZoneType


class ZoneRegistry:
    """
    Read-only, ordered collection of zones.
    Safe to share across threads without locking.
    """

    def __init__(self, zones: Iterable[Zone]):
        ordered: List[Zone] = []
        by_id: Dict[str, Zone] = {}
        for zone in zones:
            if zone.id in by_id:
                raise ValueError(f"Duplicate zone id in catalog: {zone.id}")
            by_id[zone.id] = zone
            ordered.append(zone)

        self._zones: Tuple[Zone, ...] = tuple(ordered)
        self._by_id = by_id

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._by_id

    @property
    def zones(self) -> Tuple[Zone, ...]:
        return self._zones

    def ids(self) -> List[str]:
        return [zone.id for zone in self._zones]

    def get(self, zone_id: str) -> Optional[Zone]:
        return self._by_id.get(zone_id)

    def by_city(self, city: City | str) -> List[Zone]:
        """
        Zones of a city, including the ones shared by both (City.BOTH).
        """
        city = City(city)
        return [z for z in self._zones if z.city == city or z.city == City.BOTH]

    def by_type(self, zone_type: ZoneType | str) -> List[Zone]:
        zone_type = ZoneType(zone_type)
        return [z for z in self._zones if z.zone_type == zone_type]


def default_registry() -> ZoneRegistry:
    """
    Convenience factory for the Acarigua-Araure catalog.
    """
    return ZoneRegistry(ACARIGUA_ARAURE_ZONES)
