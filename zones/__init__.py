"""
Zones domain package.

Public API:
- Domain models: Zone, City, ZoneType
- Catalog: ACARIGUA_ARAURE_ZONES, DEFAULT_MAP_CENTER, MAP_BOUNDS
- ZoneRegistry + default_registry
"""
from .models import Zone, City, ZoneType, LatLon
from .catalog import ACARIGUA_ARAURE_ZONES, DEFAULT_MAP_CENTER, MAP_BOUNDS
from .registry import ZoneRegistry, default_registry

__all__ = ["Zone",
           "City",
             "ZoneType",
               "LatLon",
               "ACARIGUA_ARAURE_ZONES",
               "DEFAULT_MAP_CENTER",
               "MAP_BOUNDS",
               "ZoneRegistry",
               "default_registry",
               ]
