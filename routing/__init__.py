#Marks routing as a package.
#Re-exports the public geo APIs (haversine_km, GeoIndex, ZoneResolution)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .distance import haversine_km, offset_point
from .geofence import GeoIndex, ZoneResolution, contains

__all__ = [
           "haversine_km",
           "offset_point",
             "GeoIndex",
             "ZoneResolution",
             "contains",
             ]
