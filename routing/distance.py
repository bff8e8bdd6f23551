#Purpose: Great-circle distance helpers.
#Straight-line (haversine) distance between two (lat, lng) points in km.
#Used by zone geofencing, nearest-zone demand lookups and candidate scoring.
#No road network here: real routing data is not part of the matching engine.

from __future__ import annotations

import math
from typing import Tuple

#internal coordinate type :(lat,lng)
LatLon = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: LatLon, b: LatLon) -> float:
    """
    Great-circle distance in kilometres between two (lat, lng) points.
    """
    lat1, lng1 = a
    lat2, lng2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def offset_point(origin: LatLon, north_km: float = 0.0, east_km: float = 0.0) -> LatLon:
    """
    Approximate point `north_km` / `east_km` away from origin.
    Good enough for fixtures and simulations at city scale.
    """
    lat, lng = origin
    d_lat = math.degrees(north_km / EARTH_RADIUS_KM)
    d_lng = math.degrees(east_km / (EARTH_RADIUS_KM * math.cos(math.radians(lat))))
    return (lat + d_lat, lng + d_lng)
