from __future__ import annotations

from math import asin, cos, radians, sin, sqrt
from typing import Any


EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    dlat = radians(lat2 - lat1)
    dlng = radians(lng2 - lng1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * asin(sqrt(a))


def coordinate_pair(lat: Any, lng: Any) -> tuple[float, float] | None:
    """
    Both coordinates or neither: a lone latitude or longitude is dropped.
    """
    if lat is None or lng is None:
        return None
    try:
        lat_value = float(lat)
        lng_value = float(lng)
    except (TypeError, ValueError):
        return None
    if not (-90 <= lat_value <= 90) or not (-180 <= lng_value <= 180):
        return None
    return lat_value, lng_value
