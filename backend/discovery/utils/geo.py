"""
Geospatial helpers

Pure functions, no I/O. Callers validate coordinate ranges; out-of-range
input gives a defined but meaningless distance.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

EARTH_RADIUS_KM = 6371.0  # mean radius, spherical model


def calculate_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points (haversine formula)

    Args:
        lat1, lon1: First point in decimal degrees
        lat2, lon2: Second point in decimal degrees

    Returns:
        Distance in kilometers
    """
    lat_distance = math.radians(lat2 - lat1)
    lon_distance = math.radians(lon2 - lon1)

    a = (math.sin(lat_distance / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
         * math.sin(lon_distance / 2) ** 2)
    # Rounding can push a just past 1 for antipodal points
    a = min(1.0, max(0.0, a))

    c =2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def format_distance(distance_km: float) -> str:
    """
    Human readable distance

    Rules:
        < 1 km      -> whole meters, truncated ("850 m")
        1 to 10 km  -> one decimal place ("2.5 km")
        >= 10 km    -> nearest whole kilometer, half up ("12 km")
    """
    if distance_km < 1.0:
        meters = int(distance_km * 1000)
        return f"{meters} m"
    if distance_km < 10.0:
        return f"{distance_km:.1f} km"
    rounded = Decimal(repr(distance_km)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{rounded} km"


def is_valid_coordinate(latitude: Optional[float], longitude: Optional[float]) -> bool:
    """Both values present and within WGS84 ranges"""
    if latitude is None or longitude is None:
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0
