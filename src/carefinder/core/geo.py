"""Great-circle distance engine.

Architecture Note:
    Uses the Haversine formula on a spherical Earth. This is what the
    "within X miles" question needs; no road network is involved. The
    Earth radius is 3963.34 miles, the value R's fields::rdist.earth uses.
"""

import math

import numpy as np

EARTH_RADIUS_MILES = 3963.34
METERS_PER_MILE = 1609.344


def haversine_distance(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Calculate great-circle distance between two points on Earth.

    Args:
        lat1, lon1: Coordinates of point 1 (degrees)
        lat2, lon2: Coordinates of point 2 (degrees)

    Returns:
        Distance in miles
    """
    lat1_r, lon1_r = math.radians(lat1), math.radians(lon1)
    lat2_r, lon2_r = math.radians(lat2), math.radians(lon2)

    dlat = lat2_r - lat1_r
    dlon = lon2_r - lon1_r

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    )
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.asin(math.sqrt(a))

    return EARTH_RADIUS_MILES * c


def distances_from(lat: float, lon: float, lats, lons) -> np.ndarray:
    """Distance in miles from one reference point to each of N points.

    The result is aligned by position with ``lats``/``lons``. Empty inputs
    yield an empty array.

    Args:
        lat, lon: Reference point (degrees)
        lats, lons: Array-likes of equal length (degrees)

    Returns:
        float64 array of length N
    """
    lats_r = np.radians(np.asarray(lats, dtype=float))
    lons_r = np.radians(np.asarray(lons, dtype=float))
    if lats_r.shape != lons_r.shape:
        raise ValueError(
            f"lats and lons must have the same shape, got {lats_r.shape} "
            f"and {lons_r.shape}"
        )
    if lats_r.size == 0:
        return np.empty(0, dtype=float)

    lat_r = float(np.radians(lat))
    lon_r = float(np.radians(lon))

    a = (
        np.sin((lats_r - lat_r) / 2) ** 2
        + math.cos(lat_r) * np.cos(lats_r) * np.sin((lons_r - lon_r) / 2) ** 2
    )
    # Rounding can push a just outside [0, 1] near antipodal points
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_MILES * 2 * np.arcsin(np.sqrt(a))


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE
