"""Great-circle distance helpers used by the proximity query."""
import math

# Mean Earth radius (IUGG) in meters
EARTH_RADIUS_M = 6371008.8
METERS_PER_DEGREE_LAT = EARTH_RADIUS_M * math.pi / 180


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in meters between two (lat, lon) points in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def latitude_margin(radius_meters: float) -> float:
    """
    Degrees of latitude that bound every point within ``radius_meters``.

    The great-circle distance is never shorter than the meridian arc between
    the two latitudes, so a latitude band of this half-width is a safe
    pre-filter. A small slack absorbs float rounding at the boundary.
    """
    return radius_meters / METERS_PER_DEGREE_LAT + 1e-9
