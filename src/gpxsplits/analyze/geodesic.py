# gpxsplits/analyze/geodesic.py
"""
Great-circle distance for gpxsplits
"""

from haversine import haversine, Unit

# Mean radius used for all track distances (a spherical approximation,
# not the WGS-84 ellipsoid).
EARTH_RADIUS_M = 6_367_137.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Surface distance in meters between two (lat, lon) pairs given in degrees."""
    central_angle = haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS)
    return EARTH_RADIUS_M * central_angle
