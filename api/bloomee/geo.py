"""Great-circle distance and globe coordinate conversions."""

import math

EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1, lng1, lat2, lng2):
    """Great-circle distance between two coordinates in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
         * math.sin(d_lng / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def lat_lng_to_point(lat, lng):
    """Convert latitude/longitude to a point on the unit sphere (y up, z toward lng 0)."""
    phi = math.radians(lat)
    theta = math.radians(lng)
    return {
        'x': math.cos(phi) * math.sin(theta),
        'y': math.sin(phi),
        'z': math.cos(phi) * math.cos(theta),
    }


def point_to_lat_lng(x, y, z):
    """Inverse of lat_lng_to_point. The point is normalized first."""
    norm = math.sqrt(x * x + y * y + z * z)
    if norm == 0:
        raise ValueError("Cannot convert the zero vector to a coordinate")
    lat = math.degrees(math.asin(max(-1.0, min(1.0, y / norm))))
    lng = math.degrees(math.atan2(x, z))
    return {'lat': lat, 'lng': lng}
