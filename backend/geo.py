"""Great-circle distance and distance labels."""

import math

from models import Coordinate

R = 6_371_000.0  # Earth radius in meters


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two lat/lon points (haversine formula)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    a = min(1.0, max(0.0, a))
    return 2 * R * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_m(a: Coordinate, b: Coordinate) -> int:
    """Distance between two coordinates, rounded to whole meters.

    Coordinates are not range-checked. Non-finite input yields 0 rather
    than an exception.
    """
    values = (a.latitude, a.longitude, b.latitude, b.longitude)
    if not all(math.isfinite(v) for v in values):
        return 0
    return round_half_up(haversine(*values))


def round_half_up(x: float) -> int:
    """Round to the nearest integer, with .5 going up (round() goes to even)."""
    return math.floor(x + 0.5)


def format_distance(meters: int) -> str:
    """Render meters as a label: whole meters up to 1000, kilometers above."""
    if meters > 1000:
        return f"{meters / 1000:.1f}km"
    return f"{meters}m"


def distance_label(a: Coordinate, b: Coordinate) -> str:
    return format_distance(distance_m(a, b))
