"""Great-circle distance helpers."""

from __future__ import annotations

import math

from .models import GeoPoint

EARTH_RADIUS_METERS = 6371e3


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Compute the haversine distance in meters; NaN inputs yield NaN."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_meters(a.lat, a.lng, b.lat, b.lng)


def format_coordinates(point: GeoPoint) -> str:
    """Fallback label used when a point cannot be reverse geocoded."""
    return f"{point.lat:.4f}, {point.lng:.4f}"
