#!/usr/bin/env python3
"""
Geolocation helpers - distance math and privacy-preserving display.

Coordinates are (latitude, longitude) tuples in decimal degrees.
"""

from typing import Optional, Tuple
import logging
import math

from core.utils import decay_score

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

Coordinates = Tuple[float, float]


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """
    Great-circle (Haversine) distance between two points.

    Args:
        a: (lat, lng) of the first point
        b: (lat, lng) of the second point

    Returns:
        Distance in kilometers (0.0 for identical points)
    """
    lat1, lng1 = a
    lat2, lng2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    h = (
        math.sin(d_lat / 2) ** 2 +
        math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
        math.sin(d_lng / 2) ** 2
    )
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def distance_to_score(distance: float, max_radius_km: float = 10.0) -> float:
    """Convert a distance to a 0-100 score; 0 beyond the radius, 10 at the radius."""
    if distance > max_radius_km:
        return 0.0
    return decay_score(distance, max_radius_km)


def is_within_radius(a: Coordinates, b: Coordinates, radius_km: float) -> bool:
    return distance_km(a, b) <= radius_km


def fuzzy_distance(distance: float) -> str:
    """Bucket a distance into an approximate label so the exact value never leaks."""
    if distance < 1:
        return "Less than 1 km away"
    if distance < 3:
        return "About 2 km away"
    if distance < 6:
        return "About 5 km away"
    if distance < 10:
        return "Within 10 km"
    if distance < 20:
        return "Within 20 km"
    return "Over 20 km away"


def coarse_location(city: str, state: Optional[str] = None, country: Optional[str] = None) -> str:
    """City-level location string for display; US is implied and omitted."""
    parts = [city]
    if state:
        parts.append(state)
    if country and country != 'US':
        parts.append(country)
    return ", ".join(parts)
