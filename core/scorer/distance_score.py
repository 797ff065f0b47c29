#!/usr/bin/env python3
"""
Distance Score - Geographic proximity between two households.
"""

from typing import Tuple

from core.geo import distance_km, distance_to_score
from core.models import Household
from core.scorer.models import FactorScore


def calculate_distance_score(household: Household, other: Household) -> Tuple[FactorScore, float]:
    """
    Score proximity using the larger of the two match radii.

    Returns: (factor_score, distance_km); distance is 0.0 when either
    household has no coordinates.
    """
    if not (household.has_coordinates and other.has_coordinates):
        return FactorScore(score=0.0, details="Location not available"), 0.0

    distance = distance_km(household.coordinates, other.coordinates)
    max_radius = max(household.match_radius_km, other.match_radius_km)
    score = distance_to_score(distance, max_radius)

    return FactorScore(score=score, details=f"{distance:.1f} km away"), distance
