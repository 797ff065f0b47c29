#!/usr/bin/env python3
"""
Availability Score - Weekly recurring overlap between two children.
"""

from typing import Tuple

from core.availability import recurring_overlap_minutes, overlap_to_score
from core.models import Child
from core.scorer.models import FactorScore


def calculate_availability_score(child: Child, other: Child) -> Tuple[FactorScore, int]:
    """Returns: (factor_score, overlap_minutes_per_week)"""
    overlap_minutes = recurring_overlap_minutes(child.availability_slots, other.availability_slots)
    score = overlap_to_score(overlap_minutes)

    hours, mins = divmod(overlap_minutes, 60)
    time_desc = f"{hours}h {mins}m" if hours > 0 else f"{mins}m"

    return FactorScore(
        score=score,
        details=f"{time_desc} overlapping availability per week"
    ), overlap_minutes
