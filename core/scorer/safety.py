#!/usr/bin/env python3
"""
Safety Score - House-rule compatibility between two households.

Starts at 100 and deducts, as fractions of the 100-point scale:
- Pet allergy conflict, checked in both directions (each direction deducts)
- Smoking household (once, if either household smokes)
- Screen-time mismatch (once, only for limited vs unrestricted)

Deductions do not stack-limit each other; the result is floored at 0.
"""

from typing import Any, Dict, List, Tuple
import logging

from core.config_loader import SafetyPenalties
from core.models import Child, ScreenTimePolicy
from core.scorer.models import FactorScore

logger = logging.getLogger(__name__)

_POLAR_SCREEN_TIME = {ScreenTimePolicy.LIMITED, ScreenTimePolicy.UNRESTRICTED}


def _pet_allergy_conflict(child: Child, other: Child) -> bool:
    """True if `child` is allergic to a pet kept in `other`'s household."""
    household = other.household
    return household.has_pets and any(a in household.pet_types for a in child.allergies)


def calculate_safety_penalties(
    child: Child,
    other: Child,
    penalties: SafetyPenalties
) -> Tuple[float, List[Dict[str, Any]]]:
    """
    Calculate total safety penalty points with detailed breakdown.

    Returns: (total_penalty_points, penalty_details)
    """
    total = 0.0
    penalty_details = []

    for allergic, host in ((other, child), (child, other)):
        if _pet_allergy_conflict(allergic, host):
            amount = penalties.pet_allergy_conflict * 100
            total += amount
            penalty_details.append({
                'type': 'pet_allergy_conflict',
                'amount': amount,
                'reason': "Pet allergy concern",
                'details': f"{allergic.id} allergic to pets in household {host.household.id}"
            })

    if child.household.smoking_household or other.household.smoking_household:
        amount = penalties.smoking_concern * 100
        total += amount
        penalty_details.append({
            'type': 'smoking_concern',
            'amount': amount,
            'reason': "Smoking household",
        })

    policies = {
        child.household.effective_screen_time_policy,
        other.household.effective_screen_time_policy,
    }
    if policies == _POLAR_SCREEN_TIME:
        amount = penalties.screen_time_mismatch * 100
        total += amount
        penalty_details.append({
            'type': 'screen_time_mismatch',
            'amount': amount,
            'reason': "Different screen time policies",
        })

    return total, penalty_details


def calculate_safety_score(child: Child, other: Child, penalties: SafetyPenalties) -> FactorScore:
    total, penalty_details = calculate_safety_penalties(child, other, penalties)

    if penalty_details:
        logger.debug(f"Safety penalties for {child.id}/{other.id}: {[d['type'] for d in penalty_details]}")
        details = ", ".join(d['reason'] for d in penalty_details)
    else:
        details = "No safety concerns"

    return FactorScore(score=max(0.0, 100.0 - total), details=details)
