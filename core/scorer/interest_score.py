#!/usr/bin/env python3
"""
Interest Score - Jaccard similarity of two children's interest sets.
"""

from typing import Tuple

from core.models import Child
from core.scorer.models import FactorScore


def calculate_interest_score(child: Child, other: Child) -> Tuple[FactorScore, Tuple[str, ...]]:
    """
    Score shared interests as |A ∩ B| / |A ∪ B| * 100.

    Returns: (factor_score, shared_interest_ids) with ids in the first
    child's order.
    """
    ids = child.interest_ids
    other_ids = other.interest_ids

    union = ids | other_ids
    shared = [ci for ci in child.interests if ci.interest_id in other_ids]
    shared_ids = tuple(dict.fromkeys(ci.interest_id for ci in shared))

    jaccard = len(shared_ids) / len(union) if union else 0.0
    score = jaccard * 100.0

    if shared_ids:
        names = ", ".join(ci.interest.name for ci in shared)
        details = f"{len(shared_ids)} shared interests: {names}"
    else:
        details = "No shared interests"

    return FactorScore(score=score, details=details), shared_ids
