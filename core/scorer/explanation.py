#!/usr/bin/env python3
"""
Explanation Generation - Human-readable summary of a match breakdown.
"""

from typing import Sequence

from core.scorer.models import ScoreBreakdown


def join_clauses(clauses: Sequence[str]) -> str:
    """Join as "a, b, and c"; two clauses become "a, and b"."""
    if len(clauses) <= 1:
        return "".join(clauses)
    return ", ".join(clauses[:-1]) + ", and " + clauses[-1]


def generate_explanation(
    breakdown: Sequence[ScoreBreakdown],
    name: str,
    other_name: str,
    threshold: float = 30.0,
    max_factors: int = 3
) -> str:
    """
    Explain a match from its strongest factors.

    Takes the `max_factors` factors with the highest weighted contribution,
    then keeps those whose raw score exceeds `threshold`. Deterministic for a
    given breakdown; the input sequence is not reordered.
    """
    ranked = sorted(breakdown, key=lambda b: b.weighted_score, reverse=True)
    top_factors = [b for b in ranked[:max_factors] if b.raw_score > threshold]

    if not top_factors:
        return f"{name} and {other_name} don't have strong compatibility factors."

    reasons = [b.factor.render(b.details) for b in top_factors]
    return f"Great match because {join_clauses(reasons)}."
