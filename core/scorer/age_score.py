#!/usr/bin/env python3
"""
Age Score - Band gating plus exponential decay on the month gap.
"""

from core.config_loader import MatchingConfig, AGE_BAND_COMPATIBILITY
from core.utils import decay_score
from core.models import Child
from core.scorer.models import FactorScore


def describe_months(months: int) -> str:
    """Render a month count as "2m" or "1y 3m"."""
    years, rest = divmod(months, 12)
    return f"{years}y {rest}m" if years > 0 else f"{rest}m"


def calculate_age_score(child: Child, other: Child, config: MatchingConfig) -> FactorScore:
    """
    Score age proximity.

    Children whose bands are not adjacent score 0 regardless of how few
    months separate them. Otherwise the score decays exponentially and equals
    10 at config.max_age_difference_months.

    Compatibility is looked up from the first child's band.
    """
    diff_months = abs(child.age_in_months - other.age_in_months)

    compatible = other.age_band in AGE_BAND_COMPATIBILITY.get(child.age_band, [])
    if not compatible:
        return FactorScore(
            score=0.0,
            details=f"Age bands not compatible ({diff_months} months apart)"
        )

    score = decay_score(diff_months, config.max_age_difference_months)
    return FactorScore(score=score, details=f"{describe_months(diff_months)} age difference")
