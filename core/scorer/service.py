#!/usr/bin/env python3
"""
Matching Service - Weighted multi-factor compatibility scoring.

Computes a 0-100 compatibility score between two children from five
independent factors (interests, age, distance, availability, safety), each
weighted by MatchingConfig, and selects the top matches from a candidate
list.

The service is stateless apart from its read-only config: every call is a
pure function of its inputs and is safe to run concurrently.
"""

from typing import List, Optional, Sequence
import logging

from core.config_loader import MatchingConfig
from core.models import Child
from core.utils import round_half_up

from core.scorer.models import Factor, FactorScore, MatchResult, ScoreBreakdown
from core.scorer.interest_score import calculate_interest_score
from core.scorer.age_score import calculate_age_score
from core.scorer.distance_score import calculate_distance_score
from core.scorer.availability_score import calculate_availability_score
from core.scorer.safety import calculate_safety_score
from core.scorer.explanation import generate_explanation

logger = logging.getLogger(__name__)


def _apply_min_score(results: List[MatchResult], min_overall_score: float) -> List[MatchResult]:
    """Drop results scoring below the configured floor."""
    return [r for r in results if r.overall_score >= min_overall_score]


class MatchingService:
    """
    Service for pairwise compatibility scoring and batch match selection.
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()

    def _breakdown_entry(self, factor: Factor, factor_score: FactorScore) -> ScoreBreakdown:
        weight = getattr(self.config.weights, factor.key)
        return ScoreBreakdown(
            factor=factor,
            weight=weight,
            raw_score=factor_score.score,
            weighted_score=factor_score.score * weight,
            details=factor_score.details
        )

    def compute_match(self, child: Child, candidate: Child) -> MatchResult:
        """Calculate the compatibility of `candidate` for `child`.

        Age band gating and the explanation's name order follow the argument
        order, so compute_match(a, b) and compute_match(b, a) can differ.

        Args:
            child: Subject child
            candidate: Candidate child

        Returns:
            MatchResult with overall score, per-factor breakdown and explanation
        """
        interest_score, shared_interests = calculate_interest_score(child, candidate)
        age_score = calculate_age_score(child, candidate, self.config)
        distance_score, distance = calculate_distance_score(child.household, candidate.household)
        availability_score, overlap_minutes = calculate_availability_score(child, candidate)
        safety_score = calculate_safety_score(child, candidate, self.config.safety_penalties)

        breakdown = (
            self._breakdown_entry(Factor.INTERESTS, interest_score),
            self._breakdown_entry(Factor.AGE, age_score),
            self._breakdown_entry(Factor.DISTANCE, distance_score),
            self._breakdown_entry(Factor.AVAILABILITY, availability_score),
            self._breakdown_entry(Factor.SAFETY, safety_score),
        )

        # Not re-clamped: only exceeds 100 if the weights sum past 1.0
        overall_score = round_half_up(sum(b.weighted_score for b in breakdown))

        explanation = generate_explanation(
            breakdown,
            child.first_name,
            candidate.first_name,
            threshold=self.config.explanation_threshold,
            max_factors=self.config.explanation_max_factors
        )

        logger.debug(f"Match {child.id} -> {candidate.id}: overall={overall_score}, "
                     f"raw={[round(b.raw_score, 1) for b in breakdown]}")

        return MatchResult(
            child_id=child.id,
            matched_child_id=candidate.id,
            overall_score=overall_score,
            breakdown=breakdown,
            explanation=explanation,
            shared_interests=shared_interests,
            distance_km=distance,
            available_minutes=overlap_minutes
        )

    def find_top_matches(
        self,
        child: Child,
        candidates: Sequence[Child],
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        """Score candidates and return the best matches.

        Excludes the subject by id, drops results below
        config.min_overall_score, sorts by overall score (highest first,
        ties keep input order) and truncates to `limit`. No paging happens
        here: callers over-fetch (limit + offset) and slice afterwards.

        Args:
            child: Subject child
            candidates: Pre-filtered candidate children
            limit: Maximum number of results (defaults to config.default_limit)

        Returns:
            List of MatchResult sorted by overall_score (highest first)
        """
        if limit is None:
            limit = self.config.default_limit

        results = [
            self.compute_match(child, candidate)
            for candidate in candidates
            if candidate.id != child.id
        ]
        scored_count = len(results)

        results = _apply_min_score(results, self.config.min_overall_score)
        results.sort(key=lambda r: r.overall_score, reverse=True)
        results = results[:max(0, limit)]

        logger.info(f"Scored {scored_count} candidates for child {child.id}, "
                    f"returning top {len(results)} (min_score={self.config.min_overall_score})")

        return results
