#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class Factor(Enum):
    """
    Scoring factors in breakdown order.

    Each member carries its config weight key, display label and the clause
    used when the factor is cited in an explanation.
    """
    INTERESTS = ("interests", "Shared Interests", "they share interests ({details})")
    AGE = ("age", "Age Compatibility", "they're close in age ({details})")
    DISTANCE = ("distance", "Distance", "they live nearby ({details})")
    AVAILABILITY = ("availability", "Availability Overlap", "they have overlapping availability ({details})")
    SAFETY = ("safety", "Safety Compatibility", "{details}")

    def __init__(self, key: str, label: str, clause: str):
        self.key = key
        self.label = label
        self.clause = clause

    def render(self, details: str) -> str:
        return self.clause.format(details=details)


@dataclass(frozen=True)
class FactorScore:
    """Raw output of a single factor calculator."""
    score: float
    details: str


@dataclass(frozen=True)
class ScoreBreakdown:
    """One factor's contribution to the overall score."""
    factor: Factor
    weight: float
    raw_score: float
    weighted_score: float
    details: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'factor': self.factor.label,
            'weight': self.weight,
            'rawScore': self.raw_score,
            'weightedScore': self.weighted_score,
            'details': self.details,
        }


@dataclass(frozen=True)
class MatchResult:
    """Complete scored match between a subject child and a candidate."""
    child_id: str
    matched_child_id: str
    overall_score: int
    breakdown: Tuple[ScoreBreakdown, ...] = ()
    explanation: str = ""
    shared_interests: Tuple[str, ...] = ()
    distance_km: float = 0.0
    available_minutes: int = 0

    def factor(self, factor: Factor) -> ScoreBreakdown:
        return next(b for b in self.breakdown if b.factor is factor)

    def to_dict(self) -> Dict[str, Any]:
        """Serialised form returned by the matches endpoint."""
        return {
            'id': self.matched_child_id,
            'score': self.overall_score,
            'explanation': self.explanation,
            'sharedInterests': list(self.shared_interests),
            'distanceKm': self.distance_km,
            'availableMinutes': self.available_minutes,
            'breakdown': [b.to_dict() for b in self.breakdown],
        }
