#!/usr/bin/env python3
"""
Scoring Module - Multi-factor compatibility scoring between children.

Public API:
- MatchingService: compute_match / find_top_matches
- MatchResult, ScoreBreakdown: result records
- Factor: scoring factors in breakdown order

Each factor lives in its own module:

- interest_score.py: Jaccard similarity of interests
- age_score.py: Age band gating and month-gap decay
- distance_score.py: Household proximity
- availability_score.py: Weekly recurring overlap
- safety.py: House-rule penalties (pets/allergies, smoking, screen time)
- explanation.py: Human-readable explanation from the breakdown
- service.py: MatchingService orchestrator
"""

from core.scorer.models import Factor, MatchResult, ScoreBreakdown
from core.scorer.service import MatchingService

__all__ = ['MatchingService', 'MatchResult', 'ScoreBreakdown', 'Factor']
