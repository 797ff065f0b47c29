import yaml
import os
import logging
from typing import List, Optional, Dict, Tuple
from pydantic import BaseModel, Field

from core.models import AgeBand

logger = logging.getLogger(__name__)


# Which age bands can realistically play together: each band plus its
# immediate neighbours.
AGE_BAND_COMPATIBILITY: Dict[AgeBand, List[AgeBand]] = {
    AgeBand.INFANT_0_12M: [AgeBand.INFANT_0_12M, AgeBand.TODDLER_13_24M],
    AgeBand.TODDLER_13_24M: [AgeBand.INFANT_0_12M, AgeBand.TODDLER_13_24M, AgeBand.TODDLER_2_3Y],
    AgeBand.TODDLER_2_3Y: [AgeBand.TODDLER_13_24M, AgeBand.TODDLER_2_3Y, AgeBand.PRESCHOOL_4_5Y],
    AgeBand.PRESCHOOL_4_5Y: [AgeBand.TODDLER_2_3Y, AgeBand.PRESCHOOL_4_5Y, AgeBand.SCHOOL_AGE_6_8Y],
    AgeBand.SCHOOL_AGE_6_8Y: [AgeBand.PRESCHOOL_4_5Y, AgeBand.SCHOOL_AGE_6_8Y, AgeBand.SCHOOL_AGE_9_12Y],
    AgeBand.SCHOOL_AGE_9_12Y: [AgeBand.SCHOOL_AGE_6_8Y, AgeBand.SCHOOL_AGE_9_12Y, AgeBand.TEEN_13_PLUS],
    AgeBand.TEEN_13_PLUS: [AgeBand.SCHOOL_AGE_9_12Y, AgeBand.TEEN_13_PLUS],
}


class MatchingWeights(BaseModel):
    """Weights for each factor in the overall score. Expected to sum to 1.0."""
    interests: float = 0.45
    age: float = 0.20
    distance: float = 0.15
    availability: float = 0.15
    safety: float = 0.05

    def total(self) -> float:
        return self.interests + self.age + self.distance + self.availability + self.safety


class SafetyPenalties(BaseModel):
    """Fractions of the 100-point safety scale deducted per issue."""
    pet_allergy_conflict: float = 0.5  # applied once per direction
    smoking_concern: float = 0.3
    screen_time_mismatch: float = 0.2  # limited vs unrestricted only


class MatchingConfig(BaseModel):
    """
    Configuration for the MatchingService.

    Constructed once at startup and passed to the service; scoring code never
    reads the environment itself.
    """
    weights: MatchingWeights = Field(default_factory=MatchingWeights)
    safety_penalties: SafetyPenalties = Field(default_factory=SafetyPenalties)

    default_radius_km: float = Field(8.0, gt=0)
    max_age_difference_months: float = Field(24.0, gt=0)  # age score is 10 at this gap
    min_overall_score: float = Field(30.0, ge=0)  # batch matching floor

    # Explanation generation
    explanation_threshold: float = 30.0  # raw score a factor must exceed
    explanation_max_factors: int = Field(3, ge=0)

    default_limit: int = 20
    max_candidates: int = 100


class AppConfig(BaseModel):
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    roster_file: Optional[str] = None


# env var -> (section path, field)
_ENV_OVERRIDES: List[Tuple[str, Tuple[str, ...]]] = [
    ("MATCHING_WEIGHT_INTERESTS", ("weights", "interests")),
    ("MATCHING_WEIGHT_AGE", ("weights", "age")),
    ("MATCHING_WEIGHT_DISTANCE", ("weights", "distance")),
    ("MATCHING_WEIGHT_AVAILABILITY", ("weights", "availability")),
    ("MATCHING_WEIGHT_SAFETY", ("weights", "safety")),
    ("DEFAULT_MATCH_RADIUS_KM", ("default_radius_km",)),
    ("MAX_AGE_DIFFERENCE_MONTHS", ("max_age_difference_months",)),
    ("MIN_OVERALL_SCORE", ("min_overall_score",)),
]


def validate_weights(weights: MatchingWeights, tolerance: float = 0.01) -> Tuple[bool, str]:
    """
    Check that factor weights sum to 1.0.

    Advisory only: scoring proceeds with whatever weights are supplied.

    Returns: (is_valid, message)
    """
    total = weights.total()
    if abs(total - 1.0) > tolerance:
        return False, f"Matching weights sum to {total:.2f}, not 1.0. Results may be skewed."
    return True, f"Matching weights sum to {total:.2f}"


def _apply_env_overrides(matching: Dict) -> Dict:
    for env_name, path in _ENV_OVERRIDES:
        value = os.environ.get(env_name)
        if not value:
            continue
        try:
            parsed = float(value)
        except ValueError:
            logger.warning(f"Ignoring non-numeric {env_name}={value!r}")
            continue

        target = matching
        for key in path[:-1]:
            if key not in target or target[key] is None:
                target[key] = {}
            target = target[key]
        target[path[-1]] = parsed
    return matching


def load_config(config_path: Optional[str] = "config.yaml") -> AppConfig:
    """Load config from YAML (if present) and apply environment overrides."""
    data = {}
    if config_path and not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        fallback = os.path.join(base_dir, "..", config_path)
        config_path = fallback if os.path.exists(fallback) else None

    if config_path:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No config file found, using defaults")

    if 'matching' not in data or data['matching'] is None:
        data['matching'] = {}
    data['matching'] = _apply_env_overrides(data['matching'])

    config = AppConfig(**data)

    is_valid, message = validate_weights(config.matching.weights)
    if not is_valid:
        logger.warning(message)

    return config
