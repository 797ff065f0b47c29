import logging
import math

logger = logging.getLogger(__name__)


def decay_score(value: float, threshold: float) -> float:
    """Exponential decay 100 * e^(-k * value), clipped to [0, 100].

    k is chosen so the score is exactly 10 when value == threshold:
    k = -ln(0.1) / threshold.

    Args:
        value: Non-negative distance/difference being scored
        threshold: Value at which the score should fall to 10

    Returns:
        Score in range [0, 100]
    """
    k = -math.log(0.1) / threshold
    score = 100.0 * math.exp(-k * value)
    if not (0.0 <= score <= 100.0):
        logger.debug(f"Decay score out of range: {score}, clipping to [0, 100]")
        return max(0.0, min(100.0, score))
    return score


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))
