"""
Score aggregation and rating policy.

Dependencies: None
System role: Overall score weighting and rating thresholds
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

CATEGORIES: tuple[str, ...] = ("eye_contact", "gestures", "movement", "posture")

EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 70


def rating_for_score(score: float) -> str:
    """
    Derive the rating label for a 0-100 score.

    Args:
        score: Overall or per-category score

    Returns:
        str: "Excellent" (>= 85), "Good" (>= 70), otherwise "Needs Work"
    """
    if score >= EXCELLENT_THRESHOLD:
        return "Excellent"
    if score >= GOOD_THRESHOLD:
        return "Good"
    return "Needs Work"


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


def round_score(value: float) -> int:
    """Round half-up to an integer score within [0, 100]."""
    rounded = Decimal(str(clamp_score(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(rounded)


class ScoringPolicy:
    """
    Weighted mean of the four category scores.

    Weights are tunable; the aggregation is defined whenever all four
    category scores are present.
    """

    def __init__(self, weights: Mapping[str, float] | None = None) -> None:
        """
        Initialize policy.

        Args:
            weights: Category -> weight; missing categories default to 1.0

        Raises:
            ValueError: On unknown categories, negative weights, or zero total
        """
        weights = dict(weights or {})
        unknown = set(weights) - set(CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown score categories: {sorted(unknown)}")

        self.weights = {category: float(weights.get(category, 1.0)) for category in CATEGORIES}
        if any(weight < 0 for weight in self.weights.values()):
            raise ValueError("Category weights must be non-negative")
        if sum(self.weights.values()) <= 0:
            raise ValueError("Category weights must have a positive sum")

    def overall_score(self, category_scores: Mapping[str, float]) -> int:
        """
        Aggregate category scores into the overall score.

        Args:
            category_scores: Score for every category in CATEGORIES

        Returns:
            int: Weighted mean rounded to an integer in [0, 100]

        Raises:
            KeyError: If a category score is missing
        """
        total_weight = sum(self.weights.values())
        weighted = sum(
            clamp_score(category_scores[category]) * weight
            for category, weight in self.weights.items()
        )
        return round_score(weighted / total_weight)
