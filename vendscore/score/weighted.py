"""
Weighted overall score and placement decision.

The overall score combines the eight General manual ratings, fixed
placeholder ratings for the dimensions without live inputs, and the module
category average, each multiplied by its weight:

    score = sum(rating_i * weight_i) / sum(weight_i) / 5.0

Unrated General dimensions contribute 0 while their weight stays in the
denominator, so missing ratings pull the score down instead of being
excluded.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

from vendscore.score import rules
from vendscore.score.policy import DEFAULT_POLICY, ScoringPolicy

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Placement recommendation derived from the overall score."""
    GREENLIGHT = "greenlight"
    WATCHLIST = "watchlist"
    PASS = "pass"
    
    @property
    def display_name(self) -> str:
        return self.value.capitalize()
    
    @property
    def color(self) -> str:
        return {
            Decision.GREENLIGHT: "green",
            Decision.WATCHLIST: "yellow",
            Decision.PASS: "red",
        }[self]


SOURCE_MANUAL = "manual"
SOURCE_PLACEHOLDER = "placeholder"
SOURCE_MODULE = "module"


@dataclass(frozen=True)
class ScoreContribution:
    """One weighted dimension's share of the overall score."""
    dimension: str
    rating: float
    weight: float
    source: str
    
    @property
    def contribution(self) -> float:
        return self.rating * self.weight


def explain_score(general, module_score: float, policy: ScoringPolicy = DEFAULT_POLICY) -> List[ScoreContribution]:
    """
    Break the overall score into per-dimension contributions.
    
    Args:
        general: GeneralCategory with manual ratings
        module_score: Module category average on the 0-5 scale
        policy: Weights and placeholder ratings
    
    Returns:
        Contributions in weight-table order
    """
    contributions = []
    for dimension, weight in policy.weights.items():
        if dimension == rules.MODULE_SPECIFIC:
            rating, source = float(module_score), SOURCE_MODULE
        elif dimension in policy.placeholder_ratings:
            rating, source = float(policy.placeholder_ratings[dimension]), SOURCE_PLACEHOLDER
        else:
            rating, source = float(general.get_rating(dimension)), SOURCE_MANUAL
        contributions.append(ScoreContribution(dimension, rating, weight, source))
    return contributions


def compute_overall_score(general, module_score: float, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    """
    Compute the normalized overall score.
    
    Args:
        general: GeneralCategory with manual ratings
        module_score: Module category average on the 0-5 scale
        policy: Scoring policy
    
    Returns:
        Score in [0, 1]
    """
    contributions = explain_score(general, module_score, policy)
    weighted_sum = sum(c.contribution for c in contributions)
    score = weighted_sum / policy.total_weight / 5.0
    logger.debug(f"Weighted sum {weighted_sum:.4f} -> score {score:.4f}")
    return score


def map_to_decision(score: float, policy: ScoringPolicy = DEFAULT_POLICY) -> Decision:
    """Map a 0-1 score to a decision; each band includes its lower bound."""
    if score >= policy.greenlight_min:
        return Decision.GREENLIGHT
    if score >= policy.watchlist_min:
        return Decision.WATCHLIST
    return Decision.PASS


def compute_module_score(category, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    """Mean of the module category's rated sub-metrics (0.0 if none rated)."""
    return category.average_rating(policy)
