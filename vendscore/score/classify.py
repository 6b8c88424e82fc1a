"""Heuristic rating inference from free text, commission and foot traffic."""
from typing import Optional

from vendscore.score.rules import (
    COMMISSION_BUCKETS,
    DEFAULT_TEXT_SCORE,
    FOOT_TRAFFIC_BUCKETS,
    UNRATED,
    KeywordTiers,
)


def classify(text: Optional[str], keyword_tiers: KeywordTiers, default: int = DEFAULT_TEXT_SCORE) -> int:
    """
    Infer a 1-5 score from free text using ordered keyword tiers.
    
    Tiers are checked top-down; the first tier with any keyword found as a
    case-insensitive substring of the text wins. Tier order matters: a
    keyword in an earlier tier shadows a longer phrase in a later one.
    
    Args:
        text: Free-text notes (None or empty allowed)
        keyword_tiers: Ordered (score, [keywords]) pairs
        default: Score when nothing matches
    
    Returns:
        Matched tier score, or the default
    """
    lowered = (text or "").lower()
    if not lowered.strip():
        return default
    
    for score, keywords in keyword_tiers:
        if any(kw.lower() in lowered for kw in keywords):
            return score
    
    return default


def classify_commission(fraction: Optional[float]) -> int:
    """
    Rate a host commission fraction (0-1); lower commission rates higher.
    
    Args:
        fraction: Commission as a decimal fraction, e.g. 0.10 for 10%
    
    Returns:
        Rating 1-5, or 0 when there is no commission data
    """
    if fraction is None:
        return UNRATED
    percentage = fraction * 100
    for max_pct, rating in COMMISSION_BUCKETS:
        # Tolerate float noise from the fraction-to-percent conversion
        if percentage <= max_pct + 1e-9:
            return rating
    return 1


def classify_foot_traffic(daily_count: Optional[int]) -> int:
    """
    Rate daily foot traffic volume.
    
    Args:
        daily_count: People passing the site per day
    
    Returns:
        Rating 1-5, or 0 when there is no traffic data
    """
    if not daily_count or daily_count <= 0:
        return UNRATED
    for min_count, rating in FOOT_TRAFFIC_BUCKETS:
        if daily_count >= min_count:
            return rating
    return UNRATED
