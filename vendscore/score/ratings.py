"""Shared 0-5 rating scale where 0 means not yet rated."""
from vendscore.score.rules import MIN_RATING, MAX_RATING, UNRATED


def clamp(value) -> int:
    """
    Clamp a rating into the 0-5 range.
    
    Out-of-range input is silently clamped, never rejected. Fractional input
    is rounded to the nearest whole star.
    
    Args:
        value: Candidate rating (int, float or None)
    
    Returns:
        Integer rating in [0, 5]
    """
    if value is None:
        return UNRATED
    return max(MIN_RATING, min(MAX_RATING, int(round(value))))


def is_rated(value) -> bool:
    """True for ratings 1-5; 0 (or None) means unrated."""
    return value is not None and value > UNRATED


def is_valid_rating(value) -> bool:
    """True when value is a whole rating in [0, 5] without clamping."""
    return isinstance(value, int) and MIN_RATING <= value <= MAX_RATING
