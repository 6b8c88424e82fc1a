"""Human-readable reason generation."""
from typing import List

from vendscore.models.definitions import GENERAL_DEFINITIONS
from vendscore.score import rules
from vendscore.score.weighted import SOURCE_PLACEHOLDER, ScoreContribution

_DIMENSION_LABELS = {key: d.title for key, d in GENERAL_DEFINITIONS.items()}
_DIMENSION_LABELS.update({
    rules.PAYBACK_VS_TARGET: "Payback vs target",
    rules.ROUTE_CLUSTER_FIT: "Route fit",
    rules.INSTALL_COMPLEXITY: "Install complexity",
    rules.MODULE_SPECIFIC: "Site-type score",
})


def dimension_label(dimension: str) -> str:
    return _DIMENSION_LABELS.get(dimension, dimension.replace("_", " ").capitalize())


def reason_codes(contributions: List[ScoreContribution]) -> List[str]:
    """
    Derive reason codes from score contributions.
    
    Codes are PREFIX:dimension where PREFIX is STRONG (rating 4+), WEAK
    (rating 1-2), UNRATED (rating 0) or PLACEHOLDER (fixed default).
    Ratings of 3 carry no code. Strongest weighted dimensions come first.
    """
    codes = []
    for c in sorted(contributions, key=lambda c: c.weight, reverse=True):
        if c.source == SOURCE_PLACEHOLDER:
            codes.append(f"PLACEHOLDER:{c.dimension}")
        elif c.rating <= 0:
            codes.append(f"UNRATED:{c.dimension}")
        elif c.rating >= rules.STRONG_RATING_MIN:
            codes.append(f"STRONG:{c.dimension}")
        elif c.rating <= rules.WEAK_RATING_MAX:
            codes.append(f"WEAK:{c.dimension}")
    return codes


def format_reason_code(code: str, value: float = None) -> str:
    """
    Format a reason code into human-readable text.
    
    Args:
        code: Reason code (e.g., "STRONG:foot_traffic")
        value: Optional rating to include in the reason
    
    Returns:
        Human-readable reason string
    """
    prefix, _, dimension = code.partition(":")
    label = dimension_label(dimension)
    rating = f" ({value:g}/5)" if value is not None else ""
    
    reason_map = {
        "STRONG": f"{label} strong{rating}",
        "WEAK": f"{label} weak{rating}",
        "UNRATED": f"{label} not rated",
        "PLACEHOLDER": f"{label} not yet assessed, default{rating} used",
    }
    
    return reason_map.get(prefix, code)


def compose_reasons(codes: List[str], contributions: List[ScoreContribution]) -> str:
    """
    Compose human-readable reasons from reason codes.
    
    Args:
        codes: Reason codes from reason_codes()
        contributions: Contributions the codes were derived from, for ratings
    
    Returns:
        Human-readable reason string
    """
    ratings = {c.dimension: c.rating for c in contributions}
    reasons = []
    
    for code in codes:
        dimension = code.partition(":")[2]
        value = ratings.get(dimension)
        if code.startswith("UNRATED"):
            value = None
        reasons.append(format_reason_code(code, value))
    
    return "; ".join(reasons)
