"""Batch scoring of location aggregates."""
import logging
import time
from typing import Dict, Iterable, Optional

import pandas as pd

from vendscore.score.policy import ScoringPolicy
from vendscore.score.reasons import compose_reasons, reason_codes

logger = logging.getLogger(__name__)

SCORE_COLUMNS = [
    "location_id",
    "name",
    "module_type",
    "overall_score",
    "decision",
    "is_complete",
    "net_monthly",
    "payback_months",
    "reason_codes",
    "reason_text",
]


def score_location(location, policy: Optional[ScoringPolicy] = None) -> Dict:
    """
    Score one location into a flat summary row.
    
    Args:
        location: LocationAggregate
        policy: Override for the location's own scoring policy
    
    Returns:
        Dict keyed by SCORE_COLUMNS
    """
    policy = policy or location.policy
    contributions = location.score_breakdown(policy)
    codes = reason_codes(contributions)
    projection = location.get_financial_projection()
    
    return {
        "location_id": location.id,
        "name": location.name,
        "module_type": location.module_type.value,
        "overall_score": location.calculate_overall_score(policy),
        "decision": location.get_decision(policy).display_name,
        "is_complete": location.is_complete(),
        "net_monthly": projection.net_monthly,
        "payback_months": projection.payback_months,
        "reason_codes": ",".join(codes),
        "reason_text": compose_reasons(codes, contributions),
    }


def score_locations(locations: Iterable, policy: Optional[ScoringPolicy] = None) -> pd.DataFrame:
    """
    Score many locations into a DataFrame, one row per location.
    
    Each location is scored independently from its own resident data, so
    callers may split the input and score the parts concurrently.
    
    Args:
        locations: LocationAggregate instances
        policy: Optional policy applied to every location instead of its own
    
    Returns:
        DataFrame with SCORE_COLUMNS, sorted by overall_score descending
    """
    locations = list(locations)
    logger.info(f"Scoring {len(locations)} locations...")
    start = time.perf_counter()
    
    results = [score_location(location, policy) for location in locations]
    result_df = pd.DataFrame(results, columns=SCORE_COLUMNS)
    if not result_df.empty:
        result_df = result_df.sort_values("overall_score", ascending=False, kind="stable").reset_index(drop=True)
    
    duration = time.perf_counter() - start
    logger.info(f"Scoring complete: {len(result_df)} locations in {duration:.2f} seconds", extra={"duration": duration})
    return result_df
