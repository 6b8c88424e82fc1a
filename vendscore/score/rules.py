"""Scoring rules and constants."""
from typing import Dict, List, Sequence, Tuple

# General category sub-metrics, in display order
FOOT_TRAFFIC = "foot_traffic"
TARGET_DEMOGRAPHIC = "target_demographic"
HOST_COMMISSION = "host_commission"
COMPETITION = "competition"
VISIBILITY = "visibility"
SECURITY = "security"
PARKING_TRANSIT = "parking_transit"
AMENITIES = "amenities"

GENERAL_METRICS: List[str] = [
    FOOT_TRAFFIC,
    TARGET_DEMOGRAPHIC,
    HOST_COMMISSION,
    COMPETITION,
    VISIBILITY,
    SECURITY,
    PARKING_TRANSIT,
    AMENITIES,
]

# Dimensions that must be rated for a location to count as complete
CORE_GENERAL_METRICS: List[str] = [
    FOOT_TRAFFIC,
    TARGET_DEMOGRAPHIC,
    COMPETITION,
    VISIBILITY,
    SECURITY,
]

# Weighted dimensions without a live input yet
PAYBACK_VS_TARGET = "payback_vs_target"
ROUTE_CLUSTER_FIT = "route_cluster_fit"
INSTALL_COMPLEXITY = "install_complexity"
MODULE_SPECIFIC = "module_specific"

PLACEHOLDER_DIMENSIONS: List[str] = [
    PAYBACK_VS_TARGET,
    ROUTE_CLUSTER_FIT,
    INSTALL_COMPLEXITY,
]

# Weights by dimension (sum to 1.0)
SCORE_WEIGHTS: Dict[str, float] = {
    # Core metrics
    FOOT_TRAFFIC: 0.20,
    TARGET_DEMOGRAPHIC: 0.10,
    COMPETITION: 0.10,
    
    # Logistics and infrastructure
    VISIBILITY: 0.05,
    PARKING_TRANSIT: 0.04,
    SECURITY: 0.04,
    AMENITIES: 0.02,
    
    # Financial terms
    HOST_COMMISSION: 0.08,
    PAYBACK_VS_TARGET: 0.06,
    ROUTE_CLUSTER_FIT: 0.04,
    INSTALL_COMPLEXITY: 0.02,
    
    # Site-type category average
    MODULE_SPECIFIC: 0.25,
}

PLACEHOLDER_RATING = 3.0

# Rating scale
MIN_RATING = 0
MAX_RATING = 5
UNRATED = 0

# Decision bands on the 0-1 score: Greenlight >= 0.75, Watchlist 0.60-0.75, Pass < 0.60
GREENLIGHT_MIN = 0.75
WATCHLIST_MIN = 0.60

# Minimum rated sub-metrics before a category average is meaningful
GENERAL_MIN_RATED = 3
MODULE_MIN_RATED = 1

# Daily foot traffic buckets: (minimum count, rating), highest first
FOOT_TRAFFIC_BUCKETS: List[Tuple[int, int]] = [
    (500, 5),
    (350, 4),
    (200, 3),
    (100, 2),
    (1, 1),
]

# Host commission buckets: (maximum percent, rating); above the last is 1
COMMISSION_BUCKETS: List[Tuple[float, int]] = [
    (5.0, 5),
    (10.0, 4),
    (15.0, 3),
    (20.0, 2),
]

DEFAULT_TEXT_SCORE = 3

KeywordTiers = Sequence[Tuple[int, Sequence[str]]]

# Keyword tiers per text-inferred dimension, checked top-down
KEYWORD_TIERS: Dict[str, KeywordTiers] = {
    TARGET_DEMOGRAPHIC: [
        (5, ["excellent", "perfect"]),
        (4, ["good", "strong"]),
        (3, ["fair", "moderate"]),
        (2, ["poor", "weak"]),
        (1, ["no", "bad"]),
    ],
    COMPETITION: [
        (5, ["none", "zero", "no competition"]),
        (4, ["low", "minimal"]),
        (3, ["moderate", "some"]),
        (2, ["high", "strong"]),
        (1, ["very high", "intense"]),
    ],
    VISIBILITY: [
        (5, ["excellent", "highly visible", "prime location"]),
        (4, ["good", "visible", "well positioned"]),
        (3, ["moderate", "adequate"]),
        (2, ["poor", "limited visibility"]),
        (1, ["very poor", "hidden", "obscured"]),
    ],
    SECURITY: [
        (5, ["excellent", "very secure", "monitored"]),
        (4, ["good", "secure", "safe"]),
        (3, ["moderate", "adequate"]),
        (2, ["poor", "concerns"]),
        (1, ["very poor", "unsafe", "high risk"]),
    ],
    PARKING_TRANSIT: [
        (5, ["excellent", "plenty of parking", "easy access"]),
        (4, ["good", "adequate parking", "convenient"]),
        (3, ["moderate", "some parking"]),
        (2, ["poor", "limited parking"]),
        (1, ["very poor", "no parking", "difficult access"]),
    ],
    AMENITIES: [
        (5, ["excellent", "many amenities", "elevator"]),
        (4, ["good", "several amenities"]),
        (3, ["moderate", "some amenities"]),
        (2, ["poor", "few amenities"]),
        (1, ["very poor", "no amenities"]),
    ],
}

# Generic tiers used for module sub-metric notes
MODULE_KEYWORD_TIERS: KeywordTiers = [
    (5, ["excellent", "outstanding", "24/7"]),
    (4, ["very good", "good", "strong"]),
    (3, ["average", "moderate", "adequate"]),
    (2, ["below average", "limited", "weak"]),
    (1, ["poor", "unsuitable", "restricted"]),
]

# Reason code thresholds
STRONG_RATING_MIN = 4
WEAK_RATING_MAX = 2
