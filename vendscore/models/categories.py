"""Rateable metric categories: the General category and one per module type."""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from vendscore.errors import UnknownMetricError
from vendscore.models.definitions import (
    GENERAL_DEFINITIONS,
    MODULE_DEFINITIONS,
    MetricDefinition,
    ModuleType,
)
from vendscore.score import rules
from vendscore.score.classify import classify, classify_commission, classify_foot_traffic
from vendscore.score.policy import DEFAULT_POLICY, ScoringPolicy
from vendscore.score.ratings import clamp, is_rated

logger = logging.getLogger(__name__)


@dataclass
class MetricEntry:
    """Manual rating (0 = unrated) and free-text notes for one sub-metric."""
    rating: int = rules.UNRATED
    notes: str = ""
    # Last out-of-range value given to set_rating, before clamping
    rejected_rating: Optional[float] = None


class RatedCategory:
    """A fixed set of named sub-metrics, each with a rating and notes."""
    
    name = "category"
    default_min_rated = rules.MODULE_MIN_RATED

    def __init__(self, definitions: Dict[str, MetricDefinition]):
        self.definitions = definitions
        self.entries: Dict[str, MetricEntry] = {key: MetricEntry() for key in definitions}
    
    @property
    def metric_keys(self) -> List[str]:
        return list(self.entries)
    
    def _entry(self, key: str) -> MetricEntry:
        try:
            return self.entries[key]
        except KeyError:
            raise UnknownMetricError(key, self.name) from None
    
    def set_rating(self, key: str, rating, notes: str = "") -> int:
        """
        Store a rating and notes for a sub-metric.
        
        The rating is clamped into 0-5; notes are stored verbatim. An
        out-of-range value is remembered until the next in-range set so
        validation can report it.
        
        Returns:
            The rating actually stored
        """
        entry = self._entry(key)
        entry.rating = clamp(rating)
        out_of_range = rating is not None and not rules.MIN_RATING <= rating <= rules.MAX_RATING
        entry.rejected_rating = rating if out_of_range else None
        entry.notes = notes if notes is not None else ""
        return entry.rating
    
    def get_rating(self, key: str) -> int:
        return self._entry(key).rating
    
    def get_notes(self, key: str) -> str:
        return self._entry(key).notes
    
    def ratings(self) -> Dict[str, int]:
        return {key: entry.rating for key, entry in self.entries.items()}
    
    def rejected_ratings(self) -> Dict[str, float]:
        """Out-of-range values that were clamped on the way in, by metric key."""
        return {key: entry.rejected_rating for key, entry in self.entries.items() if entry.rejected_rating is not None}
    
    def rated_count(self) -> int:
        return sum(1 for entry in self.entries.values() if is_rated(entry.rating))
    
    # Name used by completeness checks
    get_rated_metric_count = rated_count
    
    def metric_count(self) -> int:
        return len(self.entries)
    
    def completion_percentage(self) -> float:
        """Fraction (0-1) of sub-metrics that carry a rating."""
        total = self.metric_count()
        if total == 0:
            return 0.0
        return self.rated_count() / total
    
    def average_manual_rating(self, min_rated: Optional[int] = None) -> float:
        """
        Mean of the rated sub-metrics.

        Args:
            min_rated: Rated sub-metrics required before an average is given
                (defaults to the category's own minimum)

        Returns:
            Mean rating, or 0.0 when fewer than min_rated are rated
        """
        if min_rated is None:
            min_rated = self.default_min_rated
        rated = [entry.rating for entry in self.entries.values() if is_rated(entry.rating)]
        if not rated or len(rated) < min_rated:
            return 0.0
        return sum(rated) / len(rated)
    
    def describe(self, key: str, rating: Optional[int] = None) -> str:
        """Star guidance for a rating (the stored one when rating is None)."""
        rating = self.get_rating(key) if rating is None else rating
        return self.definitions[key].star_description(rating)


class GeneralCategory(RatedCategory):
    """Module-independent site facts and the eight general sub-metrics."""
    
    name = "general"
    default_min_rated = rules.GENERAL_MIN_RATED

    def __init__(
        self,
        foot_traffic_daily_count: int = 0,
        target_demographic_fit_text: str = "",
        nearby_competition_text: str = "",
        host_commission_fraction: float = 0.0
    ):
        super().__init__(GENERAL_DEFINITIONS)
        self.foot_traffic_daily_count = foot_traffic_daily_count
        self.target_demographic_fit_text = target_demographic_fit_text
        self.nearby_competition_text = nearby_competition_text
        self.host_commission_fraction = host_commission_fraction
    
    def average_rating(self, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
        """Mean manual rating; 0.0 (insufficient data) below the policy minimum."""
        return self.average_manual_rating(policy.general_min_rated)
    
    def has_sufficient_data(self, policy: ScoringPolicy = DEFAULT_POLICY) -> bool:
        return self.rated_count() >= policy.general_min_rated
    
    def inferred_rating(self, key: str, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
        """
        Display-only rating computed from the raw facts and notes.
        
        Never used by the weighted score, which reads manual ratings only.
        """
        entry = self._entry(key)
        if key == rules.FOOT_TRAFFIC:
            return classify_foot_traffic(self.foot_traffic_daily_count)
        if key == rules.HOST_COMMISSION:
            return classify_commission(self.host_commission_fraction)
        if key == rules.TARGET_DEMOGRAPHIC:
            text = self.target_demographic_fit_text
        elif key == rules.COMPETITION:
            text = self.nearby_competition_text
        else:
            text = entry.notes
        return classify(text, policy.tiers_for(key), policy.default_text_score)
    
    def inferred_ratings(self, policy: ScoringPolicy = DEFAULT_POLICY) -> Dict[str, int]:
        return {key: self.inferred_rating(key, policy) for key in self.entries}
    
    def inferred_average(self, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
        """Whole-number mean of all eight inferred ratings."""
        scores = list(self.inferred_ratings(policy).values())
        return sum(scores) // len(scores)


class ModuleCategory(RatedCategory):
    """Site-type specific sub-metrics. Use a concrete subclass per module type."""
    
    module_type: ModuleType = None
    
    def __init__(self):
        if self.module_type is None:
            raise TypeError("ModuleCategory must be instantiated through a module subclass")
        super().__init__(MODULE_DEFINITIONS[self.module_type])
    
    @property
    def name(self) -> str:
        return f"{self.module_type.value} module"
    
    def average_rating(self, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
        """Mean manual rating over rated sub-metrics (0.0 when none are rated)."""
        return self.average_manual_rating(policy.module_min_rated)
    
    def inferred_rating(self, key: str, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
        """Display-only rating inferred from the sub-metric's notes."""
        return classify(self._entry(key).notes, policy.module_keyword_tiers, policy.default_text_score)


class OfficeCategory(ModuleCategory):
    module_type = ModuleType.OFFICE


class HospitalCategory(ModuleCategory):
    module_type = ModuleType.HOSPITAL


class SchoolCategory(ModuleCategory):
    module_type = ModuleType.SCHOOL


class ResidentialCategory(ModuleCategory):
    module_type = ModuleType.RESIDENTIAL


MODULE_CATEGORIES: Dict[ModuleType, Type[ModuleCategory]] = {
    cls.module_type: cls
    for cls in (OfficeCategory, HospitalCategory, SchoolCategory, ResidentialCategory)
}


def new_module_category(module_type) -> ModuleCategory:
    """Create an empty (all unrated) category for a module type."""
    category = MODULE_CATEGORIES[ModuleType(module_type)]()
    logger.debug(f"Created empty {category.name} category with {category.metric_count()} metrics")
    return category
