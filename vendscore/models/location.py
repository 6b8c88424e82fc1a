"""
Location aggregate: one site's identity, categories and financial inputs.

A LocationAggregate owns exactly one GeneralCategory, one ModuleCategory
matching its declared module type, and one FinancialInputs. It is meant to
be mutated by a single session at a time; callers that share an aggregate
across threads must serialize edits themselves. Scoring reads the
aggregate's resident data only and performs no I/O, so separate aggregates
can be scored concurrently.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from vendscore.errors import ModuleTypeMismatchError, UnknownMetricError, ValidationError
from vendscore.models.categories import GeneralCategory, ModuleCategory, new_module_category
from vendscore.models.definitions import ModuleType
from vendscore.models.financials import FinancialInputs
from vendscore.score import rules
from vendscore.score.financial import FinancialProjection, project_financials
from vendscore.score.policy import DEFAULT_POLICY, ScoringPolicy
from vendscore.score.ratings import is_rated
from vendscore.score.weighted import (
    Decision,
    ScoreContribution,
    compute_module_score,
    compute_overall_score,
    explain_score,
    map_to_decision,
)
from vendscore.utils.addresses import normalize_address
from vendscore.validation import ValidationResult, validate_location

logger = logging.getLogger(__name__)

GENERAL_FACT_FIELDS = [
    "foot_traffic_daily_count",
    "target_demographic_fit_text",
    "nearby_competition_text",
    "host_commission_fraction",
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class LocationAggregate:
    """A candidate site and everything needed to score it."""
    
    def __init__(
        self,
        name: str,
        address: str,
        module_category: ModuleCategory,
        general: Optional[GeneralCategory] = None,
        financials: Optional[FinancialInputs] = None,
        comment: str = "",
        policy: ScoringPolicy = DEFAULT_POLICY
    ):
        self.id = str(uuid.uuid4())
        self.name = name
        self.address = normalize_address(address)
        self.comment = comment
        self.general = general
        self.financials = financials if financials is not None else FinancialInputs()
        self.policy = policy
        self._module_category = module_category
        self.created_at = _now()
        self.updated_at = self.created_at
    
    def __repr__(self):
        return f"<LocationAggregate {self.name!r} {self.module_type.value}>"
    
    @property
    def module_type(self) -> ModuleType:
        """Declared site type; change it only with replace_module_category()."""
        return self._module_category.module_type
    
    @property
    def module_category(self) -> ModuleCategory:
        return self._module_category
    
    def touch(self):
        self.updated_at = _now()
    
    # Mutation
    
    def _require_general(self) -> GeneralCategory:
        if self.general is None:
            self.general = GeneralCategory()
        return self.general
    
    def set_general_rating(self, dimension: str, rating, notes: str = "") -> int:
        """Set a General sub-metric rating (clamped to 0-5) and notes."""
        stored = self._require_general().set_rating(dimension, rating, notes)
        self.touch()
        return stored
    
    def set_module_rating(self, dimension: str, rating, notes: str = "") -> int:
        """Set a module sub-metric rating (clamped to 0-5) and notes."""
        stored = self._module_category.set_rating(dimension, rating, notes)
        self.touch()
        return stored
    
    def set_general_fact(self, field: str, value):
        """Set an observed site fact such as the daily foot traffic count."""
        if field not in GENERAL_FACT_FIELDS:
            raise UnknownMetricError(field, "general facts")
        setattr(self._require_general(), field, value)
        self.touch()
    
    def set_financial_input(self, field: str, value):
        """Set one financial input. Range problems are reported by validate()."""
        if field not in FinancialInputs.field_names():
            raise UnknownMetricError(field, "financial inputs")
        setattr(self.financials, field, value)
        self.touch()
    
    def replace_module_category(self, replacement: Union[ModuleCategory, ModuleType, str]) -> ModuleCategory:
        """
        Swap in a different module category, which changes the module type.
        
        Ratings of the previous category are discarded with it.
        
        Args:
            replacement: A ModuleCategory instance, or a module type for a fresh one
        
        Returns:
            The new module category
        """
        if not isinstance(replacement, ModuleCategory):
            replacement = new_module_category(replacement)
        previous = self.module_type
        self._module_category = replacement
        self.touch()
        logger.info(f"Location {self.name!r} module changed from {previous.value} to {replacement.module_type.value}")
        return replacement
    
    # Read
    
    def module_score(self, category: Optional[ModuleCategory] = None, policy: Optional[ScoringPolicy] = None) -> float:
        """
        Module category average on the 0-5 scale.
        
        Raises:
            ModuleTypeMismatchError: If category is not of this location's module type
        """
        category = category if category is not None else self._module_category
        if category.module_type != self.module_type:
            raise ModuleTypeMismatchError(
                f"{category.module_type.value} category given for {self.module_type.value} location {self.name!r}"
            )
        return compute_module_score(category, policy or self.policy)
    
    def calculate_overall_score(self, policy: Optional[ScoringPolicy] = None) -> float:
        """Overall weighted score restated on the 0-5 scale (0.0 without a General category)."""
        if self.general is None:
            return 0.0
        policy = policy or self.policy
        return compute_overall_score(self.general, self.module_score(policy=policy), policy) * 5.0
    
    def get_decision(self, policy: Optional[ScoringPolicy] = None) -> Decision:
        policy = policy or self.policy
        return map_to_decision(self.calculate_overall_score(policy) / 5.0, policy)
    
    def score_breakdown(self, policy: Optional[ScoringPolicy] = None) -> List[ScoreContribution]:
        """Per-dimension contributions behind calculate_overall_score()."""
        policy = policy or self.policy
        general = self.general if self.general is not None else GeneralCategory()
        return explain_score(general, self.module_score(policy=policy), policy)
    
    def get_financial_projection(self) -> FinancialProjection:
        foot_traffic = self.general.foot_traffic_daily_count if self.general is not None else 0
        return project_financials(self.financials, foot_traffic)
    
    def is_complete(self) -> bool:
        """
        True when the five core General dimensions are rated and the module
        category has at least one rating. Financial inputs are not considered.
        """
        if self.general is None:
            return False
        general_complete = all(is_rated(self.general.get_rating(key)) for key in rules.CORE_GENERAL_METRICS)
        return general_complete and self._module_category.rated_count() > 0
    
    # Validation
    
    def validate(self, policy: Optional[ScoringPolicy] = None) -> ValidationResult:
        return validate_location(self, policy or self.policy)
    
    def validation_warnings(self, policy: Optional[ScoringPolicy] = None) -> List[str]:
        return self.validate(policy).warnings
    
    def validate_before_save(self, policy: Optional[ScoringPolicy] = None) -> ValidationResult:
        """
        Validate and raise if anything blocks saving; warnings do not block.
        
        Raises:
            ValidationError: With every error found, plus the warnings
        """
        result = self.validate(policy)
        if not result.is_valid:
            raise ValidationError(result.errors, result.warnings)
        return result


def create_location_aggregate(
    name: str,
    address: str,
    module_type: Union[ModuleType, str],
    comment: str = "",
    policy: ScoringPolicy = DEFAULT_POLICY,
    financials: Optional[FinancialInputs] = None
) -> LocationAggregate:
    """
    Create a location with every rating unrated and default financial inputs.
    
    Args:
        name: Site name
        address: Street address
        module_type: Office, Hospital, School or Residential
        comment: Optional free-text comment
        policy: Scoring policy used by the aggregate's read operations
        financials: Financial inputs (documented defaults when omitted)
    
    Returns:
        New LocationAggregate
    """
    location = LocationAggregate(
        name=name,
        address=address,
        module_category=new_module_category(module_type),
        general=GeneralCategory(),
        financials=financials,
        comment=comment,
        policy=policy,
    )
    logger.debug(f"Created {location!r}")
    return location
