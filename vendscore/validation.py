"""Validate-before-save checks for a location aggregate."""
import logging
from dataclasses import dataclass, field
from typing import List

from vendscore.models.financials import FinancialInputs
from vendscore.score.policy import DEFAULT_POLICY, ScoringPolicy
from vendscore.score.ratings import is_valid_rating
from vendscore.utils.addresses import has_street_line

logger = logging.getLogger(__name__)

_NON_NEGATIVE_FIELDS = {
    "avg_ticket_price": "Average ticket price",
    "cost_of_goods_per_unit": "Cost of goods per unit",
    "variable_cost_per_unit": "Variable cost per unit",
    "route_cost_per_visit": "Route cost per visit",
    "route_visits_per_month": "Route visits per month",
    "capital_expense": "Capital expense",
}

_FRACTION_FIELDS = {
    "capture_rate_fraction": "Capture rate",
    "host_commission_fraction": "Host commission",
}


@dataclass
class ValidationResult:
    """Collected problems: errors block saving, warnings do not."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    
    @property
    def is_valid(self) -> bool:
        return not self.errors
    
    def extend(self, other: "ValidationResult"):
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_ratings(category, result: ValidationResult):
    rejected = category.rejected_ratings()
    for key, rating in category.ratings().items():
        title = category.definitions[key].title
        if key in rejected:
            result.errors.append(f"{title} rating must be between 1 and 5 (0 = unrated), got {rejected[key]}")
        elif not is_valid_rating(rating):
            result.errors.append(f"{title} rating must be between 1 and 5 (0 = unrated), got {rating}")


def validate_general(general, policy: ScoringPolicy = DEFAULT_POLICY) -> ValidationResult:
    """Check General category facts and ratings."""
    result = ValidationResult()
    
    foot_traffic = general.foot_traffic_daily_count
    if not _is_number(foot_traffic):
        result.errors.append("Foot traffic must be a number")
    elif foot_traffic < 0:
        result.errors.append("Foot traffic cannot be negative")
    elif foot_traffic == 0:
        result.warnings.append("Foot traffic count is zero; financial projection will be empty")
    
    if not _is_number(general.host_commission_fraction):
        result.errors.append("Host commission must be a number")
    elif not 0 <= general.host_commission_fraction <= 1:
        result.errors.append("Host commission must be between 0 and 1")
    
    _check_ratings(general, result)
    
    if not general.has_sufficient_data(policy):
        result.warnings.append(
            f"Only {general.rated_count()} general metrics rated; at least "
            f"{policy.general_min_rated} needed for a general average"
        )
    return result


def validate_module(category) -> ValidationResult:
    """Check module category ratings."""
    result = ValidationResult()
    _check_ratings(category, result)
    if category.rated_count() == 0:
        result.warnings.append(f"No {category.module_type.display_name} metrics rated")
    return result


def validate_financials(inputs: FinancialInputs) -> ValidationResult:
    """Check financial inputs for negative amounts and out-of-range fractions."""
    result = ValidationResult()
    
    for name, label in _NON_NEGATIVE_FIELDS.items():
        value = getattr(inputs, name)
        if not _is_number(value):
            result.errors.append(f"{label} must be a number")
        elif value < 0:
            result.errors.append(f"{label} cannot be negative")
    
    for name, label in _FRACTION_FIELDS.items():
        value = getattr(inputs, name)
        if not _is_number(value):
            result.errors.append(f"{label} must be a number")
        elif not 0 <= value <= 1:
            result.errors.append(f"{label} must be between 0 and 1")
    
    if not _is_number(inputs.days_open_per_month):
        result.errors.append("Days open per month must be a number")
    elif inputs.days_open_per_month <= 0:
        result.errors.append("Days open per month must be greater than 0")
    
    return result


def validate_location(location, policy: ScoringPolicy = DEFAULT_POLICY) -> ValidationResult:
    """
    Run every check on a location and collect the results.
    
    Nothing is raised here; callers decide whether errors block a save
    (see LocationAggregate.validate_before_save).
    
    Args:
        location: LocationAggregate to check
        policy: Scoring policy (for minimum rated counts)
    
    Returns:
        ValidationResult with all errors and warnings
    """
    result = ValidationResult()
    
    name = str(location.name or "").strip()
    address = str(location.address or "").strip()
    
    if not name:
        result.errors.append("Location name is required")
    
    if not address:
        result.errors.append("Location address is required")
    elif not has_street_line(address):
        result.warnings.append("Address has no recognizable street number and name")
    
    facts_numeric = True
    if location.general is None:
        result.warnings.append("General metrics not initialized")
    else:
        result.extend(validate_general(location.general, policy))
        facts_numeric = (
            _is_number(location.general.foot_traffic_daily_count)
            and _is_number(location.general.host_commission_fraction)
        )
    
    result.extend(validate_module(location.module_category))
    
    financial_result = validate_financials(location.financials)
    result.extend(financial_result)
    
    if location.general is not None and facts_numeric and financial_result.is_valid:
        general_commission = location.general.host_commission_fraction
        if general_commission and general_commission != location.financials.host_commission_fraction:
            result.warnings.append(
                f"Host commission differs between site facts ({general_commission:.0%}) "
                f"and financial inputs ({location.financials.host_commission_fraction:.0%})"
            )
        if location.get_financial_projection().net_monthly < 0:
            result.warnings.append("Projected net monthly profit is negative")
    
    logger.debug(f"Validated {location.name!r}: {len(result.errors)} errors, {len(result.warnings)} warnings")
    return result
