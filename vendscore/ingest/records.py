"""Build a location aggregate from a raw input record."""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from vendscore.models.definitions import GENERAL_DEFINITIONS, MODULE_DEFINITIONS, ModuleType
from vendscore.models.location import LocationAggregate, create_location_aggregate
from vendscore.score.policy import DEFAULT_POLICY, ScoringPolicy
from vendscore.utils.fuzzy import map_labels

logger = logging.getLogger(__name__)

IDENTITY_LABELS: Dict[str, List[str]] = {
    "name": ["NAME", "LOCATION NAME", "SITE NAME"],
    "address": ["ADDRESS", "STREET ADDRESS", "SITE ADDRESS"],
    "comment": ["COMMENT", "COMMENTS"],
}

MODULE_TYPE_LABELS = ["MODULE TYPE", "MODULE", "LOCATION TYPE", "SITE TYPE", "TYPE"]

FACT_LABELS: Dict[str, List[str]] = {
    "foot_traffic_daily_count": ["FOOT TRAFFIC DAILY COUNT", "FOOT TRAFFIC DAILY", "DAILY FOOT TRAFFIC"],
    "target_demographic_fit_text": ["TARGET DEMOGRAPHIC FIT", "DEMOGRAPHIC FIT"],
    "nearby_competition_text": ["NEARBY COMPETITION"],
    "host_commission_fraction": ["HOST COMMISSION FRACTION", "HOST COMMISSION PCT"],
}

FINANCIAL_LABELS: Dict[str, List[str]] = {
    "avg_ticket_price": ["AVG TICKET PRICE", "AVG TICKET", "AVERAGE TICKET"],
    "capture_rate_fraction": ["CAPTURE RATE FRACTION", "CAPTURE RATE", "CAPTURE PCT"],
    "days_open_per_month": ["DAYS OPEN PER MONTH", "DAYS OPEN", "DAYS"],
    "cost_of_goods_per_unit": ["COST OF GOODS PER UNIT", "COGS"],
    "variable_cost_per_unit": ["VARIABLE COST PER UNIT", "VARIABLE COSTS", "VAR OP"],
    "route_cost_per_visit": ["ROUTE COST PER VISIT", "ROUTE COST"],
    "route_visits_per_month": ["ROUTE VISITS PER MONTH", "ROUTE VISITS", "VISITS"],
    "capital_expense": ["CAPITAL EXPENSE", "CAPEX"],
}

_INTEGER_FIELDS = {"foot_traffic_daily_count", "days_open_per_month", "route_visits_per_month"}


@dataclass
class RecordImport:
    """Location built from a record, with keys and values that were not used."""
    location: LocationAggregate
    unmapped_keys: List[str] = field(default_factory=list)
    problems: List[str] = field(default_factory=list)


def _rating_labels(definitions) -> Dict[str, List[str]]:
    labels = {}
    for key, definition in definitions.items():
        labels[f"{key}:rating"] = [f"{key} rating", f"{definition.title} rating"]
        labels[f"{key}:notes"] = [f"{key} notes", f"{definition.title} notes"]
    return labels


def _to_number(field_name: str, value):
    number = float(value)
    return int(number) if field_name in _INTEGER_FIELDS else number


def _find_module_type(record: Mapping) -> Tuple[ModuleType, str]:
    mapping = map_labels({"module_type": MODULE_TYPE_LABELS}, list(record))
    if "module_type" not in mapping:
        raise ValueError("Record has no module type field")
    label = mapping["module_type"]
    return ModuleType(str(record[label]).strip().lower()), label


def build_location_from_record(
    record: Mapping,
    policy: ScoringPolicy = DEFAULT_POLICY,
    threshold: float = 92.0
) -> RecordImport:
    """
    Create a location from a flat record supplied by a form or import.
    
    Keys may be canonical names ("foot_traffic_rating") or human labels
    ("Foot Traffic Rating"); all keys are matched exactly first, then
    fuzzily. Values go through the aggregate's narrow setters, so ratings are
    clamped and range problems surface later in validate().
    
    Args:
        record: Mapping of field label to raw value
        policy: Scoring policy for the new location
        threshold: Minimum fuzzy similarity (0-100) for a label match
    
    Returns:
        RecordImport with the location, unused keys and value problems
    
    Raises:
        ValueError: If the record has no recognizable module type
    """
    module_type, module_label = _find_module_type(record)
    
    expected: Dict[str, List[str]] = {}
    expected.update({f"id:{k}": v for k, v in IDENTITY_LABELS.items()})
    expected.update({f"general:{k}": v for k, v in _rating_labels(GENERAL_DEFINITIONS).items()})
    expected.update({f"module:{k}": v for k, v in _rating_labels(MODULE_DEFINITIONS[module_type]).items()})
    expected.update({f"fact:{k}": v for k, v in FACT_LABELS.items()})
    expected.update({f"financial:{k}": v for k, v in FINANCIAL_LABELS.items()})
    
    mapping = map_labels(expected, [k for k in record if k != module_label], threshold)
    
    def value_for(canonical, default=""):
        label = mapping.get(canonical)
        value = record[label] if label is not None else None
        return default if value is None else value
    
    location = create_location_aggregate(
        name=str(value_for("id:name")),
        address=str(value_for("id:address")),
        module_type=module_type,
        comment=str(value_for("id:comment")),
        policy=policy,
    )
    result = RecordImport(location=location)
    
    setters = {
        "general": (location.set_general_rating, location.general),
        "module": (location.set_module_rating, location.module_category),
    }
    
    for canonical, label in mapping.items():
        group, _, name = canonical.partition(":")
        value = record[label]
        
        if group in setters:
            setter, category = setters[group]
            key, _, part = name.partition(":")
            if part == "notes":
                rating = category.rejected_ratings().get(key, category.get_rating(key))
                setter(key, rating, "" if value is None else str(value))
                continue
            try:
                rating = int(round(float(value))) if value not in (None, "") else 0
            except (TypeError, ValueError):
                result.problems.append(f"{label}: {value!r} is not a rating")
                continue
            setter(key, rating, category.get_notes(key))
        
        elif group in ("fact", "financial"):
            setter = location.set_general_fact if group == "fact" else location.set_financial_input
            if name.endswith("_text"):
                setter(name, "" if value is None else str(value))
                continue
            if value in (None, ""):
                continue
            try:
                setter(name, _to_number(name, value))
            except (TypeError, ValueError):
                result.problems.append(f"{label}: {value!r} is not a number")
    
    used = {module_label, *mapping.values()}
    result.unmapped_keys = [k for k in record if k not in used]
    if result.unmapped_keys:
        logger.info(f"Record for {location.name!r}: {len(result.unmapped_keys)} unmapped keys {result.unmapped_keys}")
    return result
