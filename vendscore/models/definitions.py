"""Metric titles, descriptions and per-star guidance for every category."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from vendscore.score import rules


class ModuleType(str, Enum):
    """Site type that selects the module-specific category."""
    OFFICE = "office"
    HOSPITAL = "hospital"
    SCHOOL = "school"
    RESIDENTIAL = "residential"
    
    @property
    def display_name(self) -> str:
        return self.value.capitalize()


GENERIC_STARS = ["Poor", "Below Average", "Average", "Good", "Excellent"]


@dataclass(frozen=True)
class MetricDefinition:
    """Display metadata for one rateable sub-metric."""
    key: str
    title: str
    description: str
    stars: List[str] = field(default_factory=lambda: list(GENERIC_STARS))
    
    def star_description(self, rating: int) -> str:
        """Guidance text for a 1-5 rating; empty for unrated or out of range."""
        if 1 <= rating <= len(self.stars):
            return self.stars[rating - 1]
        return ""


def _index(*definitions: MetricDefinition) -> Dict[str, MetricDefinition]:
    return {d.key: d for d in definitions}


_RESTRICTIONS = ["Many restrictions", "Several restrictions", "Some restrictions", "Few restrictions", "No restrictions"]
_FOOD_SERVICE = ["Full-service cafeteria", "Multiple food options", "Limited food options", "Basic vending only", "No food service"]

GENERAL_DEFINITIONS = _index(
    MetricDefinition(
        rules.FOOT_TRAFFIC, "Foot Traffic",
        "Daily people passing the site; the main driver of transaction volume.",
        ["<100 / day", "100-199 / day", "200-349 / day", "350-499 / day", "500+ / day"],
    ),
    MetricDefinition(
        rules.TARGET_DEMOGRAPHIC, "Audience Fit",
        "How closely the people on site match grab-and-go buyers.",
    ),
    MetricDefinition(
        rules.HOST_COMMISSION, "Commission",
        "Share of gross sales paid to the host; lower commission protects margin.",
        [">20%", "15-20%", "10-15%", "5-10%", "5% or less"],
    ),
    MetricDefinition(
        rules.COMPETITION, "Competition",
        "Nearby alternatives that pull purchases away from the machine.",
        ["Intense", "High", "Moderate", "Low", "None"],
    ),
    MetricDefinition(
        rules.VISIBILITY, "Visibility",
        "How easily passers-by see and reach the machine.",
    ),
    MetricDefinition(
        rules.SECURITY, "Security",
        "Exposure to theft and vandalism and the effect on uptime.",
    ),
    MetricDefinition(
        rules.PARKING_TRANSIT, "Access",
        "Ease of parking and loading for route service visits.",
    ),
    MetricDefinition(
        rules.AMENITIES, "Amenities",
        "Adjacent amenities (elevators, mailrooms, ATMs) that add dwell time.",
    ),
)

MODULE_DEFINITIONS: Dict[ModuleType, Dict[str, MetricDefinition]] = {
    ModuleType.OFFICE: _index(
        MetricDefinition(
            "common_areas", "Common Areas",
            "Break rooms, lounges and cafeterias where a machine can sit.",
            ["None", "Small kitchenette only", "Lounge or shared break area",
             "Lounge and cafe nook", "Lounge and cafeteria / multiple hubs"],
        ),
        MetricDefinition(
            "hours_access", "Hours & Access",
            "Building access hours and flexibility.",
            ["9-5 only, strict access", "9-7, limited evenings", "Extended weekdays",
             "Weekdays and some weekends", "24/7 with tenant badge"],
        ),
        MetricDefinition(
            "tenant_amenities", "Tenant Amenities",
            "Existing food and beverage options for tenants.",
            ["Full cafeteria / subsidized food", "Multiple food vendors",
             "Limited cafe / snack cart", "Coffee only", "None"],
        ),
        MetricDefinition(
            "proximity_hub_transit", "Hub Proximity & Transit",
            "Closeness to transport hubs and transit options.",
            ["Remote, poor transit", "Edge of hub, infrequent transit", "Near hub or decent transit",
             "In hub with good transit", "Prime hub at a major interchange"],
        ),
        MetricDefinition(
            "branding_restrictions", "Branding Restrictions",
            "Limits on signage and machine wraps.",
            ["Severe", "Heavy", "Moderate", "Light", "Minimal or none"],
        ),
        MetricDefinition(
            "layout_type", "Layout Type",
            "Building layout and tenant density.",
            ["Single-tenant, low density", "Single-tenant, medium density", "Multi-tenant (2-3)",
             "Multi-tenant (4-6)", "Multi-tenant (7+)"],
        ),
    ),
    ModuleType.HOSPITAL: _index(
        MetricDefinition(
            "patient_volume", "Patient Volume",
            "Daily patient volume and flow.",
            ["<100 patients/day", "100-300 patients/day", "300-500 patients/day",
             "500-800 patients/day", "800+ patients/day"],
        ),
        MetricDefinition(
            "staff_size", "Staff Size",
            "Number of staff on site.",
            ["<50 staff", "50-100 staff", "100-200 staff", "200-400 staff", "400+ staff"],
        ),
        MetricDefinition(
            "visitor_traffic", "Visitor Traffic",
            "Visitor flow and patterns.",
            ["Minimal", "Low", "Moderate", "High", "Very high"],
        ),
        MetricDefinition("food_service", "Food Service", "Existing food service options.", _FOOD_SERVICE),
        MetricDefinition(
            "vending_restrictions", "Vending Restrictions",
            "Rules on machine placement and product mix.", _RESTRICTIONS,
        ),
        MetricDefinition(
            "hours_of_operation", "Hours of Operation",
            "Building and department operating hours.",
            ["Limited hours", "Standard business hours", "Extended hours", "Long hours", "24/7 operation"],
        ),
    ),
    ModuleType.SCHOOL: _index(
        MetricDefinition(
            "student_population", "Student Population",
            "Enrolled students on the campus.",
            ["<500 students", "500-999 students", "1,000-1,999 students",
             "2,000-4,999 students", "5,000+ students"],
        ),
        MetricDefinition(
            "staff_size", "Staff Size",
            "Number of staff on the campus.",
            ["<50 staff", "50-99 staff", "100-199 staff", "200-399 staff", "400+ staff"],
        ),
        MetricDefinition("food_service", "Food Service", "Existing food service options.", _FOOD_SERVICE),
        MetricDefinition(
            "vending_restrictions", "Vending Restrictions",
            "District or campus rules on vending and product mix.", _RESTRICTIONS,
        ),
        MetricDefinition(
            "hours_of_operation", "Hours of Operation",
            "School operating hours and after-hours access.",
            ["Limited hours", "Standard school hours", "Extended hours", "Long hours", "24/7 access"],
        ),
        MetricDefinition("campus_layout", "Campus Layout", "Building distribution and student flow."),
    ),
    ModuleType.RESIDENTIAL: _index(
        MetricDefinition(
            "unit_count", "Unit Count",
            "Residential units in the building.",
            ["<100 units", "100-149 units", "150-249 units", "250-349 units", "350+ units"],
        ),
        MetricDefinition(
            "occupancy_rate", "Occupancy Rate",
            "Current occupancy and tenant stability.",
            ["<80%", "80-89%", "90-94%", "95-97%", "98-100%"],
        ),
        MetricDefinition(
            "demographics", "Demographics",
            "Resident profile relative to the product mix.",
            ["Limited appeal", "Some appeal", "Moderate appeal", "High appeal", "Very high appeal"],
        ),
        MetricDefinition(
            "food_service", "Food Service", "Food options in or next to the building.",
            ["Full-service options", "Multiple alternatives", "Limited alternatives",
             "Basic options only", "No food service"],
        ),
        MetricDefinition(
            "vending_restrictions", "Vending Restrictions",
            "Property management rules on placement.", _RESTRICTIONS,
        ),
        MetricDefinition(
            "hours_of_operation", "Hours of Operation",
            "Common-area access hours.",
            ["Limited hours", "Standard hours", "Extended hours", "Long hours", "24/7 access"],
        ),
        MetricDefinition("building_layout", "Building Layout", "Common-area layout and machine sight lines."),
    ),
}


def get_definition(key: str, module_type: Optional[ModuleType] = None) -> Optional[MetricDefinition]:
    """Look up a General definition, or a module one when module_type is given."""
    if module_type is None:
        return GENERAL_DEFINITIONS.get(key)
    return MODULE_DEFINITIONS[ModuleType(module_type)].get(key)
