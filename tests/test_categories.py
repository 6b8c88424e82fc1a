"""Unit tests for General and module metric categories."""
import pytest

from vendscore.errors import UnknownMetricError
from vendscore.models.categories import (
    GeneralCategory,
    HospitalCategory,
    ModuleCategory,
    OfficeCategory,
    ResidentialCategory,
    SchoolCategory,
    new_module_category,
)
from vendscore.models.definitions import ModuleType, get_definition
from vendscore.score.policy import ScoringPolicy


class TestRatingSetters:
    """Test permissive rating setters."""
    
    def test_set_rating_clamps(self):
        """Test out-of-range ratings are clamped, not rejected."""
        general = GeneralCategory()
        assert general.set_rating("security", 9) == 5
        assert general.get_rating("security") == 5
        assert general.set_rating("security", -2) == 0
        assert general.get_rating("security") == 0
    
    def test_out_of_range_remembered(self):
        """Test the raw out-of-range value is kept until an in-range set."""
        general = GeneralCategory()
        general.set_rating("security", 9)
        general.set_rating("amenities", 4)
        assert general.rejected_ratings() == {"security": 9}
        general.set_rating("security", 3)
        assert general.rejected_ratings() == {}
    
    def test_notes_stored_verbatim(self):
        """Test notes are kept exactly as given."""
        general = GeneralCategory()
        general.set_rating("visibility", 4, "  Faces the main Elevator bank  ")
        assert general.get_notes("visibility") == "  Faces the main Elevator bank  "
    
    def test_unknown_metric(self):
        """Test unknown keys are a hard failure."""
        office = OfficeCategory()
        with pytest.raises(UnknownMetricError):
            office.set_rating("patient_volume", 3)
        with pytest.raises(KeyError):
            GeneralCategory().get_rating("parking")


class TestGeneralAverage:
    """Test the General insufficient-data policy."""
    
    def test_two_rated_is_insufficient(self):
        """Test fewer than 3 rated metrics yields 0.0."""
        general = GeneralCategory()
        general.set_rating("foot_traffic", 5)
        general.set_rating("security", 4)
        assert general.rated_count() == 2
        assert general.average_manual_rating() == 0.0
        assert general.average_rating() == 0.0
        assert general.has_sufficient_data() is False
    
    def test_three_rated_is_mean(self):
        """Test exactly 3 rated metrics yields their mean."""
        general = GeneralCategory()
        general.set_rating("foot_traffic", 4)
        general.set_rating("security", 3)
        general.set_rating("amenities", 5)
        assert general.average_manual_rating() == pytest.approx(4.0)
        assert general.has_sufficient_data() is True
    
    def test_policy_minimum(self):
        """Test the minimum comes from the policy when averaging by policy."""
        general = GeneralCategory()
        general.set_rating("foot_traffic", 2)
        policy = ScoringPolicy(general_min_rated=1)
        assert general.average_rating(policy) == pytest.approx(2.0)


class TestModuleCategories:
    """Test module variants."""
    
    def test_variant_metric_sets(self):
        """Test each variant carries its own fixed metrics."""
        assert OfficeCategory().metric_keys == [
            "common_areas", "hours_access", "tenant_amenities",
            "proximity_hub_transit", "branding_restrictions", "layout_type",
        ]
        assert "patient_volume" in HospitalCategory().metric_keys
        assert "campus_layout" in SchoolCategory().metric_keys
        assert ResidentialCategory().metric_count() == 7
    
    def test_single_rating_averages(self):
        """Test module categories average any count of rated metrics."""
        office = OfficeCategory()
        assert office.average_rating() == 0.0
        office.set_rating("layout_type", 2)
        assert office.average_rating() == pytest.approx(2.0)
        office.set_rating("hours_access", 5)
        assert office.average_rating() == pytest.approx(3.5)
    
    def test_completion_percentage(self):
        """Test completion is rated over total."""
        office = OfficeCategory()
        for key in ["common_areas", "hours_access", "layout_type"]:
            office.set_rating(key, 3)
        assert office.get_rated_metric_count() == 3
        assert office.completion_percentage() == pytest.approx(0.5)
    
    def test_factory(self):
        """Test factory returns the variant for a type or its string value."""
        assert isinstance(new_module_category(ModuleType.HOSPITAL), HospitalCategory)
        assert isinstance(new_module_category("residential"), ResidentialCategory)
        with pytest.raises(ValueError):
            new_module_category("warehouse")
    
    def test_base_class_not_instantiable(self):
        """Test the bare base class needs a module type."""
        with pytest.raises(TypeError):
            ModuleCategory()


class TestInferredRatings:
    """Test display-only inferred ratings."""
    
    def test_general_inference_sources(self):
        """Test each dimension infers from its own source."""
        general = GeneralCategory(
            foot_traffic_daily_count=400,
            target_demographic_fit_text="Excellent match, young professionals",
            nearby_competition_text="Low competition",
            host_commission_fraction=0.12,
        )
        general.set_rating("security", 0, "Monitored by guards")
        assert general.inferred_rating("foot_traffic") == 4
        assert general.inferred_rating("host_commission") == 3
        assert general.inferred_rating("target_demographic") == 5
        assert general.inferred_rating("competition") == 4
        assert general.inferred_rating("security") == 5
        assert general.inferred_rating("parking_transit") == 3
    
    def test_inferred_does_not_override_manual(self):
        """Test inference leaves the manual rating untouched."""
        general = GeneralCategory()
        general.set_rating("visibility", 2, "Excellent sight lines")
        assert general.inferred_rating("visibility") == 5
        assert general.get_rating("visibility") == 2
    
    def test_inferred_average_of_empty_category(self):
        """Test empty category: no traffic (0), zero commission (5), six defaults (3)."""
        assert GeneralCategory().inferred_average() == 23 // 8
    
    def test_module_inference_from_notes(self):
        """Test module metrics infer from notes with generic tiers."""
        school = SchoolCategory()
        school.set_rating("food_service", 0, "Limited options")
        assert school.inferred_rating("food_service") == 2
        assert school.inferred_rating("campus_layout") == 3


class TestDescriptions:
    """Test star guidance lookups."""
    
    def test_specific_guidance(self):
        """Test module metrics use their own star guidance."""
        office = OfficeCategory()
        assert office.describe("common_areas", 5) == "Lounge and cafeteria / multiple hubs"
        office.set_rating("hours_access", 5)
        assert office.describe("hours_access") == "24/7 with tenant badge"
    
    def test_generic_guidance(self):
        """Test the generic scale where no specific guidance exists."""
        general = GeneralCategory()
        assert general.describe("visibility", 3) == "Average"
        assert general.describe("visibility", 0) == ""
    
    def test_definition_lookup(self):
        """Test definitions resolve by key and module type."""
        assert get_definition("foot_traffic").title == "Foot Traffic"
        assert get_definition("patient_volume", ModuleType.HOSPITAL).stars[4] == "800+ patients/day"
        assert get_definition("patient_volume") is None
