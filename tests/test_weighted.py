"""Unit tests for the weighted score engine and decision bands."""
import pytest

from vendscore.models.categories import GeneralCategory, OfficeCategory
from vendscore.score import rules
from vendscore.score.policy import DEFAULT_POLICY, ScoringPolicy
from vendscore.score.reasons import compose_reasons, reason_codes
from vendscore.score.weighted import (
    Decision,
    ScoreContribution,
    compute_module_score,
    compute_overall_score,
    explain_score,
    map_to_decision,
)


def _general_all(rating):
    general = GeneralCategory()
    for key in rules.GENERAL_METRICS:
        general.set_rating(key, rating)
    return general


class TestWeightTable:
    """Test weight table shape."""
    
    def test_weights_sum_to_one(self):
        """Test the standard table totals 1.00."""
        assert sum(rules.SCORE_WEIGHTS.values()) == pytest.approx(1.0)
        assert DEFAULT_POLICY.total_weight == pytest.approx(1.0)
    
    def test_placeholders_default_to_three(self):
        """Test the three not-yet-assessed dimensions sit at 3.0."""
        assert dict(DEFAULT_POLICY.placeholder_ratings) == {
            rules.PAYBACK_VS_TARGET: 3.0,
            rules.ROUTE_CLUSTER_FIT: 3.0,
            rules.INSTALL_COMPLEXITY: 3.0,
        }


class TestOverallScore:
    """Test weighted score computation."""
    
    def test_all_fours(self):
        """Test all general 4s with module 4.0 lands in Greenlight."""
        score = compute_overall_score(_general_all(4), 4.0)
        # 0.63*4 + 0.12*3 + 0.25*4 = 3.88 out of 5
        assert score == pytest.approx(0.776)
        assert map_to_decision(score) == Decision.GREENLIGHT
    
    def test_nothing_rated(self):
        """Test an empty location scores only its placeholders."""
        score = compute_overall_score(GeneralCategory(), 0.0)
        assert score == pytest.approx(0.36 / 5)
        assert map_to_decision(score) == Decision.PASS
    
    def test_unrated_dimension_keeps_weight(self):
        """Test an unrated dimension drags the score down instead of being skipped."""
        general = _general_all(4)
        general.set_rating(rules.VISIBILITY, 0)
        score = compute_overall_score(general, 4.0)
        assert score == pytest.approx((3.88 - 0.20) / 5)
        assert map_to_decision(score) == Decision.WATCHLIST
    
    def test_score_in_unit_range(self):
        """Test maximal inputs cap the score below 1 due to placeholders."""
        score = compute_overall_score(_general_all(5), 5.0)
        assert 0.0 <= score <= 1.0
        assert score == pytest.approx((0.63 * 5 + 0.36 + 0.25 * 5) / 5)
    
    def test_placeholder_override(self):
        """Test placeholder ratings come from the policy."""
        policy = DEFAULT_POLICY.model_copy(update={
            "placeholder_ratings": {dim: 5.0 for dim in rules.PLACEHOLDER_DIMENSIONS}
        })
        score = compute_overall_score(_general_all(4), 4.0, policy)
        assert score == pytest.approx(4.12 / 5)
    
    def test_explain_matches_total(self):
        """Test contributions add up to the weighted sum."""
        contributions = explain_score(_general_all(4), 4.0)
        assert len(contributions) == len(rules.SCORE_WEIGHTS)
        total = sum(c.contribution for c in contributions)
        assert total / 5 == pytest.approx(compute_overall_score(_general_all(4), 4.0))
        sources = {c.dimension: c.source for c in contributions}
        assert sources[rules.PAYBACK_VS_TARGET] == "placeholder"
        assert sources[rules.MODULE_SPECIFIC] == "module"
        assert sources[rules.FOOT_TRAFFIC] == "manual"
    
    def test_module_score_from_category(self):
        """Test module score is the category average."""
        office = OfficeCategory()
        office.set_rating("common_areas", 4)
        office.set_rating("layout_type", 2)
        assert compute_module_score(office) == pytest.approx(3.0)


class TestDecisionBands:
    """Test band boundaries."""
    
    def test_lower_bounds_inclusive(self):
        """Test each band includes its lower bound."""
        assert map_to_decision(0.75) == Decision.GREENLIGHT
        assert map_to_decision(0.7499) == Decision.WATCHLIST
        assert map_to_decision(0.60) == Decision.WATCHLIST
        assert map_to_decision(0.5999) == Decision.PASS
        assert map_to_decision(0.0) == Decision.PASS
        assert map_to_decision(1.0) == Decision.GREENLIGHT
    
    def test_display_attributes(self):
        """Test display names and colors."""
        assert Decision.GREENLIGHT.display_name == "Greenlight"
        assert Decision.WATCHLIST.color == "yellow"
        assert Decision.PASS.color == "red"
    
    def test_custom_thresholds(self):
        """Test thresholds come from the policy."""
        policy = ScoringPolicy(greenlight_min=0.9, watchlist_min=0.5)
        assert map_to_decision(0.8, policy) == Decision.WATCHLIST


class TestPolicyValidation:
    """Test policy consistency checks."""
    
    def test_negative_weight(self):
        """Test negative weights are rejected."""
        weights = dict(rules.SCORE_WEIGHTS, foot_traffic=-0.1)
        with pytest.raises(ValueError):
            ScoringPolicy(weights=weights)
    
    def test_missing_dimension(self):
        """Test a weight table missing a dimension is rejected."""
        weights = dict(rules.SCORE_WEIGHTS)
        del weights[rules.AMENITIES]
        with pytest.raises(ValueError):
            ScoringPolicy(weights=weights)
    
    def test_inverted_bands(self):
        """Test watchlist threshold above greenlight is rejected."""
        with pytest.raises(ValueError):
            ScoringPolicy(greenlight_min=0.5, watchlist_min=0.7)


class TestReasons:
    """Test reason codes and text."""
    
    def test_codes_and_text(self):
        """Test strong, unrated and weak dimensions each get a reason."""
        contributions = [
            ScoreContribution("foot_traffic", 5.0, 0.20, "manual"),
            ScoreContribution("visibility", 0.0, 0.05, "manual"),
            ScoreContribution("security", 2.0, 0.04, "manual"),
            ScoreContribution("amenities", 3.0, 0.02, "manual"),
        ]
        codes = reason_codes(contributions)
        assert codes == ["STRONG:foot_traffic", "UNRATED:visibility", "WEAK:security"]
        assert compose_reasons(codes, contributions) == (
            "Foot Traffic strong (5/5); Visibility not rated; Security weak (2/5)"
        )
    
    def test_placeholders_flagged(self):
        """Test placeholder dimensions are always called out."""
        codes = reason_codes(explain_score(_general_all(3), 3.0))
        assert "PLACEHOLDER:payback_vs_target" in codes
        assert "PLACEHOLDER:install_complexity" in codes
        assert not any(code.startswith("STRONG:") for code in codes)


class TestPolicyImmutability:
    """Test policies shared across locations stay fixed."""
    
    def test_shared_policy_is_read_only(self):
        """Test the default policy's tables cannot be edited in place."""
        with pytest.raises(TypeError):
            DEFAULT_POLICY.weights[rules.FOOT_TRAFFIC] = 0.0
        with pytest.raises(TypeError):
            DEFAULT_POLICY.placeholder_ratings[rules.PAYBACK_VS_TARGET] = 5.0
        with pytest.raises(TypeError):
            DEFAULT_POLICY.keyword_tiers[rules.COMPETITION] = ()
        assert isinstance(DEFAULT_POLICY.module_keyword_tiers, tuple)
        assert DEFAULT_POLICY.weights[rules.FOOT_TRAFFIC] == 0.20
    
    def test_constructed_policy_copies_input(self):
        """Test later edits to the caller's dict do not reach the policy."""
        weights = dict(rules.SCORE_WEIGHTS)
        policy = ScoringPolicy(weights=weights)
        weights[rules.FOOT_TRAFFIC] = 0.0
        assert policy.weights[rules.FOOT_TRAFFIC] == 0.20
