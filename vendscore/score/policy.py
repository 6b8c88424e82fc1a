"""Scoring policy: the weight table, bands and keyword tiers as one value."""
from types import MappingProxyType
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vendscore.config import Settings
from vendscore.score import rules
from vendscore.score.rules import KeywordTiers


def _freeze_tiers(tiers) -> tuple:
    return tuple((score, tuple(keywords)) for score, keywords in tiers)


class ScoringPolicy(BaseModel):
    """
    Immutable scoring configuration threaded through every scoring call.
    
    Defaults reproduce the standard weight table, decision bands and keyword
    tiers. Build a variant with ``policy.model_copy(update={...})`` or from
    environment settings with ``ScoringPolicy.from_settings``.
    
    Mapping and tier fields are stored read-only, so a policy shared by many
    locations cannot be edited in place.
    """
    
    model_config = ConfigDict(frozen=True, validate_default=True)
    
    weights: Dict[str, float] = Field(default_factory=lambda: dict(rules.SCORE_WEIGHTS))
    placeholder_ratings: Dict[str, float] = Field(
        default_factory=lambda: {dim: rules.PLACEHOLDER_RATING for dim in rules.PLACEHOLDER_DIMENSIONS}
    )
    greenlight_min: float = rules.GREENLIGHT_MIN
    watchlist_min: float = rules.WATCHLIST_MIN
    keyword_tiers: Dict[str, KeywordTiers] = Field(
        default_factory=lambda: {dim: list(tiers) for dim, tiers in rules.KEYWORD_TIERS.items()}
    )
    module_keyword_tiers: KeywordTiers = Field(default_factory=lambda: list(rules.MODULE_KEYWORD_TIERS))
    default_text_score: int = rules.DEFAULT_TEXT_SCORE
    general_min_rated: int = rules.GENERAL_MIN_RATED
    module_min_rated: int = rules.MODULE_MIN_RATED
    
    @field_validator("weights", "placeholder_ratings")
    @classmethod
    def _freeze_mapping(cls, value):
        return MappingProxyType(dict(value))
    
    @field_validator("keyword_tiers")
    @classmethod
    def _freeze_keyword_tiers(cls, value):
        return MappingProxyType({dim: _freeze_tiers(tiers) for dim, tiers in value.items()})
    
    @field_validator("module_keyword_tiers")
    @classmethod
    def _freeze_module_tiers(cls, value):
        return _freeze_tiers(value)
    
    @model_validator(mode="after")
    def _check_consistency(self):
        if any(weight < 0 for weight in self.weights.values()):
            raise ValueError("weights must be non-negative")
        if self.total_weight <= 0:
            raise ValueError("weights must sum to a positive total")
        missing = set(rules.SCORE_WEIGHTS) - set(self.weights)
        if missing:
            raise ValueError(f"weights missing dimensions: {sorted(missing)}")
        if self.watchlist_min > self.greenlight_min:
            raise ValueError("watchlist_min must not exceed greenlight_min")
        return self
    
    @property
    def total_weight(self) -> float:
        return sum(self.weights.values())
    
    def tiers_for(self, dimension: str) -> KeywordTiers:
        """Keyword tiers for a General dimension, or the generic module tiers."""
        return self.keyword_tiers.get(dimension, self.module_keyword_tiers)
    
    @classmethod
    def from_settings(cls, config: Settings) -> "ScoringPolicy":
        """Build a policy using the environment-tunable values from settings."""
        return cls(
            placeholder_ratings={
                rules.PAYBACK_VS_TARGET: config.placeholder_payback_rating,
                rules.ROUTE_CLUSTER_FIT: config.placeholder_route_fit_rating,
                rules.INSTALL_COMPLEXITY: config.placeholder_install_rating,
            },
            general_min_rated=config.general_min_rated,
            module_min_rated=config.module_min_rated,
        )


DEFAULT_POLICY = ScoringPolicy()
