"""Transaction-economics inputs for a location."""
from dataclasses import dataclass, fields
from typing import List

from vendscore.config import Settings


@dataclass
class FinancialInputs:
    """Per-location economics; monetary values are plain decimal amounts."""
    avg_ticket_price: float = 2.50
    capture_rate_fraction: float = 0.05  # Share of daily foot traffic that buys
    days_open_per_month: int = 30
    cost_of_goods_per_unit: float = 0.0
    variable_cost_per_unit: float = 0.0
    route_cost_per_visit: float = 0.0
    route_visits_per_month: int = 0
    host_commission_fraction: float = 0.0
    capital_expense: float = 0.0  # One-time
    
    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]
    
    @classmethod
    def from_settings(cls, config: Settings) -> "FinancialInputs":
        """Defaults taken from environment-tunable settings."""
        return cls(
            avg_ticket_price=config.default_avg_ticket_price,
            capture_rate_fraction=config.default_capture_rate,
            days_open_per_month=config.default_days_open,
        )
    
    @property
    def unit_cost(self) -> float:
        """Cost of goods plus variable operating cost per vend."""
        return self.cost_of_goods_per_unit + self.variable_cost_per_unit
    
    @property
    def net_ticket(self) -> float:
        """Ticket price after host commission."""
        return self.avg_ticket_price * (1 - self.host_commission_fraction)
