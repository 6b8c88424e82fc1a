"""
Monthly profit and loss projection for a vending location.

Pure functions over a FinancialInputs snapshot and the location's daily
foot traffic. Degenerate inputs (zero ticket price, non-positive margin,
non-positive net profit) never raise: they yield 0.0 or use a floored
divisor so a projection is always numeric.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Dict

from vendscore.models.financials import FinancialInputs

logger = logging.getLogger(__name__)

# Divisor floor for payback when net profit is zero or negative
MIN_NET_FOR_PAYBACK = 0.01


@dataclass(frozen=True)
class FinancialProjection:
    """Projected monthly figures; no currency rounding is applied."""
    tx_per_day: float
    gross_monthly: float
    product_costs: float
    route_costs: float
    commission: float
    net_monthly: float
    per_vend_margin: float
    breakeven_tx_day: float
    payback_months: float
    profit_margin_pct: float
    annual_roi_pct: float
    
    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def transactions_per_day(foot_traffic_daily_count: int, capture_rate_fraction: float) -> float:
    return foot_traffic_daily_count * capture_rate_fraction


def per_vend_margin(inputs: FinancialInputs) -> float:
    """Contribution per vend after commission and unit costs, as a fraction of ticket price."""
    if inputs.avg_ticket_price == 0:
        logger.warning("Average ticket price is zero; per-vend margin reported as 0")
        return 0.0
    return (inputs.net_ticket - inputs.unit_cost) / inputs.avg_ticket_price


def breakeven_transactions_per_day(inputs: FinancialInputs, route_costs: float) -> float:
    """Daily vends needed for per-vend contribution to cover monthly route costs."""
    denominator = inputs.days_open_per_month * (inputs.net_ticket - inputs.unit_cost)
    if denominator <= 0:
        logger.warning(f"Break-even denominator {denominator:.4f} is not positive; reported as 0")
        return 0.0
    return route_costs / denominator


def payback_months(capital_expense: float, net_monthly: float) -> float:
    """Months for net profit to repay capital; net profit is floored at 0.01."""
    if net_monthly <= 0 and capital_expense > 0:
        logger.warning(f"Net monthly profit {net_monthly:.2f} is not positive; payback uses floor {MIN_NET_FOR_PAYBACK}")
    return capital_expense / max(net_monthly, MIN_NET_FOR_PAYBACK)


def project_financials(inputs: FinancialInputs, foot_traffic_daily_count: int) -> FinancialProjection:
    """
    Project monthly gross, costs and net profit with break-even and payback.
    
    Args:
        inputs: Transaction economics for the location
        foot_traffic_daily_count: Daily foot traffic (from the General category)
    
    Returns:
        FinancialProjection; net_monthly may be negative
    """
    tx_per_day = transactions_per_day(foot_traffic_daily_count, inputs.capture_rate_fraction)
    monthly_vends = tx_per_day * inputs.days_open_per_month
    
    gross_monthly = inputs.avg_ticket_price * monthly_vends
    product_costs = inputs.unit_cost * monthly_vends
    route_costs = inputs.route_cost_per_visit * inputs.route_visits_per_month
    commission = inputs.host_commission_fraction * gross_monthly
    net_monthly = gross_monthly - product_costs - route_costs - commission
    
    profit_margin_pct = (net_monthly / gross_monthly * 100) if gross_monthly > 0 else 0.0
    annual_roi_pct = (net_monthly * 12 / inputs.capital_expense * 100) if inputs.capital_expense > 0 else 0.0
    
    projection = FinancialProjection(
        tx_per_day=tx_per_day,
        gross_monthly=gross_monthly,
        product_costs=product_costs,
        route_costs=route_costs,
        commission=commission,
        net_monthly=net_monthly,
        per_vend_margin=per_vend_margin(inputs),
        breakeven_tx_day=breakeven_transactions_per_day(inputs, route_costs),
        payback_months=payback_months(inputs.capital_expense, net_monthly),
        profit_margin_pct=profit_margin_pct,
        annual_roi_pct=annual_roi_pct,
    )
    logger.debug(f"Projected {tx_per_day:.1f} vends/day, net {net_monthly:.2f}/month")
    return projection
