"""Tiered commission calculations for agents and brokerages."""

from collections import defaultdict
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.models.agent import Commission
from src.utils.ids import utc_now


class CommissionTier(BaseModel):
    min_value: float
    max_value: Optional[float] = None
    agent_rate: float
    brokerage_rate: float


class CommissionCalculation(BaseModel):
    base_commission: float
    agent_commission: float
    brokerage_commission: float
    total_commission: float
    agent_percentage: float
    brokerage_percentage: float


class SplitCommission(BaseModel):
    listing_agent: CommissionCalculation
    selling_agent: CommissionCalculation
    total_commission: float


class MonthlyProjection(BaseModel):
    projected_commission: float
    projected_sales: int
    projected_value: float
    average_commission: float


class MonthAmount(BaseModel):
    month: str
    amount: float


class YearToDateSummary(BaseModel):
    total_commission: float
    total_sales: int
    average_commission: float
    monthly_breakdown: dict[str, float]
    top_months: list[MonthAmount]


class GoalPerformance(BaseModel):
    monthly_progress: float
    yearly_progress: float
    monthly_remaining: float
    yearly_remaining: float
    projected_yearly: float
    goal_status: str


DEFAULT_TIERS = [
    CommissionTier(min_value=0, max_value=100_000, agent_rate=0.025, brokerage_rate=0.025),
    CommissionTier(min_value=100_000, max_value=500_000, agent_rate=0.03, brokerage_rate=0.03),
    CommissionTier(min_value=500_000, max_value=1_000_000, agent_rate=0.035, brokerage_rate=0.035),
    CommissionTier(min_value=1_000_000, agent_rate=0.04, brokerage_rate=0.04),
]


def find_applicable_tier(property_value: float, tiers: list[CommissionTier]) -> CommissionTier:
    """First tier containing the value (bounds inclusive); the last tier otherwise."""
    for tier in tiers:
        if property_value >= tier.min_value and (tier.max_value is None or property_value <= tier.max_value):
            return tier
    return tiers[-1]


def calculate_with_agent_rate(property_value: float, agent_rate: float, brokerage_rate: float) -> CommissionCalculation:
    base = property_value * (agent_rate + brokerage_rate)
    return CommissionCalculation(
        base_commission=base,
        agent_commission=property_value * agent_rate,
        brokerage_commission=property_value * brokerage_rate,
        total_commission=base,
        agent_percentage=agent_rate,
        brokerage_percentage=brokerage_rate,
    )


def calculate_commission(property_value: float, tiers: Optional[list[CommissionTier]] = None) -> CommissionCalculation:
    tier = find_applicable_tier(property_value, tiers or DEFAULT_TIERS)
    return calculate_with_agent_rate(property_value, tier.agent_rate, tier.brokerage_rate)


def calculate_split(
    property_value: float,
    listing_share: float = 0.5,
    selling_share: float = 0.5,
    tiers: Optional[list[CommissionTier]] = None,
) -> SplitCommission:
    """Split a co-listed sale between the listing and selling agents."""
    listing = calculate_commission(property_value, tiers)
    selling = calculate_commission(property_value, tiers)

    return SplitCommission(
        listing_agent=listing.model_copy(update={
            "agent_commission": listing.agent_commission * listing_share,
            "total_commission": listing.total_commission * listing_share,
        }),
        selling_agent=selling.model_copy(update={
            "agent_commission": selling.agent_commission * selling_share,
            "total_commission": selling.total_commission * selling_share,
        }),
        total_commission=listing.total_commission + selling.total_commission,
    )


def calculate_monthly_projections(expected_sales: int, average_sale_price: float) -> MonthlyProjection:
    average = calculate_commission(average_sale_price)
    return MonthlyProjection(
        projected_commission=expected_sales * average.agent_commission,
        projected_sales=expected_sales,
        projected_value=expected_sales * average_sale_price,
        average_commission=average.agent_commission,
    )


def calculate_year_to_date_summary(commissions: list[Commission], now: Optional[datetime] = None) -> YearToDateSummary:
    now = now or utc_now()
    this_year = [c for c in commissions if c.created_at.year == now.year]

    total = sum(c.amount for c in this_year)
    breakdown: dict[str, float] = defaultdict(float)
    for commission in this_year:
        breakdown[commission.created_at.strftime("%b %Y")] += commission.amount

    top_months = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)[:3]

    return YearToDateSummary(
        total_commission=total,
        total_sales=len(this_year),
        average_commission=total / len(this_year) if this_year else 0,
        monthly_breakdown=dict(breakdown),
        top_months=[MonthAmount(month=month, amount=amount) for month, amount in top_months],
    )


def calculate_goal_performance(
    commissions: list[Commission],
    monthly_goal: float,
    yearly_goal: float,
    now: Optional[datetime] = None,
) -> GoalPerformance:
    now = now or utc_now()
    yearly = [c for c in commissions if c.created_at.year == now.year]
    monthly = [c for c in yearly if c.created_at.month == now.month]

    monthly_actual = sum(c.amount for c in monthly)
    yearly_actual = sum(c.amount for c in yearly)
    projected_yearly = yearly_actual / now.month * 12

    status = "on_track"
    if projected_yearly < yearly_goal * 0.9:
        status = "behind"
    elif projected_yearly > yearly_goal * 1.1:
        status = "ahead"

    return GoalPerformance(
        monthly_progress=monthly_actual / monthly_goal * 100 if monthly_goal > 0 else 0,
        yearly_progress=yearly_actual / yearly_goal * 100 if yearly_goal > 0 else 0,
        monthly_remaining=max(0, monthly_goal - monthly_actual),
        yearly_remaining=max(0, yearly_goal - yearly_actual),
        projected_yearly=projected_yearly,
        goal_status=status,
    )


def validate_commission(calculation: CommissionCalculation) -> list[str]:
    """Return validation errors; empty when the calculation is consistent."""
    errors = []
    if calculation.agent_commission < 0:
        errors.append("Agent commission cannot be negative")
    if calculation.brokerage_commission < 0:
        errors.append("Brokerage commission cannot be negative")
    if abs(calculation.total_commission - (calculation.agent_commission + calculation.brokerage_commission)) > 1e-6:
        errors.append("Total commission does not match sum of agent and brokerage commissions")
    if not 0 <= calculation.agent_percentage <= 1:
        errors.append("Agent percentage must be between 0 and 1")
    if not 0 <= calculation.brokerage_percentage <= 1:
        errors.append("Brokerage percentage must be between 0 and 1")
    return errors
