"""Tests for tiered commission calculations."""

import pytest
from datetime import datetime, timezone

from src.models.agent import Commission
from src.services.commission_calculator import (
    DEFAULT_TIERS,
    CommissionCalculation,
    calculate_commission,
    calculate_goal_performance,
    calculate_monthly_projections,
    calculate_split,
    calculate_with_agent_rate,
    calculate_year_to_date_summary,
    find_applicable_tier,
    validate_commission,
)
from tests.utils.factories import create_commission_data

NOW = datetime(2024, 6, 15, tzinfo=timezone.utc)


def _commission(amount: float, created_at: str) -> Commission:
    return Commission.model_validate(create_commission_data("a1", amount=amount, created_at=created_at))


@pytest.mark.unit
@pytest.mark.parametrize("value,rate", [
    (50_000, 0.025),
    (100_000, 0.025),
    (100_001, 0.03),
    (500_000, 0.03),
    (750_000, 0.035),
    (1_000_000, 0.035),
    (2_500_000, 0.04),
])
def test_tier_boundaries_are_inclusive(value, rate):
    assert find_applicable_tier(value, DEFAULT_TIERS).agent_rate == rate


@pytest.mark.unit
def test_value_outside_every_tier_uses_last():
    assert find_applicable_tier(-1, DEFAULT_TIERS) is DEFAULT_TIERS[-1]


@pytest.mark.unit
def test_calculate_commission_first_tier():
    calc = calculate_commission(100_000)

    assert calc.agent_commission == pytest.approx(2_500)
    assert calc.brokerage_commission == pytest.approx(2_500)
    assert calc.total_commission == pytest.approx(5_000)
    assert calc.base_commission == calc.total_commission
    assert calc.agent_percentage == 0.025


@pytest.mark.unit
def test_calculate_with_agent_rate_overrides_tiers():
    calc = calculate_with_agent_rate(400_000, 0.02, 0.01)

    assert calc.agent_commission == pytest.approx(8_000)
    assert calc.brokerage_commission == pytest.approx(4_000)
    assert calc.total_commission == pytest.approx(12_000)


@pytest.mark.unit
def test_split_halves_agent_share():
    split = calculate_split(400_000)

    assert split.listing_agent.agent_commission == pytest.approx(6_000)
    assert split.selling_agent.agent_commission == pytest.approx(6_000)
    assert split.listing_agent.brokerage_commission == pytest.approx(12_000)
    assert split.total_commission == pytest.approx(48_000)


@pytest.mark.unit
def test_split_with_uneven_shares():
    split = calculate_split(400_000, listing_share=0.6, selling_share=0.4)

    assert split.listing_agent.total_commission == pytest.approx(14_400)
    assert split.selling_agent.total_commission == pytest.approx(9_600)


@pytest.mark.unit
def test_monthly_projections():
    projection = calculate_monthly_projections(3, 800_000)

    assert projection.average_commission == pytest.approx(28_000)
    assert projection.projected_commission == pytest.approx(84_000)
    assert projection.projected_value == 2_400_000
    assert projection.projected_sales == 3


@pytest.mark.unit
def test_year_to_date_summary_only_counts_current_year():
    commissions = [
        _commission(10_000, "2024-01-10T00:00:00+00:00"),
        _commission(5_000, "2024-01-20T00:00:00+00:00"),
        _commission(8_000, "2024-03-02T00:00:00+00:00"),
        _commission(2_000, "2024-05-30T00:00:00+00:00"),
        _commission(1_000, "2024-06-01T00:00:00+00:00"),
        _commission(99_000, "2023-12-31T00:00:00+00:00"),
    ]

    summary = calculate_year_to_date_summary(commissions, now=NOW)

    assert summary.total_commission == 26_000
    assert summary.total_sales == 5
    assert summary.average_commission == pytest.approx(5_200)
    assert summary.monthly_breakdown["Jan 2024"] == 15_000
    assert [m.month for m in summary.top_months] == ["Jan 2024", "Mar 2024", "May 2024"]


@pytest.mark.unit
def test_year_to_date_summary_reads_zulu_and_naive_timestamps():
    commissions = [
        _commission(4_000, "2024-02-03T10:00:00Z"),
        _commission(6_000, "2024-02-20T08:30:00"),
    ]

    summary = calculate_year_to_date_summary(commissions, now=NOW)

    assert commissions[0].created_at == datetime(2024, 2, 3, 10, tzinfo=timezone.utc)
    assert commissions[1].created_at.tzinfo is not None
    assert summary.monthly_breakdown == {"Feb 2024": 10_000}

@pytest.mark.unit
def test_year_to_date_summary_empty():
    summary = calculate_year_to_date_summary([], now=NOW)

    assert summary.total_commission == 0
    assert summary.average_commission == 0
    assert summary.top_months == []


@pytest.mark.unit
@pytest.mark.parametrize("yearly_goal,status", [
    (100_000, "on_track"),
    (200_000, "behind"),
    (80_000, "ahead"),
])
def test_goal_status(yearly_goal, status):
    # 50k by June projects to 100k for the year
    commissions = [
        _commission(40_000, "2024-02-01T00:00:00+00:00"),
        _commission(10_000, "2024-06-05T00:00:00+00:00"),
    ]

    performance = calculate_goal_performance(commissions, monthly_goal=20_000, yearly_goal=yearly_goal, now=NOW)

    assert performance.projected_yearly == pytest.approx(100_000)
    assert performance.goal_status == status


@pytest.mark.unit
def test_goal_progress_and_remaining():
    commissions = [_commission(10_000, "2024-06-05T00:00:00+00:00")]

    performance = calculate_goal_performance(commissions, monthly_goal=20_000, yearly_goal=5_000, now=NOW)

    assert performance.monthly_progress == 50
    assert performance.monthly_remaining == 10_000
    assert performance.yearly_progress == 200
    assert performance.yearly_remaining == 0


@pytest.mark.unit
def test_goal_progress_with_zero_goals():
    performance = calculate_goal_performance([], monthly_goal=0, yearly_goal=0, now=NOW)

    assert performance.monthly_progress == 0
    assert performance.yearly_progress == 0


@pytest.mark.unit
def test_validate_commission():
    assert validate_commission(calculate_commission(300_000)) == []

    broken = CommissionCalculation(
        base_commission=10,
        agent_commission=-1,
        brokerage_commission=5,
        total_commission=10,
        agent_percentage=1.5,
        brokerage_percentage=0.02,
    )

    assert validate_commission(broken) == [
        "Agent commission cannot be negative",
        "Total commission does not match sum of agent and brokerage commissions",
        "Agent percentage must be between 0 and 1",
    ]
