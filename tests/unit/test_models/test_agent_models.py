"""Tests for agent models."""

import pytest
from pydantic import ValidationError

from src.models.agent import Agent, AgentSearchFilters, CommissionStatus, Commission
from tests.utils.factories import create_agent_data, create_commission_data


@pytest.mark.unit
def test_agent_from_row():
    agent = Agent.model_validate(create_agent_data(name="Sarah Johnson", rating=4.8))

    assert agent.name == "Sarah Johnson"
    assert agent.rating == 4.8
    assert agent.is_active is True


@pytest.mark.unit
def test_agent_rating_bounds():
    with pytest.raises(ValidationError):
        Agent.model_validate(create_agent_data(rating=5.5))


@pytest.mark.unit
def test_search_filters_reject_inverted_ranges():
    with pytest.raises(ValidationError, match="rating_min must not exceed rating_max"):
        AgentSearchFilters(rating_min=4.5, rating_max=4.0)

    filters = AgentSearchFilters(experience_min=2, experience_max=2)
    assert filters.experience_min == 2


@pytest.mark.unit
def test_commission_defaults_and_status():
    commission = Commission.model_validate(create_commission_data(status="disputed", notes="Buyer dispute"))
    assert commission.status == CommissionStatus.DISPUTED
    assert commission.notes == "Buyer dispute"

    with pytest.raises(ValidationError):
        Commission.model_validate(create_commission_data(status="refunded"))
