"""Tests for the governance gateway client."""

import json

import httpx
import pytest

from src.models.governance import (
    ProposalFormData,
    ProposalStatus,
    ProposalType,
    StakeholderRegistrationData,
    VoteType,
)
from src.services.governance_client import GovernanceClient
from src.utils.errors import GovernanceError, InvalidRequestError
from tests.utils.factories import create_proposal_data

BASE_URL = "https://governance.test"

VALID_FORM = ProposalFormData(
    title="Lower listing fees",
    description="Reduce the marketplace listing fee for verified sellers to attract more supply.",
    proposal_type=ProposalType.FEE_CHANGE,
)


def _client(handler) -> GovernanceClient:
    return GovernanceClient(BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.unit
def test_base_url_defaults_to_environment():
    assert GovernanceClient().base_url == "https://governance.test"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_proposal_posts_camel_case():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"proposalId": "7"})

    proposal_id = await _client(handler).create_proposal(VALID_FORM)

    assert proposal_id == 7
    assert seen["path"] == "/proposals"
    assert seen["body"]["proposalType"] == "FeeChange"
    assert seen["body"]["votingDuration"] == 7


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_proposal_rejects_invalid_form_without_calling_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("gateway should not be called")

    with pytest.raises(InvalidRequestError) as exc_info:
        await _client(handler).create_proposal(ProposalFormData(title="Short"))

    assert "Title must be at least 10 characters long" in exc_info.value.errors


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_proposal_without_id_fails():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    with pytest.raises(GovernanceError, match="no proposal id"):
        await _client(handler).create_proposal(VALID_FORM)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cast_vote():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True})

    assert await _client(handler).cast_vote(3, VoteType.YES, voter="0xvoter") is True
    assert seen["path"] == "/proposals/3/votes"
    assert seen["body"] == {"voteType": "Yes", "voter": "0xvoter"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_proposal_parses_gateway_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=create_proposal_data(5))

    proposal = await _client(handler).get_proposal(5)

    assert proposal.id == 5
    assert proposal.status == ProposalStatus.ACTIVE
    assert proposal.yes_votes == 120


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_proposal_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "Proposal not found"})

    client = _client(handler)
    assert await client.get_proposal(99) is None
    assert await client.get_voting_results(99) is None
    assert await client.get_stakeholder_profile("0xnobody") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_gateway_failure_propagates():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "chain unavailable"})

    with pytest.raises(GovernanceError) as exc_info:
        await _client(handler).get_proposal(1)

    assert exc_info.value.status_code == 500
    assert "chain unavailable" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    [create_proposal_data(1), create_proposal_data(2)],
    {"proposals": [create_proposal_data(1), create_proposal_data(2)]},
])
async def test_active_proposals_accepts_list_or_envelope(payload):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["status"] = request.url.params["status"]
        return httpx.Response(200, json=payload)

    proposals = await _client(handler).get_active_proposals()

    assert [p.id for p in proposals] == [1, 2]
    assert seen["status"] == "Active"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_stakeholder_queries():
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/status"):
            return httpx.Response(200, json={"isStakeholder": True})
        if path.endswith("/eligibility"):
            assert request.url.params["proposalId"] == "4"
            return httpx.Response(200, json={"canVote": False})
        if path.endswith("/voting-power"):
            return httpx.Response(200, json={"votingPower": "42.5"})
        return httpx.Response(200, json={"success": True})

    client = _client(handler)

    assert await client.is_stakeholder("0xabc") is True
    assert await client.can_vote("0xabc", 4) is False
    assert await client.calculate_voting_power("0xabc") == 42.5
    assert await client.register_stakeholder(StakeholderRegistrationData(name="Dana")) is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_governance_stats():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={
            "totalStakeholders": 12,
            "totalVotingPower": 5000,
            "activeProposals": 2,
            "totalProposals": 9,
            "participationRate": 41.5,
            "averageVotingPower": 416.7,
        })

    stats = await _client(handler).get_governance_stats()

    assert stats.total_stakeholders == 12
    assert stats.active_proposals == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unreachable_gateway_is_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(GovernanceError) as exc_info:
        await _client(handler).execute_proposal(1)

    assert exc_info.value.status_code == 502
