"""Governance voting endpoint."""

from src.models.governance import CastVoteRequest
from src.services.governance_client import GovernanceClient
from src.utils.config import AppConfig
from src.utils.http import error_response, handle_request, json_response, parse_json_body, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


async def _cast(vote: CastVoteRequest):
    client = GovernanceClient()
    voter = vote.voter or AppConfig.MOCK_USER_ID

    if not await client.can_vote(voter, vote.proposal_id):
        return None
    return await client.cast_vote(vote.proposal_id, vote.vote_type, voter)


def _vote(request):
    vote = CastVoteRequest.model_validate(parse_json_body(request))
    success = run_async(_cast(vote))
    if success is None:
        return error_response(403, "Not eligible to vote on this proposal")
    return json_response(200, {"success": success})


ROUTES = {
    "POST": (_vote, "Failed to cast vote"),
}


def handler(request):
    """Vercel entry point for /api/governance/votes."""
    return handle_request(request, ROUTES, logger)
