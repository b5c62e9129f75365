"""Governance proposals endpoint: list active proposals, submit new ones."""

from src.models.governance import ProposalFormData
from src.services.governance_client import GovernanceClient
from src.services.voting_display import filter_proposals, format_time_remaining
from src.utils.http import dump, handle_request, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _list(request):
    proposals = run_async(GovernanceClient().get_active_proposals())
    proposals = filter_proposals(
        proposals,
        proposer=query_param(request, "proposer"),
        query=query_param(request, "q", "search"),
    )

    items = []
    for proposal in proposals:
        item = dump(proposal)
        item["time_remaining"] = format_time_remaining(proposal.voting_end_time)
        items.append(item)

    return json_response(200, {"proposals": items, "total": len(items)})


def _create(request):
    form = ProposalFormData.model_validate(parse_json_body(request)).validate_form()
    proposal_id = run_async(GovernanceClient().create_proposal(form))
    return json_response(201, {"proposal_id": proposal_id})


ROUTES = {
    "GET": (_list, "Failed to fetch proposals"),
    "POST": (_create, "Failed to create proposal"),
}


def handler(request):
    """Vercel entry point for /api/governance/proposals."""
    return handle_request(request, ROUTES, logger)
