"""Agent matching endpoint."""

from src.models.agent import ClientPreferences
from src.services.agent_service import AgentService
from src.utils.http import dump, handle_request, json_response, parse_json_body, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _match(request):
    preferences = ClientPreferences.model_validate(parse_json_body(request))
    matches = run_async(AgentService().find_matching_agents(preferences))
    return json_response(200, {"matches": dump(matches)})


ROUTES = {
    "POST": (_match, "Failed to find matching agents"),
}


def handler(request):
    """Vercel entry point for /api/agents/match."""
    return handle_request(request, ROUTES, logger)
