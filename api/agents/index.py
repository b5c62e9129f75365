"""Agent directory endpoint: filtered listing and onboarding."""

from src.models.agent import AgentCreate, AgentSearchFilters
from src.services.agent_service import AgentService
from src.utils.http import (
    bool_param,
    dump,
    float_param,
    handle_request,
    json_response,
    list_param,
    parse_json_body,
    query_param,
    run_async,
)
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def agent_filters_from_query(request) -> AgentSearchFilters:
    return AgentSearchFilters.model_validate({
        "location": query_param(request, "location"),
        "specialties": list_param(request, "specialties"),
        "languages": list_param(request, "languages"),
        "experience_min": query_param(request, "experienceMin", "experience_min"),
        "experience_max": query_param(request, "experienceMax", "experience_max"),
        "rating_min": float_param(request, "ratingMin", "rating_min"),
        "rating_max": float_param(request, "ratingMax", "rating_max"),
        "is_verified": bool_param(request, "isVerified", "is_verified"),
        "brokerage_id": query_param(request, "brokerageId", "brokerage_id"),
        "commission_rate_min": float_param(request, "commissionRateMin", "commission_rate_min"),
        "commission_rate_max": float_param(request, "commissionRateMax", "commission_rate_max"),
    })


def _list(request):
    agents = run_async(AgentService().get_agents(agent_filters_from_query(request)))
    return json_response(200, {"agents": dump(agents), "total": len(agents)})


def _create(request):
    data = AgentCreate.model_validate(parse_json_body(request))
    agent = run_async(AgentService().create_agent(data))
    return json_response(201, dump(agent))


ROUTES = {
    "GET": (_list, "Failed to fetch agents"),
    "POST": (_create, "Failed to create agent"),
}


def handler(request):
    """Vercel entry point for /api/agents."""
    return handle_request(request, ROUTES, logger)
