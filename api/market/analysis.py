"""Market analysis endpoint."""

from src.models.market import PropertyType
from src.services.market_service import get_market_service
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, handle_request, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _property_type(value):
    if not value:
        return None
    try:
        return PropertyType(value)
    except ValueError:
        raise InvalidRequestError(f"Unknown property type: {value}")


def _analysis(location, property_type):
    analysis = run_async(get_market_service().get_market_analysis(location, _property_type(property_type)))
    return json_response(200, dump(analysis))


def _get(request):
    location = query_param(request, "location")
    if not location:
        raise InvalidRequestError("Location parameter is required")
    return _analysis(location, query_param(request, "propertyType", "property_type"))


def _post(request):
    body = parse_json_body(request)
    if not body.get("location"):
        raise InvalidRequestError("Missing required field: location")
    return _analysis(body["location"], body.get("property_type") or body.get("propertyType"))


ROUTES = {
    "GET": (_get, "Failed to get market analysis"),
    "POST": (_post, "Failed to get market analysis"),
}


def handler(request):
    """Vercel entry point for /api/market/analysis."""
    return handle_request(request, ROUTES, logger)
