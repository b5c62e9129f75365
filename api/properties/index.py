"""Property listings collection endpoint: paged search and create."""

from src.models.property import PropertyCreate, PropertyQuery
from src.services.property_service import PropertyService
from src.utils.http import (
    bool_param,
    dump,
    handle_request,
    int_param,
    json_response,
    parse_json_body,
    query_param,
    run_async,
)
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def property_query_from_request(request) -> PropertyQuery:
    values = {
        "search": query_param(request, "search", "q"),
        "is_listed": bool_param(request, "isListed", "is_listed"),
        "sort_by": query_param(request, "sortBy", "sort_by"),
        "sort_order": query_param(request, "sortOrder", "sort_order"),
        "page": int_param(request, "page", default=None),
        "limit": int_param(request, "limit", default=None),
    }
    return PropertyQuery.model_validate({key: value for key, value in values.items() if value is not None})


def _list(request):
    page = run_async(PropertyService().list_properties(property_query_from_request(request)))
    return json_response(200, dump(page))


def _create(request):
    data = PropertyCreate.model_validate(parse_json_body(request))
    prop = run_async(PropertyService().create_property(data))
    return json_response(201, dump(prop))


ROUTES = {
    "GET": (_list, "Failed to fetch properties"),
    "POST": (_create, "Failed to create property"),
}


def handler(request):
    """Vercel entry point for /api/properties."""
    return handle_request(request, ROUTES, logger)
