"""Single property endpoint: fetch, edit and remove a listing."""

from src.models.property import PropertyUpdate
from src.services.property_service import PropertyService
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, handle_request, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _property_id(request) -> str:
    property_id = query_param(request, "id")
    if not property_id:
        raise InvalidRequestError("Property id is required")
    return property_id


def _get(request):
    prop = run_async(PropertyService().get_property(_property_id(request)))
    return json_response(200, dump(prop))


def _update(request):
    property_id = _property_id(request)
    updates = PropertyUpdate.model_validate(parse_json_body(request))
    prop = run_async(PropertyService().update_property(property_id, updates))
    return json_response(200, dump(prop))


def _delete(request):
    run_async(PropertyService().delete_property(_property_id(request)))
    return json_response(200, {"success": True})


ROUTES = {
    "GET": (_get, "Failed to fetch property"),
    "PUT": (_update, "Failed to update property"),
    "DELETE": (_delete, "Failed to delete property"),
}


def handler(request):
    """Vercel entry point for /api/properties/:id."""
    return handle_request(request, ROUTES, logger)
