"""Single saved search endpoint: update and delete by id."""

from src.models.saved_search import SavedSearchUpdate
from src.services.saved_searches import get_saved_search_store
from src.utils.config import AppConfig
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, handle_request, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _search_id(request) -> str:
    search_id = query_param(request, "id")
    if not search_id:
        raise InvalidRequestError("Saved search id is required")
    return search_id


def _update(request):
    updates = SavedSearchUpdate.model_validate(parse_json_body(request))
    search = run_async(
        get_saved_search_store().update_search(AppConfig.MOCK_USER_ID, _search_id(request), updates)
    )
    return json_response(200, {"saved_search": dump(search)})


def _delete(request):
    run_async(get_saved_search_store().delete_search(AppConfig.MOCK_USER_ID, _search_id(request)))
    return json_response(200, {"success": True})


ROUTES = {
    "PUT": (_update, "Failed to update saved search"),
    "DELETE": (_delete, "Failed to delete saved search"),
}


def handler(request):
    """Vercel entry point for /api/saved-searches/:id."""
    return handle_request(request, ROUTES, logger)
