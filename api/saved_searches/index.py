"""Saved searches collection endpoint: list and create."""

from src.models.saved_search import SavedSearchCreate
from src.services.saved_searches import get_saved_search_store
from src.utils.config import AppConfig
from src.utils.http import dump, handle_request, json_response, parse_json_body, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _list(request):
    searches = run_async(get_saved_search_store().list_searches(AppConfig.MOCK_USER_ID))
    return json_response(200, {"saved_searches": dump(searches)})


def _create(request):
    payload = SavedSearchCreate.model_validate(parse_json_body(request))
    search = run_async(get_saved_search_store().create_search(AppConfig.MOCK_USER_ID, payload))
    return json_response(201, {"saved_search": dump(search)})


ROUTES = {
    "GET": (_list, "Failed to fetch saved searches"),
    "POST": (_create, "Failed to save search"),
}


def handler(request):
    """Vercel entry point for /api/saved-searches."""
    return handle_request(request, ROUTES, logger)
