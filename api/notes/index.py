"""Notes collection endpoint: list, search and create property notes."""

from src.models.note import CreateNoteRequest, NotesFilter
from src.services.notes_service import get_notes_service
from src.utils.errors import InvalidRequestError
from src.utils.http import (
    bool_param,
    dump,
    handle_request,
    int_param,
    json_response,
    list_param,
    paginate,
    parse_json_body,
    query_param,
    run_async,
)
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

REQUIRED_FIELDS = ("property_id", "title", "content")


def notes_filter_from_query(request) -> NotesFilter:
    return NotesFilter.model_validate({
        "user_id": query_param(request, "userId", "user_id"),
        "type": query_param(request, "type"),
        "priority": query_param(request, "priority"),
        "is_private": bool_param(request, "isPrivate", "is_private"),
        "tags": list_param(request, "tags"),
        "date_from": query_param(request, "dateFrom", "date_from"),
        "date_to": query_param(request, "dateTo", "date_to"),
    })


def _list(request):
    service = get_notes_service()
    filters = notes_filter_from_query(request)
    search = query_param(request, "search", "q")
    property_id = query_param(request, "propertyId", "property_id")

    if search:
        notes = run_async(service.search_notes(search, filters))
    elif property_id:
        notes = run_async(service.get_notes_by_property(property_id, filters))
    else:
        notes = []

    page_items, meta = paginate(
        notes,
        int_param(request, "page", default=1),
        int_param(request, "limit", default=10),
    )
    return json_response(200, {"notes": dump(page_items), **meta})


def _create(request):
    body = parse_json_body(request)
    if any(not body.get(field) for field in REQUIRED_FIELDS):
        raise InvalidRequestError(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")

    note = run_async(get_notes_service().create_note(CreateNoteRequest.model_validate(body)))
    return json_response(201, dump(note))


ROUTES = {
    "GET": (_list, "Failed to fetch notes"),
    "POST": (_create, "Failed to create note"),
}


def handler(request):
    """Vercel entry point for /api/notes."""
    return handle_request(request, ROUTES, logger)
