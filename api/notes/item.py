"""Single note endpoint."""

from src.models.note import UpdateNoteRequest
from src.services.notes_service import get_notes_service
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, handle_request, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _note_id(request) -> str:
    note_id = query_param(request, "id")
    if not note_id:
        raise InvalidRequestError("Note id is required")
    return note_id


def _get(request):
    note = run_async(get_notes_service().get_note(_note_id(request)))
    return json_response(200, dump(note))


def _update(request):
    updates = UpdateNoteRequest.model_validate(parse_json_body(request))
    note = run_async(get_notes_service().update_note(_note_id(request), updates))
    return json_response(200, dump(note))


def _delete(request):
    run_async(get_notes_service().delete_note(_note_id(request)))
    return json_response(200, {"message": "Note deleted successfully"})


ROUTES = {
    "GET": (_get, "Failed to fetch note"),
    "PUT": (_update, "Failed to update note"),
    "DELETE": (_delete, "Failed to delete note"),
}


def handler(request):
    """Vercel entry point for /api/notes/:id."""
    return handle_request(request, ROUTES, logger)
