"""Single comment endpoint, including moderation and reactions."""

from src.models.note import UpdateCommentRequest
from src.services.notes_service import get_notes_service
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, handle_request, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

ACTIONS = ("approve", "moderate", "like", "dislike")


def _comment_id(request) -> str:
    comment_id = query_param(request, "id")
    if not comment_id:
        raise InvalidRequestError("Comment id is required")
    return comment_id


def _get(request):
    comment = run_async(get_notes_service().get_comment(_comment_id(request)))
    return json_response(200, dump(comment))


def _update(request):
    updates = UpdateCommentRequest.model_validate(parse_json_body(request))
    comment = run_async(get_notes_service().update_comment(_comment_id(request), updates))
    return json_response(200, dump(comment))


def _delete(request):
    run_async(get_notes_service().delete_comment(_comment_id(request)))
    return json_response(200, {"message": "Comment deleted successfully"})


def _act(request):
    comment_id = _comment_id(request)
    body = parse_json_body(request)
    action = body.get("action")
    service = get_notes_service()

    if action == "approve":
        comment = run_async(service.approve_comment(comment_id))
    elif action == "moderate":
        reason = body.get("reason")
        if not reason:
            raise InvalidRequestError("Moderation reason is required")
        comment = run_async(service.moderate_comment(comment_id, reason))
    elif action == "like":
        comment = run_async(service.like_comment(comment_id))
    elif action == "dislike":
        comment = run_async(service.dislike_comment(comment_id))
    else:
        raise InvalidRequestError(f"Unknown action: {action}. Expected one of {', '.join(ACTIONS)}")

    return json_response(200, dump(comment))


ROUTES = {
    "GET": (_get, "Failed to fetch comment"),
    "PUT": (_update, "Failed to update comment"),
    "PATCH": (_act, "Failed to update comment"),
    "DELETE": (_delete, "Failed to delete comment"),
}


def handler(request):
    """Vercel entry point for /api/comments/:id."""
    return handle_request(request, ROUTES, logger)
