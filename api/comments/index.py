"""Comments collection endpoint: threaded listing and creation."""

from src.models.note import CommentsFilter, CreateCommentRequest
from src.services.notes_service import get_notes_service
from src.utils.errors import InvalidRequestError
from src.utils.http import (
    bool_param,
    dump,
    handle_request,
    int_param,
    json_response,
    paginate,
    parse_json_body,
    query_param,
    run_async,
)
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

REQUIRED_FIELDS = ("property_id", "content")


def _list(request):
    property_id = query_param(request, "propertyId", "property_id")
    comments = []

    if property_id:
        filters = CommentsFilter.model_validate({
            "user_id": query_param(request, "userId", "user_id"),
            "parent_id": query_param(request, "parentId", "parent_id"),
            "is_approved": bool_param(request, "isApproved", "is_approved"),
            "is_moderated": bool_param(request, "isModerated", "is_moderated"),
        })
        comments = run_async(get_notes_service().get_comments_by_property(property_id, filters))

    page_items, meta = paginate(
        comments,
        int_param(request, "page", default=1),
        int_param(request, "limit", default=10),
    )
    return json_response(200, {"comments": dump(page_items), **meta})


def _create(request):
    body = parse_json_body(request)
    if any(not body.get(field) for field in REQUIRED_FIELDS):
        raise InvalidRequestError(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")

    comment = run_async(get_notes_service().create_comment(CreateCommentRequest.model_validate(body)))
    return json_response(201, dump(comment))


ROUTES = {
    "GET": (_list, "Failed to fetch comments"),
    "POST": (_create, "Failed to create comment"),
}


def handler(request):
    """Vercel entry point for /api/comments."""
    return handle_request(request, ROUTES, logger)
