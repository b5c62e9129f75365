"""Notes and comments analytics endpoint."""

from src.services.notes_service import get_notes_service
from src.utils.http import dump, handle_request, json_response, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _analytics(request):
    property_id = query_param(request, "propertyId", "property_id")
    service = get_notes_service()
    return json_response(200, {
        "notes": dump(run_async(service.get_notes_analytics(property_id))),
        "comments": dump(run_async(service.get_comments_analytics(property_id))),
    })


ROUTES = {
    "GET": (_analytics, "Failed to fetch notes analytics"),
}


def handler(request):
    """Vercel entry point for /api/notes/analytics."""
    return handle_request(request, ROUTES, logger)
