"""Commission estimate endpoint."""

from src.services.commission_calculator import calculate_commission, calculate_split
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, float_param, handle_request, json_response
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _estimate(request):
    property_value = float_param(request, "propertyValue", "property_value")
    if property_value is None or property_value <= 0:
        raise InvalidRequestError("propertyValue must be a positive number")

    listing_share = float_param(request, "listingShare", "listing_share")
    payload = {"commission": dump(calculate_commission(property_value))}
    if listing_share is not None:
        if not 0 <= listing_share <= 1:
            raise InvalidRequestError("listingShare must be between 0 and 1")
        payload["split"] = dump(calculate_split(property_value, listing_share, 1 - listing_share))

    return json_response(200, payload)


ROUTES = {
    "GET": (_estimate, "Failed to calculate commission"),
}


def handler(request):
    """Vercel entry point for /api/agents/commission."""
    return handle_request(request, ROUTES, logger)
