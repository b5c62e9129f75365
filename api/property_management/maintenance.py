"""Maintenance requests endpoint for managed properties."""

from src.models.property_management import (
    MaintenanceRequestCreate,
    MaintenanceStatus,
    MaintenanceStatusUpdate,
)
from src.services.property_management_service import PropertyManagementService
from src.utils.errors import InvalidRequestError
from src.utils.http import dump, handle_request, int_param, json_response, parse_json_body, query_param, run_async
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _list(request):
    property_id = int_param(request, "propertyId", "property_id", default=None)
    if property_id is None:
        raise InvalidRequestError("propertyId is required")

    status = query_param(request, "status")
    try:
        status = MaintenanceStatus(status.upper()) if status else None
    except ValueError:
        raise InvalidRequestError(f"Unknown maintenance status: {status}")

    requests = run_async(PropertyManagementService().list_maintenance_requests(property_id, status))
    return json_response(200, {"requests": dump(requests), "total": len(requests)})


def _create(request):
    data = MaintenanceRequestCreate.model_validate(parse_json_body(request))
    created = run_async(PropertyManagementService().create_maintenance_request(data))
    return json_response(201, {"request": dump(created)})


def _update_status(request):
    request_id = query_param(request, "id")
    if not request_id:
        raise InvalidRequestError("Maintenance request id is required")

    update = MaintenanceStatusUpdate.model_validate(parse_json_body(request))
    updated = run_async(
        PropertyManagementService().update_maintenance_status(request_id, update.status, update.actual_cost)
    )
    return json_response(200, {"request": dump(updated)})


ROUTES = {
    "GET": (_list, "Failed to fetch maintenance requests"),
    "POST": (_create, "Failed to create maintenance request"),
    "PATCH": (_update_status, "Failed to update maintenance request"),
}


def handler(request):
    """Vercel entry point for /api/property-management/maintenance."""
    return handle_request(request, ROUTES, logger)
