"""Neighborhood search and details endpoint."""

from src.models.neighborhood import NeighborhoodFilters, NeighborhoodSearchRequest, SearchLocation
from src.services.neighborhood_service import get_neighborhood_service
from src.utils.errors import InvalidRequestError
from src.utils.http import (
    dump,
    float_param,
    handle_request,
    int_param,
    json_response,
    parse_json_body,
    query_param,
    run_async,
)
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def search_request_from_query(request) -> NeighborhoodSearchRequest:
    latitude = float_param(request, "lat", "latitude")
    longitude = float_param(request, "lng", "longitude")
    radius = float_param(request, "radius")

    location = None
    if latitude is not None and longitude is not None and radius is not None:
        location = SearchLocation(latitude=latitude, longitude=longitude, radius=radius)

    return NeighborhoodSearchRequest(
        query=query_param(request, "q", "query"),
        filters=NeighborhoodFilters(
            city=query_param(request, "city"),
            state=query_param(request, "state"),
            zip_code=query_param(request, "zipCode", "zip_code", "zip"),
            min_score=float_param(request, "minScore", "min_score"),
            min_population=int_param(request, "minPopulation", "min_population", default=None),
            max_population=int_param(request, "maxPopulation", "max_population", default=None),
            min_median_income=float_param(request, "minMedianIncome", "min_median_income"),
            min_walkability_score=int_param(request, "minWalkabilityScore", "min_walkability_score", default=None),
            min_safety_score=float_param(request, "minSafetyScore", "min_safety_score"),
        ),
        location=location,
        sort_by=query_param(request, "sortBy", "sort_by", default="relevance"),
        sort_order=query_param(request, "sortOrder", "sort_order"),
        limit=int_param(request, "limit", default=20),
        offset=int_param(request, "offset", default=0),
    )


def _get(request):
    neighborhood_id = query_param(request, "id")
    service = get_neighborhood_service()

    if neighborhood_id:
        details = run_async(service.get_details(neighborhood_id))
        return json_response(200, dump(details))

    results = run_async(service.search(search_request_from_query(request)))
    return json_response(200, dump(results))


def _post(request):
    body = parse_json_body(request)
    if not any(body.get(key) for key in ("query", "filters", "location")):
        raise InvalidRequestError("At least one search parameter is required")

    search = NeighborhoodSearchRequest.model_validate(body)
    results = run_async(get_neighborhood_service().search(search))
    return json_response(200, dump(results))


ROUTES = {
    "GET": (_get, "Failed to search neighborhoods"),
    "POST": (_post, "Failed to search neighborhoods"),
}


def handler(request):
    """Vercel entry point for /api/neighborhoods and /api/neighborhoods/:id."""
    return handle_request(request, ROUTES, logger)
