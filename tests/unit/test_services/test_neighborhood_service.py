"""Tests for neighborhood search and details."""

import pytest

from src.models.neighborhood import (
    Coordinates,
    NeighborhoodFilters,
    NeighborhoodSearchRequest,
    SearchLocation,
    SortField,
    SortOrder,
)
from src.services.neighborhood_service import NeighborhoodService, haversine_distance
from src.utils.errors import NotFoundError

DOWNTOWN = Coordinates(latitude=37.7749, longitude=-122.4194)


@pytest.fixture
def service():
    return NeighborhoodService()


def _ids(response) -> list[str]:
    return [result.neighborhood.id for result in response.neighborhoods]


@pytest.mark.unit
def test_haversine_distance():
    mission = Coordinates(latitude=37.7599, longitude=-122.4148)

    assert haversine_distance(DOWNTOWN, DOWNTOWN) == 0
    assert haversine_distance(DOWNTOWN, mission) == pytest.approx(1717, abs=5)
    assert haversine_distance(DOWNTOWN, mission) == pytest.approx(haversine_distance(mission, DOWNTOWN))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_search_without_query_ranks_by_score(service):
    response = await service.search(NeighborhoodSearchRequest())

    assert _ids(response) == ["n1", "n2", "n3"]
    assert [r.score for r in response.neighborhoods] == [8.2, 7.6, 5.0]
    assert response.total == 3
    assert response.has_more is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_match_reasons_from_analysis(service):
    response = await service.search(NeighborhoodSearchRequest())
    reasons = {r.neighborhood.id: r.match_reasons for r in response.neighborhoods}

    assert reasons["n1"] == ["High overall rating", "Excellent walkability", "Great amenities"]
    assert reasons["n2"] == ["Great amenities"]
    assert reasons["n3"] == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_query_bonus_only_without_analysis(service):
    mission = await service.search(NeighborhoodSearchRequest(query="  Mission "))
    assert _ids(mission) == ["n3"]
    assert mission.neighborhoods[0].score == 7.0
    assert mission.neighborhoods[0].match_reasons == ["Name matches search query"]

    vibrant = await service.search(NeighborhoodSearchRequest(query="vibrant"))
    assert _ids(vibrant) == ["n1", "n3"]
    assert [r.score for r in vibrant.neighborhoods] == [8.2, 6.0]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_highlights_key_stats(service):
    response = await service.search(NeighborhoodSearchRequest())
    stats = {r.neighborhood.id: r.highlights.key_stats for r in response.neighborhoods}

    assert stats["n1"].walkability_score == 85
    assert stats["n1"].safety_score == 7.5
    assert stats["n1"].median_income == 75000
    assert stats["n3"].population == 60000
    assert stats["n3"].median_income == 0
    assert [a.id for a in response.neighborhoods[0].highlights.top_amenities] == ["a2"]


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("filters,expected", [
    (NeighborhoodFilters(min_walkability_score=80), ["n1"]),
    (NeighborhoodFilters(min_population=20000), ["n2", "n3"]),
    (NeighborhoodFilters(max_population=20000), ["n1"]),
    (NeighborhoodFilters(min_safety_score=7), ["n1"]),
    (NeighborhoodFilters(min_median_income=100000), ["n2"]),
    (NeighborhoodFilters(zip_code="94110"), ["n3"]),
    (NeighborhoodFilters(city="san francisco", state="ca"), ["n1", "n2", "n3"]),
    (NeighborhoodFilters(city="Oakland"), []),
    (NeighborhoodFilters(min_score=8), ["n1"]),
])
async def test_search_filters(service, filters, expected):
    assert _ids(await service.search(NeighborhoodSearchRequest(filters=filters))) == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_location_radius_and_distance_sort(service):
    request = NeighborhoodSearchRequest(
        location=SearchLocation(latitude=37.7749, longitude=-122.4194, radius=2000),
        sort_by=SortField.DISTANCE,
    )

    response = await service.search(request)

    assert _ids(response) == ["n1", "n3"]
    assert response.neighborhoods[0].distance == 0
    assert response.neighborhoods[1].distance == pytest.approx(1717, abs=5)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_distance_sort_without_location_keeps_order(service):
    response = await service.search(NeighborhoodSearchRequest(sort_by=SortField.DISTANCE))

    assert _ids(response) == ["n1", "n2", "n3"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_name_sort_defaults_ascending(service):
    ascending = await service.search(NeighborhoodSearchRequest(sort_by=SortField.NAME))
    descending = await service.search(NeighborhoodSearchRequest(sort_by=SortField.NAME, sort_order=SortOrder.DESC))

    assert _ids(ascending) == ["n1", "n2", "n3"]
    assert _ids(descending) == ["n3", "n2", "n1"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_score_sort_ascending(service):
    response = await service.search(NeighborhoodSearchRequest(sort_by=SortField.SCORE, sort_order=SortOrder.ASC))

    assert _ids(response) == ["n3", "n2", "n1"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_pagination(service):
    first = await service.search(NeighborhoodSearchRequest(limit=2))
    second = await service.search(NeighborhoodSearchRequest(limit=2, offset=2))

    assert _ids(first) == ["n1", "n2"]
    assert first.has_more is True
    assert first.total == 3
    assert _ids(second) == ["n3"]
    assert second.has_more is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_details(service):
    details = await service.get_details("n1")

    assert details.neighborhood.name == "Downtown Arts District"
    assert details.analysis.overall_score == 8.2
    assert details.demographics.median_income == 75000
    assert details.crime.safety_score == 7.5
    assert details.transportation.walkability_score == 85
    assert [a.id for a in details.amenities] == ["a2"]

    sparse = await service.get_details("n3")
    assert sparse.analysis is None
    assert sparse.crime is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_details_missing(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_details("n404")

    assert exc_info.value.code == "NEIGHBORHOOD_NOT_FOUND"
