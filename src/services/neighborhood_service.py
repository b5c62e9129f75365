"""Neighborhood search, scoring and details over seeded neighborhood data."""

import math
from typing import Optional

from src.models.neighborhood import (
    Amenity,
    AmenityCategory,
    AmenityType,
    Boundaries,
    CategoryScores,
    CommuteTimes,
    Coordinates,
    CrimeStatistics,
    CrimeTrend,
    Demographics,
    Highlights,
    KeyStats,
    Neighborhood,
    NeighborhoodAnalysis,
    NeighborhoodDetails,
    NeighborhoodFilters,
    NeighborhoodSearchRequest,
    NeighborhoodSearchResponse,
    NeighborhoodSearchResult,
    SortField,
    SortOrder,
    Transportation,
)
from src.utils.errors import NotFoundError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

EARTH_RADIUS_M = 6_371_000
AMENITY_RADIUS_M = 2000
BASE_SCORE = 5.0
HIGHLIGHT_THRESHOLD = 8.0


def haversine_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in meters."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _square(lng: float, lat: float) -> Boundaries:
    return Boundaries(coordinates=[[lng, lat], [lng + 0.01, lat], [lng + 0.01, lat + 0.01], [lng, lat + 0.01]])


def _seed_neighborhoods() -> list[Neighborhood]:
    return [
        Neighborhood(
            id="n1",
            name="Downtown Arts District",
            city="San Francisco",
            state="CA",
            zip_code="94102",
            coordinates=Coordinates(latitude=37.7749, longitude=-122.4194),
            boundaries=_square(-122.4194, 37.7749),
            description="Vibrant downtown neighborhood known for its arts scene, galleries, and cultural attractions.",
            population=15000,
            area_sq_km=1.2,
        ),
        Neighborhood(
            id="n2",
            name="Marina District",
            city="San Francisco",
            state="CA",
            zip_code="94123",
            coordinates=Coordinates(latitude=37.8024, longitude=-122.4484),
            boundaries=_square(-122.4484, 37.8024),
            description="Upscale waterfront neighborhood with beautiful views of the bay and Golden Gate Bridge.",
            population=24000,
            area_sq_km=2.5,
        ),
        Neighborhood(
            id="n3",
            name="Mission District",
            city="San Francisco",
            state="CA",
            zip_code="94110",
            coordinates=Coordinates(latitude=37.7599, longitude=-122.4148),
            boundaries=_square(-122.4148, 37.7599),
            description="Historic neighborhood with vibrant Latino culture, murals, and diverse dining scene.",
            population=60000,
            area_sq_km=3.1,
        ),
    ]


def _seed_amenities() -> list[Amenity]:
    return [
        Amenity(
            id="a1",
            name="Golden Gate Park",
            type=AmenityType.PARKS,
            category=AmenityCategory.RECREATION,
            address="501 Stanyan St, San Francisco, CA 94117",
            coordinates=Coordinates(latitude=37.7694, longitude=-122.4862),
            rating=4.8,
            features=["Walking Trails", "Museums", "Botanical Garden", "Playground", "Sports Fields"],
            is_verified=True,
        ),
        Amenity(
            id="a2",
            name="Whole Foods Market",
            type=AmenityType.GROCERY,
            category=AmenityCategory.ESSENTIAL,
            address="2001 Market St, San Francisco, CA 94114",
            coordinates=Coordinates(latitude=37.7749, longitude=-122.4194),
            rating=4.2,
            features=["Organic Products", "Hot Bar", "Bakery", "Pharmacy", "Parking"],
            is_verified=True,
        ),
        Amenity(
            id="a3",
            name="Marina Green",
            type=AmenityType.PARKS,
            category=AmenityCategory.RECREATION,
            address="Marina Blvd, San Francisco, CA 94123",
            coordinates=Coordinates(latitude=37.8060, longitude=-122.4420),
            rating=4.7,
            features=["Waterfront", "Kite Flying", "Running Path"],
            is_verified=True,
        ),
    ]


def _seed_demographics() -> list[Demographics]:
    return [
        Demographics(
            neighborhood_id="n1",
            year=2023,
            population=15000,
            median_age=32,
            median_income=75000,
            average_household_size=2.1,
            poverty_rate=12,
        ),
        Demographics(
            neighborhood_id="n2",
            year=2023,
            population=24000,
            median_age=34,
            median_income=145000,
            average_household_size=1.8,
            poverty_rate=5,
        ),
    ]


def _seed_crime() -> list[CrimeStatistics]:
    return [
        CrimeStatistics(
            neighborhood_id="n1",
            year=2023,
            quarter=4,
            total_crimes=150,
            violent_crimes=25,
            property_crimes=125,
            crime_rate=10.0,
            safety_score=7.5,
            trend=CrimeTrend.STABLE,
            comparison_to_city=-15,
        ),
    ]


def _seed_transportation() -> list[Transportation]:
    return [
        Transportation(
            neighborhood_id="n1",
            walkability_score=85,
            transit_lines=["38 Geary", "BART", "Muni"],
            commute_times=CommuteTimes(to_downtown=15, to_airport=45),
        ),
        Transportation(
            neighborhood_id="n2",
            walkability_score=72,
            transit_lines=["30 Stockton"],
            commute_times=CommuteTimes(to_downtown=30, to_airport=40),
        ),
    ]


def _seed_analysis() -> list[NeighborhoodAnalysis]:
    return [
        NeighborhoodAnalysis(
            neighborhood_id="n1",
            overall_score=8.2,
            category_scores=CategoryScores(
                safety=7.5,
                amenities=9.0,
                schools=7.5,
                transportation=8.5,
                cost_of_living=6.0,
                walkability=8.5,
                diversity=9.5,
                nightlife=9.0,
                family_friendly=7.0,
                investment_potential=8.0,
            ),
            strengths=[
                "Excellent walkability and public transit",
                "Diverse dining and entertainment options",
                "Strong arts and culture scene",
                "Good investment potential",
            ],
            weaknesses=[
                "High cost of living",
                "Limited parking availability",
                "Some safety concerns at night",
            ],
            recommendations=[
                "Consider public transit for daily commute",
                "Look for properties with parking",
                "Explore the neighborhood during different times of day",
            ],
        ),
        NeighborhoodAnalysis(
            neighborhood_id="n2",
            overall_score=7.6,
            category_scores=CategoryScores(
                safety=8.5,
                amenities=8.0,
                schools=7.0,
                transportation=6.5,
                cost_of_living=4.0,
                walkability=7.0,
                diversity=6.0,
                nightlife=7.5,
                family_friendly=8.0,
                investment_potential=7.0,
            ),
            strengths=["Waterfront parks", "Low crime"],
            weaknesses=["Very high rents", "Limited transit"],
        ),
    ]


def _by_neighborhood(items: list) -> dict:
    return {item.neighborhood_id: item for item in items}


class NeighborhoodService:
    """Search and details for neighborhoods."""

    def __init__(self):
        self.neighborhoods = _seed_neighborhoods()
        self.amenities = _seed_amenities()
        self.demographics = _by_neighborhood(_seed_demographics())
        self.crime = _by_neighborhood(_seed_crime())
        self.transportation = _by_neighborhood(_seed_transportation())
        self.analysis = _by_neighborhood(_seed_analysis())

    def amenities_near(self, neighborhood: Neighborhood, radius_m: float = AMENITY_RADIUS_M) -> list[Amenity]:
        return [
            amenity for amenity in self.amenities
            if haversine_distance(neighborhood.coordinates, amenity.coordinates) <= radius_m
        ]

    def score(self, neighborhood: Neighborhood, query: Optional[str] = None) -> float:
        """Base 5, +2 for a name match, +1 for a description match.

        An analysed neighborhood takes its overall score instead. Clamped to
        [0, 10].
        """
        score = BASE_SCORE
        if query:
            needle = query.lower()
            if needle in neighborhood.name.lower():
                score += 2.0
            if needle in neighborhood.description.lower():
                score += 1.0

        analysis = self.analysis.get(neighborhood.id)
        if analysis is not None:
            score = analysis.overall_score

        return min(10.0, max(0.0, score))

    def match_reasons(self, neighborhood: Neighborhood, query: Optional[str] = None) -> list[str]:
        reasons = []
        if query:
            needle = query.lower()
            if needle in neighborhood.name.lower():
                reasons.append("Name matches search query")
            if needle in neighborhood.description.lower():
                reasons.append("Description matches search query")

        analysis = self.analysis.get(neighborhood.id)
        if analysis is not None:
            if analysis.overall_score >= HIGHLIGHT_THRESHOLD:
                reasons.append("High overall rating")
            if analysis.category_scores.walkability >= HIGHLIGHT_THRESHOLD:
                reasons.append("Excellent walkability")
            if analysis.category_scores.amenities >= HIGHLIGHT_THRESHOLD:
                reasons.append("Great amenities")
        return reasons

    def highlights(self, neighborhood: Neighborhood) -> Highlights:
        demographics = self.demographics.get(neighborhood.id)
        transportation = self.transportation.get(neighborhood.id)
        crime = self.crime.get(neighborhood.id)

        population = demographics.population if demographics else neighborhood.population
        return Highlights(
            top_amenities=self.amenities_near(neighborhood)[:3],
            key_stats=KeyStats(
                population=population or 0,
                median_income=demographics.median_income if demographics else 0,
                walkability_score=transportation.walkability_score if transportation else 0,
                safety_score=crime.safety_score if crime else 0,
            ),
        )

    def _passes_filters(self, neighborhood: Neighborhood, filters: NeighborhoodFilters) -> bool:
        if filters.city and neighborhood.city.lower() != filters.city.lower():
            return False
        if filters.state and neighborhood.state.lower() != filters.state.lower():
            return False
        if filters.zip_code and neighborhood.zip_code != filters.zip_code:
            return False

        stats = self.highlights(neighborhood).key_stats
        if filters.min_population is not None and stats.population < filters.min_population:
            return False
        if filters.max_population is not None and stats.population > filters.max_population:
            return False
        if filters.min_median_income is not None and stats.median_income < filters.min_median_income:
            return False
        if filters.min_walkability_score is not None and stats.walkability_score < filters.min_walkability_score:
            return False
        if filters.min_safety_score is not None and stats.safety_score < filters.min_safety_score:
            return False
        return True

    async def search(self, request: NeighborhoodSearchRequest) -> NeighborhoodSearchResponse:
        query = request.query.strip() if request.query else None
        results = []

        for neighborhood in self.neighborhoods:
            if query:
                needle = query.lower()
                haystacks = (neighborhood.name, neighborhood.city, neighborhood.description)
                if not any(needle in text.lower() for text in haystacks):
                    continue
            if not self._passes_filters(neighborhood, request.filters):
                continue

            distance = None
            if request.location is not None:
                center = Coordinates(latitude=request.location.latitude, longitude=request.location.longitude)
                distance = haversine_distance(center, neighborhood.coordinates)
                if distance > request.location.radius:
                    continue

            score = self.score(neighborhood, query)
            if request.filters.min_score is not None and score < request.filters.min_score:
                continue

            results.append(NeighborhoodSearchResult(
                neighborhood=neighborhood,
                score=score,
                match_reasons=self.match_reasons(neighborhood, query),
                highlights=self.highlights(neighborhood),
                distance=distance,
            ))

        sort_results(results, request.sort_by, request.sort_order)

        page = results[request.offset:request.offset + request.limit]
        logger.info(
            "Neighborhood search completed",
            query=query,
            total=len(results),
            sort_by=request.sort_by.value,
        )
        return NeighborhoodSearchResponse(
            neighborhoods=page,
            total=len(results),
            limit=request.limit,
            offset=request.offset,
            has_more=request.offset + request.limit < len(results),
        )

    async def get_details(self, neighborhood_id: str) -> NeighborhoodDetails:
        neighborhood = next((n for n in self.neighborhoods if n.id == neighborhood_id), None)
        if neighborhood is None:
            raise NotFoundError("Neighborhood not found", code="NEIGHBORHOOD_NOT_FOUND")

        return NeighborhoodDetails(
            neighborhood=neighborhood,
            analysis=self.analysis.get(neighborhood_id),
            demographics=self.demographics.get(neighborhood_id),
            crime=self.crime.get(neighborhood_id),
            transportation=self.transportation.get(neighborhood_id),
            amenities=self.amenities_near(neighborhood),
        )


def sort_results(
    results: list[NeighborhoodSearchResult],
    sort_by: SortField,
    sort_order: Optional[SortOrder] = None,
) -> None:
    """Sort in place. Keys sort ascending and ``desc`` reverses them.

    Score sorts default to descending and name and distance sorts to
    ascending.
    """
    if sort_order is None:
        sort_order = SortOrder.DESC if sort_by in (SortField.RELEVANCE, SortField.SCORE) else SortOrder.ASC
    reverse = sort_order == SortOrder.DESC

    if sort_by == SortField.NAME:
        results.sort(key=lambda result: result.neighborhood.name.lower(), reverse=reverse)
    elif sort_by == SortField.DISTANCE:
        # No search location means no distances; keep the current order.
        if all(result.distance is not None for result in results):
            results.sort(key=lambda result: result.distance, reverse=reverse)
    else:
        results.sort(key=lambda result: result.score, reverse=reverse)


_service: Optional[NeighborhoodService] = None


def get_neighborhood_service() -> NeighborhoodService:
    global _service
    if _service is None:
        _service = NeighborhoodService()
    return _service
