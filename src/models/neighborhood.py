"""Neighborhood exploration models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AmenityType(str, Enum):
    RESTAURANT = "restaurant"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    HEALTHCARE = "healthcare"
    FITNESS = "fitness"
    EDUCATION = "education"
    TRANSPORTATION = "transportation"
    FINANCIAL = "financial"
    GOVERNMENT = "government"
    RELIGIOUS = "religious"
    PARKS = "parks"
    RECREATION = "recreation"
    NIGHTLIFE = "nightlife"
    GROCERY = "grocery"
    PHARMACY = "pharmacy"
    OTHER = "other"


class AmenityCategory(str, Enum):
    ESSENTIAL = "essential"
    CONVENIENCE = "convenience"
    LUXURY = "luxury"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    EDUCATION = "education"
    TRANSPORTATION = "transportation"
    RECREATION = "recreation"
    NIGHTLIFE = "nightlife"


class CrimeTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class SortField(str, Enum):
    RELEVANCE = "relevance"
    SCORE = "score"
    NAME = "name"
    DISTANCE = "distance"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Boundaries(BaseModel):
    type: str = "polygon"
    coordinates: list[list[float]] = Field(default_factory=list, description="[lng, lat] pairs")


class Neighborhood(BaseModel):
    id: str
    name: str
    city: str
    state: str
    country: str = "USA"
    zip_code: str
    coordinates: Coordinates
    boundaries: Optional[Boundaries] = None
    description: str = ""
    population: Optional[int] = None
    area_sq_km: Optional[float] = None
    image_url: Optional[str] = None


class Amenity(BaseModel):
    id: str
    name: str
    type: AmenityType
    category: AmenityCategory
    address: Optional[str] = None
    coordinates: Coordinates
    rating: Optional[float] = Field(None, ge=0, le=5)
    features: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    is_verified: bool = False


class Demographics(BaseModel):
    neighborhood_id: str
    year: int
    population: int
    median_age: float
    median_income: float
    average_household_size: float
    poverty_rate: float


class CrimeStatistics(BaseModel):
    neighborhood_id: str
    year: int
    quarter: int
    total_crimes: int
    violent_crimes: int
    property_crimes: int
    crime_rate: float
    safety_score: float = Field(..., ge=0, le=10)
    trend: CrimeTrend
    comparison_to_city: float = Field(..., description="Percent relative to the city average")


class CommuteTimes(BaseModel):
    to_downtown: int
    to_airport: int


class Transportation(BaseModel):
    neighborhood_id: str
    walkability_score: int = Field(..., ge=0, le=100)
    transit_lines: list[str] = Field(default_factory=list)
    commute_times: Optional[CommuteTimes] = None


class CategoryScores(BaseModel):
    safety: float
    amenities: float
    schools: float
    transportation: float
    cost_of_living: float
    walkability: float
    diversity: float
    nightlife: float
    family_friendly: float
    investment_potential: float


class NeighborhoodAnalysis(BaseModel):
    neighborhood_id: str
    overall_score: float = Field(..., ge=0, le=10)
    category_scores: CategoryScores
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class SearchLocation(BaseModel):
    latitude: float
    longitude: float
    radius: float = Field(..., gt=0, description="Meters")


class NeighborhoodFilters(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    min_score: Optional[float] = None
    min_population: Optional[int] = None
    max_population: Optional[int] = None
    min_median_income: Optional[float] = None
    min_walkability_score: Optional[int] = None
    min_safety_score: Optional[float] = None


class NeighborhoodSearchRequest(BaseModel):
    query: Optional[str] = None
    filters: NeighborhoodFilters = Field(default_factory=NeighborhoodFilters)
    location: Optional[SearchLocation] = None
    sort_by: SortField = SortField.RELEVANCE
    sort_order: Optional[SortOrder] = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class KeyStats(BaseModel):
    population: int = 0
    median_income: float = 0
    walkability_score: int = 0
    safety_score: float = 0


class Highlights(BaseModel):
    top_amenities: list[Amenity] = Field(default_factory=list)
    key_stats: KeyStats = Field(default_factory=KeyStats)


class NeighborhoodSearchResult(BaseModel):
    neighborhood: Neighborhood
    score: float
    match_reasons: list[str] = Field(default_factory=list)
    highlights: Highlights
    distance: Optional[float] = Field(None, description="Meters from the search location")


class NeighborhoodSearchResponse(BaseModel):
    neighborhoods: list[NeighborhoodSearchResult]
    total: int
    limit: int
    offset: int
    has_more: bool


class NeighborhoodDetails(BaseModel):
    neighborhood: Neighborhood
    analysis: Optional[NeighborhoodAnalysis] = None
    demographics: Optional[Demographics] = None
    crime: Optional[CrimeStatistics] = None
    transportation: Optional[Transportation] = None
    amenities: list[Amenity] = Field(default_factory=list)
