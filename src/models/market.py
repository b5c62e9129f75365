"""Market analysis models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class MarketType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    LAND = "land"
    MIXED_USE = "mixed_use"


class MarketDataType(str, Enum):
    MEDIAN_PRICE = "median_price"
    AVERAGE_PRICE = "average_price"
    PRICE_PER_SQFT = "price_per_sqft"
    SALES_VOLUME = "sales_volume"
    DAYS_ON_MARKET = "days_on_market"
    INVENTORY_LEVEL = "inventory_level"
    APPRECIATION_RATE = "appreciation_rate"
    RENTAL_YIELD = "rental_yield"
    CAP_RATE = "cap_rate"


class PropertyType(str, Enum):
    SINGLE_FAMILY = "single_family"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    MULTI_FAMILY = "multi_family"
    APARTMENT = "apartment"
    OFFICE = "office"
    RETAIL = "retail"
    WAREHOUSE = "warehouse"
    HOTEL = "hotel"
    LAND = "land"


class TrendType(str, Enum):
    PRICE_TREND = "price_trend"
    VOLUME_TREND = "volume_trend"
    INVENTORY_TREND = "inventory_trend"
    APPRECIATION_TREND = "appreciation_trend"
    RENTAL_TREND = "rental_trend"
    MARKET_ACTIVITY = "market_activity"


class TimePeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class TrendDirection(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"
    VOLATILE = "volatile"


class InsightType(str, Enum):
    MARKET_HOT = "market_hot"
    MARKET_COOL = "market_cool"
    PRICE_OPPORTUNITY = "price_opportunity"
    INVESTMENT_OPPORTUNITY = "investment_opportunity"
    RISK_WARNING = "risk_warning"
    TREND_CHANGE = "trend_change"
    SEASONAL_PATTERN = "seasonal_pattern"
    COMPETITIVE_ANALYSIS = "competitive_analysis"


class ImpactLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComparisonType(str, Enum):
    NEIGHBORHOOD = "neighborhood"
    CITY = "city"
    STATE = "state"
    NATIONAL = "national"
    SIMILAR_PROPERTIES = "similar_properties"
    HISTORICAL = "historical"


class OpportunityType(str, Enum):
    UNDERVALUED = "undervalued"
    GROWTH_POTENTIAL = "growth_potential"
    RENTAL_INCOME = "rental_income"
    DEVELOPMENT = "development"
    FLIP_OPPORTUNITY = "flip_opportunity"
    DISTRESSED_SALE = "distressed_sale"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class TimeHorizon(str, Enum):
    SHORT_TERM = "short_term"  # < 1 year
    MEDIUM_TERM = "medium_term"  # 1-5 years
    LONG_TERM = "long_term"  # > 5 years


class ReportType(str, Enum):
    MARKET_OVERVIEW = "market_overview"
    INVESTMENT_ANALYSIS = "investment_analysis"
    PRICE_ANALYSIS = "price_analysis"
    TREND_ANALYSIS = "trend_analysis"
    COMPARATIVE_ANALYSIS = "comparative_analysis"
    FORECAST_REPORT = "forecast_report"


class ChartType(str, Enum):
    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    SCATTER = "scatter"
    AREA = "area"
    HEATMAP = "heatmap"
    GAUGE = "gauge"


class DataQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class MarketDataMetadata(BaseModel):
    sample_size: Optional[int] = None
    methodology: Optional[str] = None
    data_quality: Optional[DataQuality] = None
    notes: Optional[str] = None


class MarketData(BaseModel):
    """A single observed market statistic."""
    id: str
    location: str
    region: str
    state: str
    zip_code: str
    market_type: MarketType
    data_type: MarketDataType
    value: float
    unit: str
    date: datetime
    source: str
    confidence: float = Field(..., ge=0, le=1)
    metadata: Optional[MarketDataMetadata] = None


class MarketDataPoint(BaseModel):
    date: datetime
    value: float
    source: str
    confidence: float


class MarketForecast(BaseModel):
    id: str
    trend_id: str
    forecast_type: str
    period: TimePeriod
    predicted_value: float
    confidence: float
    upper_bound: float
    lower_bound: float
    methodology: str
    assumptions: list[str] = Field(default_factory=list)
    last_updated: datetime


class MarketTrend(BaseModel):
    id: str
    location: str
    property_type: PropertyType
    trend_type: TrendType
    period: TimePeriod
    start_date: datetime
    end_date: datetime
    current_value: float
    previous_value: float
    change_percent: float
    change_amount: float
    direction: TrendDirection
    confidence: float
    data_points: list[MarketDataPoint] = Field(default_factory=list)
    forecast: Optional[MarketForecast] = None


class MarketInsight(BaseModel):
    id: str
    location: str
    property_type: PropertyType
    insight_type: InsightType
    title: str
    description: str
    impact: ImpactLevel
    confidence: float
    source: str
    date: datetime
    tags: list[str] = Field(default_factory=list)
    related_trends: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class MarketComparison(BaseModel):
    id: str
    location: str
    property_type: PropertyType
    comparison_type: ComparisonType
    benchmark: str
    current_value: float
    benchmark_value: float
    difference: float
    difference_percent: float
    rank: int
    total_properties: int
    percentile: float
    date: datetime


class OpportunityFactor(BaseModel):
    factor: str
    impact: ImpactLevel
    description: str
    weight: float


class InvestmentOpportunity(BaseModel):
    id: str
    property_id: str
    location: str
    property_type: Optional[PropertyType] = None
    opportunity_type: OpportunityType
    title: str
    description: str
    potential_return: float = Field(..., description="Percent")
    risk_level: RiskLevel
    time_horizon: TimeHorizon
    confidence: float
    investment_required: Optional[float] = None
    factors: list[OpportunityFactor] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    date: datetime


class ChartData(BaseModel):
    id: str
    type: ChartType
    title: str
    data: list[Any] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


class TableData(BaseModel):
    id: str
    title: str
    headers: list[str]
    rows: list[list[Any]]


class ReportSection(BaseModel):
    id: str
    title: str
    content: str
    charts: list[ChartData] = Field(default_factory=list)
    tables: list[TableData] = Field(default_factory=list)
    order: int


class MarketReport(BaseModel):
    id: str
    location: str
    property_type: PropertyType
    report_type: ReportType
    title: str
    summary: str
    sections: list[ReportSection] = Field(default_factory=list)
    insights: list[MarketInsight] = Field(default_factory=list)
    trends: list[MarketTrend] = Field(default_factory=list)
    comparisons: list[MarketComparison] = Field(default_factory=list)
    opportunities: list[InvestmentOpportunity] = Field(default_factory=list)
    generated_at: datetime
    valid_until: datetime
    confidence: float


class MarketDataFilter(BaseModel):
    location: Optional[str] = None
    market_type: Optional[MarketType] = None
    data_type: Optional[MarketDataType] = None
    period: Optional[TimePeriod] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    min_confidence: Optional[float] = None


class MarketSummary(BaseModel):
    current_value: float
    previous_value: float
    change_percent: float
    direction: TrendDirection
    confidence: float


class MarketDataResponse(BaseModel):
    data: list[MarketData]
    trends: list[MarketTrend]
    summary: MarketSummary


class MarketInsightFilter(BaseModel):
    location: Optional[str] = None
    property_type: Optional[PropertyType] = None
    insight_type: Optional[InsightType] = None
    impact: Optional[ImpactLevel] = None
    min_confidence: Optional[float] = None
    tags: Optional[list[str]] = None


class OpportunityFilter(BaseModel):
    location: Optional[str] = None
    property_type: Optional[PropertyType] = None
    opportunity_type: Optional[OpportunityType] = None
    risk_level: Optional[RiskLevel] = None
    time_horizon: Optional[TimeHorizon] = None
    min_potential_return: Optional[float] = None
    max_investment: Optional[float] = None


class MarketAnalysis(BaseModel):
    location: str
    property_type: Optional[PropertyType] = None
    direction: TrendDirection
    data: list[MarketData]
    trends: list[MarketTrend]
    insights: list[MarketInsight]
    comparisons: list[MarketComparison]
    opportunities: list[InvestmentOpportunity]
    report: MarketReport
