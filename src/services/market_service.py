"""Market analysis over seeded market datasets."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from src.models.market import (
    ChartData,
    ChartType,
    ComparisonType,
    DataQuality,
    ImpactLevel,
    InsightType,
    InvestmentOpportunity,
    MarketAnalysis,
    MarketComparison,
    MarketData,
    MarketDataFilter,
    MarketDataMetadata,
    MarketDataPoint,
    MarketDataResponse,
    MarketDataType,
    MarketForecast,
    MarketInsight,
    MarketInsightFilter,
    MarketReport,
    MarketSummary,
    MarketTrend,
    MarketType,
    OpportunityFactor,
    OpportunityFilter,
    OpportunityType,
    PropertyType,
    ReportSection,
    ReportType,
    RiskLevel,
    TableData,
    TimeHorizon,
    TimePeriod,
    TrendDirection,
    TrendType,
)
from src.utils.ids import new_id, utc_now
from src.utils.logging import get_structured_logger, timed

logger = get_structured_logger(__name__)

REPORT_VALIDITY = timedelta(days=30)
REPORT_CONFIDENCE = 0.85


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def trend_direction(change_percent: float) -> TrendDirection:
    """Classify a percentage change.

    Above 5 is rising and below -5 is falling. Within 2 of zero is stable;
    anything else is volatile.
    """
    if change_percent > 5:
        return TrendDirection.RISING
    if change_percent < -5:
        return TrendDirection.FALLING
    if abs(change_percent) < 2:
        return TrendDirection.STABLE
    return TrendDirection.VOLATILE


def change_percent(current: float, previous: float) -> float:
    return (current - previous) / previous * 100 if previous > 0 else 0


def _seed_market_data() -> list[MarketData]:
    sf = {"location": "San Francisco, CA", "region": "Bay Area", "state": "CA", "zip_code": "94102"}
    austin = {"location": "Austin, TX", "region": "Central Texas", "state": "TX", "zip_code": "78701"}
    return [
        MarketData(
            id="data-1", **sf, market_type=MarketType.RESIDENTIAL, data_type=MarketDataType.MEDIAN_PRICE,
            value=1_200_000, unit="USD", date=_day(2024, 1, 1), source="MLS Data", confidence=0.95,
            metadata=MarketDataMetadata(
                sample_size=150, methodology="Median of all sales", data_quality=DataQuality.EXCELLENT
            ),
        ),
        MarketData(
            id="data-2", **sf, market_type=MarketType.RESIDENTIAL, data_type=MarketDataType.AVERAGE_PRICE,
            value=1_350_000, unit="USD", date=_day(2024, 1, 1), source="MLS Data", confidence=0.92,
            metadata=MarketDataMetadata(
                sample_size=150, methodology="Average of all sales", data_quality=DataQuality.EXCELLENT
            ),
        ),
        MarketData(
            id="data-3", **sf, market_type=MarketType.RESIDENTIAL, data_type=MarketDataType.DAYS_ON_MARKET,
            value=25, unit="days", date=_day(2024, 1, 1), source="MLS Data", confidence=0.88,
            metadata=MarketDataMetadata(
                sample_size=150, methodology="Average days on market", data_quality=DataQuality.GOOD
            ),
        ),
        MarketData(
            id="data-4", **sf, market_type=MarketType.RESIDENTIAL, data_type=MarketDataType.MEDIAN_PRICE,
            value=1_140_000, unit="USD", date=_day(2023, 10, 1), source="MLS Data", confidence=0.94,
        ),
        MarketData(
            id="data-5", **austin, market_type=MarketType.RESIDENTIAL, data_type=MarketDataType.MEDIAN_PRICE,
            value=560_000, unit="USD", date=_day(2023, 10, 1), source="MLS Data", confidence=0.9,
        ),
        MarketData(
            id="data-6", **austin, market_type=MarketType.RESIDENTIAL, data_type=MarketDataType.MEDIAN_PRICE,
            value=520_000, unit="USD", date=_day(2024, 1, 1), source="MLS Data", confidence=0.9,
        ),
        MarketData(
            id="data-7", **austin, market_type=MarketType.COMMERCIAL, data_type=MarketDataType.CAP_RATE,
            value=6.1, unit="percent", date=_day(2024, 1, 1), source="Commercial Survey", confidence=0.8,
        ),
    ]


def _seed_trends() -> list[MarketTrend]:
    return [
        MarketTrend(
            id="trend-1",
            location="San Francisco, CA",
            property_type=PropertyType.SINGLE_FAMILY,
            trend_type=TrendType.PRICE_TREND,
            period=TimePeriod.MONTHLY,
            start_date=_day(2023, 1, 1),
            end_date=_day(2024, 1, 1),
            current_value=1_200_000,
            previous_value=1_150_000,
            change_percent=4.35,
            change_amount=50_000,
            direction=TrendDirection.VOLATILE,
            confidence=0.92,
            data_points=[
                MarketDataPoint(date=_day(2023, 1, 1), value=1_150_000, source="MLS", confidence=0.95),
                MarketDataPoint(date=_day(2023, 6, 1), value=1_180_000, source="MLS", confidence=0.93),
                MarketDataPoint(date=_day(2024, 1, 1), value=1_200_000, source="MLS", confidence=0.95),
            ],
            forecast=MarketForecast(
                id="forecast-1",
                trend_id="trend-1",
                forecast_type="short_term",
                period=TimePeriod.MONTHLY,
                predicted_value=1_220_000,
                confidence=0.78,
                upper_bound=1_250_000,
                lower_bound=1_190_000,
                methodology="Linear regression with seasonal adjustment",
                assumptions=["Current market conditions continue", "No major economic shocks"],
                last_updated=_day(2024, 1, 1),
            ),
        ),
        MarketTrend(
            id="trend-2",
            location="San Francisco, CA",
            property_type=PropertyType.CONDO,
            trend_type=TrendType.PRICE_TREND,
            period=TimePeriod.QUARTERLY,
            start_date=_day(2022, 10, 1),
            end_date=_day(2023, 10, 1),
            current_value=980_000,
            previous_value=975_000,
            change_percent=0.51,
            change_amount=5_000,
            direction=TrendDirection.STABLE,
            confidence=0.85,
        ),
        MarketTrend(
            id="trend-3",
            location="Austin, TX",
            property_type=PropertyType.SINGLE_FAMILY,
            trend_type=TrendType.PRICE_TREND,
            period=TimePeriod.QUARTERLY,
            start_date=_day(2023, 1, 1),
            end_date=_day(2024, 1, 1),
            current_value=520_000,
            previous_value=565_000,
            change_percent=-7.96,
            change_amount=-45_000,
            direction=TrendDirection.FALLING,
            confidence=0.87,
        ),
    ]


def _seed_insights() -> list[MarketInsight]:
    return [
        MarketInsight(
            id="insight-1",
            location="San Francisco, CA",
            property_type=PropertyType.SINGLE_FAMILY,
            insight_type=InsightType.MARKET_HOT,
            title="Strong Seller's Market",
            description=(
                "Properties are selling 15% above asking price with multiple offers. "
                "Average days on market is only 25 days."
            ),
            impact=ImpactLevel.HIGH,
            confidence=0.88,
            source="Market Analysis",
            date=_day(2024, 1, 15),
            tags=["seller-market", "high-demand", "quick-sales"],
            related_trends=["trend-1"],
            recommendations=[
                "Consider listing properties at market value",
                "Prepare for multiple offer scenarios",
                "Focus on property presentation and staging",
            ],
        ),
        MarketInsight(
            id="insight-2",
            location="San Francisco, CA",
            property_type=PropertyType.SINGLE_FAMILY,
            insight_type=InsightType.INVESTMENT_OPPORTUNITY,
            title="Rental Yield Opportunity",
            description=(
                "Current rental yields are 4.2% with strong tenant demand. "
                "Properties near tech hubs show 5.5% yields."
            ),
            impact=ImpactLevel.MEDIUM,
            confidence=0.82,
            source="Rental Market Analysis",
            date=_day(2024, 1, 10),
            tags=["rental-yield", "investment", "tech-hubs"],
            related_trends=["trend-1"],
            recommendations=[
                "Consider properties near major tech companies",
                "Focus on 2-3 bedroom units for optimal yield",
                "Research local rental regulations",
            ],
        ),
        MarketInsight(
            id="insight-3",
            location="Austin, TX",
            property_type=PropertyType.SINGLE_FAMILY,
            insight_type=InsightType.MARKET_COOL,
            title="Cooling Prices After Pandemic Peak",
            description="Median prices have fallen for three straight quarters as inventory recovers.",
            impact=ImpactLevel.MEDIUM,
            confidence=0.79,
            source="Market Analysis",
            date=_day(2024, 1, 5),
            tags=["buyer-market", "inventory"],
            related_trends=["trend-3"],
        ),
    ]


def _seed_comparisons() -> list[MarketComparison]:
    return [
        MarketComparison(
            id="comparison-1",
            location="San Francisco, CA",
            property_type=PropertyType.SINGLE_FAMILY,
            comparison_type=ComparisonType.CITY,
            benchmark="San Francisco Average",
            current_value=1_200_000,
            benchmark_value=1_100_000,
            difference=100_000,
            difference_percent=9.09,
            rank=15,
            total_properties=100,
            percentile=85,
            date=_day(2024, 1, 1),
        ),
        MarketComparison(
            id="comparison-2",
            location="Austin, TX",
            property_type=PropertyType.SINGLE_FAMILY,
            comparison_type=ComparisonType.STATE,
            benchmark="Texas Average",
            current_value=520_000,
            benchmark_value=340_000,
            difference=180_000,
            difference_percent=52.94,
            rank=4,
            total_properties=50,
            percentile=92,
            date=_day(2024, 1, 1),
        ),
    ]


def _seed_opportunities() -> list[InvestmentOpportunity]:
    return [
        InvestmentOpportunity(
            id="opportunity-1",
            property_id="property-1",
            location="San Francisco, CA",
            property_type=PropertyType.SINGLE_FAMILY,
            opportunity_type=OpportunityType.UNDERVALUED,
            title="Distressed Property Opportunity",
            description=(
                "Property listed 20% below market value due to needed repairs. "
                "Estimated repair costs: $50,000."
            ),
            potential_return=25.5,
            risk_level=RiskLevel.MEDIUM,
            time_horizon=TimeHorizon.SHORT_TERM,
            confidence=0.75,
            investment_required=960_000,
            factors=[
                OpportunityFactor(
                    factor="Market Appreciation", impact=ImpactLevel.HIGH,
                    description="Strong market growth expected", weight=0.4,
                ),
                OpportunityFactor(
                    factor="Repair Costs", impact=ImpactLevel.MEDIUM,
                    description="Moderate renovation required", weight=0.3,
                ),
                OpportunityFactor(
                    factor="Location Premium", impact=ImpactLevel.HIGH,
                    description="Prime location with high demand", weight=0.3,
                ),
            ],
            recommendations=[
                "Get detailed inspection before purchase",
                "Obtain multiple contractor quotes",
                "Consider financing options for repairs",
                "Research local permit requirements",
            ],
            date=_day(2024, 1, 15),
        ),
        InvestmentOpportunity(
            id="opportunity-2",
            property_id="property-4",
            location="Austin, TX",
            property_type=PropertyType.MULTI_FAMILY,
            opportunity_type=OpportunityType.RENTAL_INCOME,
            title="Fourplex Near Downtown",
            description="Fully leased fourplex with below-market rents and room to raise them at renewal.",
            potential_return=8.2,
            risk_level=RiskLevel.LOW,
            time_horizon=TimeHorizon.LONG_TERM,
            confidence=0.81,
            investment_required=450_000,
            recommendations=["Review existing leases", "Budget for deferred maintenance"],
            date=_day(2024, 1, 12),
        ),
    ]


def _matches_data(item: MarketData, filters: MarketDataFilter) -> bool:
    if filters.location and item.location != filters.location:
        return False
    if filters.market_type and item.market_type != filters.market_type:
        return False
    if filters.data_type and item.data_type != filters.data_type:
        return False
    if filters.date_from and item.date < filters.date_from:
        return False
    if filters.date_to and item.date > filters.date_to:
        return False
    if filters.min_confidence is not None and item.confidence < filters.min_confidence:
        return False
    return True


def _format_percent(value: float) -> str:
    return f"{value:.1f}%"


class MarketService:
    """In-memory market datasets with analysis and reporting on top."""

    def __init__(self):
        self.market_data = _seed_market_data()
        self.trends = _seed_trends()
        self.insights = _seed_insights()
        self.comparisons = _seed_comparisons()
        self.opportunities = _seed_opportunities()

    async def get_market_data(self, filters: MarketDataFilter) -> MarketDataResponse:
        data = sorted(
            (item for item in self.market_data if _matches_data(item, filters)),
            key=lambda item: item.date,
        )
        trends = await self.get_market_trends(filters)

        current = data[-1].value if data else 0
        previous = data[-2].value if len(data) > 1 else current
        change = change_percent(current, previous)

        return MarketDataResponse(
            data=data,
            trends=trends,
            summary=MarketSummary(
                current_value=current,
                previous_value=previous,
                change_percent=change,
                direction=trend_direction(change),
                confidence=data[-1].confidence if data else 0,
            ),
        )

    async def get_market_trends(
        self,
        filters: MarketDataFilter,
        property_type: Optional[PropertyType] = None,
    ) -> list[MarketTrend]:
        """Trends for a location, most recent end date first."""
        trends = [
            trend for trend in self.trends
            if (not filters.location or trend.location == filters.location)
            and (not filters.period or trend.period == filters.period)
            and (not property_type or trend.property_type == property_type)
        ]
        return sorted(trends, key=lambda trend: trend.end_date, reverse=True)

    async def get_market_insights(self, filters: MarketInsightFilter) -> list[MarketInsight]:
        insights = []
        for insight in self.insights:
            if filters.location and insight.location != filters.location:
                continue
            if filters.property_type and insight.property_type != filters.property_type:
                continue
            if filters.insight_type and insight.insight_type != filters.insight_type:
                continue
            if filters.impact and insight.impact != filters.impact:
                continue
            if filters.min_confidence is not None and insight.confidence < filters.min_confidence:
                continue
            if filters.tags and not any(tag in insight.tags for tag in filters.tags):
                continue
            insights.append(insight)
        return sorted(insights, key=lambda insight: insight.date, reverse=True)

    async def get_market_comparisons(
        self,
        locations: list[str],
        property_type: Optional[PropertyType] = None,
    ) -> list[MarketComparison]:
        comparisons = [
            comparison for comparison in self.comparisons
            if comparison.location in locations
            and (not property_type or comparison.property_type == property_type)
        ]
        return sorted(comparisons, key=lambda comparison: comparison.date, reverse=True)

    async def get_investment_opportunities(self, filters: OpportunityFilter) -> list[InvestmentOpportunity]:
        """Matching opportunities, highest potential return first."""
        opportunities = []
        for opportunity in self.opportunities:
            if filters.location and opportunity.location != filters.location:
                continue
            if filters.property_type and opportunity.property_type != filters.property_type:
                continue
            if filters.opportunity_type and opportunity.opportunity_type != filters.opportunity_type:
                continue
            if filters.risk_level and opportunity.risk_level != filters.risk_level:
                continue
            if filters.time_horizon and opportunity.time_horizon != filters.time_horizon:
                continue
            if filters.min_potential_return is not None and opportunity.potential_return < filters.min_potential_return:
                continue
            if filters.max_investment is not None and (
                opportunity.investment_required is None or opportunity.investment_required > filters.max_investment
            ):
                continue
            opportunities.append(opportunity)
        return sorted(opportunities, key=lambda opportunity: opportunity.potential_return, reverse=True)

    @timed("market.analysis")
    async def get_market_analysis(
        self,
        location: str,
        property_type: Optional[PropertyType] = None,
    ) -> MarketAnalysis:
        data = await self.get_market_data(MarketDataFilter(location=location))
        report = await self.generate_market_report(location, ReportType.MARKET_OVERVIEW, property_type)

        if report.trends:
            direction = trend_direction(report.trends[0].change_percent)
        else:
            direction = data.summary.direction

        logger.info(
            "Market analysis generated",
            location=location,
            property_type=property_type.value if property_type else None,
            direction=direction.value,
            trends=len(report.trends),
        )
        return MarketAnalysis(
            location=location,
            property_type=property_type,
            direction=direction,
            data=data.data,
            trends=report.trends,
            insights=report.insights,
            comparisons=report.comparisons,
            opportunities=report.opportunities,
            report=report,
        )

    async def generate_market_report(
        self,
        location: str,
        report_type: ReportType = ReportType.MARKET_OVERVIEW,
        property_type: Optional[PropertyType] = None,
    ) -> MarketReport:
        trends = await self.get_market_trends(MarketDataFilter(location=location), property_type)
        insights = await self.get_market_insights(
            MarketInsightFilter(location=location, property_type=property_type)
        )
        comparisons = await self.get_market_comparisons([location], property_type)
        opportunities = await self.get_investment_opportunities(
            OpportunityFilter(location=location, property_type=property_type)
        )

        generated_at = utc_now()
        report = MarketReport(
            id=new_id("report"),
            location=location,
            property_type=property_type or PropertyType.SINGLE_FAMILY,
            report_type=report_type,
            title=f"Market Analysis: {location}",
            summary=f"Comprehensive market analysis for {location}",
            insights=insights,
            trends=trends,
            comparisons=comparisons,
            opportunities=opportunities,
            generated_at=generated_at,
            valid_until=generated_at + REPORT_VALIDITY,
            confidence=REPORT_CONFIDENCE,
        )
        report.sections = build_report_sections(report)
        return report


def build_report_sections(report: MarketReport) -> list[ReportSection]:
    """Summary first, then trends, insights and opportunities when present."""
    sections = [
        ReportSection(
            id="summary-section",
            title="Summary",
            content=report.summary,
            order=1,
        )
    ]

    if report.trends:
        sections.append(ReportSection(
            id="trends-section",
            title="Market Trends",
            content="Analysis of current market trends and patterns.",
            charts=[ChartData(
                id="trends-chart",
                type=ChartType.LINE,
                title="Price Trends Over Time",
                data=[point.model_dump(mode="json") for point in report.trends[0].data_points],
                options={"responsive": True},
            )],
            tables=[TableData(
                id="trends-table",
                title="Market Trends Summary",
                headers=["Property Type", "Period", "Current Value", "Change", "Direction"],
                rows=[
                    [
                        trend.property_type.value,
                        trend.period.value,
                        trend.current_value,
                        _format_percent(trend.change_percent),
                        trend.direction.value,
                    ]
                    for trend in report.trends
                ],
            )],
            order=len(sections) + 1,
        ))

    if report.insights:
        sections.append(ReportSection(
            id="insights-section",
            title="Market Insights",
            content="Key insights and recommendations for the market.",
            tables=[TableData(
                id="insights-table",
                title="Market Insights Summary",
                headers=["Type", "Impact", "Confidence", "Date"],
                rows=[
                    [
                        insight.insight_type.value,
                        insight.impact.value,
                        _format_percent(insight.confidence * 100),
                        insight.date.date().isoformat(),
                    ]
                    for insight in report.insights
                ],
            )],
            order=len(sections) + 1,
        ))

    if report.opportunities:
        sections.append(ReportSection(
            id="opportunities-section",
            title="Investment Opportunities",
            content="Identified investment opportunities in the market.",
            tables=[TableData(
                id="opportunities-table",
                title="Investment Opportunities",
                headers=["Type", "Potential Return", "Risk Level", "Time Horizon"],
                rows=[
                    [
                        opportunity.opportunity_type.value,
                        _format_percent(opportunity.potential_return),
                        opportunity.risk_level.value,
                        opportunity.time_horizon.value,
                    ]
                    for opportunity in report.opportunities
                ],
            )],
            order=len(sections) + 1,
        ))

    return sections


_service: Optional[MarketService] = None


def get_market_service() -> MarketService:
    global _service
    if _service is None:
        _service = MarketService()
    return _service
