"""Agent directory service: agents, brokerages, commissions and client matching."""

from typing import Any, Optional

from src.models.agent import (
    Agent,
    AgentCreate,
    AgentMatch,
    AgentPerformance,
    AgentSearchFilters,
    AgentVerification,
    Brokerage,
    ClientPreferences,
    Commission,
    CommissionCreate,
    CommissionStatus,
    MatchCompatibility,
)
from src.services.supabase_client import fetch_row, fetch_rows, insert_row, update_row
from src.utils.errors import NotFoundError
from src.utils.ids import new_id, utc_now
from src.utils.logging import get_structured_logger, mask_payload, timed

logger = get_structured_logger(__name__)

AGENTS_TABLE = "agents"
BROKERAGES_TABLE = "brokerages"
COMMISSIONS_TABLE = "commissions"

MIN_VERIFICATION_REFERENCES = 2


def _overlaps(wanted: list[str], available: list[str]) -> bool:
    available_lower = {item.lower() for item in available}
    return any(item.lower() in available_lower for item in wanted)


def matches_filters(agent: Agent, filters: AgentSearchFilters) -> bool:
    """Apply directory filters to a single agent."""
    if filters.location:
        location = filters.location.lower()
        if not any(location in area.lower() for area in agent.service_areas):
            return False
    if filters.specialties and not _overlaps(filters.specialties, agent.specialties):
        return False
    if filters.languages and not _overlaps(filters.languages, agent.languages):
        return False
    if filters.experience_min is not None and agent.experience < filters.experience_min:
        return False
    if filters.experience_max is not None and agent.experience > filters.experience_max:
        return False
    if filters.rating_min is not None and agent.rating < filters.rating_min:
        return False
    if filters.rating_max is not None and agent.rating > filters.rating_max:
        return False
    if filters.is_verified is not None and agent.is_verified != filters.is_verified:
        return False
    if filters.brokerage_id and agent.brokerage_id != filters.brokerage_id:
        return False
    if filters.commission_rate_min is not None and agent.commission_rate < filters.commission_rate_min:
        return False
    if filters.commission_rate_max is not None and agent.commission_rate > filters.commission_rate_max:
        return False
    return True


def score_agent(agent: Agent, preferences: ClientPreferences) -> AgentMatch:
    """Score how well an agent fits a client's preferences.

    Weights: location 30, specialty 25, experience 20/15, rating 15/10,
    availability 10.
    """
    score = 0
    reasons: list[str] = []
    compatibility = MatchCompatibility()

    location = preferences.location.lower()
    if any(location in area.lower() for area in agent.service_areas):
        compatibility.location = 100
        score += 30
        reasons.append("Serves your preferred location")

    property_type = preferences.property_type.lower()
    if any(property_type in specialty.lower() for specialty in agent.specialties):
        compatibility.specialties = 100
        score += 25
        reasons.append(f"Specializes in {preferences.property_type}")

    if agent.experience >= 5:
        compatibility.experience = 100
        score += 20
        reasons.append("Experienced agent with proven track record")
    elif agent.experience >= 2:
        compatibility.experience = 70
        score += 15
        reasons.append("Moderately experienced agent")

    if agent.rating >= 4.5:
        compatibility.rating = 100
        score += 15
        reasons.append("Highly rated by clients")
    elif agent.rating >= 4.0:
        compatibility.rating = 80
        score += 10
        reasons.append("Well-rated agent")

    if agent.is_active:
        compatibility.availability = 100
        score += 10
        reasons.append("Currently active and available")

    return AgentMatch(agent_id=agent.id, match_score=score, reasons=reasons, compatibility=compatibility)


class AgentService:
    """Agent directory operations against Supabase."""

    @timed("agents.list")
    async def get_agents(self, filters: Optional[AgentSearchFilters] = None) -> list[Agent]:
        rows = await fetch_rows(AGENTS_TABLE, {"is_active": True}, order_by="rating", descending=True)
        agents = [Agent.model_validate(row) for row in rows]
        if filters is not None:
            agents = [agent for agent in agents if matches_filters(agent, filters)]
        return agents

    async def get_agent(self, agent_id: str) -> Optional[Agent]:
        row = await fetch_row(AGENTS_TABLE, "id", agent_id)
        return Agent.model_validate(row) if row else None

    async def create_agent(self, data: AgentCreate) -> Agent:
        now = utc_now().isoformat()
        record: dict[str, Any] = data.model_dump()
        record.update({
            "id": new_id(),
            "commission_rate": data.commission_rate if data.commission_rate is not None else 2.5,
            "rating": 0,
            "review_count": 0,
            "is_verified": False,
            "is_active": True,
            "certifications": [],
            "awards": [],
            "total_sales": 0,
            "total_sales_value": 0,
            "average_days_on_market": 0,
            "client_satisfaction_score": 0,
            "created_at": now,
            "updated_at": now,
        })

        row = await insert_row(AGENTS_TABLE, record)
        logger.info("Agent created", agent_id=record["id"], **mask_payload({"email": data.email or ""}))
        return Agent.model_validate(row)

    async def update_agent(self, agent_id: str, updates: dict[str, Any]) -> Agent:
        updates = {key: value for key, value in updates.items() if key not in ("id", "created_at")}
        updates["updated_at"] = utc_now().isoformat()

        row = await update_row(AGENTS_TABLE, "id", agent_id, updates)
        if row is None:
            raise NotFoundError("Agent not found", code="AGENT_NOT_FOUND")
        return Agent.model_validate(row)

    async def get_brokerages(self) -> list[Brokerage]:
        rows = await fetch_rows(BROKERAGES_TABLE, {"is_active": True}, order_by="name")
        return [Brokerage.model_validate(row) for row in rows]

    async def get_brokerage(self, brokerage_id: str) -> Optional[Brokerage]:
        row = await fetch_row(BROKERAGES_TABLE, "id", brokerage_id)
        return Brokerage.model_validate(row) if row else None

    async def get_commissions(self, agent_id: str) -> list[Commission]:
        """Commissions for an agent, newest first."""
        rows = await fetch_rows(
            COMMISSIONS_TABLE, {"agent_id": agent_id}, order_by="created_at", descending=True
        )
        return [Commission.model_validate(row) for row in rows]

    async def create_commission(self, data: CommissionCreate) -> Commission:
        now = utc_now().isoformat()
        record = {
            **data.model_dump(mode="json"),
            "id": new_id(),
            "status": CommissionStatus.PENDING.value,
            "created_at": now,
            "updated_at": now,
        }
        row = await insert_row(COMMISSIONS_TABLE, record)
        return Commission.model_validate(row)

    @timed("agents.match")
    async def find_matching_agents(self, preferences: ClientPreferences) -> list[AgentMatch]:
        """Agents scoring above zero, best first."""
        agents = await self.get_agents()
        matches = [score_agent(agent, preferences) for agent in agents]
        matches = [match for match in matches if match.match_score > 0]
        matches.sort(key=lambda match: match.match_score, reverse=True)

        logger.info("Agent matching completed", candidates=len(agents), matches=len(matches))
        return matches

    async def verify_agent(self, agent_id: str, verification: AgentVerification) -> bool:
        agent = await self.get_agent(agent_id)
        if agent is None:
            return False

        verified = (
            verification.license_number == agent.license_number
            and verification.license_state == agent.license_state
            and verification.background_check
            and len(verification.references) >= MIN_VERIFICATION_REFERENCES
        )

        if verified:
            await self.update_agent(agent_id, {"is_verified": True})
        logger.info("Agent verification checked", agent_id=agent_id, verified=verified)
        return verified

    async def get_agent_performance(self, agent_id: str) -> AgentPerformance:
        agent = await self.get_agent(agent_id)
        if agent is None:
            raise NotFoundError("Agent not found", code="AGENT_NOT_FOUND")

        commissions = await self.get_commissions(agent_id)
        active = [c for c in commissions if c.status != CommissionStatus.DISPUTED]

        return AgentPerformance(
            agent_id=agent.id,
            total_sales=agent.total_sales,
            total_sales_value=agent.total_sales_value,
            average_days_on_market=agent.average_days_on_market,
            rating=agent.rating,
            client_satisfaction_score=agent.client_satisfaction_score,
            total_commission=sum(c.amount for c in active),
            pending_commission=sum(
                c.amount for c in active if c.status in (CommissionStatus.PENDING, CommissionStatus.APPROVED)
            ),
            paid_commission=sum(c.amount for c in active if c.status == CommissionStatus.PAID),
        )
