"""Gateway client for the on-chain governance service.

Voting, tallying and execution all happen behind the gateway. This client
only forwards requests and validates what comes back.
"""

from typing import Any, Optional

from src.models.governance import (
    Proposal,
    ProposalFormData,
    StakeholderProfile,
    StakeholderRegistrationData,
    VoteType,
    VotingResults,
    GovernanceStats,
)
from src.services.api_client import JsonApiClient
from src.utils.config import get_governance_api_url
from src.utils.errors import GovernanceError
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)


def _field(data: Any, *names: str, default: Any = None) -> Any:
    """Read the first present key; the gateway answers in camelCase."""
    if not isinstance(data, dict):
        return default
    for name in names:
        if name in data:
            return data[name]
    return default


class GovernanceClient(JsonApiClient):
    """Async client for ``GOVERNANCE_API_URL``."""

    error_class = GovernanceError
    service_name = "Governance gateway"

    def __init__(self, base_url: Optional[str] = None, **kwargs: Any):
        super().__init__(base_url or get_governance_api_url(), **kwargs)

    async def _get_or_none(self, path: str) -> Any:
        try:
            return await self.request("GET", path)
        except GovernanceError as e:
            if e.status_code == 404:
                return None
            raise

    # Proposals

    async def create_proposal(self, form: ProposalFormData) -> int:
        form.validate_form()
        data = await self.request("POST", "/proposals", json=form.model_dump(mode="json", by_alias=True))
        proposal_id = _field(data, "proposalId", "proposal_id", "id")
        if proposal_id is None:
            raise GovernanceError("Governance gateway returned no proposal id")

        logger.info("Proposal created", proposal_id=proposal_id, proposal_type=form.proposal_type.value)
        return int(proposal_id)

    async def cast_vote(self, proposal_id: int, vote_type: VoteType, voter: Optional[str] = None) -> bool:
        data = await self.request(
            "POST",
            f"/proposals/{proposal_id}/votes",
            json={"voteType": vote_type.value, "voter": voter},
        )
        success = bool(_field(data, "success", default=False))
        logger.info(
            "Vote cast",
            proposal_id=proposal_id,
            vote_type=vote_type.value,
            voter=mask_user_id(voter or ""),
            success=success,
        )
        return success

    async def execute_proposal(self, proposal_id: int) -> bool:
        data = await self.request("POST", f"/proposals/{proposal_id}/execute")
        return bool(_field(data, "success", default=False))

    async def get_proposal(self, proposal_id: int) -> Optional[Proposal]:
        data = await self._get_or_none(f"/proposals/{proposal_id}")
        return Proposal.model_validate(data) if data else None

    async def get_active_proposals(self) -> list[Proposal]:
        data = await self.request("GET", "/proposals", params={"status": "Active"})
        items = data if isinstance(data, list) else _field(data, "proposals", default=[])
        return [Proposal.model_validate(item) for item in items]

    async def get_voting_results(self, proposal_id: int) -> Optional[VotingResults]:
        data = await self._get_or_none(f"/proposals/{proposal_id}/results")
        return VotingResults.model_validate(data) if data else None

    # Stakeholders

    async def register_stakeholder(self, registration: StakeholderRegistrationData) -> bool:
        data = await self.request(
            "POST", "/stakeholders", json=registration.model_dump(mode="json", by_alias=True, exclude_none=True)
        )
        return bool(_field(data, "success", default=False))

    async def get_stakeholder_profile(self, address: str) -> Optional[StakeholderProfile]:
        data = await self._get_or_none(f"/stakeholders/{address}")
        return StakeholderProfile.model_validate(data) if data else None

    async def is_stakeholder(self, address: str) -> bool:
        data = await self.request("GET", f"/stakeholders/{address}/status")
        return bool(_field(data, "isStakeholder", "is_stakeholder", default=False))

    async def can_vote(self, address: str, proposal_id: int) -> bool:
        data = await self.request(
            "GET", f"/stakeholders/{address}/eligibility", params={"proposalId": proposal_id}
        )
        return bool(_field(data, "canVote", "can_vote", default=False))

    async def calculate_voting_power(self, address: str) -> float:
        data = await self.request("GET", f"/stakeholders/{address}/voting-power")
        return float(_field(data, "votingPower", "voting_power", default=0))

    async def get_governance_stats(self) -> GovernanceStats:
        data = await self.request("GET", "/stats")
        return GovernanceStats.model_validate(data)
