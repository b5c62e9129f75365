"""Governance models mirrored from the external governance gateway.

The gateway speaks camelCase JSON; these models accept either camelCase or
snake_case input and serialize snake_case for our own responses.
"""

import json
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.utils.errors import InvalidRequestError


class ProposalStatus(str, Enum):
    ACTIVE = "Active"
    PASSED = "Passed"
    REJECTED = "Rejected"
    EXECUTED = "Executed"
    CANCELLED = "Cancelled"


class VoteType(str, Enum):
    YES = "Yes"
    NO = "No"
    ABSTAIN = "Abstain"


class ProposalType(str, Enum):
    PROPERTY_RULE = "PropertyRule"
    FEE_CHANGE = "FeeChange"
    CONTRACT_UPGRADE = "ContractUpgrade"
    COMMUNITY_FUND = "CommunityFund"
    EMERGENCY_ACTION = "EmergencyAction"


class StakeholderStatus(str, Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    REVOKED = "Revoked"


class VerificationLevel(str, Enum):
    BASIC = "Basic"
    VERIFIED = "Verified"
    PREMIUM = "Premium"
    INSTITUTIONAL = "Institutional"


class GatewayModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Proposal(GatewayModel):
    """Governance proposal. Timestamps are epoch milliseconds."""
    id: int
    title: str
    description: str
    proposer: str
    proposal_type: ProposalType
    status: ProposalStatus
    created_at: int
    voting_start_time: int
    voting_end_time: int
    execution_time: Optional[int] = None
    yes_votes: float = 0
    no_votes: float = 0
    abstain_votes: float = 0
    total_voting_power: float = 0
    quorum_required: float = Field(default=10, description="Percent of total voting power")
    execution_data: Optional[str] = None
    target_contract: Optional[str] = None


class Vote(GatewayModel):
    proposal_id: int
    voter: str
    vote_type: VoteType
    voting_power: float
    timestamp: int


class StakeholderProfile(GatewayModel):
    address: str
    name: Optional[str] = None
    email: Optional[str] = None
    organization: Optional[str] = None
    status: StakeholderStatus
    verification_level: VerificationLevel
    voting_power: float
    property_count: int
    total_property_value: float
    reputation_score: float
    joined_at: int
    last_active_at: int
    verification_date: Optional[int] = None
    kyc_completed: bool = False
    aml_completed: bool = False


class VotingResults(GatewayModel):
    yes_votes: float
    no_votes: float
    abstain_votes: float
    total_votes: float
    participation_rate: float
    quorum_met: bool
    majority_yes: bool


class GovernanceStats(GatewayModel):
    total_stakeholders: int
    total_voting_power: float
    active_proposals: int
    total_proposals: int
    participation_rate: float
    average_voting_power: float


class ProposalFormData(GatewayModel):
    """Proposal as submitted by a stakeholder, before the gateway sees it."""
    title: str = ""
    description: str = ""
    proposal_type: ProposalType = ProposalType.PROPERTY_RULE
    voting_duration: int = Field(default=7, description="Days")
    quorum_required: float = Field(default=10, description="Percent")
    execution_data: Optional[str] = None
    target_contract: Optional[str] = None

    def validation_errors(self) -> list[str]:
        errors = []

        title = self.title.strip()
        if not title:
            errors.append("Title is required")
        elif len(self.title) < 10:
            errors.append("Title must be at least 10 characters long")
        elif len(self.title) > 100:
            errors.append("Title must be less than 100 characters")

        if not self.description.strip():
            errors.append("Description is required")
        elif len(self.description) < 50:
            errors.append("Description must be at least 50 characters long")
        elif len(self.description) > 2000:
            errors.append("Description must be less than 2000 characters")

        if not 1 <= self.voting_duration <= 30:
            errors.append("Voting duration must be between 1 and 30 days")

        if not 1 <= self.quorum_required <= 100:
            errors.append("Quorum must be between 1% and 100%")

        if self.execution_data and self.execution_data.strip():
            try:
                json.loads(self.execution_data)
            except ValueError:
                errors.append("Execution data must be valid JSON")

        return errors

    def validate_form(self) -> "ProposalFormData":
        """Raise InvalidRequestError listing every problem with the form."""
        errors = self.validation_errors()
        if errors:
            raise InvalidRequestError("Invalid proposal", errors=errors)
        return self


class StakeholderRegistrationData(GatewayModel):
    name: Optional[str] = None
    email: Optional[str] = Field(default=None, pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    organization: Optional[str] = None


class CastVoteRequest(GatewayModel):
    proposal_id: int
    vote_type: VoteType
    voter: Optional[str] = None
