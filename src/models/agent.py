"""Agent, brokerage and commission models (Supabase tables: agents, brokerages, commissions)."""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from src.utils.ids import UtcDatetime


class CommissionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    DISPUTED = "disputed"


class Agent(BaseModel):
    """Licensed agent listed in the directory."""
    id: str = Field(..., description="Agent ID (text)")
    user_id: Optional[str] = Field(None, description="Marketplace user account")
    name: str = Field(..., description="Display name")
    email: Optional[str] = None
    phone: Optional[str] = None
    license_number: str = Field(..., description="Real estate license number")
    license_state: str = Field(..., description="Issuing state")
    license_expiry: Optional[str] = None
    brokerage_id: Optional[str] = None
    brokerage_name: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    experience: int = Field(default=0, ge=0, description="Years in practice")
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = 0
    commission_rate: float = Field(default=2.5, description="Percent of sale price")
    bio: Optional[str] = None
    languages: list[str] = Field(default_factory=list)
    service_areas: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    awards: list[str] = Field(default_factory=list)
    is_verified: bool = False
    is_active: bool = True
    total_sales: int = 0
    total_sales_value: float = 0
    average_days_on_market: float = 0
    client_satisfaction_score: float = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AgentCreate(BaseModel):
    """Fields accepted when onboarding an agent; the rest take defaults."""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    license_number: str
    license_state: str
    license_expiry: Optional[str] = None
    brokerage_id: Optional[str] = None
    brokerage_name: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    experience: int = Field(default=0, ge=0)
    bio: Optional[str] = None
    languages: list[str] = Field(default_factory=list)
    service_areas: list[str] = Field(default_factory=list)
    commission_rate: Optional[float] = None


class BrokerageAddress(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str


class Brokerage(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[BrokerageAddress] = None
    license_number: str
    license_state: str
    is_verified: bool = False
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Commission(BaseModel):
    id: str
    agent_id: str
    property_id: str
    transaction_id: str
    amount: float = Field(..., ge=0)
    percentage: float
    status: CommissionStatus = CommissionStatus.PENDING
    due_date: date
    paid_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: UtcDatetime
    updated_at: Optional[UtcDatetime] = None


class CommissionCreate(BaseModel):
    agent_id: str
    property_id: str
    transaction_id: str
    amount: float = Field(..., ge=0)
    percentage: float
    due_date: date
    notes: Optional[str] = None


class AgentSearchFilters(BaseModel):
    location: Optional[str] = None
    specialties: Optional[list[str]] = None
    experience_min: Optional[int] = None
    experience_max: Optional[int] = None
    rating_min: Optional[float] = None
    rating_max: Optional[float] = None
    languages: Optional[list[str]] = None
    is_verified: Optional[bool] = None
    brokerage_id: Optional[str] = None
    commission_rate_min: Optional[float] = None
    commission_rate_max: Optional[float] = None

    @model_validator(mode="after")
    def check_ranges(self):
        for low, high in (
            ("experience_min", "experience_max"),
            ("rating_min", "rating_max"),
            ("commission_rate_min", "commission_rate_max"),
        ):
            low_value, high_value = getattr(self, low), getattr(self, high)
            if low_value is not None and high_value is not None and low_value > high_value:
                raise ValueError(f"{low} must not exceed {high}")
        return self


class ClientPreferences(BaseModel):
    """What a client is looking for when asking to be matched with agents."""
    location: str
    property_type: str
    budget: Optional[float] = None
    timeline: Optional[str] = None
    special_requirements: list[str] = Field(default_factory=list)


class MatchCompatibility(BaseModel):
    location: int = 0
    specialties: int = 0
    experience: int = 0
    rating: int = 0
    availability: int = 0


class AgentMatch(BaseModel):
    agent_id: str
    match_score: int
    reasons: list[str]
    compatibility: MatchCompatibility


class AgentVerification(BaseModel):
    license_number: str
    license_state: str
    background_check: bool
    references: list[str] = Field(default_factory=list)


class AgentPerformance(BaseModel):
    agent_id: str
    total_sales: int
    total_sales_value: float
    average_days_on_market: float
    rating: float
    client_satisfaction_score: float
    total_commission: float
    pending_commission: float
    paid_commission: float
