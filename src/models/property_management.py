"""Property management models (Supabase tables: managed_properties, tenants,
payments, maintenance_requests, automation_tasks)."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from src.utils.config import PropertyManagementConfig
from src.utils.errors import InvalidRequestError
from src.utils.ids import UtcDatetime

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class MaintenancePriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class MaintenanceStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AutomationTaskType(str, Enum):
    RENT_COLLECTION = "RENT_COLLECTION"
    MAINTENANCE_REMINDER = "MAINTENANCE_REMINDER"
    LEASE_RENEWAL = "LEASE_RENEWAL"
    PROPERTY_INSPECTION = "PROPERTY_INSPECTION"
    UTILITY_PAYMENT = "UTILITY_PAYMENT"
    MARKET_ANALYSIS = "MARKET_ANALYSIS"
    TENANT_COMMUNICATION = "TENANT_COMMUNICATION"
    SECURITY_CHECK = "SECURITY_CHECK"


class ScheduleType(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"
    CUSTOM = "CUSTOM"


class FormModel(BaseModel):
    """Submitted form with field-level checks beyond type validation."""

    def validation_errors(self) -> list[str]:
        return []

    def validate_form(self):
        errors = self.validation_errors()
        if errors:
            raise InvalidRequestError(errors[0], errors=errors)
        return self


class ManagedProperty(BaseModel):
    property_id: int
    owner: str
    manager: Optional[str] = None
    rent_amount: float
    rent_due_day: int = Field(default=1, description="Day of month rent is due")
    maintenance_fund: float = 0
    late_fee_percentage: float = PropertyManagementConfig.LATE_FEE_PERCENTAGE
    max_tenants: int = PropertyManagementConfig.MAX_TENANTS
    is_active: bool = True
    created_at: UtcDatetime
    last_rent_collection: Optional[UtcDatetime] = None
    tenant_count: int = 0
    total_revenue: float = 0


class PropertyRegistration(FormModel):
    property_id: int
    owner: Optional[str] = None
    manager: Optional[str] = None
    rent_amount: float
    rent_due_day: int = PropertyManagementConfig.RENT_DUE_DAY
    maintenance_fund: Optional[float] = None

    def validation_errors(self) -> list[str]:
        errors = []
        if self.property_id <= 0:
            errors.append("Property ID must be a positive number")
        if self.rent_amount <= 0:
            errors.append("Rent amount must be a positive number")
        if self.maintenance_fund is not None and self.maintenance_fund < 0:
            errors.append("Maintenance fund must be a non-negative number")
        if not 1 <= self.rent_due_day <= 31:
            errors.append("Invalid rent due date")
        return errors


class TenantInfo(BaseModel):
    tenant_id: str
    property_id: int
    tenant_address: str
    name: str
    email: str
    lease_start_date: UtcDatetime
    lease_end_date: UtcDatetime
    monthly_rent: float
    security_deposit: float = 0
    credit_score: Optional[int] = None
    is_active: bool = True


class TenantRegistration(FormModel):
    property_id: int
    tenant_address: str
    name: str
    email: str
    credit_score: int
    income: float
    salary: float
    monthly_rent: Optional[float] = None
    security_deposit: float = 0
    lease_start_date: Optional[UtcDatetime] = None

    def validation_errors(self) -> list[str]:
        errors = []
        if self.property_id <= 0:
            errors.append("Property ID must be a positive number")
        if not 300 <= self.credit_score <= 850:
            errors.append("Credit score must be between 300 and 850")
        if self.income <= 0:
            errors.append("Income must be a positive number")
        if self.salary <= 0:
            errors.append("Salary must be a positive number")
        if not EMAIL_PATTERN.match(self.email):
            errors.append("Invalid email address")
        return errors


class PaymentRecord(BaseModel):
    payment_id: str
    property_id: int
    tenant_id: str
    amount: float
    payment_date: UtcDatetime
    payment_type: str = "rent"
    is_late: bool = False
    late_fee: float = 0


class MaintenanceRequest(BaseModel):
    request_id: str
    property_id: int
    tenant_id: Optional[str] = None
    description: str
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    estimated_cost: float
    status: MaintenanceStatus = MaintenanceStatus.PENDING
    created_at: UtcDatetime
    completed_at: Optional[UtcDatetime] = None
    assigned_vendor: Optional[str] = None
    actual_cost: Optional[float] = None


class MaintenanceRequestCreate(FormModel):
    property_id: int
    tenant_id: Optional[str] = None
    description: str = ""
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    estimated_cost: float
    assigned_vendor: Optional[str] = None

    def validation_errors(self) -> list[str]:
        errors = []
        if self.property_id <= 0:
            errors.append("Property ID must be a positive number")
        if not self.description.strip():
            errors.append("Description is required")
        if self.estimated_cost < 0:
            errors.append("Estimated cost must be a non-negative number")
        return errors


class MaintenanceStatusUpdate(BaseModel):
    status: MaintenanceStatus
    actual_cost: Optional[float] = Field(None, ge=0)


class AutomationSchedule(BaseModel):
    schedule_type: ScheduleType
    interval: int = Field(..., description="Seconds between executions")
    start_time: UtcDatetime
    end_time: Optional[UtcDatetime] = None
    timezone: str = "UTC"


class AutomationTask(BaseModel):
    task_id: str
    task_type: AutomationTaskType
    property_id: int
    owner: str
    schedule: AutomationSchedule
    is_active: bool = True
    last_executed: Optional[UtcDatetime] = None
    next_execution: UtcDatetime
    execution_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    parameters: dict[str, str] = Field(default_factory=dict)


class AutomationTaskCreate(FormModel):
    task_type: AutomationTaskType
    property_id: int
    owner: Optional[str] = None
    schedule: AutomationSchedule
    parameters: dict[str, str] = Field(default_factory=dict)

    def validation_errors(self) -> list[str]:
        errors = []
        if self.property_id <= 0:
            errors.append("Property ID must be a positive number")
        if self.schedule.interval <= 0:
            errors.append("Interval must be a positive number")
        if self.schedule.end_time is not None and self.schedule.end_time <= self.schedule.start_time:
            errors.append("End time must be after start time")
        return errors


class AutomationResult(BaseModel):
    task_id: str
    execution_time: UtcDatetime
    success: bool
    message: str = ""
    data: dict[str, str] = Field(default_factory=dict)
    execution_duration: int = Field(default=0, description="Milliseconds")


class AutomationStats(BaseModel):
    total_tasks: int
    active_tasks: int
    total_executions: int
    successful_executions: int
    failed_executions: int
    success_rate: float
