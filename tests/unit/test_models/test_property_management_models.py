"""Tests for property management form validation."""

import pytest
from datetime import datetime, timezone

from src.models.property_management import (
    AutomationSchedule,
    AutomationTaskCreate,
    AutomationTaskType,
    MaintenanceRequestCreate,
    ManagedProperty,
    PropertyRegistration,
    ScheduleType,
    TenantRegistration,
)
from src.utils.errors import InvalidRequestError

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _tenant(**overrides) -> TenantRegistration:
    data = {
        "property_id": 101,
        "tenant_address": "0xtenant",
        "name": "Jane Renter",
        "email": "jane@example.com",
        "credit_score": 720,
        "income": 120_000,
        "salary": 9_000,
    }
    data.update(overrides)
    return TenantRegistration(**data)


def _task(**schedule_overrides) -> AutomationTaskCreate:
    schedule = {"schedule_type": ScheduleType.DAILY, "interval": 86_400, "start_time": START}
    schedule.update(schedule_overrides)
    return AutomationTaskCreate(
        task_type=AutomationTaskType.RENT_COLLECTION,
        property_id=101,
        schedule=AutomationSchedule(**schedule),
    )


@pytest.mark.unit
def test_property_registration_messages():
    registration = PropertyRegistration(property_id=0, rent_amount=0, maintenance_fund=-1, rent_due_day=32)

    assert registration.validation_errors() == [
        "Property ID must be a positive number",
        "Rent amount must be a positive number",
        "Maintenance fund must be a non-negative number",
        "Invalid rent due date",
    ]


@pytest.mark.unit
def test_property_registration_defaults():
    registration = PropertyRegistration(property_id=101, rent_amount=3000)

    assert registration.validate_form() is registration
    assert registration.rent_due_day == 1
    assert registration.maintenance_fund is None


@pytest.mark.unit
@pytest.mark.parametrize("overrides, message", [
    ({"credit_score": 299}, "Credit score must be between 300 and 850"),
    ({"credit_score": 851}, "Credit score must be between 300 and 850"),
    ({"income": 0}, "Income must be a positive number"),
    ({"salary": -5}, "Salary must be a positive number"),
    ({"email": "jane at example.com"}, "Invalid email address"),
    ({"email": "jane@example"}, "Invalid email address"),
])
def test_tenant_registration_messages(overrides, message):
    assert _tenant(**overrides).validation_errors() == [message]


@pytest.mark.unit
def test_tenant_registration_boundaries_pass():
    assert _tenant(credit_score=300).validation_errors() == []
    assert _tenant(credit_score=850).validation_errors() == []


@pytest.mark.unit
def test_maintenance_request_messages():
    data = MaintenanceRequestCreate(property_id=-1, description="   ", estimated_cost=-10)

    with pytest.raises(InvalidRequestError) as exc_info:
        data.validate_form()

    assert exc_info.value.message == "Property ID must be a positive number"
    assert exc_info.value.errors == [
        "Property ID must be a positive number",
        "Description is required",
        "Estimated cost must be a non-negative number",
    ]


@pytest.mark.unit
def test_maintenance_request_zero_cost_is_valid():
    data = MaintenanceRequestCreate(property_id=1, description="Replace smoke detector", estimated_cost=0)
    assert data.validation_errors() == []


@pytest.mark.unit
def test_automation_task_messages():
    assert _task().validation_errors() == []
    assert _task(interval=0).validation_errors() == ["Interval must be a positive number"]
    assert _task(end_time=START).validation_errors() == ["End time must be after start time"]


@pytest.mark.unit
def test_managed_property_defaults_from_config():
    prop = ManagedProperty(property_id=1, owner="user1", rent_amount=2000, created_at=START)

    assert prop.late_fee_percentage == 0.05
    assert prop.max_tenants == 4
    assert prop.is_active is True
    assert prop.total_revenue == 0


@pytest.mark.unit
def test_automation_schedule_mixed_offsets_compare_as_utc():
    data = AutomationTaskCreate.model_validate({
        "task_type": "RENT_COLLECTION",
        "property_id": 101,
        "schedule": {
            "schedule_type": "DAILY",
            "interval": 86_400,
            "start_time": "2024-02-01T00:00:00",
            "end_time": "2024-03-01T00:00:00Z",
        },
    })

    assert data.validate_form() is data
    assert data.schedule.start_time == datetime(2024, 2, 1, tzinfo=timezone.utc)


@pytest.mark.unit
def test_naive_end_before_aware_start_is_rejected():
    task = _task(end_time="2023-12-31T00:00:00")

    assert task.schedule.end_time.tzinfo is not None
    assert task.validation_errors() == ["End time must be after start time"]
