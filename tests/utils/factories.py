"""Test data factories using Faker."""

from faker import Faker
from typing import Optional
from datetime import datetime, timedelta, timezone

fake = Faker()


def _id() -> str:
    return fake.uuid4().replace('-', '')[:26].upper()  # ULID-like format


def create_agent_data(**overrides) -> dict:
    """Create an agents table row."""
    data = {
        "id": _id(),
        "name": fake.name(),
        "email": fake.email(),
        "phone": fake.phone_number(),
        "license_number": f"CA-{fake.random_int(min=100000, max=999999)}",
        "license_state": "CA",
        "brokerage_id": None,
        "specialties": ["residential"],
        "experience": fake.random_int(min=0, max=20),
        "rating": 4.0,
        "review_count": fake.random_int(min=0, max=200),
        "commission_rate": 2.5,
        "languages": ["English"],
        "service_areas": ["San Francisco"],
        "is_verified": False,
        "is_active": True,
        "total_sales": fake.random_int(min=0, max=100),
        "total_sales_value": float(fake.random_int(min=0, max=50_000_000)),
        "average_days_on_market": 30.0,
        "client_satisfaction_score": 4.5,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    data.update(overrides)
    return data


def create_brokerage_data(**overrides) -> dict:
    """Create a brokerages table row."""
    data = {
        "id": _id(),
        "name": fake.company(),
        "license_number": f"BR-{fake.random_int(min=1000, max=9999)}",
        "license_state": "CA",
        "is_verified": True,
        "is_active": True,
    }
    data.update(overrides)
    return data


def create_listing_data(**overrides) -> dict:
    """Create a properties table row."""
    data = {
        "id": _id(),
        "name": f"{fake.last_name()} House",
        "description": fake.sentence(nb_words=12),
        "address": fake.street_address(),
        "square_footage": 1850.0,
        "price": 725_000.0,
        "owner": f"0x{fake.sha1()[:40]}",
        "token_id": None,
        "contract_address": None,
        "image_url": None,
        "is_listed": True,
        "created_at": "2024-01-12T09:00:00+00:00",
        "updated_at": "2024-01-12T09:00:00+00:00",
    }
    data.update(overrides)
    return data


def create_commission_data(agent_id: Optional[str] = None, **overrides) -> dict:
    """Create a commissions table row."""
    data = {
        "id": _id(),
        "agent_id": agent_id or _id(),
        "property_id": f"property-{fake.random_int(min=1, max=99)}",
        "transaction_id": f"txn-{fake.random_int(min=1000, max=9999)}",
        "amount": 10_000.0,
        "percentage": 2.5,
        "status": "pending",
        "due_date": "2024-02-01",
        "created_at": "2024-01-15T00:00:00+00:00",
    }
    data.update(overrides)
    return data


def create_proposal_data(proposal_id: int = 1, **overrides) -> dict:
    """Create a proposal as the governance gateway returns it (camelCase)."""
    now_ms = int(datetime(2024, 1, 20, 12, tzinfo=timezone.utc).timestamp() * 1000)
    data = {
        "id": proposal_id,
        "title": "Lower listing fees for verified sellers",
        "description": fake.text(max_nb_chars=200),
        "proposer": "0xabc123",
        "proposalType": "FeeChange",
        "status": "Active",
        "createdAt": now_ms - 86_400_000,
        "votingStartTime": now_ms - 86_400_000,
        "votingEndTime": now_ms + 2 * 86_400_000,
        "yesVotes": 120.0,
        "noVotes": 30.0,
        "abstainVotes": 10.0,
        "totalVotingPower": 1000.0,
        "quorumRequired": 10,
    }
    data.update(overrides)
    return data


def create_property_data(property_id: int = 101, **overrides) -> dict:
    """Create a managed_properties table row."""
    data = {
        "property_id": property_id,
        "owner": "user1",
        "manager": None,
        "rent_amount": 3000.0,
        "rent_due_day": 1,
        "maintenance_fund": 300.0,
        "late_fee_percentage": 0.05,
        "max_tenants": 4,
        "is_active": True,
        "created_at": "2024-01-01T00:00:00+00:00",
        "last_rent_collection": None,
        "tenant_count": 0,
        "total_revenue": 0.0,
    }
    data.update(overrides)
    return data


def create_tenant_data(property_id: int = 101, **overrides) -> dict:
    """Create a tenants table row."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    data = {
        "tenant_id": f"tenant_{_id()}",
        "property_id": property_id,
        "tenant_address": fake.address(),
        "name": fake.name(),
        "email": fake.email(),
        "lease_start_date": start.isoformat(),
        "lease_end_date": (start + timedelta(days=365)).isoformat(),
        "monthly_rent": 3000.0,
        "security_deposit": 3000.0,
        "credit_score": 720,
        "is_active": True,
    }
    data.update(overrides)
    return data


def create_maintenance_data(property_id: int = 101, **overrides) -> dict:
    """Create a maintenance_requests table row."""
    data = {
        "request_id": f"mr_{_id()}",
        "property_id": property_id,
        "tenant_id": None,
        "description": "Leaking kitchen faucet",
        "priority": "MEDIUM",
        "estimated_cost": 150.0,
        "status": "PENDING",
        "created_at": "2024-01-10T09:00:00+00:00",
        "completed_at": None,
        "assigned_vendor": None,
        "actual_cost": None,
    }
    data.update(overrides)
    return data


def create_automation_task_data(property_id: int = 101, **overrides) -> dict:
    """Create an automation_tasks table row."""
    data = {
        "task_id": f"task_{_id()}",
        "task_type": "RENT_COLLECTION",
        "property_id": property_id,
        "owner": "user1",
        "schedule": {
            "schedule_type": "DAILY",
            "interval": 86_400,
            "start_time": "2024-01-01T00:00:00+00:00",
            "end_time": None,
            "timezone": "UTC",
        },
        "is_active": True,
        "last_executed": None,
        "next_execution": "2024-01-01T00:00:00+00:00",
        "execution_count": 0,
        "success_count": 0,
        "failure_count": 0,
        "parameters": {},
    }
    data.update(overrides)
    return data
