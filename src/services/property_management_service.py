"""Property management: rent, tenants, maintenance and scheduled automation."""

from datetime import datetime, timedelta
from typing import Any, Optional

from src.models.property_management import (
    AutomationResult,
    AutomationStats,
    AutomationTask,
    AutomationTaskCreate,
    MaintenanceRequest,
    MaintenanceRequestCreate,
    MaintenanceStatus,
    ManagedProperty,
    PaymentRecord,
    PropertyRegistration,
    TenantInfo,
    TenantRegistration,
)
from src.services.supabase_client import fetch_row, fetch_rows, insert_row, update_row
from src.utils.config import AppConfig, PropertyManagementConfig
from src.utils.errors import InvalidRequestError, NotFoundError
from src.utils.ids import as_utc, new_id, utc_now
from src.utils.logging import get_structured_logger, mask_payload

logger = get_structured_logger(__name__)

PROPERTIES_TABLE = "managed_properties"
TENANTS_TABLE = "tenants"
PAYMENTS_TABLE = "payments"
MAINTENANCE_TABLE = "maintenance_requests"
AUTOMATION_TABLE = "automation_tasks"


def late_fee_for(prop: ManagedProperty, paid_at: datetime) -> float:
    """Rent paid after the due day owes ``rent * late_fee_percentage``."""
    if paid_at.day > prop.rent_due_day:
        return prop.rent_amount * prop.late_fee_percentage
    return 0


def next_execution_after(task: AutomationTask, executed_at: datetime) -> datetime:
    return executed_at + timedelta(seconds=task.schedule.interval)


def _json(model) -> dict[str, Any]:
    return model.model_dump(mode="json")


class PropertyManagementService:
    """Property management operations against Supabase."""

    # Properties

    async def register_property(self, registration: PropertyRegistration) -> ManagedProperty:
        registration.validate_form()

        existing = await fetch_row(PROPERTIES_TABLE, "property_id", registration.property_id)
        if existing is not None:
            raise InvalidRequestError(
                f"Property {registration.property_id} is already registered", code="PROPERTY_EXISTS"
            )

        maintenance_fund = registration.maintenance_fund
        if maintenance_fund is None:
            maintenance_fund = registration.rent_amount * PropertyManagementConfig.MAINTENANCE_FUND_PERCENTAGE

        prop = ManagedProperty(
            property_id=registration.property_id,
            owner=registration.owner or AppConfig.MOCK_USER_ID,
            manager=registration.manager,
            rent_amount=registration.rent_amount,
            rent_due_day=registration.rent_due_day,
            maintenance_fund=maintenance_fund,
            created_at=utc_now(),
        )
        row = await insert_row(PROPERTIES_TABLE, _json(prop))

        logger.info("Property registered", property_id=prop.property_id, rent_amount=prop.rent_amount)
        return ManagedProperty.model_validate(row)

    async def get_property(self, property_id: int) -> Optional[ManagedProperty]:
        row = await fetch_row(PROPERTIES_TABLE, "property_id", property_id)
        return ManagedProperty.model_validate(row) if row else None

    async def _require_property(self, property_id: int) -> ManagedProperty:
        prop = await self.get_property(property_id)
        if prop is None:
            raise NotFoundError("Property not found", code="PROPERTY_NOT_FOUND")
        return prop

    async def list_properties(self, owner: Optional[str] = None) -> list[ManagedProperty]:
        filters = {"is_active": True}
        if owner:
            filters["owner"] = owner
        rows = await fetch_rows(PROPERTIES_TABLE, filters, order_by="created_at", descending=True)
        return [ManagedProperty.model_validate(row) for row in rows]

    # Tenants

    async def add_tenant(self, registration: TenantRegistration) -> TenantInfo:
        registration.validate_form()
        prop = await self._require_property(registration.property_id)

        tenants = await fetch_rows(TENANTS_TABLE, {"property_id": prop.property_id, "is_active": True})
        if len(tenants) >= prop.max_tenants:
            raise InvalidRequestError(
                f"Property already has the maximum of {prop.max_tenants} tenants", code="MAX_TENANTS_REACHED"
            )

        lease_start = registration.lease_start_date or utc_now()
        tenant = TenantInfo(
            tenant_id=new_id("tenant"),
            property_id=prop.property_id,
            tenant_address=registration.tenant_address,
            name=registration.name,
            email=registration.email,
            lease_start_date=lease_start,
            lease_end_date=lease_start + timedelta(days=PropertyManagementConfig.LEASE_DURATION_DAYS),
            monthly_rent=registration.monthly_rent or prop.rent_amount,
            security_deposit=registration.security_deposit,
            credit_score=registration.credit_score,
        )
        row = await insert_row(TENANTS_TABLE, _json(tenant))
        await update_row(PROPERTIES_TABLE, "property_id", prop.property_id, {"tenant_count": len(tenants) + 1})

        logger.info(
            "Tenant added",
            property_id=prop.property_id,
            tenant_id=tenant.tenant_id,
            **mask_payload({"email": tenant.email}),
        )
        return TenantInfo.model_validate(row)

    async def list_tenants(self, property_id: int) -> list[TenantInfo]:
        rows = await fetch_rows(TENANTS_TABLE, {"property_id": property_id, "is_active": True})
        return [TenantInfo.model_validate(row) for row in rows]

    # Rent

    async def record_rent_payment(
        self,
        property_id: int,
        tenant_id: str,
        amount: float,
        paid_at: Optional[datetime] = None,
    ) -> PaymentRecord:
        if amount <= 0:
            raise InvalidRequestError("Payment amount must be a positive number")

        prop = await self._require_property(property_id)
        paid_at = as_utc(paid_at) if paid_at else utc_now()
        late_fee = late_fee_for(prop, paid_at)

        payment = PaymentRecord(
            payment_id=new_id("pay"),
            property_id=property_id,
            tenant_id=tenant_id,
            amount=amount,
            payment_date=paid_at,
            is_late=late_fee > 0,
            late_fee=late_fee,
        )
        row = await insert_row(PAYMENTS_TABLE, _json(payment))
        await update_row(PROPERTIES_TABLE, "property_id", property_id, {
            "last_rent_collection": paid_at.isoformat(),
            "total_revenue": prop.total_revenue + amount + late_fee,
        })

        if payment.is_late:
            logger.warning("Late rent payment", property_id=property_id, tenant_id=tenant_id, late_fee=late_fee)
        return PaymentRecord.model_validate(row)

    # Maintenance

    async def create_maintenance_request(self, data: MaintenanceRequestCreate) -> MaintenanceRequest:
        data.validate_form()
        await self._require_property(data.property_id)

        request = MaintenanceRequest(
            request_id=new_id("mr"),
            property_id=data.property_id,
            tenant_id=data.tenant_id,
            description=data.description.strip(),
            priority=data.priority,
            estimated_cost=data.estimated_cost,
            assigned_vendor=data.assigned_vendor,
            created_at=utc_now(),
        )
        row = await insert_row(MAINTENANCE_TABLE, _json(request))

        logger.info(
            "Maintenance request created",
            property_id=data.property_id,
            request_id=request.request_id,
            priority=data.priority.value,
        )
        return MaintenanceRequest.model_validate(row)

    async def update_maintenance_status(
        self,
        request_id: str,
        status: MaintenanceStatus,
        actual_cost: Optional[float] = None,
    ) -> MaintenanceRequest:
        row = await fetch_row(MAINTENANCE_TABLE, "request_id", request_id)
        if row is None:
            raise NotFoundError("Maintenance request not found", code="MAINTENANCE_REQUEST_NOT_FOUND")
        request = MaintenanceRequest.model_validate(row)

        updates: dict[str, Any] = {"status": status.value}
        if status == MaintenanceStatus.COMPLETED:
            updates["completed_at"] = utc_now().isoformat()
            updates["actual_cost"] = actual_cost if actual_cost is not None else request.estimated_cost
        elif actual_cost is not None:
            updates["actual_cost"] = actual_cost

        updated = await update_row(MAINTENANCE_TABLE, "request_id", request_id, updates)
        if updated is None:
            raise NotFoundError("Maintenance request not found", code="MAINTENANCE_REQUEST_NOT_FOUND")
        return MaintenanceRequest.model_validate(updated)

    async def list_maintenance_requests(
        self,
        property_id: int,
        status: Optional[MaintenanceStatus] = None,
    ) -> list[MaintenanceRequest]:
        """Requests for a property, newest first."""
        filters: dict[str, Any] = {"property_id": property_id}
        if status:
            filters["status"] = status.value
        rows = await fetch_rows(MAINTENANCE_TABLE, filters, order_by="created_at", descending=True)
        return [MaintenanceRequest.model_validate(row) for row in rows]

    # Automation

    async def create_automation_task(self, data: AutomationTaskCreate) -> AutomationTask:
        data.validate_form()
        await self._require_property(data.property_id)

        task = AutomationTask(
            task_id=new_id("task"),
            task_type=data.task_type,
            property_id=data.property_id,
            owner=data.owner or AppConfig.MOCK_USER_ID,
            schedule=data.schedule,
            next_execution=data.schedule.start_time,
            parameters=data.parameters,
        )
        row = await insert_row(AUTOMATION_TABLE, _json(task))

        logger.info(
            "Automation task created",
            task_id=task.task_id,
            task_type=task.task_type.value,
            property_id=task.property_id,
        )
        return AutomationTask.model_validate(row)

    async def list_automation_tasks(self, property_id: int) -> list[AutomationTask]:
        rows = await fetch_rows(AUTOMATION_TABLE, {"property_id": property_id}, order_by="next_execution")
        return [AutomationTask.model_validate(row) for row in rows]

    async def record_task_execution(self, task_id: str, result: AutomationResult) -> AutomationTask:
        """Apply an execution result and schedule the next run.

        The task is deactivated when its next run would fall after the
        schedule's end time.
        """
        row = await fetch_row(AUTOMATION_TABLE, "task_id", task_id)
        if row is None:
            raise NotFoundError("Automation task not found", code="AUTOMATION_TASK_NOT_FOUND")
        task = AutomationTask.model_validate(row)

        next_execution = next_execution_after(task, result.execution_time)
        end_time = task.schedule.end_time
        still_active = task.is_active and (end_time is None or next_execution <= end_time)

        updates = {
            "last_executed": result.execution_time.isoformat(),
            "next_execution": next_execution.isoformat(),
            "execution_count": task.execution_count + 1,
            "success_count": task.success_count + (1 if result.success else 0),
            "failure_count": task.failure_count + (0 if result.success else 1),
            "is_active": still_active,
        }
        updated = await update_row(AUTOMATION_TABLE, "task_id", task_id, updates)
        if updated is None:
            raise NotFoundError("Automation task not found", code="AUTOMATION_TASK_NOT_FOUND")

        log = logger.info if result.success else logger.warning
        log(
            "Automation task executed",
            task_id=task_id,
            success=result.success,
            execution_duration_ms=result.execution_duration,
            active=still_active,
        )
        return AutomationTask.model_validate(updated)

    async def get_automation_stats(self, property_id: int) -> AutomationStats:
        tasks = await self.list_automation_tasks(property_id)

        total_executions = sum(task.execution_count for task in tasks)
        successful = sum(task.success_count for task in tasks)
        failed = sum(task.failure_count for task in tasks)

        return AutomationStats(
            total_tasks=len(tasks),
            active_tasks=sum(1 for task in tasks if task.is_active),
            total_executions=total_executions,
            successful_executions=successful,
            failed_executions=failed,
            success_rate=successful / total_executions * 100 if total_executions else 0,
        )
