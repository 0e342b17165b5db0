"""Employment history service maintaining each employee's job timeline.

Records of one employee never overlap and at most one of them is current.
The change-type constructors close the current record on the day before the
new effective date and open a new current record that carries forward every
field the change does not touch.
"""

import logging
from datetime import date, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.config import get_settings
from hrms_api.exceptions import (
    DepartmentNotFoundError,
    EmployeeNotFoundError,
    EmploymentHistoryNotFoundError,
    HistoryOverlapError,
    ManagerNotFoundError,
    ValidationError,
)
from hrms_api.models.domain.employment_history import ChangeType
from hrms_api.models.dto.employment_history import (
    EmploymentHistoryCreate,
    EmploymentHistoryListResponse,
    EmploymentHistoryResponse,
    EmploymentHistorySummary,
    JoiningHistoryCreate,
    PromotionHistoryCreate,
    RoleChangeHistoryCreate,
    SalaryRevisionHistoryCreate,
    TransferHistoryCreate,
)
from hrms_api.models.orm.employment_history import EmploymentHistoryORM
from hrms_api.repositories.department_repository import DepartmentRepository
from hrms_api.repositories.employee_repository import EmployeeRepository
from hrms_api.repositories.employment_history_repository import EmploymentHistoryRepository

logger = logging.getLogger(__name__)

JOINING_REASON = "Employee joining the organization"


class EmploymentHistoryService:
    """Service for employment history operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.repo = EmploymentHistoryRepository(session)
        self.employee_repo = EmployeeRepository(session)
        self.department_repo = DepartmentRepository(session)
        self.settings = get_settings()

    async def _build_responses(
        self, records: list[EmploymentHistoryORM]
    ) -> list[EmploymentHistoryResponse]:
        """Build response DTOs, loading department and manager names in batch."""
        departments_by_id = await self.department_repo.get_by_ids(
            [r.department_id for r in records if r.department_id]
        )
        managers_by_id = await self.employee_repo.get_by_ids(
            [r.manager_id for r in records if r.manager_id]
        )
        items = []
        for record in records:
            department = departments_by_id.get(record.department_id) if record.department_id else None
            manager = managers_by_id.get(record.manager_id) if record.manager_id else None
            items.append(
                EmploymentHistoryResponse(
                    id=record.id,
                    employee_id=record.employee_id,
                    effective_date=record.effective_date,
                    end_date=record.end_date,
                    job_title=record.job_title,
                    job_level=record.job_level,
                    department_id=record.department_id,
                    department_name=department.name if department else None,
                    manager_id=record.manager_id,
                    manager_name=manager.full_name if manager else None,
                    salary_amount=record.salary_amount,
                    salary_currency=record.salary_currency,
                    change_type=record.change_type,
                    change_reason=record.change_reason,
                    changed_by=record.changed_by,
                    is_current=record.is_current,
                    created_at=record.created_at,
                    updated_at=record.updated_at,
                )
            )
        return items

    async def _build_response(self, record: EmploymentHistoryORM) -> EmploymentHistoryResponse:
        return (await self._build_responses([record]))[0]

    async def _ensure_employee(self, employee_id: UUID) -> None:
        if not await self.employee_repo.exists(employee_id):
            raise EmployeeNotFoundError(employee_id)

    def _open_end(self) -> date:
        """Stand-in end date for records without one."""
        today = date.today()
        years = self.settings.history_open_end_years
        try:
            return today.replace(year=today.year + years)
        except ValueError:
            # 29 February in a non-leap target year
            return today.replace(year=today.year + years, day=28)

    async def _check_references(self, department_id: UUID | None, manager_id: UUID | None) -> None:
        if department_id and not await self.department_repo.exists(department_id):
            raise DepartmentNotFoundError(department_id)
        if manager_id and not await self.employee_repo.exists(manager_id):
            raise ManagerNotFoundError(manager_id)

    async def _check_overlap(
        self,
        employee_id: UUID,
        effective_date: date,
        end_date: date | None,
        exclude_id: UUID | None = None,
    ) -> None:
        """Reject an interval that intersects any stored record of the employee.

        Raises:
            HistoryOverlapError: Listing the intersecting record IDs
        """
        open_end = self._open_end()
        overlapping = await self.repo.find_overlapping(
            employee_id,
            start=effective_date,
            end=end_date or open_end,
            open_end=open_end,
        )
        overlapping_ids = [r.id for r in overlapping if r.id != exclude_id]
        if overlapping_ids:
            raise HistoryOverlapError(overlapping_ids)

    async def _create_record(self, employee_id: UUID, **fields: Any) -> EmploymentHistoryORM:
        """Validate and persist one record.

        Args:
            employee_id: Employee UUID
            **fields: Column values, ``effective_date`` and ``change_type`` required

        Returns:
            Persisted record

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ValidationError: On missing fields, bad date order or overlap
        """
        await self._ensure_employee(employee_id)

        effective_date = fields.get("effective_date")
        end_date = fields.get("end_date")
        if effective_date is None:
            raise ValidationError("Effective date is required", {"field": "effective_date"})
        if fields.get("change_type") is None:
            raise ValidationError("Change type is required", {"field": "change_type"})
        if end_date is not None and end_date < effective_date:
            raise ValidationError(
                "End date must be on or after effective date",
                {"effective_date": str(effective_date), "end_date": str(end_date)},
            )

        await self._check_references(fields.get("department_id"), fields.get("manager_id"))
        await self._check_overlap(employee_id, effective_date, end_date)

        if fields.get("is_current"):
            await self.repo.clear_current(employee_id)

        record = await self.repo.create(employee_id=employee_id, **fields)
        logger.info(
            f"Opened {record.change_type} history record {record.id} for employee "
            f"{employee_id} effective {record.effective_date}"
        )
        return record

    async def _close_current(
        self, current: EmploymentHistoryORM, new_effective_date: date
    ) -> None:
        """End the current record on the day before ``new_effective_date``."""
        if new_effective_date <= current.effective_date:
            raise ValidationError(
                "Effective date must be after the current record's effective date",
                {
                    "effective_date": str(new_effective_date),
                    "current_effective_date": str(current.effective_date),
                },
            )
        current.end_date = new_effective_date - timedelta(days=1)
        current.is_current = False
        await self.repo.save(current)
        logger.info(
            f"Closed history record {current.id} for employee {current.employee_id} "
            f"on {current.end_date}"
        )

    async def _require_current(self, employee_id: UUID, change: str) -> EmploymentHistoryORM:
        await self._ensure_employee(employee_id)
        current = await self.repo.get_current(employee_id)
        if current is None:
            raise ValidationError(
                f"No current employment record found for {change}",
                {"employee_id": str(employee_id)},
            )
        return current

    async def create_employment_history(
        self, employee_id: UUID, request: EmploymentHistoryCreate
    ) -> EmploymentHistoryResponse:
        """Store a record as given.

        Making it current clears the flag on every other record of the
        employee; nothing else is closed.
        """
        record = await self._create_record(employee_id, **request.model_dump())
        return await self._build_response(record)

    async def create_joining_history(
        self, employee_id: UUID, request: JoiningHistoryCreate
    ) -> EmploymentHistoryResponse:
        """Open the first record of an employee.

        A current record left from an earlier employment is closed first.
        """
        await self._ensure_employee(employee_id)
        current = await self.repo.get_current(employee_id)
        if current is not None:
            await self._close_current(current, request.joining_date)

        record = await self._create_record(
            employee_id,
            effective_date=request.joining_date,
            job_title=request.job_title,
            job_level=request.job_level,
            department_id=request.department_id,
            manager_id=request.manager_id,
            salary_amount=request.salary_amount,
            salary_currency=request.salary_currency,
            change_type=ChangeType.JOINING,
            change_reason=JOINING_REASON,
            changed_by=request.changed_by,
            is_current=True,
        )
        return await self._build_response(record)

    async def create_promotion_history(
        self, employee_id: UUID, request: PromotionHistoryCreate
    ) -> EmploymentHistoryResponse:
        """Record a promotion.

        Title, level, department, manager and salary come from the request.
        The currency stays the current record's, or the configured default
        when there is no current record.
        """
        await self._ensure_employee(employee_id)
        current = await self.repo.get_current(employee_id)
        currency = self.settings.default_salary_currency
        if current is not None:
            currency = current.salary_currency or currency
            await self._close_current(current, request.effective_date)

        record = await self._create_record(
            employee_id,
            effective_date=request.effective_date,
            job_title=request.job_title,
            job_level=request.job_level,
            department_id=request.department_id,
            manager_id=request.manager_id,
            salary_amount=request.salary_amount,
            salary_currency=currency,
            change_type=ChangeType.PROMOTION,
            change_reason=request.change_reason,
            changed_by=request.changed_by,
            is_current=True,
        )
        return await self._build_response(record)

    async def _open_next(
        self,
        current: EmploymentHistoryORM,
        effective_date: date,
        change_type: ChangeType,
        change_reason: str | None,
        changed_by: str | None,
        **changes: Any,
    ) -> EmploymentHistoryResponse:
        """Close ``current`` and open its successor with ``changes`` applied."""
        fields = self._carry_forward(current)
        fields.update(changes)
        await self._close_current(current, effective_date)

        record = await self._create_record(
            current.employee_id,
            effective_date=effective_date,
            change_type=change_type,
            change_reason=change_reason,
            changed_by=changed_by,
            is_current=True,
            **fields,
        )
        return await self._build_response(record)

    async def create_transfer_history(
        self, employee_id: UUID, request: TransferHistoryCreate
    ) -> EmploymentHistoryResponse:
        """Record a move to another department and manager."""
        current = await self._require_current(employee_id, "transfer")
        return await self._open_next(
            current,
            request.effective_date,
            ChangeType.TRANSFER,
            request.change_reason,
            request.changed_by,
            department_id=request.department_id,
            manager_id=request.manager_id,
        )

    async def create_salary_revision_history(
        self, employee_id: UUID, request: SalaryRevisionHistoryCreate
    ) -> EmploymentHistoryResponse:
        """Record a new salary. A missing currency keeps the current one."""
        current = await self._require_current(employee_id, "salary revision")
        return await self._open_next(
            current,
            request.effective_date,
            ChangeType.SALARY_REVISION,
            request.change_reason,
            request.changed_by,
            salary_amount=request.salary_amount,
            salary_currency=request.salary_currency or current.salary_currency,
        )

    async def create_role_change_history(
        self, employee_id: UUID, request: RoleChangeHistoryCreate
    ) -> EmploymentHistoryResponse:
        """Record a new title or level."""
        current = await self._require_current(employee_id, "role change")
        return await self._open_next(
            current,
            request.effective_date,
            ChangeType.ROLE_CHANGE,
            request.change_reason,
            request.changed_by,
            job_title=request.job_title,
            job_level=request.job_level,
        )

    @staticmethod
    def _carry_forward(current: EmploymentHistoryORM) -> dict[str, Any]:
        """Fields a new record inherits unless the change sets them."""
        return {
            "job_title": current.job_title,
            "job_level": current.job_level,
            "department_id": current.department_id,
            "manager_id": current.manager_id,
            "salary_amount": current.salary_amount,
            "salary_currency": current.salary_currency,
        }

    async def get_employee_history(
        self, employee_id: UUID, offset: int = 0, limit: int | None = None
    ) -> EmploymentHistoryListResponse:
        """All records of an employee, most recent first."""
        await self._ensure_employee(employee_id)
        records = await self.repo.get_by_employee(employee_id, offset=offset, limit=limit)
        return EmploymentHistoryListResponse(
            items=await self._build_responses(records),
            total=await self.repo.count_for_employee(employee_id),
        )

    async def get_current_employment_history(self, employee_id: UUID) -> EmploymentHistoryResponse:
        """The employee's current record.

        Raises:
            EmploymentHistoryNotFoundError: If there is none
        """
        await self._ensure_employee(employee_id)
        current = await self.repo.get_current(employee_id)
        if current is None:
            raise EmploymentHistoryNotFoundError()
        return await self._build_response(current)

    async def get_history_by_change_type(
        self, employee_id: UUID, change_type: ChangeType
    ) -> EmploymentHistoryListResponse:
        await self._ensure_employee(employee_id)
        records = await self.repo.get_by_change_type(employee_id, change_type)
        return EmploymentHistoryListResponse(
            items=await self._build_responses(records), total=len(records)
        )

    async def get_promotions(self, employee_id: UUID) -> EmploymentHistoryListResponse:
        return await self.get_history_by_change_type(employee_id, ChangeType.PROMOTION)

    async def get_transfers(self, employee_id: UUID) -> EmploymentHistoryListResponse:
        return await self.get_history_by_change_type(employee_id, ChangeType.TRANSFER)

    async def get_salary_revisions(self, employee_id: UUID) -> EmploymentHistoryListResponse:
        return await self.get_history_by_change_type(employee_id, ChangeType.SALARY_REVISION)

    async def has_employment_history(self, employee_id: UUID) -> bool:
        await self._ensure_employee(employee_id)
        return await self.repo.exists_for_employee(employee_id)

    async def get_history_count(self, employee_id: UUID) -> int:
        await self._ensure_employee(employee_id)
        return await self.repo.count_for_employee(employee_id)

    async def get_history_summary(self, employee_id: UUID) -> EmploymentHistorySummary:
        """Record count and whether any record exists."""
        count = await self.get_history_count(employee_id)
        return EmploymentHistorySummary(
            employee_id=employee_id, record_count=count, has_history=count > 0
        )
