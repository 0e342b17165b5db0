"""Employee service for employee records and status transitions."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.exceptions import (
    DepartmentNotFoundError,
    DuplicateError,
    EmployeeNotFoundError,
    InvalidStateTransitionError,
    ManagerNotFoundError,
    OrganizationNotFoundError,
    ValidationError,
)
from hrms_api.models.domain.employee import EmploymentStatus
from hrms_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
    ManagerInfo,
)
from hrms_api.models.orm.department import DepartmentORM
from hrms_api.models.orm.employee import EmployeeORM
from hrms_api.repositories.department_repository import DepartmentRepository
from hrms_api.repositories.employee_repository import EmployeeRepository
from hrms_api.repositories.organization_repository import OrganizationRepository
from hrms_api.utils.hierarchy import ensure_no_cycle

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.department_repo = DepartmentRepository(session)
        self.organization_repo = OrganizationRepository(session)

    @staticmethod
    def _build_manager_info(manager: EmployeeORM) -> ManagerInfo:
        """Build ManagerInfo DTO from a manager ORM object."""
        return ManagerInfo(
            id=manager.id,
            employee_number=manager.employee_number,
            full_name=manager.full_name,
        )

    def _build_employee_response(
        self,
        employee: EmployeeORM,
        manager: EmployeeORM | None,
        department: DepartmentORM | None,
    ) -> EmployeeResponse:
        """Build EmployeeResponse DTO from an employee ORM object.

        Args:
            employee: Employee ORM object
            manager: Loaded manager, if any
            department: Loaded department, if any

        Returns:
            EmployeeResponse DTO
        """
        return EmployeeResponse(
            id=employee.id,
            organization_id=employee.organization_id,
            employee_number=employee.employee_number,
            first_name=employee.first_name,
            middle_name=employee.middle_name,
            last_name=employee.last_name,
            preferred_name=employee.preferred_name,
            full_name=employee.full_name,
            work_email=employee.work_email,
            personal_email=employee.personal_email,
            phone_number=employee.phone_number,
            employment_status=employee.employment_status,
            employment_type=employee.employment_type,
            job_title=employee.job_title,
            job_level=employee.job_level,
            salary_amount=employee.salary_amount,
            salary_currency=employee.salary_currency,
            hire_date=employee.hire_date,
            termination_date=employee.termination_date,
            termination_reason=employee.termination_reason,
            probation_end_date=employee.probation_end_date,
            confirmation_date=employee.confirmation_date,
            is_on_probation=employee.is_on_probation,
            department_id=employee.department_id,
            department_name=department.name if department else None,
            manager=self._build_manager_info(manager) if manager else None,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )

    async def build_responses(self, employees: list[EmployeeORM]) -> list[EmployeeResponse]:
        """Build response DTOs, loading managers and departments in batch."""
        managers_by_id = await self.employee_repo.get_by_ids(
            [e.manager_id for e in employees if e.manager_id]
        )
        departments_by_id = await self.department_repo.get_by_ids(
            [e.department_id for e in employees if e.department_id]
        )
        return [
            self._build_employee_response(
                employee=e,
                manager=managers_by_id.get(e.manager_id) if e.manager_id else None,
                department=departments_by_id.get(e.department_id) if e.department_id else None,
            )
            for e in employees
        ]

    async def _build_single_response(self, employee: EmployeeORM) -> EmployeeResponse:
        return (await self.build_responses([employee]))[0]

    async def get_employee(self, employee_id: UUID) -> EmployeeORM:
        """Get an employee or raise EmployeeNotFoundError."""
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def get_employee_response(self, employee_id: UUID) -> EmployeeResponse:
        """Get an employee as a response DTO."""
        return await self._build_single_response(await self.get_employee(employee_id))

    async def list_employees_response(
        self,
        organization_id: UUID | None = None,
        status: str | None = None,
        department_id: UUID | None = None,
        search: str | None = None,
        sort_by: str = "last_name",
        sort_dir: str = "asc",
        page: int = 1,
        page_size: int = 50,
    ) -> EmployeeListResponse:
        """List employees and return ready-to-use response DTOs.

        Args:
            organization_id: Filter by organization
            status: Filter by employment status
            department_id: Filter by department
            search: Search query
            sort_by: Sort field
            sort_dir: Sort direction
            page: Page number (1-indexed)
            page_size: Page size

        Returns:
            EmployeeListResponse with fully assembled DTOs
        """
        employees, total = await self.employee_repo.get_all_with_filters(
            organization_id=organization_id,
            status=status,
            department_id=department_id,
            search=search,
            sort_by=sort_by,
            sort_dir=sort_dir,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return EmployeeListResponse(
            items=await self.build_responses(employees),
            total=total,
            page=page,
            page_size=page_size,
        )

    async def _check_unique_fields(
        self,
        organization_id: UUID,
        employee_number: str | None,
        work_email: str | None,
        exclude_id: UUID | None = None,
    ) -> None:
        if employee_number is not None:
            existing = await self.employee_repo.get_by_employee_number(organization_id, employee_number)
            if existing and existing.id != exclude_id:
                raise DuplicateError(
                    "Employee number already exists", field="employee_number", value=employee_number
                )
        if work_email is not None:
            existing = await self.employee_repo.get_by_work_email(organization_id, work_email)
            if existing and existing.id != exclude_id:
                raise DuplicateError("Work email already exists", field="work_email")

    async def _validate_department(self, organization_id: UUID, department_id: UUID) -> None:
        department = await self.department_repo.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        if department.organization_id != organization_id:
            raise ValidationError(
                "Department belongs to a different organization",
                {"department_id": str(department_id)},
            )

    async def _validate_manager(
        self, organization_id: UUID, manager_id: UUID, employee_id: UUID | None = None
    ) -> None:
        """Check that the manager exists and the reporting line stays acyclic."""
        if employee_id is not None and manager_id == employee_id:
            raise ValidationError(
                "Employee cannot be their own manager", {"manager_id": str(manager_id)}
            )
        manager = await self.employee_repo.get_by_id(manager_id)
        if manager is None:
            raise ManagerNotFoundError(manager_id)
        if manager.organization_id != organization_id:
            raise ValidationError(
                "Manager belongs to a different organization", {"manager_id": str(manager_id)}
            )
        if employee_id is not None:
            await ensure_no_cycle(
                employee_id,
                manager_id,
                self.employee_repo.get_manager_id,
                await self.employee_repo.count(),
                "Manager assignment would create circular reporting line",
            )

    async def create_employee(self, request: EmployeeCreate) -> EmployeeResponse:
        """Create an employee.

        Args:
            request: Employee data

        Returns:
            Created employee

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            DuplicateError: If employee number or work email is taken
            ManagerNotFoundError: If the manager does not exist
            DepartmentNotFoundError: If the department does not exist
        """
        if not await self.organization_repo.exists(request.organization_id):
            raise OrganizationNotFoundError(request.organization_id)

        work_email = request.work_email.lower() if request.work_email else None
        await self._check_unique_fields(request.organization_id, request.employee_number, work_email)
        if request.manager_id:
            await self._validate_manager(request.organization_id, request.manager_id)
        if request.department_id:
            await self._validate_department(request.organization_id, request.department_id)

        employee = await self.employee_repo.create(
            organization_id=request.organization_id,
            employee_number=request.employee_number,
            first_name=request.first_name,
            middle_name=request.middle_name,
            last_name=request.last_name,
            preferred_name=request.preferred_name,
            work_email=work_email,
            personal_email=request.personal_email,
            phone_number=request.phone_number,
            employment_status=request.employment_status,
            employment_type=request.employment_type,
            job_title=request.job_title,
            job_level=request.job_level,
            salary_amount=request.salary_amount,
            salary_currency=request.salary_currency,
            hire_date=request.hire_date,
            probation_end_date=request.probation_end_date,
            manager_id=request.manager_id,
            department_id=request.department_id,
        )
        logger.info(f"Created employee {employee.id} in organization {employee.organization_id}")
        return await self._build_single_response(employee)

    async def update_employee(self, employee_id: UUID, request: EmployeeUpdate) -> EmployeeResponse:
        """Apply the fields present in ``request`` to an employee.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            DuplicateError: If employee number or work email is taken
            ValidationError: If the manager assignment is invalid
        """
        employee = await self.get_employee(employee_id)
        updates = request.model_dump(exclude_unset=True)

        if "work_email" in updates and updates["work_email"]:
            updates["work_email"] = updates["work_email"].lower()
        await self._check_unique_fields(
            employee.organization_id,
            updates.get("employee_number"),
            updates.get("work_email"),
            exclude_id=employee.id,
        )
        if updates.get("manager_id"):
            await self._validate_manager(employee.organization_id, updates["manager_id"], employee.id)
        if updates.get("department_id"):
            await self._validate_department(employee.organization_id, updates["department_id"])

        # Required columns cannot be cleared
        for field in ("employee_number", "first_name", "last_name", "employment_type"):
            if field in updates and updates[field] is None:
                del updates[field]

        for key, value in updates.items():
            setattr(employee, key, value)
        employee = await self.employee_repo.save(employee)
        logger.info(f"Updated employee {employee.id}")
        return await self._build_single_response(employee)

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee without direct reports.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ValidationError: If other employees report to this one
        """
        await self.get_employee(employee_id)
        reports = await self.employee_repo.count_direct_reports(employee_id)
        if reports > 0:
            raise ValidationError(
                "Cannot delete employee with direct reports",
                {"employee_id": str(employee_id), "direct_reports": reports},
            )
        await self.employee_repo.delete(employee_id)
        logger.info(f"Deleted employee {employee_id}")

    async def get_direct_reports(self, employee_id: UUID) -> list[EmployeeResponse]:
        """Get employees reporting directly to ``employee_id``."""
        await self.get_employee(employee_id)
        return await self.build_responses(await self.employee_repo.get_direct_reports(employee_id))

    async def get_employees_on_probation(
        self, organization_id: UUID | None = None
    ) -> list[EmployeeResponse]:
        """Get employees whose probation has not ended yet."""
        employees = await self.employee_repo.get_on_probation(date.today(), organization_id)
        return await self.build_responses(employees)

    async def terminate_employee(
        self, employee_id: UUID, termination_date: date, reason: str | None = None
    ) -> EmployeeResponse:
        """Terminate an employee.

        Raises:
            InvalidStateTransitionError: If the employee is already terminated
        """
        employee = await self.get_employee(employee_id)
        if employee.is_terminated:
            raise InvalidStateTransitionError(
                "Employee is already terminated", employee.employment_status
            )

        employee.employment_status = EmploymentStatus.TERMINATED
        employee.termination_date = termination_date
        employee.termination_reason = reason
        employee = await self.employee_repo.save(employee)
        logger.info(f"Terminated employee {employee.id} effective {termination_date}")
        return await self._build_single_response(employee)

    async def reactivate_employee(self, employee_id: UUID) -> EmployeeResponse:
        """Bring a terminated employee back to active.

        Raises:
            InvalidStateTransitionError: If the employee is not terminated
        """
        employee = await self.get_employee(employee_id)
        if not employee.is_terminated:
            raise InvalidStateTransitionError(
                "Only terminated employees can be reactivated", employee.employment_status
            )

        employee.employment_status = EmploymentStatus.ACTIVE
        employee.termination_date = None
        employee.termination_reason = None
        employee = await self.employee_repo.save(employee)
        logger.info(f"Reactivated employee {employee.id}")
        return await self._build_single_response(employee)

    async def confirm_employee(self, employee_id: UUID, confirmation_date: date) -> EmployeeResponse:
        """Confirm an employee at the end of probation.

        The probation end date is moved to the confirmation date. An employee
        in ``probation`` status becomes ``active``.

        Raises:
            InvalidStateTransitionError: If the employee is not on probation
        """
        employee = await self.get_employee(employee_id)
        if not employee.is_on_probation:
            raise InvalidStateTransitionError(
                "Employee is not on probation", employee.employment_status
            )

        employee.confirmation_date = confirmation_date
        employee.probation_end_date = confirmation_date
        if employee.employment_status == EmploymentStatus.PROBATION:
            employee.employment_status = EmploymentStatus.ACTIVE
        employee = await self.employee_repo.save(employee)
        logger.info(f"Confirmed employee {employee.id} on {confirmation_date}")
        return await self._build_single_response(employee)
