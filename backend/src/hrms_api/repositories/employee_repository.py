"""Employee repository."""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select

from hrms_api.constants.validation import ALLOWED_EMPLOYEE_SORT_COLUMNS, DEFAULT_EMPLOYEE_SORT_COLUMN
from hrms_api.models.orm.employee import EmployeeORM
from hrms_api.repositories.base import BaseRepository
from hrms_api.utils.validation import escape_like_wildcards


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_employee_number(
        self, organization_id: UUID, employee_number: str
    ) -> EmployeeORM | None:
        """Get employee by number within an organization."""
        result = await self.session.execute(
            select(EmployeeORM).where(
                EmployeeORM.organization_id == organization_id,
                EmployeeORM.employee_number == employee_number,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_work_email(self, organization_id: UUID, email: str) -> EmployeeORM | None:
        """Get employee by work e-mail within an organization (case-insensitive)."""
        result = await self.session.execute(
            select(EmployeeORM).where(
                EmployeeORM.organization_id == organization_id,
                func.lower(EmployeeORM.work_email) == email.lower(),
            )
        )
        return result.scalars().first()

    async def get_all_with_filters(
        self,
        organization_id: UUID | None = None,
        status: str | None = None,
        department_id: UUID | None = None,
        search: str | None = None,
        sort_by: str = DEFAULT_EMPLOYEE_SORT_COLUMN,
        sort_dir: str = "asc",
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[EmployeeORM], int]:
        """Get employees with optional filters.

        Args:
            organization_id: Filter by organization
            status: Filter by employment status
            department_id: Filter by department
            search: Search in name, employee number or job title
            sort_by: Column to sort by
            sort_dir: Sort direction (asc or desc)
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (employees, total_count)
        """
        query = select(EmployeeORM)
        count_query = select(func.count()).select_from(EmployeeORM)

        filters = []
        if organization_id:
            filters.append(EmployeeORM.organization_id == organization_id)
        if status:
            filters.append(EmployeeORM.employment_status == status)
        if department_id:
            filters.append(EmployeeORM.department_id == department_id)
        if search:
            escaped_search = f"%{escape_like_wildcards(search)}%"
            filters.append(
                EmployeeORM.first_name.ilike(escaped_search, escape="\\")
                | EmployeeORM.last_name.ilike(escaped_search, escape="\\")
                | EmployeeORM.employee_number.ilike(escaped_search, escape="\\")
                | EmployeeORM.job_title.ilike(escaped_search, escape="\\")
            )

        if filters:
            query = query.where(*filters)
            count_query = count_query.where(*filters)

        if sort_by not in ALLOWED_EMPLOYEE_SORT_COLUMNS:
            sort_by = DEFAULT_EMPLOYEE_SORT_COLUMN
        sort_column = getattr(EmployeeORM, sort_by)
        if sort_dir == "desc":
            query = query.order_by(sort_column.desc().nulls_last(), EmployeeORM.id)
        else:
            query = query.order_by(sort_column.asc().nulls_last(), EmployeeORM.id)

        result = await self.session.execute(query.offset(offset).limit(limit))
        employees = list(result.scalars().all())

        count_result = await self.session.execute(count_query)
        return employees, count_result.scalar_one()

    async def get_direct_reports(self, manager_id: UUID) -> list[EmployeeORM]:
        """Get employees reporting directly to a manager."""
        result = await self.session.execute(
            select(EmployeeORM)
            .where(EmployeeORM.manager_id == manager_id)
            .order_by(EmployeeORM.last_name, EmployeeORM.first_name)
        )
        return list(result.scalars().all())

    async def count_direct_reports(self, manager_id: UUID) -> int:
        """Count employees reporting directly to a manager."""
        result = await self.session.execute(
            select(func.count()).select_from(EmployeeORM).where(EmployeeORM.manager_id == manager_id)
        )
        return result.scalar_one()

    async def get_on_probation(
        self, today: date, organization_id: UUID | None = None
    ) -> list[EmployeeORM]:
        """Get employees whose probation ends after ``today``."""
        query = select(EmployeeORM).where(EmployeeORM.probation_end_date > today)
        if organization_id:
            query = query.where(EmployeeORM.organization_id == organization_id)
        result = await self.session.execute(query.order_by(EmployeeORM.probation_end_date))
        return list(result.scalars().all())

    async def get_manager_id(self, employee_id: UUID) -> UUID | None:
        """Get only the manager ID of an employee."""
        result = await self.session.execute(
            select(EmployeeORM.manager_id).where(EmployeeORM.id == employee_id)
        )
        return result.scalar_one_or_none()
