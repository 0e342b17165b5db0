"""Employment history repository."""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select, update

from hrms_api.models.orm.employment_history import EmploymentHistoryORM
from hrms_api.repositories.base import BaseRepository


class EmploymentHistoryRepository(BaseRepository[EmploymentHistoryORM]):
    """Repository for employment history operations."""

    model = EmploymentHistoryORM

    async def get_by_employee(
        self,
        employee_id: UUID,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[EmploymentHistoryORM]:
        """Get an employee's history, most recent first."""
        query = (
            select(EmploymentHistoryORM)
            .where(EmploymentHistoryORM.employee_id == employee_id)
            .order_by(EmploymentHistoryORM.effective_date.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_current(self, employee_id: UUID) -> EmploymentHistoryORM | None:
        """Get the employee's current record."""
        result = await self.session.execute(
            select(EmploymentHistoryORM).where(
                EmploymentHistoryORM.employee_id == employee_id,
                EmploymentHistoryORM.is_current == True,  # noqa: E712
            )
        )
        return result.scalars().first()

    async def get_by_change_type(
        self, employee_id: UUID, change_type: str
    ) -> list[EmploymentHistoryORM]:
        """Get an employee's records of one change type, most recent first."""
        result = await self.session.execute(
            select(EmploymentHistoryORM)
            .where(
                EmploymentHistoryORM.employee_id == employee_id,
                EmploymentHistoryORM.change_type == change_type,
            )
            .order_by(EmploymentHistoryORM.effective_date.desc())
        )
        return list(result.scalars().all())

    async def find_overlapping(
        self,
        employee_id: UUID,
        start: date,
        end: date,
        open_end: date,
    ) -> list[EmploymentHistoryORM]:
        """Find records whose interval intersects ``[start, end]``.

        Bounds are inclusive. A stored record without an end date is treated
        as ending on ``open_end``.

        Args:
            employee_id: Employee UUID
            start: First day of the candidate interval
            end: Last day of the candidate interval
            open_end: Stand-in end date for open-ended records

        Returns:
            Intersecting records
        """
        result = await self.session.execute(
            select(EmploymentHistoryORM).where(
                EmploymentHistoryORM.employee_id == employee_id,
                EmploymentHistoryORM.effective_date <= end,
                func.coalesce(EmploymentHistoryORM.end_date, open_end) >= start,
            )
        )
        return list(result.scalars().all())

    async def clear_current(self, employee_id: UUID, exclude_id: UUID | None = None) -> None:
        """Mark every current record of an employee as not current."""
        stmt = update(EmploymentHistoryORM).where(
            EmploymentHistoryORM.employee_id == employee_id,
            EmploymentHistoryORM.is_current == True,  # noqa: E712
        )
        if exclude_id is not None:
            stmt = stmt.where(EmploymentHistoryORM.id != exclude_id)
        await self.session.execute(stmt.values(is_current=False))
        await self.session.flush()

    async def exists_for_employee(self, employee_id: UUID) -> bool:
        """Check whether the employee has any history."""
        return await self.count_for_employee(employee_id) > 0

    async def count_for_employee(self, employee_id: UUID) -> int:
        """Count an employee's history records."""
        result = await self.session.execute(
            select(func.count())
            .select_from(EmploymentHistoryORM)
            .where(EmploymentHistoryORM.employee_id == employee_id)
        )
        return result.scalar_one()
