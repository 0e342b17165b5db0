"""Employee bank detail repository."""

from uuid import UUID

from sqlalchemy import func, select, update

from hrms_api.models.orm.bank_detail import EmployeeBankDetailORM
from hrms_api.repositories.base import BaseRepository


class BankDetailRepository(BaseRepository[EmployeeBankDetailORM]):
    """Repository for employee bank detail operations."""

    model = EmployeeBankDetailORM

    async def get_active_by_employee(
        self, employee_id: UUID, account_type: str | None = None
    ) -> list[EmployeeBankDetailORM]:
        """Get active accounts of an employee, primary first."""
        query = select(EmployeeBankDetailORM).where(
            EmployeeBankDetailORM.employee_id == employee_id,
            EmployeeBankDetailORM.is_active == True,  # noqa: E712
        )
        if account_type:
            query = query.where(EmployeeBankDetailORM.account_type == account_type)
        result = await self.session.execute(
            query.order_by(EmployeeBankDetailORM.is_primary.desc(), EmployeeBankDetailORM.created_at)
        )
        return list(result.scalars().all())

    async def get_primary(self, employee_id: UUID) -> EmployeeBankDetailORM | None:
        """Get the active primary account of an employee."""
        result = await self.session.execute(
            select(EmployeeBankDetailORM).where(
                EmployeeBankDetailORM.employee_id == employee_id,
                EmployeeBankDetailORM.is_primary == True,  # noqa: E712
                EmployeeBankDetailORM.is_active == True,  # noqa: E712
            )
        )
        return result.scalars().first()

    async def get_by_account_number(
        self, employee_id: UUID, account_number: str
    ) -> EmployeeBankDetailORM | None:
        """Get an employee's account by number, active or not."""
        result = await self.session.execute(
            select(EmployeeBankDetailORM).where(
                EmployeeBankDetailORM.employee_id == employee_id,
                EmployeeBankDetailORM.account_number == account_number,
            )
        )
        return result.scalar_one_or_none()

    async def account_number_exists(self, employee_id: UUID, account_number: str) -> bool:
        """Check whether the employee already holds this account number."""
        return await self.get_by_account_number(employee_id, account_number) is not None

    async def count_active(self, employee_id: UUID) -> int:
        """Count active accounts of an employee."""
        result = await self.session.execute(
            select(func.count())
            .select_from(EmployeeBankDetailORM)
            .where(
                EmployeeBankDetailORM.employee_id == employee_id,
                EmployeeBankDetailORM.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one()

    async def clear_primary(self, employee_id: UUID) -> None:
        """Mark every account of an employee as non-primary in one statement."""
        await self.session.execute(
            update(EmployeeBankDetailORM)
            .where(
                EmployeeBankDetailORM.employee_id == employee_id,
                EmployeeBankDetailORM.is_primary == True,  # noqa: E712
            )
            .values(is_primary=False)
        )
        await self.session.flush()

    async def deactivate_all(self, employee_id: UUID) -> None:
        """Soft-delete every account of an employee and drop the primary flag."""
        await self.session.execute(
            update(EmployeeBankDetailORM)
            .where(EmployeeBankDetailORM.employee_id == employee_id)
            .values(is_active=False, is_primary=False)
        )
        await self.session.flush()
