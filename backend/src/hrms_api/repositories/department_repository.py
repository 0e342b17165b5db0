"""Department repository."""

from uuid import UUID

from sqlalchemy import func, select

from hrms_api.constants.validation import (
    ALLOWED_DEPARTMENT_SORT_COLUMNS,
    DEFAULT_DEPARTMENT_SORT_COLUMN,
)
from hrms_api.models.orm.department import DepartmentORM
from hrms_api.repositories.base import BaseRepository
from hrms_api.utils.validation import escape_like_wildcards


class DepartmentRepository(BaseRepository[DepartmentORM]):
    """Repository for department operations."""

    model = DepartmentORM

    async def get_by_code(self, organization_id: UUID, code: str) -> DepartmentORM | None:
        """Get department by code within an organization."""
        result = await self.session.execute(
            select(DepartmentORM).where(
                DepartmentORM.organization_id == organization_id,
                DepartmentORM.code == code,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, organization_id: UUID, name: str) -> DepartmentORM | None:
        """Get department by name within an organization."""
        result = await self.session.execute(
            select(DepartmentORM).where(
                DepartmentORM.organization_id == organization_id,
                DepartmentORM.name == name,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_organization(
        self,
        organization_id: UUID,
        search: str | None = None,
        sort_by: str = DEFAULT_DEPARTMENT_SORT_COLUMN,
        sort_dir: str = "asc",
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[DepartmentORM], int]:
        """Get departments of an organization, optionally filtered by name.

        Args:
            organization_id: Organization UUID
            search: Case-insensitive substring of the department name
            sort_by: Column to sort by
            sort_dir: Sort direction (asc or desc)
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (departments, total_count)
        """
        filters = [DepartmentORM.organization_id == organization_id]
        if search:
            filters.append(
                DepartmentORM.name.ilike(f"%{escape_like_wildcards(search)}%", escape="\\")
            )

        if sort_by not in ALLOWED_DEPARTMENT_SORT_COLUMNS:
            sort_by = DEFAULT_DEPARTMENT_SORT_COLUMN
        sort_column = getattr(DepartmentORM, sort_by)
        order = sort_column.desc() if sort_dir == "desc" else sort_column.asc()

        result = await self.session.execute(
            select(DepartmentORM).where(*filters).order_by(order).offset(offset).limit(limit)
        )
        count_result = await self.session.execute(
            select(func.count()).select_from(DepartmentORM).where(*filters)
        )
        return list(result.scalars().all()), count_result.scalar_one()

    async def get_roots(self, organization_id: UUID) -> list[DepartmentORM]:
        """Get departments without a parent."""
        result = await self.session.execute(
            select(DepartmentORM)
            .where(
                DepartmentORM.organization_id == organization_id,
                DepartmentORM.parent_department_id.is_(None),
            )
            .order_by(DepartmentORM.name)
        )
        return list(result.scalars().all())

    async def get_children(self, parent_department_id: UUID) -> list[DepartmentORM]:
        """Get direct sub-departments."""
        result = await self.session.execute(
            select(DepartmentORM)
            .where(DepartmentORM.parent_department_id == parent_department_id)
            .order_by(DepartmentORM.name)
        )
        return list(result.scalars().all())

    async def count_children(self, parent_department_id: UUID) -> int:
        """Count direct sub-departments."""
        result = await self.session.execute(
            select(func.count())
            .select_from(DepartmentORM)
            .where(DepartmentORM.parent_department_id == parent_department_id)
        )
        return result.scalar_one()

    async def get_parent_id(self, department_id: UUID) -> UUID | None:
        """Get only the parent ID of a department."""
        result = await self.session.execute(
            select(DepartmentORM.parent_department_id).where(DepartmentORM.id == department_id)
        )
        return result.scalar_one_or_none()

    async def get_all_in_organization(self, organization_id: UUID) -> list[DepartmentORM]:
        """Get every department of an organization ordered by name."""
        result = await self.session.execute(
            select(DepartmentORM)
            .where(DepartmentORM.organization_id == organization_id)
            .order_by(DepartmentORM.name)
        )
        return list(result.scalars().all())
