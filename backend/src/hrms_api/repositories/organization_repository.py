"""Organization repository."""

from sqlalchemy import select

from hrms_api.models.orm.organization import OrganizationORM
from hrms_api.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[OrganizationORM]):
    """Repository for organization operations."""

    model = OrganizationORM

    async def get_by_name(self, name: str) -> OrganizationORM | None:
        """Get organization by exact name."""
        result = await self.session.execute(
            select(OrganizationORM).where(OrganizationORM.name == name)
        )
        return result.scalar_one_or_none()

    async def get_all(self, offset: int = 0, limit: int = 100) -> list[OrganizationORM]:
        """Get organizations ordered by name."""
        result = await self.session.execute(
            select(OrganizationORM).order_by(OrganizationORM.name).offset(offset).limit(limit)
        )
        return list(result.scalars().all())
