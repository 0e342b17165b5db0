"""Organization service."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.exceptions import DuplicateError, OrganizationNotFoundError
from hrms_api.models.dto.organization import (
    OrganizationCreate,
    OrganizationListResponse,
    OrganizationResponse,
)
from hrms_api.models.orm.organization import OrganizationORM
from hrms_api.repositories.organization_repository import OrganizationRepository

logger = logging.getLogger(__name__)


class OrganizationService:
    """Service for organization operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.repo = OrganizationRepository(session)

    async def get_organization(self, organization_id: UUID) -> OrganizationORM:
        """Get an organization or raise OrganizationNotFoundError."""
        organization = await self.repo.get_by_id(organization_id)
        if organization is None:
            raise OrganizationNotFoundError(organization_id)
        return organization

    async def create_organization(self, request: OrganizationCreate) -> OrganizationResponse:
        """Create an organization with a unique name.

        Raises:
            DuplicateError: If the name is taken
        """
        name = request.name.strip()
        if await self.repo.get_by_name(name):
            raise DuplicateError("Organization name already exists", field="name", value=name)

        organization = await self.repo.create(
            name=name,
            legal_name=request.legal_name,
            domain=request.domain,
        )
        logger.info(f"Created organization {organization.id}")
        return OrganizationResponse.model_validate(organization)

    async def get_organization_response(self, organization_id: UUID) -> OrganizationResponse:
        """Get an organization as a response DTO."""
        return OrganizationResponse.model_validate(await self.get_organization(organization_id))

    async def list_organizations(self, offset: int = 0, limit: int = 100) -> OrganizationListResponse:
        """List organizations ordered by name."""
        organizations = await self.repo.get_all(offset=offset, limit=limit)
        total = await self.repo.count()
        return OrganizationListResponse(
            items=[OrganizationResponse.model_validate(o) for o in organizations],
            total=total,
        )
