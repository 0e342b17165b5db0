"""Organizations router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hrms_api.dependencies import get_organization_service
from hrms_api.models.dto.organization import (
    OrganizationCreate,
    OrganizationListResponse,
    OrganizationResponse,
)
from hrms_api.services.organization_service import OrganizationService

router = APIRouter()


@router.get("", response_model=OrganizationListResponse)
async def list_organizations(
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    page: int = Query(default=1, ge=1, le=10000),
    page_size: int = Query(default=50, ge=1, le=200),
) -> OrganizationListResponse:
    """List organizations."""
    return await service.list_organizations(offset=(page - 1) * page_size, limit=page_size)


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    request: OrganizationCreate,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Create an organization."""
    return await service.create_organization(request)


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: UUID,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Get an organization by ID."""
    return await service.get_organization_response(organization_id)
