"""Departments router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hrms_api.constants.validation import (
    ALLOWED_DEPARTMENT_SORT_COLUMNS,
    DEFAULT_DEPARTMENT_SORT_COLUMN,
)
from hrms_api.dependencies import get_department_service
from hrms_api.models.dto.department import (
    DepartmentHierarchyNode,
    DepartmentListResponse,
    DepartmentRequest,
    DepartmentResponse,
)
from hrms_api.services.department_service import DepartmentService
from hrms_api.utils.validation import sanitize_search, validate_sort_by

router = APIRouter()


@router.get("", response_model=DepartmentListResponse)
async def list_departments(
    service: Annotated[DepartmentService, Depends(get_department_service)],
    organization_id: UUID,
    search: str | None = Query(default=None, max_length=200),
    sort_by: str = Query(default=DEFAULT_DEPARTMENT_SORT_COLUMN, max_length=50),
    sort_dir: str = Query(default="asc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1, le=10000),
    page_size: int = Query(default=50, ge=1, le=200),
) -> DepartmentListResponse:
    """List departments of an organization, optionally searching by name."""
    return await service.list_departments(
        organization_id,
        search=sanitize_search(search),
        sort_by=validate_sort_by(
            sort_by, ALLOWED_DEPARTMENT_SORT_COLUMNS, DEFAULT_DEPARTMENT_SORT_COLUMN
        ),
        sort_dir=sort_dir,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    request: DepartmentRequest,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Create a department."""
    return await service.create_department(request)


@router.get("/hierarchy", response_model=list[DepartmentHierarchyNode])
async def get_department_hierarchy(
    organization_id: UUID,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> list[DepartmentHierarchyNode]:
    """Get the department tree of an organization."""
    return await service.get_department_hierarchy(organization_id)


@router.get("/roots", response_model=list[DepartmentResponse])
async def list_root_departments(
    organization_id: UUID,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> list[DepartmentResponse]:
    """List departments without a parent."""
    return await service.get_root_departments(organization_id)


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: UUID,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Get a department by ID."""
    return await service.get_department_response(department_id)


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: UUID,
    request: DepartmentRequest,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Replace a department. Omitted parent or manager is cleared."""
    return await service.update_department(department_id, request)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: UUID,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> None:
    """Delete a department without sub-departments."""
    await service.delete_department(department_id)


@router.get("/{department_id}/sub-departments", response_model=list[DepartmentResponse])
async def list_sub_departments(
    department_id: UUID,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> list[DepartmentResponse]:
    """List direct sub-departments."""
    return await service.get_sub_departments(department_id)
