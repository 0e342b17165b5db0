"""Employees router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hrms_api.constants.validation import (
    ALLOWED_EMPLOYEE_SORT_COLUMNS,
    ALLOWED_EMPLOYEE_STATUSES,
    DEFAULT_EMPLOYEE_SORT_COLUMN,
)
from hrms_api.dependencies import get_employee_service
from hrms_api.models.dto.employee import (
    EmployeeConfirm,
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeTerminate,
    EmployeeUpdate,
)
from hrms_api.services.employee_service import EmployeeService
from hrms_api.utils.validation import sanitize_search, sanitize_status, validate_sort_by

router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    organization_id: UUID | None = None,
    status: str | None = None,
    department_id: UUID | None = None,
    search: str | None = Query(default=None, max_length=200),
    sort_by: str = Query(default=DEFAULT_EMPLOYEE_SORT_COLUMN, max_length=50),
    sort_dir: str = Query(default="asc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1, le=10000),
    page_size: int = Query(default=50, ge=1, le=200),
) -> EmployeeListResponse:
    """List employees with optional filters."""
    return await service.list_employees_response(
        organization_id=organization_id,
        status=sanitize_status(status, ALLOWED_EMPLOYEE_STATUSES),
        department_id=department_id,
        search=sanitize_search(search),
        sort_by=validate_sort_by(sort_by, ALLOWED_EMPLOYEE_SORT_COLUMNS, DEFAULT_EMPLOYEE_SORT_COLUMN),
        sort_dir=sort_dir,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: EmployeeCreate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee."""
    return await service.create_employee(request)


@router.get("/probation", response_model=list[EmployeeResponse])
async def list_employees_on_probation(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    organization_id: UUID | None = None,
) -> list[EmployeeResponse]:
    """List employees whose probation has not ended."""
    return await service.get_employees_on_probation(organization_id)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get an employee by ID."""
    return await service.get_employee_response(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: UUID,
    request: EmployeeUpdate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Update the fields present in the request body."""
    return await service.update_employee(employee_id, request)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Delete an employee without direct reports."""
    await service.delete_employee(employee_id)


@router.get("/{employee_id}/direct-reports", response_model=list[EmployeeResponse])
async def list_direct_reports(
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[EmployeeResponse]:
    """List employees reporting to this employee."""
    return await service.get_direct_reports(employee_id)


@router.post("/{employee_id}/terminate", response_model=EmployeeResponse)
async def terminate_employee(
    employee_id: UUID,
    request: EmployeeTerminate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Terminate an employee."""
    return await service.terminate_employee(employee_id, request.termination_date, request.reason)


@router.post("/{employee_id}/reactivate", response_model=EmployeeResponse)
async def reactivate_employee(
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Reactivate a terminated employee."""
    return await service.reactivate_employee(employee_id)


@router.post("/{employee_id}/confirm", response_model=EmployeeResponse)
async def confirm_employee(
    employee_id: UUID,
    request: EmployeeConfirm,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Confirm an employee at the end of probation."""
    return await service.confirm_employee(employee_id, request.confirmation_date)
