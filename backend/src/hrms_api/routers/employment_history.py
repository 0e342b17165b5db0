"""Employment history router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hrms_api.dependencies import get_employment_history_service
from hrms_api.models.domain.employment_history import ChangeType
from hrms_api.models.dto.employment_history import (
    EmploymentHistoryCreate,
    EmploymentHistoryListResponse,
    EmploymentHistoryResponse,
    EmploymentHistorySummary,
    JoiningHistoryCreate,
    PromotionHistoryCreate,
    RoleChangeHistoryCreate,
    SalaryRevisionHistoryCreate,
    TransferHistoryCreate,
)
from hrms_api.services.employment_history_service import EmploymentHistoryService

router = APIRouter()

HistoryServiceDep = Annotated[EmploymentHistoryService, Depends(get_employment_history_service)]


@router.get("", response_model=EmploymentHistoryListResponse)
async def list_employment_history(
    employee_id: UUID,
    service: HistoryServiceDep,
    page: int = Query(default=1, ge=1, le=10000),
    page_size: int = Query(default=50, ge=1, le=200),
) -> EmploymentHistoryListResponse:
    """List an employee's history, most recent first."""
    return await service.get_employee_history(
        employee_id, offset=(page - 1) * page_size, limit=page_size
    )


@router.post("", response_model=EmploymentHistoryResponse, status_code=status.HTTP_201_CREATED)
async def create_employment_history(
    employee_id: UUID,
    request: EmploymentHistoryCreate,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Store a history record as given."""
    return await service.create_employment_history(employee_id, request)


@router.get("/current", response_model=EmploymentHistoryResponse)
async def get_current_employment_history(
    employee_id: UUID,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Get the employee's current record."""
    return await service.get_current_employment_history(employee_id)


@router.get("/summary", response_model=EmploymentHistorySummary)
async def get_history_summary(
    employee_id: UUID,
    service: HistoryServiceDep,
) -> EmploymentHistorySummary:
    """Count the employee's records."""
    return await service.get_history_summary(employee_id)


@router.get("/promotions", response_model=EmploymentHistoryListResponse)
async def list_promotions(employee_id: UUID, service: HistoryServiceDep) -> EmploymentHistoryListResponse:
    return await service.get_promotions(employee_id)


@router.get("/transfers", response_model=EmploymentHistoryListResponse)
async def list_transfers(employee_id: UUID, service: HistoryServiceDep) -> EmploymentHistoryListResponse:
    return await service.get_transfers(employee_id)


@router.get("/salary-revisions", response_model=EmploymentHistoryListResponse)
async def list_salary_revisions(
    employee_id: UUID, service: HistoryServiceDep
) -> EmploymentHistoryListResponse:
    return await service.get_salary_revisions(employee_id)


@router.get("/by-change-type/{change_type}", response_model=EmploymentHistoryListResponse)
async def list_by_change_type(
    employee_id: UUID,
    change_type: ChangeType,
    service: HistoryServiceDep,
) -> EmploymentHistoryListResponse:
    """List an employee's records of one change type."""
    return await service.get_history_by_change_type(employee_id, change_type)


@router.post("/joining", response_model=EmploymentHistoryResponse, status_code=status.HTTP_201_CREATED)
async def record_joining(
    employee_id: UUID,
    request: JoiningHistoryCreate,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Record the employee joining."""
    return await service.create_joining_history(employee_id, request)


@router.post("/promotion", response_model=EmploymentHistoryResponse, status_code=status.HTTP_201_CREATED)
async def record_promotion(
    employee_id: UUID,
    request: PromotionHistoryCreate,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Close the current record and open a promotion."""
    return await service.create_promotion_history(employee_id, request)


@router.post("/transfer", response_model=EmploymentHistoryResponse, status_code=status.HTTP_201_CREATED)
async def record_transfer(
    employee_id: UUID,
    request: TransferHistoryCreate,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Close the current record and open a transfer."""
    return await service.create_transfer_history(employee_id, request)


@router.post(
    "/salary-revision", response_model=EmploymentHistoryResponse, status_code=status.HTTP_201_CREATED
)
async def record_salary_revision(
    employee_id: UUID,
    request: SalaryRevisionHistoryCreate,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Close the current record and open a salary revision."""
    return await service.create_salary_revision_history(employee_id, request)


@router.post("/role-change", response_model=EmploymentHistoryResponse, status_code=status.HTTP_201_CREATED)
async def record_role_change(
    employee_id: UUID,
    request: RoleChangeHistoryCreate,
    service: HistoryServiceDep,
) -> EmploymentHistoryResponse:
    """Close the current record and open a role change."""
    return await service.create_role_change_history(employee_id, request)
