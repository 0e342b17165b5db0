"""Employee bank accounts router. Account numbers are only ever returned masked."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from hrms_api.dependencies import get_bank_details_service
from hrms_api.models.domain.bank_detail import AccountType
from hrms_api.models.dto.bank_detail import (
    BankAccountCreate,
    BankAccountSummary,
    BankAccountUpdate,
    BankDetailListResponse,
    BankDetailResponse,
    MaskedAccountNumberResponse,
)
from hrms_api.services.bank_details_service import BankDetailsService

router = APIRouter()

BankDetailsServiceDep = Annotated[BankDetailsService, Depends(get_bank_details_service)]


@router.get("", response_model=BankDetailListResponse)
async def list_bank_accounts(
    employee_id: UUID,
    service: BankDetailsServiceDep,
    account_type: AccountType | None = None,
) -> BankDetailListResponse:
    """List active accounts of an employee, primary first."""
    return await service.get_employee_bank_details(employee_id, account_type)


@router.post("", response_model=BankDetailResponse, status_code=status.HTTP_201_CREATED)
async def add_bank_account(
    employee_id: UUID,
    request: BankAccountCreate,
    service: BankDetailsServiceDep,
) -> BankDetailResponse:
    """Add a bank account. A primary account replaces the previous primary."""
    return await service.add_bank_account(employee_id, request)


@router.get("/primary", response_model=BankDetailResponse)
async def get_primary_bank_account(
    employee_id: UUID,
    service: BankDetailsServiceDep,
) -> BankDetailResponse:
    """Get the employee's primary account."""
    return await service.get_primary_bank_account(employee_id)


@router.get("/summary", response_model=BankAccountSummary)
async def get_bank_account_summary(
    employee_id: UUID,
    service: BankDetailsServiceDep,
) -> BankAccountSummary:
    """Count active accounts and report whether one is primary."""
    return await service.get_account_summary(employee_id)


@router.post("/deactivate-all", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_all_bank_accounts(
    employee_id: UUID,
    service: BankDetailsServiceDep,
) -> None:
    """Soft-delete every account of the employee."""
    await service.deactivate_all_accounts_for_employee(employee_id)


@router.put("/{bank_detail_id}", response_model=BankDetailResponse)
async def update_bank_account(
    employee_id: UUID,
    bank_detail_id: UUID,
    request: BankAccountUpdate,
    service: BankDetailsServiceDep,
) -> BankDetailResponse:
    """Replace an account's details."""
    return await service.update_bank_account(employee_id, bank_detail_id, request)


@router.delete("/{bank_detail_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bank_account(
    employee_id: UUID,
    bank_detail_id: UUID,
    service: BankDetailsServiceDep,
) -> None:
    """Soft-delete an account."""
    await service.delete_bank_account(employee_id, bank_detail_id)


@router.post("/{bank_detail_id}/primary", response_model=BankDetailResponse)
async def set_primary_bank_account(
    employee_id: UUID,
    bank_detail_id: UUID,
    service: BankDetailsServiceDep,
) -> BankDetailResponse:
    """Make an account the employee's primary account."""
    return await service.set_primary_account(employee_id, bank_detail_id)


@router.post("/{bank_detail_id}/reactivate", response_model=BankDetailResponse)
async def reactivate_bank_account(
    employee_id: UUID,
    bank_detail_id: UUID,
    service: BankDetailsServiceDep,
) -> BankDetailResponse:
    """Reactivate a soft-deleted account as non-primary."""
    return await service.reactivate_bank_account(employee_id, bank_detail_id)


@router.get("/{bank_detail_id}/masked", response_model=MaskedAccountNumberResponse)
async def get_masked_account_number(
    employee_id: UUID,
    bank_detail_id: UUID,
    service: BankDetailsServiceDep,
) -> MaskedAccountNumberResponse:
    """Get the masked account number."""
    return await service.get_masked_account_number(employee_id, bank_detail_id)
