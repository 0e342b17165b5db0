"""Bank detail DTOs.

Format rules (account number digits, IFSC pattern) are enforced by the
bank details service so that they surface as validation errors.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from hrms_api.models.domain.bank_detail import AccountType


class BankAccountCreate(BaseModel):
    """DTO for adding a bank account to an employee."""

    bank_name: str = Field(max_length=1000)
    account_number: str = Field(max_length=100)
    ifsc_code: str | None = Field(default=None, max_length=100)
    branch_name: str | None = Field(default=None, max_length=255)
    account_type: AccountType | None = None
    is_primary: bool = False


class BankAccountUpdate(BaseModel):
    """DTO for replacing the details of a bank account."""

    bank_name: str = Field(max_length=1000)
    account_number: str = Field(max_length=100)
    ifsc_code: str | None = Field(default=None, max_length=100)
    branch_name: str | None = Field(default=None, max_length=255)
    account_type: AccountType | None = None


class BankDetailResponse(BaseModel):
    """Bank detail response DTO. Only the masked account number is exposed."""

    id: UUID
    employee_id: UUID
    bank_name: str
    masked_account_number: str
    ifsc_code: str | None = None
    branch_name: str | None = None
    account_type: AccountType
    is_primary: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class BankDetailListResponse(BaseModel):
    """Bank detail list response DTO."""

    items: list[BankDetailResponse]
    total: int


class MaskedAccountNumberResponse(BaseModel):
    """Masked account number for display."""

    bank_detail_id: UUID
    masked_account_number: str


class BankAccountSummary(BaseModel):
    """Counts of an employee's active accounts."""

    employee_id: UUID
    active_accounts: int
    has_primary_account: bool
