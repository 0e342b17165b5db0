"""Employment history DTOs."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from hrms_api.models.domain.employment_history import ChangeType


class EmploymentHistoryCreate(BaseModel):
    """DTO for a raw employment history record."""

    effective_date: date
    end_date: date | None = None
    job_title: str | None = Field(default=None, max_length=255)
    job_level: str | None = Field(default=None, max_length=50)
    department_id: UUID | None = None
    manager_id: UUID | None = None
    salary_amount: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    change_type: ChangeType
    change_reason: str | None = Field(default=None, max_length=500)
    changed_by: str | None = Field(default=None, max_length=255)
    is_current: bool = False


class JoiningHistoryCreate(BaseModel):
    """DTO for recording an employee joining."""

    joining_date: date
    job_title: str | None = Field(default=None, max_length=255)
    job_level: str | None = Field(default=None, max_length=50)
    department_id: UUID | None = None
    manager_id: UUID | None = None
    salary_amount: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    changed_by: str | None = Field(default=None, max_length=255)


class PromotionHistoryCreate(BaseModel):
    """DTO for recording a promotion."""

    effective_date: date
    job_title: str | None = Field(default=None, max_length=255)
    job_level: str | None = Field(default=None, max_length=50)
    department_id: UUID | None = None
    manager_id: UUID | None = None
    salary_amount: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    change_reason: str | None = Field(default=None, max_length=500)
    changed_by: str | None = Field(default=None, max_length=255)


class TransferHistoryCreate(BaseModel):
    """DTO for recording a transfer to another department."""

    effective_date: date
    department_id: UUID | None = None
    manager_id: UUID | None = None
    change_reason: str | None = Field(default=None, max_length=500)
    changed_by: str | None = Field(default=None, max_length=255)


class SalaryRevisionHistoryCreate(BaseModel):
    """DTO for recording a salary revision."""

    effective_date: date
    salary_amount: Decimal = Field(ge=0, max_digits=15, decimal_places=2)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    change_reason: str | None = Field(default=None, max_length=500)
    changed_by: str | None = Field(default=None, max_length=255)


class RoleChangeHistoryCreate(BaseModel):
    """DTO for recording a change of title or level."""

    effective_date: date
    job_title: str | None = Field(default=None, max_length=255)
    job_level: str | None = Field(default=None, max_length=50)
    change_reason: str | None = Field(default=None, max_length=500)
    changed_by: str | None = Field(default=None, max_length=255)


class EmploymentHistoryResponse(BaseModel):
    """Employment history response DTO."""

    id: UUID
    employee_id: UUID
    effective_date: date
    end_date: date | None = None
    job_title: str | None = None
    job_level: str | None = None
    department_id: UUID | None = None
    department_name: str | None = None
    manager_id: UUID | None = None
    manager_name: str | None = None
    salary_amount: Decimal | None = None
    salary_currency: str | None = None
    change_type: ChangeType
    change_reason: str | None = None
    changed_by: str | None = None
    is_current: bool
    created_at: datetime
    updated_at: datetime


class EmploymentHistoryListResponse(BaseModel):
    """Employment history list response DTO."""

    items: list[EmploymentHistoryResponse]
    total: int


class EmploymentHistorySummary(BaseModel):
    """Number of records an employee has."""

    employee_id: UUID
    record_count: int
    has_history: bool
