"""Employee DTOs."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from hrms_api.models.domain.employee import EmploymentStatus, EmploymentType


class ManagerInfo(BaseModel):
    """Manager summary embedded in employee and department responses."""

    id: UUID
    employee_number: str
    full_name: str


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: UUID
    organization_id: UUID
    employee_number: str
    first_name: str
    middle_name: str | None = None
    last_name: str
    preferred_name: str | None = None
    full_name: str
    work_email: str | None = None
    personal_email: str | None = None
    phone_number: str | None = None
    employment_status: EmploymentStatus
    employment_type: EmploymentType
    job_title: str | None = None
    job_level: str | None = None
    salary_amount: Decimal | None = None
    salary_currency: str | None = None
    hire_date: date | None = None
    termination_date: date | None = None
    termination_reason: str | None = None
    probation_end_date: date | None = None
    confirmation_date: date | None = None
    is_on_probation: bool = False
    department_id: UUID | None = None
    department_name: str | None = None
    manager: ManagerInfo | None = None
    created_at: datetime
    updated_at: datetime


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    items: list[EmployeeResponse]
    total: int
    page: int
    page_size: int


class EmployeeCreate(BaseModel):
    """DTO for creating an employee."""

    organization_id: UUID
    employee_number: str = Field(min_length=1, max_length=50, description="Unique within the organization")
    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    preferred_name: str | None = Field(default=None, max_length=100)
    work_email: EmailStr | None = Field(default=None, description="Unique within the organization")
    personal_email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=50)
    employment_status: EmploymentStatus = Field(default=EmploymentStatus.ACTIVE)
    employment_type: EmploymentType = Field(default=EmploymentType.FULL_TIME)
    job_title: str | None = Field(default=None, max_length=255)
    job_level: str | None = Field(default=None, max_length=50)
    salary_amount: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    hire_date: date | None = None
    probation_end_date: date | None = None
    manager_id: UUID | None = None
    department_id: UUID | None = None


class EmployeeUpdate(BaseModel):
    """DTO for updating an employee.

    Only fields present in the request body are applied. Sending
    ``manager_id`` or ``department_id`` as null clears the reference.
    Employment status changes only through terminate, reactivate and confirm.
    """

    employee_number: str | None = Field(default=None, min_length=1, max_length=50)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    preferred_name: str | None = Field(default=None, max_length=100)
    work_email: EmailStr | None = None
    personal_email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=50)
    employment_type: EmploymentType | None = None
    job_title: str | None = Field(default=None, max_length=255)
    job_level: str | None = Field(default=None, max_length=50)
    salary_amount: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    hire_date: date | None = None
    probation_end_date: date | None = None
    manager_id: UUID | None = None
    department_id: UUID | None = None


class EmployeeTerminate(BaseModel):
    """DTO for terminating an employee."""

    termination_date: date
    reason: str | None = Field(default=None, max_length=500)


class EmployeeConfirm(BaseModel):
    """DTO for confirming an employee at the end of probation."""

    confirmation_date: date
