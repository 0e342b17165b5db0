"""Data Transfer Objects package."""

from hrms_api.models.dto.bank_detail import BankDetailListResponse, BankDetailResponse
from hrms_api.models.dto.department import (
    DepartmentHierarchyNode,
    DepartmentListResponse,
    DepartmentResponse,
)
from hrms_api.models.dto.employee import EmployeeListResponse, EmployeeResponse
from hrms_api.models.dto.employment_history import (
    EmploymentHistoryListResponse,
    EmploymentHistoryResponse,
)
from hrms_api.models.dto.organization import OrganizationListResponse, OrganizationResponse

__all__ = [
    "BankDetailListResponse",
    "BankDetailResponse",
    "DepartmentHierarchyNode",
    "DepartmentListResponse",
    "DepartmentResponse",
    "EmployeeListResponse",
    "EmployeeResponse",
    "EmploymentHistoryListResponse",
    "EmploymentHistoryResponse",
    "OrganizationListResponse",
    "OrganizationResponse",
]
