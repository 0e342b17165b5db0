"""Repositories package."""

from hrms_api.repositories.bank_detail_repository import BankDetailRepository
from hrms_api.repositories.base import BaseRepository
from hrms_api.repositories.department_repository import DepartmentRepository
from hrms_api.repositories.employee_repository import EmployeeRepository
from hrms_api.repositories.employment_history_repository import EmploymentHistoryRepository
from hrms_api.repositories.organization_repository import OrganizationRepository

__all__ = [
    "BankDetailRepository",
    "BaseRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "EmploymentHistoryRepository",
    "OrganizationRepository",
]
