"""Centralized dependency injection factories for FastAPI.

Every factory receives the request-scoped session from ``get_db``, so all
services used by one request share a single transaction.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.database import get_db
from hrms_api.services.bank_details_service import BankDetailsService
from hrms_api.services.department_service import DepartmentService
from hrms_api.services.employee_service import EmployeeService
from hrms_api.services.employment_history_service import EmploymentHistoryService
from hrms_api.services.organization_service import OrganizationService


def get_organization_service(db: AsyncSession = Depends(get_db)) -> OrganizationService:
    """Get OrganizationService instance."""
    return OrganizationService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    """Get DepartmentService instance."""
    return DepartmentService(db)


def get_bank_details_service(db: AsyncSession = Depends(get_db)) -> BankDetailsService:
    """Get BankDetailsService instance."""
    return BankDetailsService(db)


def get_employment_history_service(
    db: AsyncSession = Depends(get_db),
) -> EmploymentHistoryService:
    """Get EmploymentHistoryService instance."""
    return EmploymentHistoryService(db)
