"""SQLAlchemy ORM models package."""

from hrms_api.models.orm.bank_detail import EmployeeBankDetailORM
from hrms_api.models.orm.base import Base
from hrms_api.models.orm.department import DepartmentORM
from hrms_api.models.orm.employee import EmployeeORM
from hrms_api.models.orm.employment_history import EmploymentHistoryORM
from hrms_api.models.orm.organization import OrganizationORM

__all__ = [
    "Base",
    "DepartmentORM",
    "EmployeeBankDetailORM",
    "EmployeeORM",
    "EmploymentHistoryORM",
    "OrganizationORM",
]
