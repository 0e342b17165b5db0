"""Domain models package."""

from hrms_api.models.domain.bank_detail import AccountType
from hrms_api.models.domain.employee import EmploymentStatus, EmploymentType
from hrms_api.models.domain.employment_history import ChangeType

__all__ = [
    "AccountType",
    "ChangeType",
    "EmploymentStatus",
    "EmploymentType",
]
