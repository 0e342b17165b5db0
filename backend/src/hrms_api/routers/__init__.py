"""API routers."""

from hrms_api.routers import (
    bank_details,
    departments,
    employees,
    employment_history,
    organizations,
)

__all__ = [
    "bank_details",
    "departments",
    "employees",
    "employment_history",
    "organizations",
]
